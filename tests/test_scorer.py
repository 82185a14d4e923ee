from collections import Counter

import pytest

from dailyword.exceptions import InvalidLengthError
from dailyword.models.game import LetterVerdict
from dailyword.services.scorer import merge_letter_hints, score_guess, should_replace_hint

C, P, A = LetterVerdict.CORRECT, LetterVerdict.PRESENT, LetterVerdict.ABSENT


def test_duplicate_letters_are_only_credited_once_per_occurrence():
    assert score_guess("ALLOW", "LOLLY") == (P, P, C, A, A)


def test_exact_matches_consume_letters_before_present():
    # The E in position 4 is correct, so the leading E has nothing left to match.
    assert score_guess("CRANE", "EERIE") == (A, A, P, A, C)


def test_secret_scores_all_correct_against_itself():
    for word in ["CRANE", "ALLOW", "EERIE", "MAMMA"]:
        assert score_guess(word, word) == (C,) * 5


def test_no_common_letters():
    assert score_guess("CRANE", "MOULD") == (A,) * 5


@pytest.mark.parametrize("secret,guess", [
    ("ALLOW", "LOLLY"), ("CRANE", "NACRE"), ("SPEED", "EERIE"), ("ABBEY", "BABES"),
    ("MAMMA", "AMMAM"), ("LEVEL", "LLAMA"), ("ROBOT", "OTTOR"),
])
def test_non_absent_count_matches_common_multiset(secret, guess):
    verdicts = score_guess(secret, guess)
    common = sum((Counter(secret) & Counter(guess)).values())
    assert sum(1 for v in verdicts if v is not A) == common

    credited = Counter(letter for letter, v in zip(guess, verdicts) if v is not A)
    for letter, count in credited.items():
        assert count <= Counter(secret)[letter]


def test_length_mismatch_raises():
    with pytest.raises(InvalidLengthError):
        score_guess("CRANE", "CRANES")


def test_hint_replacement_rules():
    assert should_replace_hint(None, A)
    assert should_replace_hint(A, P)
    assert should_replace_hint(A, C)
    assert should_replace_hint(P, C)
    assert not should_replace_hint(P, A)
    assert not should_replace_hint(C, P)
    assert not should_replace_hint(C, A)


def test_merge_keeps_best_verdict_within_one_guess():
    hints = merge_letter_hints({}, "LOLLY", (P, P, C, A, A))
    assert hints == {"L": C, "O": P, "Y": A}


def test_merge_does_not_mutate_input():
    original = {"A": C}
    merged = merge_letter_hints(original, "ABBEY", (A, A, A, A, A))
    assert original == {"A": C}
    assert merged["A"] is C
    assert merged["B"] is A
