"""
Guess Scorer

Implements the Wordle letter evaluation algorithm and the keyboard hint merge.
"""

from collections import Counter
from typing import Dict, List, Optional, Tuple

from ..exceptions import InvalidLengthError
from ..models.game import LetterVerdict


def score_guess(secret: str, guess: str) -> Tuple[LetterVerdict, ...]:
    """
    Scores a guess against the secret word.

    Exact matches are resolved first and consume their letter before any
    PRESENT verdict is handed out, so a letter is never credited more times
    than it occurs in the secret.

    Args:
        secret: The word being guessed
        guess: The submitted word, same length as the secret

    Returns:
        One LetterVerdict per position

    Raises:
        InvalidLengthError: If the two words differ in length
    """
    if len(secret) != len(guess):
        raise InvalidLengthError(
            f"Guess length {len(guess)} does not match secret length {len(secret)}"
        )

    remaining = Counter(secret)
    verdicts: List[Optional[LetterVerdict]] = [None] * len(guess)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == secret[i]:
            verdicts[i] = LetterVerdict.CORRECT
            remaining[letter] -= 1

    # Second pass: misplaced letters against what is left
    for i, letter in enumerate(guess):
        if verdicts[i] is not None:
            continue
        if remaining[letter] > 0:
            verdicts[i] = LetterVerdict.PRESENT
            remaining[letter] -= 1
        else:
            verdicts[i] = LetterVerdict.ABSENT

    return tuple(verdicts)


def should_replace_hint(current: Optional[LetterVerdict], new: LetterVerdict) -> bool:
    """Hints only move towards more information; CORRECT is never downgraded."""
    if current is None:
        return True
    if current is LetterVerdict.ABSENT:
        return new is not LetterVerdict.ABSENT
    if current is LetterVerdict.PRESENT:
        return new is LetterVerdict.CORRECT
    return False


def merge_letter_hints(hints: Dict[str, LetterVerdict],
                       guess: str,
                       verdicts: Tuple[LetterVerdict, ...]) -> Dict[str, LetterVerdict]:
    """Returns a copy of hints updated with one scored guess."""
    merged = dict(hints)
    for letter, verdict in zip(guess, verdicts):
        if should_replace_hint(merged.get(letter), verdict):
            merged[letter] = verdict
    return merged
