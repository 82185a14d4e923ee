from datetime import datetime, timezone

import pytest

from dailyword.config.game_settings import load_word_list
from dailyword.exceptions import ConfigurationError
from dailyword.services.word_selector import date_digest, select_daily_word, today_key, yesterday

WORD_LIST = load_word_list()


def test_same_date_gives_same_word():
    assert select_daily_word("2024-03-10", WORD_LIST) == select_daily_word("2024-03-10", WORD_LIST)


def test_selection_does_not_depend_on_call_order():
    first = [select_daily_word(d, WORD_LIST) for d in ("2024-01-01", "2024-01-02", "2024-01-03")]
    second = [select_daily_word(d, WORD_LIST) for d in ("2024-01-03", "2024-01-02", "2024-01-01")]
    assert first == list(reversed(second))


def test_selected_word_comes_from_list():
    words = ["CRANE", "SLATE", "PLANT"]
    word = select_daily_word("2024-03-10", words)
    assert word == words[date_digest("2024-03-10") % 3]


def test_empty_word_list_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        select_daily_word("2024-03-10", [])


def test_today_key_uses_reference_timezone():
    moment = datetime(2024, 3, 10, 2, 30, tzinfo=timezone.utc)
    assert today_key("UTC", moment) == "2024-03-10"
    assert today_key("America/Los_Angeles", moment) == "2024-03-09"
    assert today_key("Asia/Tokyo", moment) == "2024-03-10"


def test_unknown_timezone_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        today_key("Not/AZone")


@pytest.mark.parametrize("day,expected", [
    ("2024-03-10", "2024-03-09"),
    ("2024-03-01", "2024-02-29"),
    ("2023-03-01", "2023-02-28"),
    ("2024-01-01", "2023-12-31"),
    ("2024-11-04", "2024-11-03"),
])
def test_yesterday_is_calendar_subtraction(day, expected):
    assert yesterday(day) == expected


def test_yesterday_rejects_malformed_keys():
    with pytest.raises(ValueError):
        yesterday("10/03/2024")
