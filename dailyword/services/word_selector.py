"""
Daily Word Selector

Maps a calendar date in the reference timezone to a word, and provides the
calendar helpers the streak logic relies on.
"""

import hashlib
from datetime import date, datetime, timedelta
from typing import Optional, Sequence
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..exceptions import ConfigurationError


def get_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown reference timezone '{name}': {e}")


def today_key(timezone_name: str, now: Optional[datetime] = None) -> str:
    """
    Returns today's date key (YYYY-MM-DD) in the reference timezone.

    Args:
        timezone_name: IANA timezone name
        now: Aware datetime to convert instead of the current time
    """
    tz = get_timezone(timezone_name)
    moment = now.astimezone(tz) if now is not None else datetime.now(tz)
    return moment.date().isoformat()


def parse_date_key(date_key: str) -> date:
    try:
        return date.fromisoformat(date_key)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid date key: {date_key!r}")


def yesterday(date_key: str) -> str:
    """The calendar day before date_key."""
    return (parse_date_key(date_key) - timedelta(days=1)).isoformat()


def date_digest(date_key: str) -> int:
    """Stable integer digest of a date key."""
    return int(hashlib.sha256(date_key.encode('utf-8')).hexdigest(), 16)


def select_daily_word(date_key: str, word_list: Sequence[str]) -> str:
    """
    Deterministically picks the word for a date.

    Raises:
        ConfigurationError: If the word list is empty
    """
    if not word_list:
        raise ConfigurationError("Word list cannot be empty")
    return word_list[date_digest(date_key) % len(word_list)]
