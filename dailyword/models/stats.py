"""
Statistics Data Models

Streak, history and histogram records persisted per player.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..exceptions import PersistenceCorruptionError


def _non_negative_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise PersistenceCorruptionError(f"{name} must be a non-negative integer")
    return value


@dataclass
class StreakRecord:
    """Consecutive-day win streak."""
    current_streak: int = 0
    best_streak: int = 0
    last_win_date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_streak": self.current_streak,
            "best_streak": self.best_streak,
            "last_win_date": self.last_win_date,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "StreakRecord":
        if not isinstance(data, dict):
            raise PersistenceCorruptionError("Streak record is not an object")
        try:
            record = cls(
                current_streak=_non_negative_int(data["current_streak"], "current_streak"),
                best_streak=_non_negative_int(data["best_streak"], "best_streak"),
                last_win_date=data.get("last_win_date") or "",
            )
        except KeyError as e:
            raise PersistenceCorruptionError(f"Streak record missing {e}")
        if not isinstance(record.last_win_date, str):
            raise PersistenceCorruptionError("last_win_date must be a string")
        if record.best_streak < record.current_streak:
            raise PersistenceCorruptionError("best_streak is lower than current_streak")
        return record


@dataclass(frozen=True)
class CompletedGameRecord:
    """One finished game in the rolling history."""
    word: str
    won: bool
    attempts_used: int
    timestamp: str
    is_daily_puzzle: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "won": self.won,
            "attempts_used": self.attempts_used,
            "timestamp": self.timestamp,
            "is_daily_puzzle": self.is_daily_puzzle,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CompletedGameRecord":
        if not isinstance(data, dict):
            raise PersistenceCorruptionError("History entry is not an object")
        try:
            record = cls(
                word=data["word"],
                won=data["won"],
                attempts_used=data["attempts_used"],
                timestamp=data["timestamp"],
                is_daily_puzzle=bool(data.get("is_daily_puzzle", False)),
            )
        except KeyError as e:
            raise PersistenceCorruptionError(f"History entry missing {e}")
        if not isinstance(record.word, str) or not isinstance(record.won, bool):
            raise PersistenceCorruptionError("History entry has invalid word or outcome")
        if isinstance(record.attempts_used, bool) or not isinstance(record.attempts_used, int) \
                or record.attempts_used < 1:
            raise PersistenceCorruptionError("attempts_used must be a positive integer")
        return record


@dataclass
class DailyAttemptHistogram:
    """Daily-puzzle wins bucketed by the attempt that won."""
    attempts: List[int] = field(default_factory=lambda: [0] * 6)
    total_wins: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = {f"attempt{i + 1}": count for i, count in enumerate(self.attempts)}
        data["total_wins"] = self.total_wins
        return data

    @classmethod
    def from_dict(cls, data: Any, max_guesses: int = 6) -> "DailyAttemptHistogram":
        if not isinstance(data, dict):
            raise PersistenceCorruptionError("Histogram is not an object")
        try:
            attempts = [
                _non_negative_int(data.get(f"attempt{i + 1}", 0), f"attempt{i + 1}")
                for i in range(max_guesses)
            ]
            total_wins = _non_negative_int(data["total_wins"], "total_wins")
        except KeyError as e:
            raise PersistenceCorruptionError(f"Histogram missing {e}")
        if total_wins != sum(attempts):
            raise PersistenceCorruptionError("total_wins does not match the attempt counts")
        return cls(attempts=attempts, total_wins=total_wins)


@dataclass
class StatsSummary:
    """Figures derived from the rolling history."""
    total_games: int
    wins: int
    losses: int
    win_rate_percent: int
    guess_distribution: Dict[int, int]
