"""
Streak Service

Keeps the consecutive-day win streak for daily puzzles. Days are reference
timezone date keys and "yesterday" is calendar subtraction on those keys.
"""

from typing import Optional

from .store import PersistedStore, load_json_value, player_key, save_json_value
from .word_selector import parse_date_key, yesterday
from ..models.stats import StreakRecord
from ..utils.game_logger import game_logger

STREAK_KEY = "streak"


class StreakService:

    def __init__(self, store: PersistedStore, ttl: Optional[int] = None):
        self.store = store
        self.ttl = ttl

    def load(self, player_id: str) -> StreakRecord:
        return load_json_value(
            self.store, player_key(player_id, STREAK_KEY), StreakRecord.from_dict, StreakRecord
        )

    def save(self, player_id: str, record: StreakRecord) -> None:
        save_json_value(self.store, player_key(player_id, STREAK_KEY), record.to_dict(), self.ttl)

    def record_outcome(self, player_id: str, won: bool, today: str) -> StreakRecord:
        """
        Applies one daily result. Delivering the same day's result twice has
        no further effect, and a loss never undoes a win already recorded today.
        """
        parse_date_key(today)
        record = self.load(player_id)
        updated = apply_outcome(record, won, today)
        if updated != record:
            self.save(player_id, updated)
            game_logger.log_game_event(
                player_id, 'streak_updated',
                date_key=today, won=won,
                current_streak=updated.current_streak, best_streak=updated.best_streak
            )
        return updated


def apply_outcome(record: StreakRecord, won: bool, today: str) -> StreakRecord:
    """Pure streak transition for one daily result."""
    if record.last_win_date == today:
        return record

    if not won:
        return StreakRecord(0, record.best_streak, record.last_win_date)

    if record.last_win_date and record.last_win_date == yesterday(today):
        current = record.current_streak + 1
    else:
        current = 1
    return StreakRecord(
        current_streak=current,
        best_streak=max(record.best_streak, current),
        last_win_date=today
    )
