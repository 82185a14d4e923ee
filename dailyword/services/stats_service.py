"""
Statistics Service

Rolling history of finished games, the daily-win histogram, and the summary
figures derived from the history.
"""

from typing import List, Optional, Sequence

from .store import PersistedStore, load_json_value, player_key, save_json_value
from ..config.game_settings import HISTORY_CAP, MAX_GUESSES
from ..exceptions import PersistenceCorruptionError
from ..models.stats import CompletedGameRecord, DailyAttemptHistogram, StatsSummary
from ..utils.game_logger import game_logger

HISTORY_KEY = "history"
HISTOGRAM_KEY = "histogram"


def compute_summary(history: Sequence[CompletedGameRecord], max_guesses: int = MAX_GUESSES) -> StatsSummary:
    """
    Derives totals, win rate and the per-attempt win distribution.

    The win rate is rounded half up to a whole percent and is 0 for an empty history.
    """
    total_games = len(history)
    wins = sum(1 for record in history if record.won)
    distribution = {attempt: 0 for attempt in range(1, max_guesses + 1)}
    for record in history:
        if record.won and record.attempts_used in distribution:
            distribution[record.attempts_used] += 1

    win_rate = (200 * wins + total_games) // (2 * total_games) if total_games else 0

    return StatsSummary(
        total_games=total_games,
        wins=wins,
        losses=total_games - wins,
        win_rate_percent=win_rate,
        guess_distribution=distribution
    )


class StatsService:

    def __init__(self,
                 store: PersistedStore,
                 history_cap: int = HISTORY_CAP,
                 max_guesses: int = MAX_GUESSES,
                 ttl: Optional[int] = None):
        self.store = store
        self.history_cap = history_cap
        self.max_guesses = max_guesses
        self.ttl = ttl

    def _decode_history(self, data) -> List[CompletedGameRecord]:
        if not isinstance(data, list):
            raise PersistenceCorruptionError("History is not a list")
        records = [CompletedGameRecord.from_dict(item) for item in data]
        if any(record.attempts_used > self.max_guesses for record in records):
            raise PersistenceCorruptionError("History entry exceeds the guess limit")
        return records

    def _empty_histogram(self) -> DailyAttemptHistogram:
        return DailyAttemptHistogram(attempts=[0] * self.max_guesses)

    def load_history(self, player_id: str) -> List[CompletedGameRecord]:
        return load_json_value(self.store, player_key(player_id, HISTORY_KEY), self._decode_history, list)

    def load_histogram(self, player_id: str) -> DailyAttemptHistogram:
        return load_json_value(
            self.store, player_key(player_id, HISTOGRAM_KEY),
            lambda data: DailyAttemptHistogram.from_dict(data, self.max_guesses),
            self._empty_histogram
        )

    def record_completion(self, player_id: str, record: CompletedGameRecord) -> List[CompletedGameRecord]:
        """Appends to the capped history and counts daily wins in the histogram."""
        history = self.load_history(player_id)
        history.append(record)
        history = history[-self.history_cap:]
        save_json_value(
            self.store, player_key(player_id, HISTORY_KEY),
            [item.to_dict() for item in history], self.ttl
        )

        if record.won and record.is_daily_puzzle and 1 <= record.attempts_used <= self.max_guesses:
            histogram = self.load_histogram(player_id)
            histogram.attempts[record.attempts_used - 1] += 1
            histogram.total_wins += 1
            save_json_value(self.store, player_key(player_id, HISTOGRAM_KEY), histogram.to_dict(), self.ttl)

        game_logger.log_game_event(
            player_id, 'stats_updated', won=record.won,
            attempts_used=record.attempts_used, daily=record.is_daily_puzzle,
            history_size=len(history)
        )
        return history

    def summary(self, player_id: str) -> StatsSummary:
        return compute_summary(self.load_history(player_id), self.max_guesses)
