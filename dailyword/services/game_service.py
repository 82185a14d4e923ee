"""
Game Service

Per-player orchestration: keeps each player's daily and practice session
managers, rolls the daily puzzle over at midnight in the reference timezone,
and routes completion events to the streak and statistics services.
"""

import random
import threading
from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Sequence

from flask import current_app

from .daily_word_service import DailyWordService
from .dictionary_service import DictionaryService
from .session_manager import SessionManager
from .stats_service import StatsService
from .store import MemoryStore, MongoStore, PersistedStore
from .streak_service import StreakService
from .word_selector import get_timezone, today_key
from ..config.game_settings import load_word_list
from ..exceptions import ConfigurationError, GameInProgressError, SessionNotStartedError
from ..models.dictionary import WordMeaning
from ..models.game import CompletionEvent, GameState, SessionStatus
from ..models.stats import CompletedGameRecord
from ..utils.game_logger import game_logger

DAY_SECONDS = 24 * 60 * 60
RECORD_LOCK_STRIPES = 64

Notifier = Callable[[str, Dict[str, Any], str], None]


class GameService:
    """
    Core game service managing every player's sessions.

    This class handles:
    - Starting, restoring and rolling over the daily puzzle
    - Practice puzzles with a custom or random word
    - Streak and statistics bookkeeping on completion
    - Optional notifications to live clients
    """

    def __init__(self,
                 store: PersistedStore,
                 dictionary: DictionaryService,
                 daily_words: DailyWordService,
                 word_list: Sequence[str],
                 reference_timezone: str = 'UTC',
                 word_length: int = 5,
                 max_guesses: int = 6,
                 history_cap: int = 100,
                 session_ttl: Optional[int] = None,
                 record_ttl: Optional[int] = None,
                 clock: Callable[[], datetime] = None,
                 notifier: Optional[Notifier] = None):
        if word_length < 1 or max_guesses < 1 or history_cap < 1:
            raise ConfigurationError("Word length, max guesses and history cap must be positive")
        if not word_list:
            raise ConfigurationError("Word list cannot be empty")
        if len(daily_words.fallback_word) != word_length:
            raise ConfigurationError("Fallback word does not match the configured word length")
        get_timezone(reference_timezone)

        self.store = store
        self.dictionary = dictionary
        self.daily_words = daily_words
        self.word_list = list(word_list)
        self.reference_timezone = reference_timezone
        self.word_length = word_length
        self.max_guesses = max_guesses
        self.session_ttl = session_ttl
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.notifier = notifier

        self.streaks = StreakService(store, record_ttl)
        self.stats = StatsService(store, history_cap, max_guesses, record_ttl)

        self.daily_sessions: Dict[str, SessionManager] = {}
        self.practice_sessions: Dict[str, SessionManager] = {}
        self._lock = threading.Lock()
        self._active_day: Optional[str] = None
        self._record_locks = [threading.Lock() for _ in range(RECORD_LOCK_STRIPES)]

    @classmethod
    def from_config(cls,
                    config,
                    store: Optional[PersistedStore] = None,
                    dictionary: Optional[DictionaryService] = None,
                    notifier: Optional[Notifier] = None) -> "GameService":
        """Build the service and its collaborators from a Config class."""
        word_list = load_word_list(config.WORD_LIST_FILE, word_length=config.WORD_LENGTH)

        if store is None:
            if config.MONGO_URI:
                store = MongoStore.from_uri(config.MONGO_URI, config.MONGO_DB_NAME)
            else:
                game_logger.logger.warning("MONGO_URI not configured, progress is kept in memory only")
                store = MemoryStore()

        if dictionary is None:
            dictionary = DictionaryService(
                config.DICTIONARY_API_URL, word_list, timeout=config.HTTP_TIMEOUT_SECONDS
            )

        daily_words = DailyWordService(
            word_list, config.FALLBACK_WORD, config.WORD_LENGTH,
            remote_url=config.DAILY_WORD_URL, timeout=config.HTTP_TIMEOUT_SECONDS
        )

        return cls(
            store, dictionary, daily_words, word_list,
            reference_timezone=config.REFERENCE_TIMEZONE,
            word_length=config.WORD_LENGTH,
            max_guesses=config.MAX_GUESSES,
            history_cap=config.HISTORY_CAP,
            session_ttl=config.SESSION_TTL_DAYS * DAY_SECONDS,
            record_ttl=config.STORE_TTL_DAYS * DAY_SECONDS,
            notifier=notifier
        )

    def today(self) -> str:
        """Today's date key; the first call on a new day evicts stale managers."""
        today = today_key(self.reference_timezone, self.clock())
        if today != self._active_day:
            self._evict_stale(today)
        return today

    # ------------------------------------------------------------------
    # Session managers
    # ------------------------------------------------------------------

    def _manager(self, registry: Dict[str, SessionManager], player_id: str) -> SessionManager:
        with self._lock:
            manager = registry.get(player_id)
            if manager is None:
                manager = SessionManager(
                    player_id, self.store, self.dictionary, self.daily_words,
                    word_length=self.word_length, max_guesses=self.max_guesses,
                    session_ttl=self.session_ttl
                )
                manager.add_completion_listener(lambda event: self._on_completion(player_id, event))
                registry[player_id] = manager
            return manager

    def _practice_manager(self, player_id: str) -> SessionManager:
        self.today()
        manager = self.practice_sessions.get(player_id)
        if manager is None:
            raise SessionNotStartedError()
        return manager

    def _evict_stale(self, today: str) -> None:
        """
        Drops every manager whose session belongs to an earlier day. Daily
        progress survives in the store and is restored on the next request.
        """
        with self._lock:
            if today == self._active_day:
                return
            self._active_day = today
            evicted = 0
            for registry in (self.daily_sessions, self.practice_sessions):
                for player_id, manager in list(registry.items()):
                    session = manager.session
                    if session is None or session.date_key != today:
                        del registry[player_id]
                        manager.retire()
                        evicted += 1
        if evicted:
            game_logger.logger.info(f"Evicted {evicted} session managers on rollover to {today}")

    def _current_daily(self, player_id: str) -> SessionManager:
        """Today's daily manager, starting or rolling over the session as needed."""
        today = self.today()
        manager = self._manager(self.daily_sessions, player_id)
        session = manager.session
        if session is None or session.date_key != today:
            manager.start_daily(today)
        return manager

    # ------------------------------------------------------------------
    # Daily puzzle
    # ------------------------------------------------------------------

    def start_daily(self, player_id: str) -> GameState:
        today = self.today()
        manager = self._manager(self.daily_sessions, player_id)
        manager.start_daily(today)
        return manager.public_state()

    def get_daily_state(self, player_id: str) -> GameState:
        return self._current_daily(player_id).public_state()

    def submit_daily_guess(self, player_id: str, guess: str) -> Optional[GameState]:
        """
        Returns the updated state, or None when the guess was dropped because
        the puzzle changed underneath it.
        """
        today = self.today()
        manager = self._manager(self.daily_sessions, player_id)
        session = manager.session
        if session is None:
            previous = manager.stored_date_key()
            manager.start_daily(today)
            if previous is not None and previous != today:
                return None
        elif session.date_key != today:
            manager.start_daily(today)
            return None
        record = manager.submit_guess(guess)
        return manager.public_state() if record is not None else None

    # ------------------------------------------------------------------
    # Practice puzzle
    # ------------------------------------------------------------------

    def start_practice(self, player_id: str, word: Optional[str] = None) -> GameState:
        today = self.today()
        manager = self._manager(self.practice_sessions, player_id)
        secret = word if word else random.choice(self.word_list)
        manager.start_practice(secret, today)
        return manager.public_state()

    def get_practice_state(self, player_id: str) -> GameState:
        state = self._practice_manager(player_id).public_state()
        if state is None:
            raise SessionNotStartedError()
        return state

    def submit_practice_guess(self, player_id: str, guess: str) -> Optional[GameState]:
        manager = self._practice_manager(player_id)
        record = manager.submit_guess(guess)
        return manager.public_state() if record is not None else None

    def reset_practice(self, player_id: str) -> GameState:
        manager = self._practice_manager(player_id)
        manager.reset_practice()
        return manager.public_state()

    # ------------------------------------------------------------------
    # Meaning and statistics
    # ------------------------------------------------------------------

    def get_meaning(self, player_id: str, mode: str = 'daily') -> Optional[WordMeaning]:
        """Definition of the secret, available only once that game is over."""
        if mode == 'practice':
            manager = self._practice_manager(player_id)
        else:
            manager = self._current_daily(player_id)
        session = manager.session
        if session is None:
            raise SessionNotStartedError()
        if session.status is SessionStatus.PLAYING:
            raise GameInProgressError()
        return self.dictionary.fetch_meaning(session.secret)

    def get_stats(self, player_id: str) -> Dict[str, Any]:
        summary = self.stats.summary(player_id)
        return {
            'summary': asdict(summary),
            'histogram': self.stats.load_histogram(player_id).to_dict(),
            'streak': self.streaks.load(player_id).to_dict()
        }

    # ------------------------------------------------------------------
    # Completion events
    # ------------------------------------------------------------------

    def _record_lock(self, player_id: str) -> threading.Lock:
        return self._record_locks[hash(player_id) % len(self._record_locks)]

    def _on_completion(self, player_id: str, event: CompletionEvent) -> None:
        self._notify('session_completed', asdict(event), player_id)

        record = CompletedGameRecord(
            word=event.word,
            won=event.won,
            attempts_used=event.attempts_used,
            timestamp=self.clock().isoformat(),
            is_daily_puzzle=event.is_daily_puzzle
        )
        # Streak, history and histogram are read-modify-write per player
        with self._record_lock(player_id):
            streak = None
            if event.is_daily_puzzle:
                streak = self.streaks.record_outcome(player_id, event.won, event.date_key)
            self.stats.record_completion(player_id, record)
            summary = self.stats.summary(player_id)

        if streak is not None:
            self._notify('streak_updated', streak.to_dict(), player_id)
        self._notify('stats_updated', asdict(summary), player_id)

    def _notify(self, event_name: str, payload: Dict[str, Any], player_id: str) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier(event_name, payload, player_id)
        except Exception as e:
            game_logger.logger.error(f"Failed to notify player {player_id} of {event_name}: {e}")


def get_game_service() -> Optional[GameService]:
    """Get the game service of the current Flask application."""
    return current_app.extensions.get('game_service')
