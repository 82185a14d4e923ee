"""
Session Manager

Owns one puzzle at a time: starting or restoring it, validating and scoring
guesses, and announcing completion. Daily sessions are snapshotted to the
persisted store after every change so a reload resumes the same game.
"""

import copy
import threading
from typing import Callable, List, Optional, Tuple

from .daily_word_service import DailyWordService
from .dictionary_service import DictionaryService
from .scorer import merge_letter_hints, score_guess
from .store import PersistedStore, load_json_value, player_key, save_json_value
from ..config.game_settings import MAX_GUESSES, WORD_LENGTH
from ..exceptions import (
    GameOverError, NotAWordError, PersistenceCorruptionError, PracticeOnlyError,
    SessionNotStartedError, ValidationInProgressError, WrongLengthError
)
from ..models.game import (
    CompletionEvent, GameSession, GameState, GuessRecord, LetterVerdict, ManagerState, SessionStatus
)
from ..utils.game_logger import game_logger

DAILY_SESSION_KEY = "daily_session"

CompletionListener = Callable[[CompletionEvent], None]


def compute_status(guesses: List[GuessRecord], max_guesses: int) -> SessionStatus:
    if guesses and all(v is LetterVerdict.CORRECT for v in guesses[-1].verdicts):
        return SessionStatus.WON
    if len(guesses) >= max_guesses:
        return SessionStatus.LOST
    return SessionStatus.PLAYING


class SessionManager:
    """
    State machine for a single player's current puzzle.

    States run UNINITIALIZED -> LOADING -> PLAYING -> WON | LOST. Starting a
    new session (new day, new practice word, practice reset) bumps the
    instance counter; a dictionary check that was in flight for an older
    instance is dropped when it returns.
    """

    def __init__(self,
                 player_id: str,
                 store: PersistedStore,
                 dictionary: DictionaryService,
                 daily_words: DailyWordService,
                 word_length: int = WORD_LENGTH,
                 max_guesses: int = MAX_GUESSES,
                 session_ttl: Optional[int] = None):
        self.player_id = player_id
        self.store = store
        self.dictionary = dictionary
        self.daily_words = daily_words
        self.word_length = word_length
        self.max_guesses = max_guesses
        self.session_ttl = session_ttl

        self.state = ManagerState.UNINITIALIZED
        self.warning: Optional[str] = None

        self._lock = threading.Lock()
        self._session: Optional[GameSession] = None
        self._instance = 0
        self._pending = False
        self._listeners: List[CompletionListener] = []

    @property
    def session(self) -> Optional[GameSession]:
        """A copy of the current session."""
        with self._lock:
            return copy.deepcopy(self._session)

    @property
    def validation_pending(self) -> bool:
        return self._pending

    def add_completion_listener(self, listener: CompletionListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Starting sessions
    # ------------------------------------------------------------------

    def _begin(self) -> int:
        self._instance += 1
        self._pending = False
        self._session = None
        self.warning = None
        self.state = ManagerState.LOADING
        return self._instance

    def _activate(self, session: GameSession) -> None:
        self._session = session
        self.state = ManagerState(session.status.value)

    def start_daily(self, today: str) -> GameSession:
        """
        Starts today's puzzle, restoring the stored snapshot for the same day
        when there is one.
        """
        with self._lock:
            self._begin()

            key = player_key(self.player_id, DAILY_SESSION_KEY)
            stored = load_json_value(self.store, key, self._decode_snapshot, lambda: None)

            if stored is not None and stored.date_key == today:
                self._activate(stored)
                self.warning = stored.warning
                game_logger.log_game_event(
                    self.player_id, 'session_restored',
                    date_key=today, guesses=len(stored.guesses), status=stored.status.value
                )
                return copy.deepcopy(stored)

            secret, warning = self.daily_words.get_daily_word(today)
            session = GameSession(date_key=today, secret=secret, is_daily_puzzle=True, warning=warning)
            self.warning = warning
            self._activate(session)
            self._persist()
            game_logger.log_game_event(self.player_id, 'daily_started', date_key=today)
            return copy.deepcopy(session)

    def start_practice(self, secret: str, date_key: str = "") -> GameSession:
        """Starts a practice puzzle. The daily snapshot is never touched."""
        word = self._normalize(secret, "Custom word")
        with self._lock:
            self._begin()
            session = GameSession(date_key=date_key, secret=word, is_daily_puzzle=False)
            self._activate(session)
            game_logger.log_game_event(self.player_id, 'practice_started', date_key=date_key)
            return copy.deepcopy(session)

    def reset_practice(self) -> GameSession:
        """Clears guesses on a practice session, keeping its secret."""
        with self._lock:
            if self._session is None:
                raise SessionNotStartedError()
            if self._session.is_daily_puzzle:
                raise PracticeOnlyError()
            session = GameSession(
                date_key=self._session.date_key,
                secret=self._session.secret,
                is_daily_puzzle=False
            )
            self._begin()
            self._activate(session)
            return copy.deepcopy(session)

    def retire(self) -> None:
        """Drops the current session; a validation still in flight is discarded."""
        with self._lock:
            self._begin()
            self.state = ManagerState.UNINITIALIZED

    def stored_date_key(self) -> Optional[str]:
        """Date of the persisted daily snapshot, if there is a usable one."""
        key = player_key(self.player_id, DAILY_SESSION_KEY)
        stored = load_json_value(self.store, key, self._decode_snapshot, lambda: None)
        return stored.date_key if stored is not None else None

    # ------------------------------------------------------------------
    # Guessing
    # ------------------------------------------------------------------

    def _normalize(self, raw: str, label: str = "Guess") -> str:
        word = (raw or "").strip().upper()
        if len(word) != self.word_length:
            raise WrongLengthError(f"{label} must be exactly {self.word_length} letters")
        if not word.isalpha():
            raise NotAWordError(f"{label} must contain only letters")
        return word

    def submit_guess(self, raw: str) -> Optional[GuessRecord]:
        """
        Validates, scores and records a guess.

        The exact secret is always accepted; anything else must pass the
        dictionary. Rejected words do not use up an attempt.

        Returns:
            The recorded guess, or None if the session was replaced while the
            word was being checked.

        Raises:
            SessionNotStartedError, GameOverError, WrongLengthError,
            NotAWordError, ValidationInProgressError
        """
        with self._lock:
            session = self._session
            if session is None:
                raise SessionNotStartedError()
            if session.status.is_terminal:
                raise GameOverError()
            guess = self._normalize(raw)
            if self._pending:
                raise ValidationInProgressError()
            self._pending = True
            instance = self._instance
            secret = session.secret

        try:
            accepted = guess == secret or self.dictionary.is_valid_word(guess)
        finally:
            with self._lock:
                if self._instance == instance:
                    self._pending = False

        with self._lock:
            if self._instance != instance:
                game_logger.logger.warning(
                    f"Discarding validation result for superseded session of player {self.player_id}"
                )
                return None
            if not accepted:
                raise NotAWordError()
            record, event = self._apply_guess(guess)

        if event is not None:
            self._notify(event)
        return record

    def _apply_guess(self, guess: str) -> Tuple[GuessRecord, Optional[CompletionEvent]]:
        session = self._session
        verdicts = score_guess(session.secret, guess)
        record = GuessRecord(word=guess, verdicts=verdicts)

        session.guesses.append(record)
        session.letter_hints = merge_letter_hints(session.letter_hints, guess, verdicts)
        session.status = compute_status(session.guesses, self.max_guesses)
        self.state = ManagerState(session.status.value)

        if session.is_daily_puzzle:
            self._persist()

        if not session.status.is_terminal:
            return record, None

        event = CompletionEvent(
            date_key=session.date_key,
            word=session.secret,
            won=session.status is SessionStatus.WON,
            attempts_used=len(session.guesses),
            is_daily_puzzle=session.is_daily_puzzle
        )
        game_logger.log_game_event(
            self.player_id, 'game_won' if event.won else 'game_lost',
            date_key=event.date_key, target_word=event.word,
            attempts_used=event.attempts_used, daily=event.is_daily_puzzle
        )
        return record, event

    def _notify(self, event: CompletionEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                game_logger.logger.error(f"Completion listener failed for player {self.player_id}: {e}")

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _persist(self) -> None:
        save_json_value(
            self.store, player_key(self.player_id, DAILY_SESSION_KEY),
            self._session.to_dict(), self.session_ttl
        )

    def _decode_snapshot(self, data) -> GameSession:
        """Decodes a snapshot and checks it replays to the same state."""
        session = GameSession.from_dict(data)
        if not session.is_daily_puzzle:
            raise PersistenceCorruptionError("Stored daily session is not a daily puzzle")
        if len(session.secret) != self.word_length or not session.secret.isalpha():
            raise PersistenceCorruptionError("Stored secret has the wrong shape")
        if len(session.guesses) > self.max_guesses:
            raise PersistenceCorruptionError("Stored session has too many guesses")

        hints = {}
        for index, record in enumerate(session.guesses):
            if len(record.word) != self.word_length:
                raise PersistenceCorruptionError("Stored guess has the wrong length")
            if score_guess(session.secret, record.word) != record.verdicts:
                raise PersistenceCorruptionError("Stored verdicts do not match the secret")
            if index < len(session.guesses) - 1 and \
                    compute_status(session.guesses[:index + 1], self.max_guesses).is_terminal:
                raise PersistenceCorruptionError("Stored session continues after it ended")
            hints = merge_letter_hints(hints, record.word, record.verdicts)

        if hints != session.letter_hints:
            raise PersistenceCorruptionError("Stored letter hints do not match the guesses")
        if compute_status(session.guesses, self.max_guesses) is not session.status:
            raise PersistenceCorruptionError("Stored status does not match the guesses")
        return session

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def public_state(self) -> Optional[GameState]:
        """Client view of the session; the answer is hidden while playing."""
        with self._lock:
            session = self._session
            if session is None:
                return None
            return GameState(
                date_key=session.date_key,
                mode='daily' if session.is_daily_puzzle else 'practice',
                status=session.status.value,
                current_round=len(session.guesses),
                max_guesses=self.max_guesses,
                word_length=self.word_length,
                guesses=[g.to_dict() for g in session.guesses],
                letter_hints={letter: v.value for letter, v in session.letter_hints.items()},
                answer=session.secret if session.status.is_terminal else None,
                warning=self.warning
            )

