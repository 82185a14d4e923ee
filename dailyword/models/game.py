"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from ..exceptions import PersistenceCorruptionError


class LetterVerdict(Enum):
    """Per-letter feedback for a scored guess."""
    CORRECT = "CORRECT"
    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class SessionStatus(Enum):
    """Outcome state of a single puzzle."""
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionStatus.PLAYING


class ManagerState(Enum):
    """Lifecycle of a session manager."""
    UNINITIALIZED = "UNINITIALIZED"
    LOADING = "LOADING"
    PLAYING = "PLAYING"
    WON = "WON"
    LOST = "LOST"


@dataclass(frozen=True)
class GuessRecord:
    """A submitted guess together with its verdicts."""
    word: str
    verdicts: tuple

    def to_dict(self) -> Dict[str, Any]:
        return {"word": self.word, "verdicts": [v.value for v in self.verdicts]}

    @classmethod
    def from_dict(cls, data: Any) -> "GuessRecord":
        try:
            word = data["word"]
            verdicts = tuple(LetterVerdict(v) for v in data["verdicts"])
        except (KeyError, TypeError, ValueError) as e:
            raise PersistenceCorruptionError(f"Malformed guess record: {e}")
        if not isinstance(word, str) or len(word) != len(verdicts):
            raise PersistenceCorruptionError("Guess word does not match its verdicts")
        return cls(word=word, verdicts=verdicts)


@dataclass
class GameSession:
    """State of one puzzle, daily or practice."""
    date_key: str
    secret: str
    guesses: List[GuessRecord] = field(default_factory=list)
    letter_hints: Dict[str, LetterVerdict] = field(default_factory=dict)
    status: SessionStatus = SessionStatus.PLAYING
    is_daily_puzzle: bool = True
    warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date_key": self.date_key,
            "secret": self.secret,
            "guesses": [g.to_dict() for g in self.guesses],
            "letter_hints": {letter: v.value for letter, v in self.letter_hints.items()},
            "status": self.status.value,
            "is_daily_puzzle": self.is_daily_puzzle,
            "warning": self.warning,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "GameSession":
        if not isinstance(data, dict):
            raise PersistenceCorruptionError("Session snapshot is not an object")
        try:
            session = cls(
                date_key=data["date_key"],
                secret=data["secret"],
                guesses=[GuessRecord.from_dict(g) for g in data["guesses"]],
                letter_hints={
                    letter: LetterVerdict(v) for letter, v in data["letter_hints"].items()
                },
                status=SessionStatus(data["status"]),
                is_daily_puzzle=bool(data.get("is_daily_puzzle", True)),
                warning=data.get("warning"),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceCorruptionError(f"Malformed session snapshot: {e}")
        if not isinstance(session.date_key, str) or not isinstance(session.secret, str):
            raise PersistenceCorruptionError("Session snapshot has invalid date or secret")
        if session.warning is not None and not isinstance(session.warning, str):
            raise PersistenceCorruptionError("Session snapshot has an invalid warning")
        return session


@dataclass
class GameState:
    """Client-facing view of a session. The answer is only set once the game is over."""
    date_key: str
    mode: str
    status: str
    current_round: int
    max_guesses: int
    word_length: int
    guesses: List[Dict[str, Any]]
    letter_hints: Dict[str, str]
    answer: Optional[str] = None
    warning: Optional[str] = None


@dataclass(frozen=True)
class CompletionEvent:
    """Emitted once when a session reaches a terminal status."""
    date_key: str
    word: str
    won: bool
    attempts_used: int
    is_daily_puzzle: bool
