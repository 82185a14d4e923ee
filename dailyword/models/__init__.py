"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    LetterVerdict, SessionStatus, ManagerState, GuessRecord, GameSession, GameState, CompletionEvent
)
from .stats import StreakRecord, CompletedGameRecord, DailyAttemptHistogram, StatsSummary
from .dictionary import WordMeaning, MeaningEntry

__all__ = [
    'LetterVerdict', 'SessionStatus', 'ManagerState', 'GuessRecord', 'GameSession', 'GameState',
    'CompletionEvent', 'StreakRecord', 'CompletedGameRecord', 'DailyAttemptHistogram',
    'StatsSummary', 'WordMeaning', 'MeaningEntry'
]
