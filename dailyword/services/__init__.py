"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameService, get_game_service
from .player_service import PlayerService, get_player_service
from .session_manager import SessionManager
from .streak_service import StreakService
from .stats_service import StatsService, compute_summary
from .dictionary_service import DictionaryService
from .daily_word_service import DailyWordService
from .store import PersistedStore, MemoryStore, MongoStore
from .scorer import score_guess, merge_letter_hints
from .word_selector import select_daily_word, today_key, yesterday

__all__ = [
    'GameService', 'get_game_service',
    'PlayerService', 'get_player_service',
    'SessionManager', 'StreakService', 'StatsService', 'compute_summary',
    'DictionaryService', 'DailyWordService',
    'PersistedStore', 'MemoryStore', 'MongoStore',
    'score_guess', 'merge_letter_hints',
    'select_daily_word', 'today_key', 'yesterday'
]
