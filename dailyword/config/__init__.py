"""
Configuration Package

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game defaults and word-list loading
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    WORD_LENGTH, MAX_GUESSES, HISTORY_CAP,
    load_word_list, validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game settings
    'WORD_LENGTH', 'MAX_GUESSES', 'HISTORY_CAP',
    'load_word_list', 'validate_word_list_integrity', 'get_word_statistics'
]
