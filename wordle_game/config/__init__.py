"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word lists
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config
from .game_settings import (
    ANSWER_WORDS, VALID_GUESSES, MAX_ROWS, WORD_LENGTH, STORAGE_KEY,
    validate_word_list_integrity, get_word_statistics
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config',
    # Game rules
    'ANSWER_WORDS', 'VALID_GUESSES', 'MAX_ROWS', 'WORD_LENGTH', 'STORAGE_KEY',
    'validate_word_list_integrity', 'get_word_statistics'
]
