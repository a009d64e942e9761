"""
Services Package

Contains the game logic and its collaborators.
"""

from .game_service import GameService, get_game_service
from .persistence import JsonFileStateStore, MemoryStateStore, MongoStateStore, StorageError, create_state_store
from .scoring import score_guess
from .hints import update_hints
from .word_source import WordSource

__all__ = [
    'GameService', 'get_game_service',
    'JsonFileStateStore', 'MemoryStateStore', 'MongoStateStore', 'StorageError', 'create_state_store',
    'score_guess', 'update_hints', 'WordSource'
]
