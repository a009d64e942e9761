"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_player, websocket_player_required
from .helpers import get_local_day_key, get_player_id
from .game_logger import game_logger

__all__ = ['require_player', 'websocket_player_required', 'get_local_day_key', 'get_player_id', 'game_logger']
