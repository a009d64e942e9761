"""
Helper Functions

Contains utility functions used throughout the application.
"""

import re
from datetime import date, datetime
from typing import Optional

from flask import request

_PLAYER_ID_PATTERN = re.compile(r'^[A-Za-z0-9_.-]{1,64}$')


def get_local_day_key(day: Optional[date] = None) -> str:
    """Calendar-day key (YYYY-MM-DD) in local time."""
    if day is None:
        day = datetime.now().date()
    return day.strftime('%Y-%m-%d')


def is_valid_player_id(player_id) -> bool:
    return isinstance(player_id, str) and bool(_PLAYER_ID_PATTERN.match(player_id))


def get_player_id(request_obj=None) -> Optional[str]:
    """
    Extract the player id from a request.

    Looks at the X-Player-Id header first, then a ``player_id`` field in the
    JSON body or the query string. Returns None when absent or malformed.
    """
    if request_obj is None:
        request_obj = request

    player_id = request_obj.headers.get('X-Player-Id')
    if not player_id:
        data = request_obj.get_json(silent=True) or {}
        player_id = data.get('player_id') if isinstance(data, dict) else None
    if not player_id:
        player_id = request_obj.args.get('player_id')

    if not is_valid_player_id(player_id):
        return None
    return player_id
