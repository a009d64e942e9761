"""
Request Decorators

Contains decorators that resolve the player behind HTTP and WebSocket requests.
"""

from functools import wraps
from flask import request, jsonify
from flask_socketio import emit

from .helpers import get_player_id, is_valid_player_id


def require_player(f):
    """
    Decorator to require a player id for game endpoints.

    The id is read from the X-Player-Id header, the JSON body or the query
    string and stored on ``request.player_id``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        player_id = get_player_id(request)
        if not player_id:
            return jsonify({
                'success': False,
                'error': 'Player id required'
            }), 400

        request.player_id = player_id
        return f(*args, **kwargs)

    return decorated_function


def websocket_player_required(f):
    """Decorator for WebSocket events; passes ``player_id`` as a keyword argument."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        data = args[0] if args and isinstance(args[0], dict) else {}
        player_id = data.get('player_id')
        if not is_valid_player_id(player_id):
            emit('error', {'error': 'Player id required'})
            return

        kwargs['player_id'] = player_id
        return f(*args, **kwargs)

    return decorated_function
