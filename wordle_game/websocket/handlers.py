"""
WebSocket Event Handlers

Lets a browser drive its game over Socket.IO. Every event is answered with a
``game_update`` to the emitting client carrying the new view and the effect
cues of the transition.
"""

from flask import current_app, request
from flask_socketio import emit

from ..presentation import build_view, effects_for
from ..services.game_service import DeveloperToolsDisabledError, InvalidInputError
from ..utils.decorators import websocket_player_required
from ..utils.game_logger import game_logger


def _emit_update(session, result=None):
    emit('game_update', {
        'view': build_view(session),
        'outcome': result.outcome.value if result else None,
        'effects': effects_for(result) if result else []
    })


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def game_service():
        return current_app.extensions['wordle_game']

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.logger.info(f"WebSocket connected: {request.sid}")

    @socketio.on('disconnect')
    def handle_disconnect(*args):
        """Handle WebSocket disconnection."""
        game_logger.logger.info(f"WebSocket disconnected: {request.sid}")

    @socketio.on('get_game')
    @websocket_player_required
    def handle_get_game(data, player_id=None):
        """Send the player's current game."""
        try:
            _emit_update(game_service().get_session(player_id))
        except Exception as e:
            game_logger.log_error(None, e, 'ws_get_game', player_id)
            emit('error', {'error': 'Failed to load game'})

    @socketio.on('key')
    @websocket_player_required
    def handle_key(data, player_id=None):
        """Apply one key press."""
        try:
            session, result = game_service().handle_key(player_id, data.get('key'))
            _emit_update(session, result)
        except InvalidInputError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(None, e, 'ws_key', player_id)
            emit('error', {'error': 'Failed to process key'})

    @socketio.on('new_game')
    @websocket_player_required
    def handle_new_game(data, player_id=None):
        """Start a new game with today's word or a random one."""
        try:
            session = game_service().new_game(player_id, data.get('choice'))
            _emit_update(session)
        except InvalidInputError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(None, e, 'ws_new_game', player_id)
            emit('error', {'error': 'Failed to start new game'})

    @socketio.on('toggle_developer')
    @websocket_player_required
    def handle_toggle_developer(data, player_id=None):
        """Debug command: show or hide the answer."""
        try:
            session, result = game_service().toggle_developer_mode(player_id)
            _emit_update(session, result)
        except DeveloperToolsDisabledError as e:
            emit('error', {'error': str(e)})
        except Exception as e:
            game_logger.log_error(None, e, 'ws_toggle_developer', player_id)
            emit('error', {'error': 'Failed to toggle developer mode'})
