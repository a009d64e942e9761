"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from typing import List

from flask import Blueprint, request, jsonify

from ..models.game import GameSession, TransitionResult
from ..presentation import build_view, collect_effects
from ..services.game_service import DeveloperToolsDisabledError, InvalidInputError, get_game_service
from ..utils.decorators import require_player
from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


def _game_response(action: str, session: GameSession, results: List[TransitionResult] = None, **log_details):
    """Build the JSON body for a game view and log it."""
    results = results or []
    response_data = {
        'success': True,
        'view': build_view(session),
        'effects': collect_effects(results)
    }
    if results:
        response_data['outcome'] = results[-1].outcome.value

    game_logger.log_server_response(
        request, action, True, response_data, session.player_id,
        status=session.state.status.value, **log_details
    )
    return jsonify(response_data)


def _error_response(action: str, message: str, status_code: int):
    error_response = {
        'success': False,
        'error': message
    }
    game_logger.log_server_response(request, action, False, error_response, getattr(request, 'player_id', None))
    return jsonify(error_response), status_code


@game_bp.route('/game', methods=['GET'])
@require_player
def get_game():
    """Restore today's game or start one."""
    try:
        game_logger.log_user_action(request, 'get_game', request.player_id)
        session = get_game_service().get_session(request.player_id)
        return _game_response('get_game', session)

    except Exception as e:
        game_logger.log_error(request, e, 'get_game', request.player_id)
        return _error_response('get_game', str(e), 500)


@game_bp.route('/game/key', methods=['POST'])
@require_player
def press_key():
    """Apply a single key press: a letter, enter or backspace."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not key:
            return _error_response('key', 'Key is required', 400)

        game_logger.log_user_action(request, 'key', request.player_id, key=key)

        session, result = get_game_service().handle_key(request.player_id, key)
        return _game_response('key', session, [result], outcome=result.outcome.value)

    except InvalidInputError as e:
        return _error_response('key', str(e), 400)
    except Exception as e:
        game_logger.log_error(request, e, 'key', request.player_id)
        return _error_response('key', str(e), 500)


@game_bp.route('/game/guess', methods=['POST'])
@require_player
def make_guess():
    """Type a whole word into the current row and submit it."""
    try:
        data = request.get_json(silent=True) or {}
        if 'guess' not in data:
            return _error_response('submit_guess', 'Guess is required', 400)

        guess = data['guess']
        game_logger.log_user_action(request, 'submit_guess', request.player_id, guess=guess)

        session, results = get_game_service().submit_word(request.player_id, guess)
        return _game_response('submit_guess', session, results, outcome=results[-1].outcome.value)

    except InvalidInputError as e:
        return _error_response('submit_guess', str(e), 400)
    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', request.player_id)
        return _error_response('submit_guess', str(e), 500)


@game_bp.route('/new_game', methods=['POST'])
@require_player
def new_game():
    """Replace the player's game; choice "same" keeps today's word, "new" picks a random one."""
    try:
        data = request.get_json(silent=True) or {}
        choice = data.get('choice')

        game_logger.log_user_action(request, 'new_game', request.player_id, choice=choice)

        session = get_game_service().new_game(request.player_id, choice)
        return _game_response('new_game', session, choice=choice or 'same')

    except InvalidInputError as e:
        return _error_response('new_game', str(e), 400)
    except Exception as e:
        game_logger.log_error(request, e, 'new_game', request.player_id)
        return _error_response('new_game', str(e), 500)


@game_bp.route('/game/developer', methods=['POST'])
@require_player
def toggle_developer():
    """Debug command: show or hide the answer."""
    try:
        game_logger.log_user_action(request, 'toggle_developer', request.player_id)

        session, result = get_game_service().toggle_developer_mode(request.player_id)
        return _game_response('toggle_developer', session, [result])

    except DeveloperToolsDisabledError as e:
        return _error_response('toggle_developer', str(e), 403)
    except Exception as e:
        game_logger.log_error(request, e, 'toggle_developer', request.player_id)
        return _error_response('toggle_developer', str(e), 500)


@game_bp.route('/game', methods=['DELETE'])
@require_player
def delete_game():
    """Forget the player's saved game."""
    try:
        game_logger.log_user_action(request, 'delete_game', request.player_id)

        deleted = get_game_service().delete_game(request.player_id)
        response_data = {
            'success': True,
            'deleted': deleted
        }
        game_logger.log_server_response(request, 'delete_game', True, response_data, request.player_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', request.player_id)
        return _error_response('delete_game', str(e), 500)


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.sessions),
            'storage_backend': type(game_service.store).__name__,
            'developer_tools_enabled': game_service.developer_tools_enabled,
            'log_stats': game_logger.get_log_stats()
        }
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        return jsonify({
            'status': 'error',
            'error': str(e)
        }), 500
