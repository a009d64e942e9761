import json

from wordle_game.utils.game_logger import GameLogger


def test_sanitize_hides_view_details(tmp_path):
    logger = GameLogger(str(tmp_path))
    sanitized = logger._sanitize_response_data({
        'success': True,
        'view': {'status': 'active', 'currentRow': 2, 'currentCol': 0, 'message': '',
                 'developerMode': True, 'answer': 'CRANE', 'reveal': None}
    })
    assert 'CRANE' not in json.dumps(sanitized)
    assert sanitized['view']['answer_revealed'] is False
    assert sanitized['view']['current_row'] == 2


def test_game_events_are_counted(tmp_path):
    logger = GameLogger(str(tmp_path))
    logger.log_game_event('p1', 'game_started', day_key='2024-03-14')
    logger.log_error(None, ValueError('boom'), 'save_game', 'p1')
    for handler in logger.logger.handlers:
        handler.flush()

    stats = logger.get_log_stats()
    assert stats['game_events'] == 1
    assert stats['errors'] == 1
    assert stats['total_entries'] == 2
