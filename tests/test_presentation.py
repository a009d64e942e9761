from wordle_game.models.game import EventKind, GameEvent, GameSession, LetterEvaluation
from wordle_game.presentation import build_view, collect_effects, effects_for, tile_state
from wordle_game.services.game_machine import apply_event, create_new_state


def session_for(state, message=''):
    return GameSession(player_id='p1', state=state, message=message, day_key='2024-03-14')


def press(state, keys, words):
    results = []
    for key in keys:
        if key == 'enter':
            event = GameEvent(EventKind.ENTER)
        elif key == 'backspace':
            event = GameEvent(EventKind.BACKSPACE)
        else:
            event = GameEvent.letter_key(key)
        result = apply_event(state, event, words)
        state = result.state
        results.append(result)
    return state, results


def test_tile_state():
    assert tile_state('', LetterEvaluation.EMPTY) == 'empty'
    assert tile_state('A', LetterEvaluation.EMPTY) == 'filled'
    assert tile_state('A', LetterEvaluation.PRESENT) == 'present'


def test_view_of_fresh_game():
    view = build_view(session_for(create_new_state('CRANE'), 'Guess the Wordle in 6 tries.'))
    assert len(view['grid']) == 6
    assert all(len(row) == 5 for row in view['grid'])
    assert view['grid'][0][0] == {'letter': '', 'state': 'empty'}
    assert view['status'] == 'active'
    assert view['reveal'] is None
    assert view['message'] == 'Guess the Wordle in 6 tries.'
    assert 'answer' not in view
    assert [key['key'] for key in view['keyboard'][2]][0] == 'enter'
    assert view['keyboard'][2][-1] == {'key': 'backspace', 'state': ''}


def test_view_after_scored_row(word_source):
    state, _ = press(create_new_state('CRANE'), list('TRACE') + ['enter', 'S'], word_source)
    view = build_view(session_for(state))

    assert [tile['state'] for tile in view['grid'][0]] == ['absent', 'correct', 'correct', 'present', 'correct']
    assert view['grid'][1][0] == {'letter': 'S', 'state': 'filled'}
    assert view['keyStates']['t'] == 'absent'
    keyboard = {key['key']: key['state'] for row in view['keyboard'] for key in row}
    assert keyboard['c'] == 'present'
    assert keyboard['r'] == 'correct'
    assert keyboard['q'] == ''
    assert view['currentRow'] == 1
    assert view['currentCol'] == 1


def test_view_reveals_answer_in_developer_mode():
    state = create_new_state('CRANE', developer_mode=True)
    assert build_view(session_for(state))['answer'] == 'CRANE'


def test_view_reveal_text_when_lost(word_source):
    keys = []
    for word in ['TRACE', 'SPEED', 'ERASE', 'SLATE', 'ADIEU', 'BRICK']:
        keys += list(word) + ['enter']
    state, _ = press(create_new_state('CRANE'), keys, word_source)
    assert build_view(session_for(state))['reveal'] == 'Game over. The word was CRANE.'


def test_effects_for_typing_and_scoring(word_source):
    _, results = press(create_new_state('CRANE'), ['T', 'backspace', 'T', 'R', 'A', 'C', 'E', 'enter'], word_source)
    assert effects_for(results[0]) == ['press:t', 'click']
    assert effects_for(results[1]) == ['press:backspace']
    assert effects_for(results[-1]) == ['press:enter', 'click', 'flip:0']


def test_effects_for_rejected_submit(word_source):
    _, results = press(create_new_state('CRANE'), ['C', 'enter'], word_source)
    assert effects_for(results[-1]) == ['press:enter', 'click']


def test_effects_for_win_and_after(word_source):
    state, results = press(create_new_state('CRANE'), list('CRANE') + ['enter'], word_source)
    assert effects_for(results[-1]) == ['press:enter', 'click', 'flip:0', 'win']

    _, results = press(state, ['A'], word_source)
    assert effects_for(results[0]) == []


def test_effects_for_loss(word_source):
    keys = []
    for word in ['TRACE', 'SPEED', 'ERASE', 'SLATE', 'ADIEU', 'BRICK']:
        keys += list(word) + ['enter']
    _, results = press(create_new_state('CRANE'), keys, word_source)
    assert effects_for(results[-1])[-2:] == ['flip:5', 'lose']


def test_collect_effects(word_source):
    _, results = press(create_new_state('CRANE'), ['A', 'B'], word_source)
    assert collect_effects(results) == ['press:a', 'click', 'press:b', 'click']
