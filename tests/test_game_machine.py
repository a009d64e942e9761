import copy

import pytest

from wordle_game.models.game import (
    EventKind, GameEvent, GameState, GameStatus, LetterEvaluation, TransitionOutcome
)
from wordle_game.services import game_machine
from wordle_game.services.game_machine import (
    apply_event, create_new_state, normalize_key, reveal_text
)

A = LetterEvaluation.ABSENT
P = LetterEvaluation.PRESENT
C = LetterEvaluation.CORRECT
EMPTY = LetterEvaluation.EMPTY

ENTER = GameEvent(EventKind.ENTER)
BACKSPACE = GameEvent(EventKind.BACKSPACE)
TOGGLE = GameEvent(EventKind.TOGGLE_DEVELOPER)

NON_MATCHING = ['TRACE', 'SPEED', 'ERASE', 'SLATE', 'ADIEU', 'BRICK']


def type_word(state, word, words):
    for letter in word:
        state = apply_event(state, GameEvent.letter_key(letter), words).state
    return state


def guess(state, word, words):
    state = type_word(state, word, words)
    return apply_event(state, ENTER, words)


def test_new_state_shape():
    state = create_new_state('crane')
    assert state.answer == 'CRANE'
    assert state.guesses == [[''] * 5 for _ in range(6)]
    assert state.evaluations == [[EMPTY] * 5 for _ in range(6)]
    assert (state.current_row, state.current_col) == (0, 0)
    assert state.status is GameStatus.ACTIVE
    assert state.key_states == {}
    assert state.developer_mode is False


@pytest.mark.parametrize('raw, expected', [
    ('a', GameEvent(EventKind.LETTER, 'A')),
    ('Z', GameEvent(EventKind.LETTER, 'Z')),
    ('Enter', ENTER),
    ('enter', ENTER),
    ('Backspace', BACKSPACE),
    ('BACKSPACE', BACKSPACE),
])
def test_normalize_key(raw, expected):
    assert normalize_key(raw) == expected


@pytest.mark.parametrize('raw', ['', '1', 'ab', 'é', 'Shift', None, 5])
def test_normalize_key_rejects_other_keys(raw):
    assert normalize_key(raw) is None


def test_letter_input_writes_uppercase_and_advances(word_source):
    state = create_new_state('CRANE')
    result = apply_event(state, GameEvent(EventKind.LETTER, 'c'), word_source)

    assert result.outcome is TransitionOutcome.LETTER_ADDED
    assert result.changed
    assert result.state.guesses[0][0] == 'C'
    assert result.state.current_col == 1
    # Input state untouched
    assert state.guesses[0][0] == ''
    assert state.current_col == 0


def test_letter_input_ignored_when_row_full(word_source):
    state = type_word(create_new_state('CRANE'), 'TRACE', word_source)
    result = apply_event(state, GameEvent.letter_key('X'), word_source)

    assert result.outcome is TransitionOutcome.IGNORED
    assert result.state is state
    assert state.current_word() == 'TRACE'


def test_backspace_clears_previous_cell(word_source):
    state = type_word(create_new_state('CRANE'), 'TR', word_source)
    result = apply_event(state, BACKSPACE, word_source)

    assert result.outcome is TransitionOutcome.LETTER_REMOVED
    assert result.state.current_col == 1
    assert result.state.guesses[0] == ['T', '', '', '', '']


def test_backspace_ignored_at_start_of_row(word_source):
    state = create_new_state('CRANE')
    result = apply_event(state, BACKSPACE, word_source)
    assert result.outcome is TransitionOutcome.IGNORED
    assert result.state is state


def test_not_enough_letters(word_source):
    state = type_word(create_new_state('CRANE'), 'CRA', word_source)
    snapshot = copy.deepcopy(state)
    result = apply_event(state, ENTER, word_source)

    assert result.outcome is TransitionOutcome.REJECTED
    assert result.message == 'Not enough letters.'
    assert 'not enough letters' in result.message.lower()
    assert result.state is state
    assert state == snapshot


def test_word_not_in_list_keeps_row(word_source):
    state = type_word(create_new_state('CRANE'), 'QQQQQ', word_source)
    snapshot = copy.deepcopy(state)
    result = apply_event(state, ENTER, word_source)

    assert result.outcome is TransitionOutcome.REJECTED
    assert result.message == 'Word is not in the list.'
    assert result.state is state
    assert state == snapshot
    assert state.current_word() == 'QQQQQ'
    assert state.current_col == 5


def test_winning_guess(word_source):
    result = guess(create_new_state('CRANE'), 'CRANE', word_source)

    assert result.outcome is TransitionOutcome.WON
    assert result.row == 0
    assert result.state.status is GameStatus.WON
    assert result.state.evaluations[0] == [C] * 5
    assert result.message == 'You got it! 🎉'
    assert reveal_text(result.state) == 'You got it! 🎉'
    # Cursor stays on the winning row
    assert result.state.current_row == 0


def test_trace_fixture_and_row_advance(word_source):
    state = create_new_state('CRANE')
    result = guess(state, 'TRACE', word_source)

    assert result.outcome is TransitionOutcome.ROW_SCORED
    assert result.evaluation == [A, C, C, P, C]
    assert result.state.evaluations[0] == [A, C, C, P, C]
    assert result.state.current_row == 1
    assert result.state.current_col == 0
    assert result.state.status is GameStatus.ACTIVE
    assert result.message == ''
    assert result.state.key_states == {'t': A, 'r': C, 'a': C, 'c': P, 'e': C}


def test_prior_rows_are_frozen(word_source):
    state = guess(create_new_state('CRANE'), 'TRACE', word_source).state
    frozen_guesses = copy.deepcopy(state.guesses[0])
    frozen_evaluations = copy.deepcopy(state.evaluations[0])

    state = guess(state, 'SLATE', word_source).state
    state = apply_event(state, GameEvent.letter_key('B'), word_source).state
    state = apply_event(state, BACKSPACE, word_source).state

    assert state.current_row == 2
    assert state.guesses[0] == frozen_guesses
    assert state.evaluations[0] == frozen_evaluations


def test_six_misses_lose_and_reveal_answer(word_source):
    state = create_new_state('CRANE')
    for index, word in enumerate(NON_MATCHING):
        result = guess(state, word, word_source)
        state = result.state
        if index < 5:
            assert result.outcome is TransitionOutcome.ROW_SCORED
            assert state.current_row == index + 1

    assert result.outcome is TransitionOutcome.LOST
    assert state.status is GameStatus.LOST
    assert state.current_row == 5
    assert state.answer in result.message
    assert result.message == 'Game over. The word was CRANE.'
    assert all(evaluation is not EMPTY for row in state.evaluations for evaluation in row)


@pytest.mark.parametrize('final_word, status', [('CRANE', GameStatus.WON), (None, GameStatus.LOST)])
def test_terminal_state_ignores_input(word_source, final_word, status):
    state = create_new_state('CRANE')
    if final_word:
        state = guess(state, final_word, word_source).state
    else:
        for word in NON_MATCHING:
            state = guess(state, word, word_source).state
    assert state.status is status

    snapshot = copy.deepcopy(state)
    for event in [GameEvent.letter_key('A'), BACKSPACE, ENTER]:
        result = apply_event(state, event, word_source)
        assert result.outcome is TransitionOutcome.IGNORED
        assert result.state is state
    assert state == snapshot


def test_win_on_last_row(word_source):
    state = create_new_state('CRANE')
    for word in NON_MATCHING[:5]:
        state = guess(state, word, word_source).state
    result = guess(state, 'CRANE', word_source)
    assert result.outcome is TransitionOutcome.WON
    assert result.state.current_row == 5


def test_toggle_developer_mode_clears_current_row(word_source):
    state = type_word(create_new_state('CRANE'), 'TRA', word_source)
    result = apply_event(state, TOGGLE, word_source)

    assert result.outcome is TransitionOutcome.DEVELOPER_MODE_TOGGLED
    assert result.state.developer_mode is True
    assert result.state.guesses[0] == [''] * 5
    assert result.state.current_col == 0
    assert result.message == 'Welcome developer.'

    result = apply_event(result.state, TOGGLE, word_source)
    assert result.state.developer_mode is False
    assert result.message == 'Developer mode disabled.'


def test_toggle_developer_mode_keeps_finished_board(word_source):
    state = guess(create_new_state('CRANE'), 'CRANE', word_source).state
    result = apply_event(state, TOGGLE, word_source)
    assert result.state.developer_mode is True
    assert result.state.guesses[0] == list('CRANE')
    assert result.state.status is GameStatus.WON


def test_submit_only_scores_with_validator(word_source):
    class RejectEverything:
        def is_valid_guess(self, word):
            return False

    state = type_word(create_new_state('CRANE'), 'CRANE', word_source)
    result = game_machine.submit_guess(state, ENTER, RejectEverything())
    assert result.outcome is TransitionOutcome.REJECTED
    assert result.state.status is GameStatus.ACTIVE


def test_state_round_trips_through_dict(word_source):
    state = guess(create_new_state('CRANE'), 'TRACE', word_source).state
    state = type_word(state, 'SL', word_source)
    assert GameState.from_dict(state.to_dict()) == state
