"""
Presentation helpers

Turns game sessions into the view model the browser renders and translates
transition results into effect cues (sounds and animations). The browser
decides whether and how to play each cue.
"""

from typing import Any, Dict, Iterable, List

from .config.game_settings import KEYBOARD_LAYOUT, MAX_ROWS, WORD_LENGTH
from .models.game import EventKind, GameSession, GameState, LetterEvaluation, TransitionOutcome, TransitionResult
from .services.game_machine import reveal_text


def tile_state(letter: str, evaluation: LetterEvaluation) -> str:
    """Display state of a tile; typed but unscored letters show as filled."""
    if evaluation is LetterEvaluation.EMPTY:
        return LetterEvaluation.FILLED.value if letter else LetterEvaluation.EMPTY.value
    return evaluation.value


def build_grid(state: GameState) -> List[List[Dict[str, str]]]:
    return [
        [
            {'letter': state.guesses[row][col], 'state': tile_state(state.guesses[row][col], state.evaluations[row][col])}
            for col in range(WORD_LENGTH)
        ]
        for row in range(MAX_ROWS)
    ]


def build_keyboard(state: GameState) -> List[List[Dict[str, str]]]:
    keyboard = []
    for layout_row in KEYBOARD_LAYOUT:
        keys = []
        for key in layout_row:
            hint = state.key_states.get(key)
            keys.append({'key': key, 'state': hint.value if hint else ''})
        keyboard.append(keys)
    return keyboard


def build_view(session: GameSession) -> Dict[str, Any]:
    """Everything the client needs to redraw the board after a change."""
    state = session.state
    view = {
        'grid': build_grid(state),
        'keyboard': build_keyboard(state),
        'keyStates': {letter: evaluation.value for letter, evaluation in state.key_states.items()},
        'status': state.status.value,
        'message': session.message,
        'reveal': reveal_text(state),
        'currentRow': state.current_row,
        'currentCol': state.current_col,
        'developerMode': state.developer_mode,
        'dayKey': session.day_key
    }
    if state.developer_mode:
        view['answer'] = state.answer
    return view


def effects_for(result: TransitionResult) -> List[str]:
    """
    Effect cues for one transition.

    Key presses on a finished game produce nothing. Otherwise the key is
    animated, letters and enter click, a scored row flips and the final
    guess adds a win or lose sound.
    """
    effects: List[str] = []
    event = result.event
    if event is None or event.kind is EventKind.TOGGLE_DEVELOPER:
        return effects
    if result.outcome is TransitionOutcome.IGNORED and result.state.status.is_terminal:
        return effects

    effects.append(f"press:{event.key}")
    if event.kind in (EventKind.LETTER, EventKind.ENTER):
        effects.append('click')

    if result.row is not None:
        effects.append(f"flip:{result.row}")
    if result.outcome is TransitionOutcome.WON:
        effects.append('win')
    elif result.outcome is TransitionOutcome.LOST:
        effects.append('lose')
    return effects


def collect_effects(results: Iterable[TransitionResult]) -> List[str]:
    effects: List[str] = []
    for result in results:
        effects.extend(effects_for(result))
    return effects
