"""
Game State Machine

Pure transition functions: each takes a GameState and one event and returns a
TransitionResult holding the next state. Inputs are never mutated; events
that are ignored or rejected hand back the very same state object.
"""

import copy
from typing import Optional, Protocol

from ..config.game_settings import MAX_ROWS, WORD_LENGTH
from ..models.game import (
    EventKind, GameEvent, GameState, GameStatus, LetterEvaluation,
    TransitionOutcome, TransitionResult
)
from .hints import update_hints
from .scoring import score_guess

NOT_ENOUGH_LETTERS = "Not enough letters."
NOT_IN_WORD_LIST = "Word is not in the list."
WIN_MESSAGE = "You got it! 🎉"
LOSS_MESSAGE = "Game over. The word was {answer}."
DEVELOPER_ON_MESSAGE = "Welcome developer."
DEVELOPER_OFF_MESSAGE = "Developer mode disabled."


class GuessValidator(Protocol):
    def is_valid_guess(self, word: str) -> bool:
        ...


def create_new_state(answer: str, developer_mode: bool = False) -> GameState:
    """Fresh game for the given answer."""
    return GameState(answer=answer.upper(), developer_mode=developer_mode)


def normalize_key(raw_key) -> Optional[GameEvent]:
    """
    Maps a raw key name to a game event.

    Accepts single letters A-Z in either case, "enter" and "backspace"
    (case-insensitive). Returns None for anything else.
    """
    if not isinstance(raw_key, str):
        return None

    key = raw_key.strip()
    if len(key) == 1 and 'a' <= key.lower() <= 'z':
        return GameEvent.letter_key(key)

    lowered = key.lower()
    if lowered == 'enter':
        return GameEvent(EventKind.ENTER)
    if lowered == 'backspace':
        return GameEvent(EventKind.BACKSPACE)
    return None


def reveal_text(state: GameState) -> Optional[str]:
    """Terminal win/loss text, or None while the game is active."""
    if state.status is GameStatus.WON:
        return WIN_MESSAGE
    if state.status is GameStatus.LOST:
        return LOSS_MESSAGE.format(answer=state.answer.upper())
    return None


def _ignored(state: GameState, event: GameEvent) -> TransitionResult:
    return TransitionResult(state=state, event=event, outcome=TransitionOutcome.IGNORED)


def _rejected(state: GameState, event: GameEvent, message: str) -> TransitionResult:
    return TransitionResult(state=state, event=event, outcome=TransitionOutcome.REJECTED, message=message)


def input_letter(state: GameState, event: GameEvent) -> TransitionResult:
    if state.status.is_terminal or state.current_col >= WORD_LENGTH:
        return _ignored(state, event)

    new_state = copy.deepcopy(state)
    new_state.guesses[new_state.current_row][new_state.current_col] = event.letter.upper()
    new_state.current_col += 1
    return TransitionResult(state=new_state, event=event, outcome=TransitionOutcome.LETTER_ADDED, changed=True)


def backspace(state: GameState, event: GameEvent) -> TransitionResult:
    if state.status.is_terminal or state.current_col == 0:
        return _ignored(state, event)

    new_state = copy.deepcopy(state)
    new_state.current_col -= 1
    new_state.guesses[new_state.current_row][new_state.current_col] = ''
    return TransitionResult(state=new_state, event=event, outcome=TransitionOutcome.LETTER_REMOVED, changed=True)


def submit_guess(state: GameState, event: GameEvent, words: GuessValidator) -> TransitionResult:
    """
    Scores the current row.

    Incomplete rows and unknown words are rejected with a message and leave
    the state untouched so the player can fix the row and try again.
    """
    if state.status.is_terminal:
        return _ignored(state, event)

    if state.current_col < WORD_LENGTH:
        return _rejected(state, event, NOT_ENOUGH_LETTERS)

    guess = state.current_word()
    if not words.is_valid_guess(guess):
        return _rejected(state, event, NOT_IN_WORD_LIST)

    new_state = copy.deepcopy(state)
    submitted_row = new_state.current_row
    scored = score_guess(guess, new_state.answer)
    new_state.evaluations[submitted_row] = scored
    new_state.key_states = update_hints(new_state.key_states, list(guess), scored)

    if guess == new_state.answer.upper():
        new_state.status = GameStatus.WON
        outcome = TransitionOutcome.WON
    elif submitted_row == MAX_ROWS - 1:
        new_state.status = GameStatus.LOST
        outcome = TransitionOutcome.LOST
    else:
        new_state.current_row += 1
        new_state.current_col = 0
        outcome = TransitionOutcome.ROW_SCORED

    return TransitionResult(
        state=new_state,
        event=event,
        outcome=outcome,
        changed=True,
        row=submitted_row,
        evaluation=list(scored),
        message=reveal_text(new_state) or ''
    )


def toggle_developer_mode(state: GameState, event: GameEvent) -> TransitionResult:
    """Flips developer mode; an active game also loses its partly typed row."""
    new_state = copy.deepcopy(state)
    new_state.developer_mode = not new_state.developer_mode

    if not new_state.status.is_terminal:
        new_state.guesses[new_state.current_row] = [''] * WORD_LENGTH
        new_state.evaluations[new_state.current_row] = [LetterEvaluation.EMPTY] * WORD_LENGTH
        new_state.current_col = 0

    return TransitionResult(
        state=new_state,
        event=event,
        outcome=TransitionOutcome.DEVELOPER_MODE_TOGGLED,
        changed=True,
        message=DEVELOPER_ON_MESSAGE if new_state.developer_mode else DEVELOPER_OFF_MESSAGE
    )


def apply_event(state: GameState, event: GameEvent, words: GuessValidator) -> TransitionResult:
    """Dispatches one event to its transition."""
    if event.kind is EventKind.LETTER:
        return input_letter(state, event)
    if event.kind is EventKind.BACKSPACE:
        return backspace(state, event)
    if event.kind is EventKind.ENTER:
        return submit_guess(state, event, words)
    if event.kind is EventKind.TOGGLE_DEVELOPER:
        return toggle_developer_mode(state, event)
    raise ValueError(f"Unknown event kind: {event.kind}")
