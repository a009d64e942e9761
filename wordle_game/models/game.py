"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from string import ascii_letters
from typing import Any, Dict, List, Optional

from ..config.game_settings import MAX_ROWS, WORD_LENGTH


class LetterEvaluation(Enum):
    """Per-tile evaluation. EMPTY and FILLED are pre-scoring states."""
    EMPTY = "empty"
    FILLED = "filled"
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"


class GameStatus(Enum):
    ACTIVE = "active"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.ACTIVE


class EventKind(Enum):
    LETTER = "letter"
    BACKSPACE = "backspace"
    ENTER = "enter"
    TOGGLE_DEVELOPER = "toggle_developer"


@dataclass(frozen=True)
class GameEvent:
    """A single normalized input event."""
    kind: EventKind
    letter: Optional[str] = None

    @classmethod
    def letter_key(cls, letter: str) -> 'GameEvent':
        return cls(EventKind.LETTER, letter.upper())

    @property
    def key(self) -> str:
        """Lowercase key name as the on-screen keyboard labels it."""
        if self.kind is EventKind.LETTER:
            return self.letter.lower()
        return self.kind.value


class TransitionOutcome(Enum):
    IGNORED = "ignored"
    LETTER_ADDED = "letter_added"
    LETTER_REMOVED = "letter_removed"
    REJECTED = "rejected"
    ROW_SCORED = "row_scored"
    WON = "won"
    LOST = "lost"
    DEVELOPER_MODE_TOGGLED = "developer_mode_toggled"


def empty_guesses() -> List[List[str]]:
    return [[''] * WORD_LENGTH for _ in range(MAX_ROWS)]


def empty_evaluations() -> List[List[LetterEvaluation]]:
    return [[LetterEvaluation.EMPTY] * WORD_LENGTH for _ in range(MAX_ROWS)]


@dataclass
class GameState:
    """
    Complete state of one game.

    Rows before ``current_row`` are scored; the current row holds
    ``current_col`` typed letters followed by empty strings.
    """
    answer: str
    guesses: List[List[str]] = field(default_factory=empty_guesses)
    evaluations: List[List[LetterEvaluation]] = field(default_factory=empty_evaluations)
    current_row: int = 0
    current_col: int = 0
    status: GameStatus = GameStatus.ACTIVE
    key_states: Dict[str, LetterEvaluation] = field(default_factory=dict)
    developer_mode: bool = False

    def current_word(self) -> str:
        return ''.join(self.guesses[self.current_row])

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON record layout used by saved games and the API."""
        return {
            'answer': self.answer,
            'guesses': [list(row) for row in self.guesses],
            'evaluations': [[evaluation.value for evaluation in row] for row in self.evaluations],
            'currentRow': self.current_row,
            'currentCol': self.current_col,
            'status': self.status.value,
            'keyStates': {letter: evaluation.value for letter, evaluation in self.key_states.items()},
            'developerMode': self.developer_mode
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameState':
        """
        Build a state from a saved record.

        Raises:
            ValueError: If the record is missing fields, has the wrong shape,
                or describes a board the game could not have reached
        """
        if not isinstance(data, dict):
            raise ValueError("Saved game must be a JSON object")

        answer = data.get('answer')
        if not isinstance(answer, str) or len(answer) != WORD_LENGTH or not _is_word(answer):
            raise ValueError(f"Saved answer must be {WORD_LENGTH} letters")

        raw_key_states = data.get('keyStates') or {}
        if not isinstance(raw_key_states, dict):
            raise ValueError("Saved key states must be an object")

        try:
            guesses = [[_saved_letter(letter) for letter in row] for row in data['guesses']]
            evaluations = [[LetterEvaluation(value) for value in row] for row in data['evaluations']]
            current_row = int(data['currentRow'])
            current_col = int(data['currentCol'])
            status = GameStatus(data['status'])
            key_states = {
                _saved_letter(letter).lower(): LetterEvaluation(value)
                for letter, value in raw_key_states.items()
            }
        except (KeyError, TypeError) as e:
            raise ValueError(f"Saved game is incomplete: {e}")

        if len(guesses) != MAX_ROWS or any(len(row) != WORD_LENGTH for row in guesses):
            raise ValueError("Saved guesses have the wrong shape")
        if len(evaluations) != MAX_ROWS or any(len(row) != WORD_LENGTH for row in evaluations):
            raise ValueError("Saved evaluations have the wrong shape")
        if not 0 <= current_row < MAX_ROWS or not 0 <= current_col <= WORD_LENGTH:
            raise ValueError("Saved cursor is out of range")
        if '' in key_states:
            raise ValueError("Saved key states must be keyed by letter")

        _check_board(guesses, evaluations, current_row, current_col, status)

        return cls(
            answer=answer.upper(),
            guesses=guesses,
            evaluations=evaluations,
            current_row=current_row,
            current_col=current_col,
            status=status,
            key_states=key_states,
            developer_mode=bool(data.get('developerMode'))
        )


def _is_word(text: str) -> bool:
    return all(letter in ascii_letters for letter in text)


def _saved_letter(letter) -> str:
    """A grid cell is either empty or a single letter A-Z."""
    if not isinstance(letter, str) or len(letter) > 1 or not _is_word(letter):
        raise ValueError(f"Saved cell {letter!r} is not a letter")
    return letter.upper()


def _check_board(guesses, evaluations, current_row, current_col, status) -> None:
    """
    Rows before the cursor row are scored and full. On an active game the
    cursor row holds ``current_col`` letters followed by blanks and is not
    scored; a finished game keeps its cursor on the last scored row.
    Rows after the cursor row are blank.
    """
    scored_rows = current_row + 1 if status.is_terminal else current_row

    for index in range(MAX_ROWS):
        letters = guesses[index]
        row_evaluations = evaluations[index]
        if index < scored_rows:
            if '' in letters or LetterEvaluation.EMPTY in row_evaluations or \
                    LetterEvaluation.FILLED in row_evaluations:
                raise ValueError(f"Saved row {index} should be scored")
        elif index == current_row:
            filled = [letter != '' for letter in letters]
            if filled != [True] * current_col + [False] * (WORD_LENGTH - current_col):
                raise ValueError("Saved cursor does not match the current row")
            if any(evaluation is not LetterEvaluation.EMPTY for evaluation in row_evaluations):
                raise ValueError("Saved current row is already scored")
        elif any(letters) or any(evaluation is not LetterEvaluation.EMPTY for evaluation in row_evaluations):
            raise ValueError(f"Saved row {index} should be blank")

    if status.is_terminal and current_col != WORD_LENGTH:
        raise ValueError("Saved cursor does not match a finished game")


@dataclass
class TransitionResult:
    """What a single event did to a game."""
    state: GameState
    event: Optional[GameEvent]
    outcome: TransitionOutcome
    changed: bool = False
    row: Optional[int] = None
    evaluation: Optional[List[LetterEvaluation]] = None
    message: Optional[str] = None


@dataclass
class GameSession:
    """A player's current game plus the last status message shown to them."""
    player_id: str
    state: GameState
    message: str = ''
    day_key: str = ''
