"""
Keyboard Hint Aggregator

Folds scored rows into the best-known state per keyboard letter.
"""

from typing import Dict, Sequence

from ..config.game_settings import HINT_PRIORITY
from ..models.game import LetterEvaluation


def hint_priority(evaluation: LetterEvaluation) -> int:
    """Rank of an evaluation on the keyboard; unscored states rank 0."""
    return HINT_PRIORITY.get(evaluation.value, 0)


def update_hints(current_hints: Dict[str, LetterEvaluation],
                 letters: Sequence[str],
                 evaluations: Sequence[LetterEvaluation]) -> Dict[str, LetterEvaluation]:
    """
    Merges one scored row into the keyboard hints.

    A letter's hint is only replaced by a strictly higher-priority evaluation,
    so hints never move backward. The input mapping is not modified.

    Args:
        current_hints: Lowercase letter -> best evaluation so far
        letters: The letters of the scored row
        evaluations: The evaluation of each letter

    Returns:
        New hint mapping
    """
    hints = dict(current_hints)

    for letter, new_evaluation in zip(letters, evaluations):
        if hint_priority(new_evaluation) == 0:
            continue

        key_letter = letter.lower()
        current = hints.get(key_letter)
        if current is None or hint_priority(new_evaluation) > hint_priority(current):
            hints[key_letter] = new_evaluation

    return hints
