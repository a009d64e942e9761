"""
Scoring Engine

Implements the Wordle letter evaluation algorithm.
"""

from typing import Dict, List

from ..models.game import LetterEvaluation


def get_letter_counts(word: str) -> Dict[str, int]:
    """Count how many times each letter occurs in a word."""
    counts: Dict[str, int] = {}
    for letter in word:
        counts[letter] = counts.get(letter, 0) + 1
    return counts


def score_guess(guess: str, answer: str) -> List[LetterEvaluation]:
    """
    Evaluates a guess against the answer.

    Exact matches are marked first and consume their letter; the remaining
    positions are then scanned left to right, so a letter repeated in the
    guess is only marked present as many times as the answer still has it.

    Args:
        guess: The guessed word
        answer: The target word

    Returns:
        List of CORRECT / PRESENT / ABSENT, one per letter

    Raises:
        ValueError: If the words have different lengths
    """
    guess = guess.upper()
    answer = answer.upper()
    if len(guess) != len(answer):
        raise ValueError("Guess must be the same length as the answer")

    result = [LetterEvaluation.ABSENT] * len(answer)
    remaining_counts = get_letter_counts(answer)

    # First pass: exact position matches
    for i, letter in enumerate(guess):
        if letter == answer[i]:
            result[i] = LetterEvaluation.CORRECT
            remaining_counts[letter] -= 1

    # Second pass: misplaced letters while the answer still has copies left
    for i, letter in enumerate(guess):
        if result[i] is LetterEvaluation.CORRECT:
            continue

        if remaining_counts.get(letter, 0) > 0:
            result[i] = LetterEvaluation.PRESENT
            remaining_counts[letter] -= 1

    return result
