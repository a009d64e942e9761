"""
Word Source

Dictionary lookups and answer selection.
"""

import random
from datetime import date
from typing import Iterable, Optional

from ..config.game_settings import ANSWER_WORDS, VALID_GUESSES, WORD_LENGTH
from ..utils.helpers import get_local_day_key


class WordSource:
    """
    Supplies answers and checks guesses against the accepted word list.

    The answer of the day is picked with a generator seeded from the day key,
    so every call on the same calendar day returns the same word.
    """

    def __init__(self, answer_words: Iterable[str] = None, valid_guesses: Iterable[str] = None,
                 rng: Optional[random.Random] = None):
        answers = ANSWER_WORDS if answer_words is None else answer_words
        guesses = VALID_GUESSES if valid_guesses is None else valid_guesses

        self.answer_words = sorted({word.upper() for word in answers})
        if not self.answer_words:
            raise ValueError("Answer list cannot be empty")

        # Every answer must be guessable
        self.valid_guesses = frozenset(word.upper() for word in guesses) | frozenset(self.answer_words)
        self._rng = rng or random.Random()

    def is_valid_guess(self, word: str) -> bool:
        """True if the word is an accepted 5-letter guess (case-insensitive)."""
        if not isinstance(word, str) or len(word) != WORD_LENGTH:
            return False
        return word.upper() in self.valid_guesses

    def get_daily_answer(self, day: Optional[date] = None) -> str:
        """Returns the answer of the day for the given (default: today's) date."""
        day_key = get_local_day_key(day)
        return random.Random(day_key).choice(self.answer_words)

    def get_random_answer_word(self) -> str:
        """Returns a uniformly random answer, independent of the date."""
        return self._rng.choice(self.answer_words)
