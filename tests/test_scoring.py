import pytest

from wordle_game.models.game import LetterEvaluation
from wordle_game.services.scoring import get_letter_counts, score_guess

A = LetterEvaluation.ABSENT
P = LetterEvaluation.PRESENT
C = LetterEvaluation.CORRECT


def test_exact_match_is_all_correct():
    assert score_guess('CRANE', 'CRANE') == [C, C, C, C, C]


def test_trace_against_crane():
    # T absent; R, A, E in place; C present using the unmatched C of CRANE
    assert score_guess('TRACE', 'CRANE') == [A, C, C, P, C]


def test_speed_against_erase():
    # ERASE has two Es, so both Es of SPEED are present
    assert score_guess('SPEED', 'ERASE') == [P, A, P, P, A]


def test_duplicate_guess_letter_with_single_answer_letter():
    # One L in the answer: only the earlier L is marked
    assert score_guess('LLAMA', 'PLANK') == [A, C, C, A, A]
    assert score_guess('ALLOT', 'LEMON') == [A, P, A, C, A]


def test_positional_match_takes_priority_over_earlier_present():
    # The second E is in place, so the first E gets nothing
    assert score_guess('EERIE', 'THOSE') == [A, A, A, A, C]


@pytest.mark.parametrize('guess, answer', [
    ('BRICK', 'CRANE'),
    ('FLOWN', 'GHOST'),
    ('JUMPY', 'PIOUS'),
    ('SLATE', 'ADIEU'),
])
def test_distinct_letters_reduce_to_position_and_membership(guess, answer):
    expected = []
    for i, letter in enumerate(guess):
        if letter == answer[i]:
            expected.append(C)
        elif letter in answer:
            expected.append(P)
        else:
            expected.append(A)
    assert score_guess(guess, answer) == expected


def test_duplicates_never_exceed_answer_count():
    guess, answer = 'SASSY', 'ASSET'
    result = score_guess(guess, answer)
    marked = [i for i, letter in enumerate(guess) if letter == 'S' and result[i] is not A]
    assert len(marked) == answer.count('S')
    assert result == [P, P, C, A, A]


def test_scoring_is_case_insensitive():
    assert score_guess('trace', 'Crane') == score_guess('TRACE', 'CRANE')


def test_length_mismatch_raises():
    with pytest.raises(ValueError):
        score_guess('CRANES', 'CRANE')


def test_get_letter_counts():
    assert get_letter_counts('ERASE') == {'E': 2, 'R': 1, 'A': 1, 'S': 1}
