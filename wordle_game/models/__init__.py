"""
Data Models Package

Contains all data models used throughout the application.
"""

from .game import (
    EventKind, GameEvent, GameSession, GameState, GameStatus,
    LetterEvaluation, TransitionOutcome, TransitionResult
)

__all__ = [
    'EventKind', 'GameEvent', 'GameSession', 'GameState', 'GameStatus',
    'LetterEvaluation', 'TransitionOutcome', 'TransitionResult'
]
