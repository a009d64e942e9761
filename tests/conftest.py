import os
import random
import tempfile
from datetime import date

# Keep test logs out of the working tree; must run before wordle_game is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='wordle-logs-'))

import pytest

from wordle_game import create_app
from wordle_game.config import TestingConfig
from wordle_game.services.game_service import GameService
from wordle_game.services.persistence import MemoryStateStore
from wordle_game.services.word_source import WordSource

TODAY = date(2024, 3, 14)

ANSWERS = ['CRANE']
GUESSES = [
    'CRANE', 'TRACE', 'SPEED', 'ERASE', 'SLATE', 'ADIEU',
    'BRICK', 'JUMPY', 'FLOWN', 'GHOST', 'PIOUS', 'DOUBT'
]


@pytest.fixture
def word_source():
    return WordSource(ANSWERS, GUESSES, rng=random.Random(7))


@pytest.fixture
def store():
    return MemoryStateStore()


@pytest.fixture
def game_service(word_source, store):
    return GameService(word_source, store, developer_tools_enabled=True, today=lambda: TODAY)


@pytest.fixture
def app(word_source, store):
    app, _ = create_app(TestingConfig, word_source=word_source, store=store)
    return app


@pytest.fixture
def socketio(app):
    return app.socketio


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def player_headers():
    return {'X-Player-Id': 'player-1'}
