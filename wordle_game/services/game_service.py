"""
Game Service

Owns every player's game session and feeds input events through the state
machine, saving a snapshot after each change.
"""

import threading
from datetime import date, datetime
from typing import Callable, Dict, List, Optional, Tuple

from ..config.game_settings import MAX_ROWS, WORD_LENGTH
from ..models.game import (
    EventKind, GameEvent, GameSession, GameState, TransitionOutcome, TransitionResult
)
from ..utils.game_logger import game_logger
from ..utils.helpers import get_local_day_key
from . import game_machine
from .persistence import MemoryStateStore, StateStore, StorageError
from .word_source import WordSource

WELCOME_MESSAGE = f"Guess the Wordle in {MAX_ROWS} tries."
RESTORED_ACTIVE_MESSAGE = "Restored your game."
RESTORED_COMPLETED_MESSAGE = "Restored completed game."
NEW_RANDOM_GAME_MESSAGE = "New game started with a random word."
NEW_DAILY_GAME_MESSAGE = "New game started with today's word."
INVALID_CHOICE_MESSAGE = "Please choose NEW or SAME."

NEW_GAME_CHOICES = ('same', 'new')


class InvalidInputError(ValueError):
    """Raised for requests the game cannot interpret (unknown key, bad choice)."""


class DeveloperToolsDisabledError(PermissionError):
    """Raised when the developer command is used while developer tools are off."""


class GameService:
    """
    Core game service managing one game per player.

    This class handles:
    - Restoring today's saved game or starting a fresh one
    - Serializing input events so each runs to completion before the next
    - Persisting a snapshot after every change (storage failures are logged, not raised)
    - New-game requests with a choice between today's answer and a random one
    """

    def __init__(self,
                 word_source: Optional[WordSource] = None,
                 store: Optional[StateStore] = None,
                 developer_tools_enabled: bool = False,
                 today: Optional[Callable[[], date]] = None):
        self.word_source = word_source or WordSource()
        self.store = store if store is not None else MemoryStateStore()
        self.developer_tools_enabled = developer_tools_enabled
        self._today = today or (lambda: datetime.now().date())
        self.sessions: Dict[str, GameSession] = {}
        self._sessions_day_key: Optional[str] = None
        self._lock = threading.RLock()

    def _day_key(self) -> str:
        return get_local_day_key(self._today())

    def _persist(self, session: GameSession) -> None:
        try:
            self.store.save_state(session.player_id, session.state, self._today())
        except StorageError as e:
            game_logger.log_error(None, e, 'save_game', session.player_id)

    def _restore(self, player_id: str) -> Optional[GameState]:
        try:
            return self.store.load_state(player_id, self._today())
        except StorageError as e:
            game_logger.log_error(None, e, 'load_game', player_id)
            return None

    def _cleanup_stale_sessions(self, today_key: str) -> None:
        """Drops sessions left over from an earlier day."""
        if today_key == self._sessions_day_key:
            return
        stale = [player_id for player_id, session in self.sessions.items() if session.day_key != today_key]
        for player_id in stale:
            del self.sessions[player_id]
        if stale:
            game_logger.logger.info(f"Cleaned up {len(stale)} sessions from before {today_key}")
        self._sessions_day_key = today_key

    def _start_session(self, player_id: str, answer: str, message: str,
                       developer_mode: bool = False) -> GameSession:
        state = game_machine.create_new_state(answer, developer_mode)
        session = GameSession(player_id=player_id, state=state, message=message, day_key=self._day_key())
        self.sessions[player_id] = session
        self._persist(session)
        game_logger.log_game_event(player_id, 'game_started', day_key=session.day_key)
        return session

    def get_session(self, player_id: str) -> GameSession:
        """
        Returns the player's current game.

        Sessions from a previous day are dropped for every player. Without a
        session in memory the saved game is restored if it belongs to today;
        otherwise a new game with the answer of the day is started.
        """
        with self._lock:
            today_key = self._day_key()
            self._cleanup_stale_sessions(today_key)
            session = self.sessions.get(player_id)
            if session is not None and session.day_key == today_key:
                return session

            restored = self._restore(player_id)
            if restored is not None:
                message = RESTORED_COMPLETED_MESSAGE if restored.status.is_terminal else RESTORED_ACTIVE_MESSAGE
                session = GameSession(player_id=player_id, state=restored, message=message, day_key=today_key)
                self.sessions[player_id] = session
                game_logger.log_game_event(player_id, 'game_restored', status=restored.status.value,
                                           current_row=restored.current_row)
                return session

            return self._start_session(player_id, self.word_source.get_daily_answer(self._today()),
                                       WELCOME_MESSAGE)

    def apply_event(self, player_id: str, event: GameEvent) -> Tuple[GameSession, TransitionResult]:
        """Runs one event against the player's game and commits the result."""
        with self._lock:
            session = self.get_session(player_id)
            result = game_machine.apply_event(session.state, event, self.word_source)
            self._commit(session, result)
            return session, result

    def handle_key(self, player_id: str, raw_key) -> Tuple[GameSession, TransitionResult]:
        """
        Handles a raw key name from the client.

        Raises:
            InvalidInputError: If the key is not a letter, enter or backspace
        """
        event = game_machine.normalize_key(raw_key)
        if event is None:
            raise InvalidInputError(f"Unsupported key: {raw_key!r}")
        return self.apply_event(player_id, event)

    def submit_word(self, player_id: str, word) -> Tuple[GameSession, List[TransitionResult]]:
        """
        Types a whole word into the current row and submits it.

        The current row is cleared first. The events go through the same
        transitions as individual key presses.

        Raises:
            InvalidInputError: If the word has characters other than A-Z or is too long
        """
        if not isinstance(word, str) or not word.strip():
            raise InvalidInputError("Guess is required")
        letters = word.strip()
        if not all('a' <= letter.lower() <= 'z' for letter in letters):
            raise InvalidInputError("Guess must contain only letters")
        if len(letters) > WORD_LENGTH:
            raise InvalidInputError(f"Guess must be at most {WORD_LENGTH} letters")

        with self._lock:
            session = self.get_session(player_id)
            events = [GameEvent(EventKind.BACKSPACE)] * session.state.current_col
            events += [GameEvent.letter_key(letter) for letter in letters]
            events.append(GameEvent(EventKind.ENTER))

            results = []
            for event in events:
                session, result = self.apply_event(player_id, event)
                results.append(result)
            return session, results

    def toggle_developer_mode(self, player_id: str) -> Tuple[GameSession, TransitionResult]:
        """
        Raises:
            DeveloperToolsDisabledError: If developer tools are not enabled
        """
        if not self.developer_tools_enabled:
            raise DeveloperToolsDisabledError("Developer tools are disabled")
        return self.apply_event(player_id, GameEvent(EventKind.TOGGLE_DEVELOPER))

    def new_game(self, player_id: str, choice: Optional[str] = None) -> GameSession:
        """
        Replaces the player's game with a fresh one.

        Args:
            player_id: Player identifier
            choice: "same" for today's answer (default) or "new" for a random answer

        Raises:
            InvalidInputError: If the choice is neither "same" nor "new"
        """
        if choice is not None and not isinstance(choice, str):
            raise InvalidInputError(INVALID_CHOICE_MESSAGE)
        normalized_choice = (choice or 'same').strip().lower()
        if normalized_choice not in NEW_GAME_CHOICES:
            raise InvalidInputError(INVALID_CHOICE_MESSAGE)

        with self._lock:
            keep_developer_mode = self.get_session(player_id).state.developer_mode
            if normalized_choice == 'new':
                answer = self.word_source.get_random_answer_word()
                message = NEW_RANDOM_GAME_MESSAGE
            else:
                answer = self.word_source.get_daily_answer(self._today())
                message = NEW_DAILY_GAME_MESSAGE
            return self._start_session(player_id, answer, message, keep_developer_mode)

    def _commit(self, session: GameSession, result: TransitionResult) -> None:
        if result.message is not None:
            session.message = result.message
        if not result.changed:
            return

        session.state = result.state
        self._persist(session)

        if result.outcome is TransitionOutcome.WON:
            game_logger.log_game_event(session.player_id, 'game_won', rows_used=result.row + 1,
                                       target_word=result.state.answer)
        elif result.outcome is TransitionOutcome.LOST:
            game_logger.log_game_event(session.player_id, 'game_lost', rows_used=result.row + 1,
                                       target_word=result.state.answer)
        elif result.outcome is TransitionOutcome.DEVELOPER_MODE_TOGGLED:
            game_logger.log_game_event(session.player_id, 'developer_mode_toggled',
                                       enabled=result.state.developer_mode)

    def delete_game(self, player_id: str) -> bool:
        """
        Forgets a player's game in memory and in storage.

        Returns:
            bool: True if a session was in memory
        """
        with self._lock:
            existed = self.sessions.pop(player_id, None) is not None
            try:
                self.store.delete(player_id)
            except StorageError as e:
                game_logger.log_error(None, e, 'delete_game', player_id)
            return existed


def get_game_service() -> GameService:
    """Game service of the current Flask application."""
    from flask import current_app
    return current_app.extensions['wordle_game']
