"""
Persistence Adapter

Saves one game per player, scoped to the calendar day it was played on.
"""

import json
import os
import re
from datetime import date
from typing import Dict, Optional

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..config.game_settings import STORAGE_KEY
from ..models.game import GameState
from ..utils.game_logger import game_logger
from ..utils.helpers import get_local_day_key


class StorageError(Exception):
    """Raised when a storage backend cannot read or write a saved game."""


def serialize_state(state: GameState, day: Optional[date] = None) -> str:
    """JSON snapshot of a game tagged with the day key."""
    payload = state.to_dict()
    payload['dayKey'] = get_local_day_key(day)
    return json.dumps(payload, ensure_ascii=False)


def deserialize_state(raw: Optional[str], day: Optional[date] = None) -> Optional[GameState]:
    """
    Restores a snapshot, or returns None when it cannot be used.

    A snapshot is discarded when it does not parse, was saved on another day,
    has no answer, or does not describe a valid board.
    """
    if not raw:
        return None

    try:
        payload = json.loads(raw)
    except (TypeError, ValueError):
        game_logger.logger.info("Discarding saved game: payload is not valid JSON")
        return None

    if not isinstance(payload, dict):
        game_logger.logger.info("Discarding saved game: payload is not an object")
        return None

    if payload.get('dayKey') != get_local_day_key(day) or not payload.get('answer'):
        return None

    try:
        return GameState.from_dict(payload)
    except ValueError as e:
        game_logger.logger.info(f"Discarding saved game: {e}")
        return None


class StateStore:
    """Raw snapshot storage keyed by player id."""

    def __init__(self, storage_key: str = STORAGE_KEY):
        self.storage_key = storage_key

    def load(self, player_id: str) -> Optional[str]:
        raise NotImplementedError

    def save(self, player_id: str, raw: str) -> None:
        raise NotImplementedError

    def delete(self, player_id: str) -> None:
        raise NotImplementedError

    def load_state(self, player_id: str, day: Optional[date] = None) -> Optional[GameState]:
        return deserialize_state(self.load(player_id), day)

    def save_state(self, player_id: str, state: GameState, day: Optional[date] = None) -> None:
        self.save(player_id, serialize_state(state, day))


class MemoryStateStore(StateStore):
    """In-process storage, used by the testing configuration."""

    def __init__(self, storage_key: str = STORAGE_KEY):
        super().__init__(storage_key)
        self.records: Dict[str, str] = {}

    def load(self, player_id: str) -> Optional[str]:
        return self.records.get(player_id)

    def save(self, player_id: str, raw: str) -> None:
        self.records[player_id] = raw

    def delete(self, player_id: str) -> None:
        self.records.pop(player_id, None)


class JsonFileStateStore(StateStore):
    """One JSON file per player inside a directory."""

    def __init__(self, directory: str, storage_key: str = STORAGE_KEY):
        super().__init__(storage_key)
        self.directory = directory
        os.makedirs(self.directory, exist_ok=True)

    def _path(self, player_id: str) -> str:
        safe_id = re.sub(r'[^A-Za-z0-9_.-]', '_', player_id)
        return os.path.join(self.directory, f"{self.storage_key}_{safe_id}.json")

    def load(self, player_id: str) -> Optional[str]:
        path = self._path(player_id)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
        except OSError as e:
            raise StorageError(f"Failed to read saved game: {e}")

    def save(self, player_id: str, raw: str) -> None:
        path = self._path(player_id)
        tmp_path = f"{path}.tmp"
        try:
            with open(tmp_path, 'w', encoding='utf-8') as f:
                f.write(raw)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StorageError(f"Failed to write saved game: {e}")

    def delete(self, player_id: str) -> None:
        try:
            os.remove(self._path(player_id))
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Failed to delete saved game: {e}")


class MongoStateStore(StateStore):
    """
    Saved games in a MongoDB collection.

    Documents are keyed by ``"{storage_key}:{player_id}"`` and hold the raw
    snapshot string, so the same parsing rules apply as for the file store.
    """

    def __init__(self, mongo_uri: str = None, db_name: str = 'wordle', collection=None,
                 storage_key: str = STORAGE_KEY):
        super().__init__(storage_key)
        if collection is None:
            try:
                client = MongoClient(mongo_uri, server_api=ServerApi('1'))
                collection = client[db_name]['saved_games']
            except Exception as e:
                raise StorageError(f"Failed to connect to MongoDB: {e}")
        self.collection = collection

    def _document_id(self, player_id: str) -> str:
        return f"{self.storage_key}:{player_id}"

    def load(self, player_id: str) -> Optional[str]:
        try:
            document = self.collection.find_one({'_id': self._document_id(player_id)})
        except Exception as e:
            raise StorageError(f"Failed to read saved game: {e}")
        return document.get('payload') if document else None

    def save(self, player_id: str, raw: str) -> None:
        try:
            self.collection.replace_one(
                {'_id': self._document_id(player_id)},
                {'_id': self._document_id(player_id), 'player_id': player_id, 'payload': raw},
                upsert=True
            )
        except Exception as e:
            raise StorageError(f"Failed to write saved game: {e}")

    def delete(self, player_id: str) -> None:
        try:
            self.collection.delete_one({'_id': self._document_id(player_id)})
        except Exception as e:
            raise StorageError(f"Failed to delete saved game: {e}")


def create_state_store(settings) -> StateStore:
    """Builds the store selected by STORAGE_BACKEND in a Flask config mapping."""
    backend = settings.get('STORAGE_BACKEND', 'json')

    if backend == 'memory':
        return MemoryStateStore()
    if backend == 'mongo':
        if not settings.get('MONGO_URI'):
            raise ValueError("STORAGE_BACKEND is 'mongo' but MONGO_URI is not configured")
        return MongoStateStore(settings['MONGO_URI'], settings.get('MONGO_DB_NAME', 'wordle'))
    if backend == 'json':
        return JsonFileStateStore(settings.get('STORAGE_DIR', 'saves'))
    raise ValueError(f"Unknown storage backend: {backend}")
