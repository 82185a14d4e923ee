"""
Persisted Store

Small key/value stores with expiry used to keep per-player snapshots. Values
are JSON strings; decoding and corruption recovery live in load_json_value.
"""

import datetime
import json
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

from pymongo.mongo_client import MongoClient
from pymongo.server_api import ServerApi

from ..exceptions import PersistenceCorruptionError
from ..utils.game_logger import game_logger

T = TypeVar('T')


class PersistedStore(ABC):
    """Abstract key/value store with per-key time to live (seconds)."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if absent or expired."""

    @abstractmethod
    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        """Store value under key, expiring after ttl seconds when given."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key if present."""


class MemoryStore(PersistedStore):
    """Dict-backed store. Expiry is checked lazily on read."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._data[key]
            return None
        return value

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = self._clock() + ttl if ttl is not None else None
        self._data[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class MongoStore(PersistedStore):
    """
    MongoDB-backed store.

    Documents look like {_id: key, value: str, expires_at: datetime | None}.
    A TTL index removes expired documents; reads also filter on expires_at
    because the TTL monitor only runs periodically.
    """

    def __init__(self, collection):
        self.collection = collection
        self.collection.create_index("expires_at", expireAfterSeconds=0)

    @classmethod
    def from_uri(cls, mongo_uri: str, db_name: str, collection_name: str = "player_store") -> "MongoStore":
        """Connect to MongoDB and return a store bound to the given collection."""
        client = MongoClient(mongo_uri, server_api=ServerApi('1'))
        client.admin.command('ping')
        game_logger.logger.info(f"Connected to MongoDB database '{db_name}'")
        return cls(client[db_name][collection_name])

    def _now(self) -> datetime.datetime:
        return datetime.datetime.now(datetime.timezone.utc)

    def get(self, key: str) -> Optional[str]:
        doc = self.collection.find_one({
            "_id": key,
            "$or": [{"expires_at": None}, {"expires_at": {"$gt": self._now()}}]
        })
        return doc["value"] if doc else None

    def set(self, key: str, value: str, ttl: Optional[int] = None) -> None:
        expires_at = self._now() + datetime.timedelta(seconds=ttl) if ttl is not None else None
        self.collection.replace_one(
            {"_id": key},
            {"_id": key, "value": value, "expires_at": expires_at},
            upsert=True
        )

    def delete(self, key: str) -> None:
        self.collection.delete_one({"_id": key})


def player_key(player_id: str, name: str) -> str:
    return f"player:{player_id}:{name}"


def load_json_value(store: PersistedStore,
                    key: str,
                    decode: Callable[[Any], T],
                    default: Callable[[], T]) -> T:
    """
    Loads and decodes a JSON value.

    A missing key yields default(). A value that is not valid JSON or that
    decode rejects with PersistenceCorruptionError is deleted from the store
    and replaced by default().
    """
    raw = store.get(key)
    if raw is None:
        return default()
    try:
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise PersistenceCorruptionError(f"Invalid JSON: {e}")
        return decode(data)
    except PersistenceCorruptionError as e:
        game_logger.logger.warning(f"Discarding corrupt value for '{key}': {e}")
        store.delete(key)
        return default()


def save_json_value(store: PersistedStore, key: str, data: Any, ttl: Optional[int] = None) -> None:
    store.set(key, json.dumps(data, separators=(',', ':')), ttl)
