"""
Path-addressed storage used by the gear, trip and bike services.

Paths look like Realtime Database references ("trips/<trip_id>") so the
in-memory backend and the Firebase backend are interchangeable. Values are
plain JSON-compatible dicts, lists, strings and numbers.
"""
import copy
import logging
import threading
import time
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


def _split(path: str):
    return [part for part in path.strip("/").split("/") if part]


def generate_key() -> str:
    """Time-ordered unique key, similar in spirit to a Realtime Database push id."""
    return f"{int(time.time() * 1000):013x}{uuid.uuid4().hex[:8]}"


class Storage(ABC):
    """Interface every storage backend implements."""

    @abstractmethod
    def get(self, path: str) -> Optional[Any]:
        ...

    @abstractmethod
    def set(self, path: str, value: Any) -> None:
        ...

    @abstractmethod
    def update(self, path: str, values: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def delete(self, path: str) -> None:
        ...


class InMemoryStorage(Storage):
    """Keeps everything in a nested dict. Used for tests and local development."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._root: Dict[str, Any] = copy.deepcopy(initial) if initial else {}
        self._lock = threading.RLock()

    def _parent(self, parts, create: bool):
        node = self._root
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                if not create:
                    return None
                child = {}
                node[part] = child
            node = child
        return node

    def get(self, path: str) -> Optional[Any]:
        parts = _split(path)
        with self._lock:
            if not parts:
                return copy.deepcopy(self._root) or None
            parent = self._parent(parts, create=False)
            if parent is None:
                return None
            return copy.deepcopy(parent.get(parts[-1]))

    def set(self, path: str, value: Any) -> None:
        parts = _split(path)
        if not parts:
            raise ValueError("Cannot overwrite the storage root.")
        with self._lock:
            if value is None:
                self._delete(parts)
                return
            parent = self._parent(parts, create=True)
            parent[parts[-1]] = copy.deepcopy(value)

    def update(self, path: str, values: Dict[str, Any]) -> None:
        with self._lock:
            for key, value in values.items():
                self.set(f"{path}/{key}", value)

    def delete(self, path: str) -> None:
        parts = _split(path)
        with self._lock:
            self._delete(parts)

    def _delete(self, parts) -> None:
        parent = self._parent(parts, create=False)
        if parent is not None:
            parent.pop(parts[-1], None)
