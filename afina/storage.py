"""Key/value storage interface and a size-bounded LRU implementation."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Optional

DEFAULT_MAX_SIZE = 1024


class Storage(ABC):
    """Abstract key/value storage."""

    def start(self) -> None:
        """Prepare the storage for use."""

    def stop(self) -> None:
        """Release resources held by the storage."""

    @abstractmethod
    def put(self, key: str, value: str) -> bool:
        """Associate ``value`` with ``key``, replacing any existing value."""

    @abstractmethod
    def put_if_absent(self, key: str, value: str) -> bool:
        """Associate ``value`` with ``key`` only if ``key`` is not stored yet."""

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Replace the value of an existing ``key``."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; return False if it was not stored."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the value for ``key`` or None if it is not stored."""


class SimpleLRU(Storage):
    """LRU cache bounded by the total length of all keys and values.

    Not thread safe.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self._max_size = max_size
        self._current_size = 0
        # First entry is the least recently used one.
        self._items: OrderedDict[str, str] = OrderedDict()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def current_size(self) -> int:
        """Total length of all stored keys and values."""
        return self._current_size

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def _fits(self, key: str, value: str) -> bool:
        return len(key) + len(value) <= self._max_size

    def _remove(self, key: str) -> None:
        value = self._items.pop(key)
        self._current_size -= len(key) + len(value)

    def _free_space(self, keep: Optional[str] = None) -> None:
        while self._current_size > self._max_size:
            victim = next(k for k in self._items if k != keep)
            self._remove(victim)

    def _insert(self, key: str, value: str) -> None:
        self._current_size += len(key) + len(value)
        self._free_space()
        self._items[key] = value

    def _update(self, key: str, value: str) -> None:
        self._current_size += len(value) - len(self._items[key])
        self._free_space(keep=key)
        self._items[key] = value
        self._items.move_to_end(key)

    def put(self, key: str, value: str) -> bool:
        if not self._fits(key, value):
            return False
        if key in self._items:
            self._update(key, value)
        else:
            self._insert(key, value)
        return True

    def put_if_absent(self, key: str, value: str) -> bool:
        if not self._fits(key, value) or key in self._items:
            return False
        self._insert(key, value)
        return True

    def set(self, key: str, value: str) -> bool:
        if not self._fits(key, value) or key not in self._items:
            return False
        self._update(key, value)
        return True

    def delete(self, key: str) -> bool:
        if key not in self._items:
            return False
        self._remove(key)
        return True

    def get(self, key: str) -> Optional[str]:
        if key not in self._items:
            return None
        self._items.move_to_end(key)
        return self._items[key]


class ThreadSafeSimpleLRU(SimpleLRU):
    """SimpleLRU guarded by a lock so it may be shared between threads."""

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        super().__init__(max_size)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return super().__len__()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return super().__contains__(key)

    def put(self, key: str, value: str) -> bool:
        with self._lock:
            return super().put(key, value)

    def put_if_absent(self, key: str, value: str) -> bool:
        with self._lock:
            return super().put_if_absent(key, value)

    def set(self, key: str, value: str) -> bool:
        with self._lock:
            return super().set(key, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return super().delete(key)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return super().get(key)