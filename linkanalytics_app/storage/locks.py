"""
Per-key mutual exclusion for storage units.

Requests run in worker threads, so two requests touching the same link can
race on the same file. KeyedLock hands out one threading.Lock per key,
creates it on first use and forgets it once nobody holds or waits on it.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class _Entry:
    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class KeyedLock:
    """Map from key to a lock, created on demand"""

    def __init__(self):
        self._guard = threading.Lock()
        self._entries: Dict[str, _Entry] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for `key` for the duration of the with-block"""
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.users += 1

        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        """Number of keys currently held or waited on"""
        with self._guard:
            return len(self._entries)
