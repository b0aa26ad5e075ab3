import logging
import threading
from contextlib import contextmanager
from typing import Dict, List

logger = logging.getLogger(__name__)


class KeyedLock:
    """Thread-safe per-key lock registry (one RLock per quiz id / user id)"""

    def __init__(self):
        # key -> [lock, number of holders and waiters]
        self._locks: Dict[str, List] = {}
        self._lock = threading.Lock()

    def _acquire_entry(self, key: str) -> threading.RLock:
        with self._lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = [threading.RLock(), 0]
                self._locks[key] = entry
            entry[1] += 1
            return entry[0]

    def _release_entry(self, key: str):
        with self._lock:
            entry = self._locks[key]
            entry[1] -= 1
            # Last user gone, drop the lock so idle keys don't pile up
            if entry[1] == 0:
                del self._locks[key]

    @contextmanager
    def hold(self, key: str):
        """Serialize every mutation made under the same key"""
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self):
        with self._lock:
            return len(self._locks)


# Shared by every service in the process
keyed_lock = KeyedLock()
