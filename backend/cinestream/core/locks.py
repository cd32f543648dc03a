"""
Keyed mutual exclusion for per-movie read-modify-write sequences
"""
from contextlib import contextmanager
from threading import Lock
from typing import Dict, Hashable, List
import logging

logger = logging.getLogger(__name__)


class KeyedLock:
    """
    Registry of locks keyed by an arbitrary hashable (a movie id).

    Holders of different keys never contend; the registry mutex is only held
    while looking up or releasing an entry, never for the critical section.
    Entries are dropped once no thread holds or waits on them.
    """

    def __init__(self):
        self._registry_lock = Lock()
        self._entries: Dict[Hashable, List] = {}  # key -> [Lock, users]

    @contextmanager
    def hold(self, key: Hashable):
        with self._registry_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = [Lock(), 0]
                self._entries[key] = entry
            entry[1] += 1

        lock = entry[0]
        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._registry_lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]

    def active_keys(self) -> int:
        """Number of keys currently held or awaited"""
        with self._registry_lock:
            return len(self._entries)


# Shared across request-scoped services in this process
review_locks = KeyedLock()
