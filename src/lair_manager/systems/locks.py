"""Per-entity locks for read-modify-write rule applications."""

import threading
from contextlib import contextmanager
from typing import Hashable, Iterator


class EntityLocks:
    """
    One lock per entity id, created on first use.

    Two loyalty updates on the same minion serialize; updates on
    different minions don't block each other. Locks are reentrant because
    a payday refreshes mood while already holding the minion's lock.
    """

    def __init__(self):
        self._locks: dict[Hashable, threading.RLock] = {}
        self._guard = threading.Lock()

    def __contains__(self, key: Hashable) -> bool:
        with self._guard:
            return key in self._locks

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    def lock_for(self, key: Hashable) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    def discard(self, key: Hashable) -> None:
        """Forget the lock for a deleted entity."""
        with self._guard:
            self._locks.pop(key, None)

    @contextmanager
    def hold(self, key: Hashable | None) -> Iterator[None]:
        # Unsaved entities have no id and nobody else can reach them
        if key is None:
            yield
            return
        with self.lock_for(key):
            yield
