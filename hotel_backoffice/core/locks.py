"""
Per-room serialization for booking writes.

Every write that can break the non-overlap invariant of a room, or that
changes a room's status as a lifecycle side effect, runs while holding the
room's lock. The lock is held until the surrounding transaction commits.
Within one process this is what serializes check-then-insert; across
processes the room row lock taken inside the transaction does the same on
stores that support ``SELECT ... FOR UPDATE``.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, Optional

from hotel_backoffice.config.settings import settings
from hotel_backoffice.core.exceptions import LockTimeoutError


class RoomLockRegistry:
    """Lazily created mutex per room id."""

    def __init__(self, timeout: Optional[float] = None):
        self._timeout = timeout
        self._locks: Dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def timeout(self) -> float:
        if self._timeout is not None:
            return self._timeout
        return settings.ROOM_LOCK_TIMEOUT_SECONDS

    def lock_for(self, room_id: Hashable) -> threading.Lock:
        key = str(room_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *room_ids: Hashable) -> Iterator[None]:
        """
        Hold the locks of one or more rooms.

        Locks are taken in sorted key order so that two callers needing the
        same pair of rooms cannot deadlock.
        """
        keys = sorted({str(room_id) for room_id in room_ids})
        acquired = []
        try:
            for key in keys:
                lock = self.lock_for(key)
                if not lock.acquire(timeout=self.timeout):
                    raise LockTimeoutError(key, self.timeout)
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


room_locks = RoomLockRegistry()
