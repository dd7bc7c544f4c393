import threading
import time

import pytest

from hotel_backoffice.core.exceptions import LockTimeoutError
from hotel_backoffice.core.locks import RoomLockRegistry


def test_same_room_shares_one_lock():
    registry = RoomLockRegistry(timeout=1)

    assert registry.lock_for("101") is registry.lock_for("101")
    assert registry.lock_for("101") is not registry.lock_for("102")


def test_hold_releases_on_exit_and_on_error():
    registry = RoomLockRegistry(timeout=1)

    with registry.hold("a", "b"):
        assert registry.lock_for("a").locked()
        assert registry.lock_for("b").locked()
    assert not registry.lock_for("a").locked()

    with pytest.raises(RuntimeError):
        with registry.hold("a"):
            raise RuntimeError("boom")
    assert not registry.lock_for("a").locked()


def test_duplicate_ids_are_held_once():
    registry = RoomLockRegistry(timeout=0.1)

    with registry.hold("a", "a"):
        assert registry.lock_for("a").locked()


def test_timeout_releases_already_acquired_locks():
    registry = RoomLockRegistry(timeout=0.05)
    registry.lock_for("b").acquire()
    try:
        with pytest.raises(LockTimeoutError):
            with registry.hold("a", "b"):
                pass
        assert not registry.lock_for("a").locked()
    finally:
        registry.lock_for("b").release()


def test_hold_serializes_callers():
    registry = RoomLockRegistry(timeout=5)
    inside = []
    overlaps = []

    def worker():
        with registry.hold("room"):
            inside.append(1)
            if len(inside) > 1:
                overlaps.append(True)
            time.sleep(0.01)
            inside.pop()

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []


def test_default_timeout_comes_from_settings():
    from hotel_backoffice.config.settings import settings

    assert RoomLockRegistry().timeout == settings.ROOM_LOCK_TIMEOUT_SECONDS
