"""Thread-safe registry of (user_id, action) pairs currently being processed."""
import threading
import logging
from contextlib import contextmanager
from fastapi import HTTPException

logger = logging.getLogger(__name__)
_lock = threading.Lock()
_in_flight: set[tuple[str, str]] = set()


def acquire(user_id: str, action: str) -> bool:
    with _lock:
        key = (user_id, action)
        if key in _in_flight:
            return False
        _in_flight.add(key)
        return True


def release(user_id: str, action: str) -> None:
    with _lock:
        _in_flight.discard((user_id, action))


@contextmanager
def in_flight(user_id: str, action: str):
    """Refuse a duplicate submission of the same action while one is in progress."""
    if not acquire(user_id, action):
        logger.info(f"Rejected duplicate {action} for user {user_id}")
        raise HTTPException(status_code=409, detail="This action is already in progress")
    try:
        yield
    finally:
        release(user_id, action)
