import asyncio
import weakref

from ..core.logging import get_logger

logger = get_logger(__name__)


class CartLockRegistry:
    """
    Per-session asyncio locks for cart mutations.

    Serializes the read-check-write sequences of one session inside a single
    process. Locks are held weakly and disappear once no request uses them.
    Separate worker processes do not share these locks.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()


    def lock_for(self, session_id: str) -> asyncio.Lock:
        lock = self._locks.get(session_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[session_id] = lock
        elif lock.locked():
            logger.debug(f"Waiting for cart lock of session {session_id}")
        return lock


    def __len__(self) -> int:
        return len(self._locks)


cart_locks = CartLockRegistry()
