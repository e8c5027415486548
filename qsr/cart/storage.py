"""Persistence slots for the active cart."""
import json
import threading
import weakref
from typing import Optional, Protocol

from upstash_redis import Redis

from qsr.db import get_redis_sync, RedisKeys, TTL
from qsr.errors import PersistenceReadFailure
from .models import CartState

# Fixed slot name; Redis slots are further scoped by browsing session
STORAGE_KEY = RedisKeys.CART


class SlotLock:
    """Re-entrant lock shared by every CartSession bound to the same slot."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def __enter__(self) -> "SlotLock":
        self._lock.acquire()
        return self

    def __exit__(self, *exc) -> None:
        self._lock.release()


# One lock per Redis key within this process; dropped once no slot uses it
_redis_slot_locks: "weakref.WeakValueDictionary[str, SlotLock]" = weakref.WeakValueDictionary()
_redis_slot_locks_guard = threading.Lock()


def _lock_for_key(key: str) -> SlotLock:
    with _redis_slot_locks_guard:
        lock = _redis_slot_locks.get(key)
        if lock is None:
            lock = SlotLock()
            _redis_slot_locks[key] = lock
        return lock


class CartSlot(Protocol):
    """Single key-value entry holding the serialized cart, or nothing."""

    lock: SlotLock

    def read(self) -> Optional[str]: ...

    def write(self, value: str) -> None: ...

    def delete(self) -> None: ...


class MemorySlot:
    """Process-local slot. Each instance is an independent session."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self.lock = SlotLock()
        self._store: dict[str, str] = {}
        if initial is not None:
            self._store[STORAGE_KEY] = initial

    def read(self) -> Optional[str]:
        return self._store.get(STORAGE_KEY)

    def write(self, value: str) -> None:
        self._store[STORAGE_KEY] = value

    def delete(self) -> None:
        self._store.pop(STORAGE_KEY, None)


class RedisSlot:
    """
    Upstash Redis slot for one browsing session.

    The key expires after the session TTL, so an abandoned cart does
    not outlive the session that created it.
    """

    def __init__(self, session_id: str, redis: Optional[Redis] = None, ttl: int = TTL.CART) -> None:
        if not session_id:
            raise ValueError("session_id must be a non-empty string")
        self.key = RedisKeys.cart_key(session_id)
        self.lock = _lock_for_key(self.key)
        self.ttl = ttl
        self._redis = redis  # Lazy initialization

    @property
    def redis(self) -> Redis:
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def read(self) -> Optional[str]:
        data = self.redis.get(self.key)
        if data is None:
            return None
        if isinstance(data, bytes):
            return data.decode("utf-8")
        return str(data)

    def write(self, value: str) -> None:
        self.redis.set(self.key, value, ex=self.ttl)

    def delete(self) -> None:
        self.redis.delete(self.key)


def dump_state(cart: CartState) -> str:
    """Serialize a cart for the slot."""
    return json.dumps(cart.to_dict())


def load_state(slot: CartSlot) -> Optional[CartState]:
    """
    Read the persisted cart.

    Returns:
        The stored CartState, or None when the slot is empty

    Raises:
        PersistenceReadFailure: slot unreachable or payload corrupt
    """
    try:
        raw = slot.read()
    except Exception as e:
        raise PersistenceReadFailure(f"Cart slot read failed: {e}", raw_error=e) from e

    if not raw:
        return None

    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError(f"expected an object, got {type(data).__name__}")
        return CartState.from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise PersistenceReadFailure(f"Corrupted cart payload: {e}", raw_error=e) from e
