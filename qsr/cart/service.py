"""Cart session: the single active cart of one browsing session."""
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from qsr.errors import PersistenceReadFailure
from qsr.logging import get_logger, mask_mobile_for_logging, sanitize_id_for_logging
from .models import CartState, MenuItemRef, OrderType
from .storage import CartSlot, MemorySlot, dump_state, load_state

logger = get_logger(__name__)

Listener = Callable[[Optional[CartState]], None]


class CartSession:
    """
    Holds at most one active cart, scoped to (restaurant_id, order_type).

    States:
    - Uninitialized: no active cart; every mutation is a no-op
    - Active(scope): entered only through ``init_cart``

    ``init_cart`` with a different scope discards the current cart and
    starts a fresh one; ``clear_cart`` is the only way back to
    Uninitialized. Each mutation replaces the CartState value, writes
    it to the slot and notifies listeners.

    Several sessions may be bound to one slot (one per HTTP request for
    the same browsing session). They share the slot's lock, and every
    mutation starts from the latest persisted cart of its scope, so
    concurrent increments are never lost.
    """

    def __init__(self, slot: Optional[CartSlot] = None) -> None:
        self._slot = slot if slot is not None else MemorySlot()
        self._cart: Optional[CartState] = None
        self._listeners: list[Listener] = []
        self._lock = self._slot.lock

    # ==================== READ ====================

    @property
    def is_active(self) -> bool:
        return self._cart is not None

    def get_snapshot(self) -> Optional[CartState]:
        """Current cart value, or None when Uninitialized."""
        return self._cart

    def on_change(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with the new snapshot after every change.

        Returns:
            Unsubscribe function; calling it more than once is harmless
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def locked(self) -> Iterator["CartSession"]:
        """Hold the slot lock across several operations, e.g. init_cart + add_item."""
        with self._lock:
            yield self

    # ==================== TRANSITIONS ====================

    def init_cart(self, restaurant_id: str, order_type: OrderType | str) -> CartState:
        """Resume the persisted cart for this scope, or start a fresh one."""
        order_type = OrderType.parse(order_type)
        with self._lock:
            existing = self._read_persisted()

            if existing is not None and existing.matches(restaurant_id, order_type):
                logger.debug(
                    f"Resumed cart for restaurant {sanitize_id_for_logging(restaurant_id)} "
                    f"({order_type.value}, {len(existing.items)} lines)"
                )
                self._set(existing, persist=False)
                return existing

            if existing is not None:
                logger.info(
                    f"Cart scope changed to restaurant {sanitize_id_for_logging(restaurant_id)} "
                    f"({order_type.value}); discarding previous cart"
                )

            fresh = CartState.empty(restaurant_id, order_type)
            self._set(fresh)
            return fresh

    def add_item(self, item: MenuItemRef) -> Optional[CartState]:
        """Add one unit of a menu item; no-op without an active cart."""
        ref = MenuItemRef.from_record(item)
        with self._lock:
            cart = self._current()
            if cart is None:
                return None
            updated = cart.with_item_added(ref)
            self._set(updated)
            return updated

    def update_quantity(self, item_id: str, quantity: int) -> Optional[CartState]:
        """Set a line's quantity; zero or less removes the line."""
        with self._lock:
            cart = self._current()
            if cart is None:
                return None
            if cart.find(item_id) is None:
                return cart
            updated = cart.with_quantity(item_id, int(quantity))
            self._set(updated)
            return updated

    def set_mobile_number(self, mobile: str) -> Optional[CartState]:
        """Attach a contact number. Format is not validated here."""
        with self._lock:
            cart = self._current()
            if cart is None:
                return None
            updated = cart.with_mobile_number(mobile)
            self._set(updated)
            logger.debug(
                f"Mobile number {mask_mobile_for_logging(mobile)} set on "
                f"{updated.order_type.value} cart"
            )
            return updated

    def clear_cart(self) -> None:
        """Drop the active cart and its persisted copy (after checkout)."""
        with self._lock:
            was_active = self._cart is not None
            self._cart = None
            self._slot.delete()
            if was_active:
                self._notify(None)

    # ==================== INTERNALS ====================

    def _current(self) -> Optional[CartState]:
        """Active cart, replaced by the persisted one when another session wrote the same scope."""
        if self._cart is None:
            return None
        persisted = self._read_persisted()
        if persisted is not None and persisted.scope == self._cart.scope:
            self._cart = persisted
        return self._cart

    def _read_persisted(self) -> Optional[CartState]:
        try:
            return load_state(self._slot)
        except PersistenceReadFailure as e:
            # Treated as "no cart"; the next write replaces the payload
            logger.warning(f"Discarding unreadable cart: {e}")
            return None

    def _set(self, cart: CartState, persist: bool = True) -> None:
        self._cart = cart
        if persist:
            self._slot.write(dump_state(cart))
        self._notify(cart)

    def _notify(self, cart: Optional[CartState]) -> None:
        for listener in list(self._listeners):
            try:
                listener(cart)
            except Exception as e:
                logger.error(f"Cart listener failed: {e}", exc_info=True)
