"""Cart package: models, storage slots, and session state machine."""
from .models import CartLineItem, CartState, MenuItemRef, OrderType
from .service import CartSession
from .storage import CartSlot, MemorySlot, RedisSlot, STORAGE_KEY

__all__ = [
    "CartLineItem",
    "CartSession",
    "CartSlot",
    "CartState",
    "MemorySlot",
    "MenuItemRef",
    "OrderType",
    "RedisSlot",
    "STORAGE_KEY",
]
