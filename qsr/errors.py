"""
Common Errors

Centralized error messages and the few exception types the core raises.
"""
from typing import Any

ERROR_RESTAURANT_NOT_FOUND = "Restaurant not found"
ERROR_RESTAURANT_CLOSED = "Restaurant is not accepting orders"
ERROR_MENU_ITEM_NOT_FOUND = "Menu item not found or unavailable"
ERROR_INVALID_ORDER_TYPE = "Invalid order type"
ERROR_INTERNAL = "Internal server error"


class StorefrontError(Exception):
    """Base error for the storefront core."""

    def __init__(self, message: str, code: str | None = None, raw_error: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.raw_error = raw_error


class ConfigurationError(StorefrontError):
    """Restaurant record holds a value outside the accepted format."""

    def __init__(self, message: str, raw_error: Any = None) -> None:
        super().__init__(message, code="CONFIGURATION", raw_error=raw_error)


class PersistenceReadFailure(StorefrontError):
    """Persisted cart payload is corrupt or unreadable."""

    def __init__(self, message: str = "Persisted cart is unreadable", raw_error: Any = None) -> None:
        super().__init__(message, code="PERSISTENCE_READ", raw_error=raw_error)
