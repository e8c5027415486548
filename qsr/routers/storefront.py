"""
Storefront Router

QR-code landing endpoints: restaurant availability, gated menu, and the
session cart for a (restaurant, order type) scope.

Cart endpoints call ``init_cart`` for the requested scope first, which
resumes the session's cart or replaces it when the scope changed.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from qsr.cart import CartSession, CartState, MenuItemRef, OrderType
from qsr.errors import (
    ConfigurationError,
    ERROR_INTERNAL,
    ERROR_INVALID_ORDER_TYPE,
    ERROR_MENU_ITEM_NOT_FOUND,
    ERROR_RESTAURANT_CLOSED,
    ERROR_RESTAURANT_NOT_FOUND,
)
from qsr.logging import get_logger, sanitize_id_for_logging
from qsr.services.money import to_float
from qsr.services.storefront import StorefrontService
from .deps import get_cart_session, get_storefront_service
from .models import AddToCartRequest, UpdateCartItemRequest, SetMobileRequest

logger = get_logger(__name__)

router = APIRouter(tags=["storefront"])


def _parse_order_type(value: Optional[str]) -> OrderType:
    try:
        return OrderType.parse(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"{ERROR_INVALID_ORDER_TYPE}: {value}")


def _format_cart_response(cart: Optional[CartState]) -> dict:
    """Cart snapshot with per-line and overall totals."""
    if cart is None:
        return {
            "cart": None,
            "items": [],
            "total_items": 0,
            "subtotal": 0.0,
        }

    return {
        "cart": {
            "restaurant_id": cart.restaurant_id,
            "order_type": cart.order_type.value,
            "mobile_number": cart.mobile_number,
        },
        "items": [
            {
                "item_id": item.item_id,
                "name": item.name,
                "price": to_float(item.price),
                "quantity": item.quantity,
                "total_price": to_float(item.total_price),
            }
            for item in cart.items
        ],
        "total_items": cart.total_items,
        "subtotal": to_float(cart.subtotal),
    }


def _restaurant_payload(view) -> dict:
    return {
        "restaurant": view.restaurant.model_dump() if view.restaurant else None,
        "availability": view.availability.to_dict(),
    }


# ==================== RESTAURANT / MENU ====================

@router.get("/r/{restaurant_id}")
async def get_restaurant(
    restaurant_id: str,
    service: StorefrontService = Depends(get_storefront_service),
):
    """Restaurant details with its current availability."""
    try:
        view = await service.load_restaurant(restaurant_id)
    except ConfigurationError as e:
        logger.error(f"Bad schedule for restaurant {sanitize_id_for_logging(restaurant_id)}: {e}")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    if view.restaurant is None:
        raise HTTPException(status_code=404, detail=ERROR_RESTAURANT_NOT_FOUND)

    return _restaurant_payload(view)


@router.get("/r/{restaurant_id}/menu")
async def get_menu(
    restaurant_id: str,
    order_type: Optional[str] = Query(None, alias="type"),
    service: StorefrontService = Depends(get_storefront_service),
):
    """Menu for the restaurant; empty while it is not accepting orders."""
    parsed_type = _parse_order_type(order_type)

    try:
        view = await service.load_menu(restaurant_id)
    except ConfigurationError as e:
        logger.error(f"Bad schedule for restaurant {sanitize_id_for_logging(restaurant_id)}: {e}")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    if view.restaurant is None:
        raise HTTPException(status_code=404, detail=ERROR_RESTAURANT_NOT_FOUND)

    payload = _restaurant_payload(view)
    payload["order_type"] = parsed_type.value
    payload["menu"] = [item.model_dump(mode="json") for item in view.menu]
    return payload


# ==================== CART ====================
# Plain ``def`` handlers: the cart slot client is blocking, so FastAPI runs
# them in its threadpool. Each one holds the slot lock across init + mutation.

async def get_orderable_item(
    restaurant_id: str,
    request: AddToCartRequest,
    service: StorefrontService = Depends(get_storefront_service),
) -> MenuItemRef:
    """Snapshot a catalog item, refusing closed restaurants and unknown items."""
    try:
        view = await service.load_restaurant(restaurant_id)
    except ConfigurationError as e:
        logger.error(f"Bad schedule for restaurant {sanitize_id_for_logging(restaurant_id)}: {e}")
        raise HTTPException(status_code=500, detail=ERROR_INTERNAL)

    if view.restaurant is None:
        raise HTTPException(status_code=404, detail=ERROR_RESTAURANT_NOT_FOUND)
    if not view.availability.available:
        raise HTTPException(status_code=409, detail=ERROR_RESTAURANT_CLOSED)

    item = await service.find_menu_item(restaurant_id, request.item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=ERROR_MENU_ITEM_NOT_FOUND)

    return MenuItemRef.from_record(item)


@router.get("/r/{restaurant_id}/cart")
@router.post("/r/{restaurant_id}/cart")
def init_cart(
    restaurant_id: str,
    order_type: Optional[str] = Query(None, alias="type"),
    session: CartSession = Depends(get_cart_session),
):
    """Resume or start the session cart for this restaurant and order type."""
    parsed_type = _parse_order_type(order_type)
    cart = session.init_cart(restaurant_id, parsed_type)
    return _format_cart_response(cart)


@router.post("/r/{restaurant_id}/cart/items")
def add_cart_item(
    restaurant_id: str,
    item: MenuItemRef = Depends(get_orderable_item),
    order_type: Optional[str] = Query(None, alias="type"),
    session: CartSession = Depends(get_cart_session),
):
    """Add one unit of a menu item."""
    parsed_type = _parse_order_type(order_type)
    with session.locked():
        session.init_cart(restaurant_id, parsed_type)
        cart = session.add_item(item)
    return _format_cart_response(cart)


@router.patch("/r/{restaurant_id}/cart/items/{item_id}")
def update_cart_item(
    restaurant_id: str,
    item_id: str,
    request: UpdateCartItemRequest,
    order_type: Optional[str] = Query(None, alias="type"),
    session: CartSession = Depends(get_cart_session),
):
    """Set a line's quantity (0 removes it)."""
    parsed_type = _parse_order_type(order_type)
    with session.locked():
        session.init_cart(restaurant_id, parsed_type)
        cart = session.update_quantity(item_id, request.quantity)
    return _format_cart_response(cart)


@router.put("/r/{restaurant_id}/cart/mobile")
def set_cart_mobile(
    restaurant_id: str,
    request: SetMobileRequest,
    order_type: Optional[str] = Query(None, alias="type"),
    session: CartSession = Depends(get_cart_session),
):
    """Attach a contact number for the order."""
    parsed_type = _parse_order_type(order_type)
    with session.locked():
        session.init_cart(restaurant_id, parsed_type)
        cart = session.set_mobile_number(request.mobile_number)
    return _format_cart_response(cart)


@router.delete("/cart")
def clear_cart(session: CartSession = Depends(get_cart_session)):
    """Clear the session cart after checkout."""
    session.clear_cart()
    return {"success": True}
