"""
Shared Dependencies for Routers

Lazy-loaded collaborators, overridable through ``app.dependency_overrides``.
"""
import secrets
from typing import Optional

from fastapi import Depends, Request, Response

from qsr import config
from qsr.cart import CartSession, CartSlot, RedisSlot
from qsr.services.repositories import RestaurantRepository
from qsr.services.storefront import StorefrontService


def get_restaurant_repository() -> RestaurantRepository:
    from qsr.db import get_supabase_sync
    return RestaurantRepository(get_supabase_sync())


def get_storefront_service(
    repository: RestaurantRepository = Depends(get_restaurant_repository),
) -> StorefrontService:
    return StorefrontService(repository)


def get_session_id(request: Request, response: Response) -> str:
    """Browsing session id from the session cookie; issues one when absent."""
    session_id: Optional[str] = request.cookies.get(config.SESSION_COOKIE_NAME)
    if not session_id:
        session_id = secrets.token_urlsafe(16)
        response.set_cookie(
            config.SESSION_COOKIE_NAME,
            session_id,
            httponly=True,
            samesite="lax",
        )
    return session_id


def get_cart_slot(session_id: str = Depends(get_session_id)) -> CartSlot:
    return RedisSlot(session_id)


def get_cart_session(slot: CartSlot = Depends(get_cart_slot)) -> CartSession:
    return CartSession(slot)
