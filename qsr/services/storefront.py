"""
Storefront Service

What a QR-code page load needs: the restaurant, whether it is taking
orders right now, and its menu when it is.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from qsr.availability import AvailabilityResult, evaluate
from qsr.logging import get_logger, sanitize_id_for_logging
from qsr.services.models import Restaurant, MenuItem
from qsr.services.repositories import RestaurantRepository

logger = get_logger(__name__)


@dataclass(frozen=True)
class RestaurantView:
    restaurant: Optional[Restaurant]
    availability: AvailabilityResult


@dataclass(frozen=True)
class MenuView:
    restaurant: Optional[Restaurant]
    availability: AvailabilityResult
    menu: List[MenuItem] = field(default_factory=list)


class StorefrontService:
    """Restaurant lookup with availability gating of the menu."""

    def __init__(self, repository: RestaurantRepository) -> None:
        self.repository = repository

    async def load_restaurant(self, restaurant_id: str, now: Optional[datetime] = None) -> RestaurantView:
        """Unknown restaurants are reported as unavailable."""
        restaurant = await self.repository.get_restaurant(restaurant_id)
        if restaurant is None:
            return RestaurantView(restaurant=None, availability=AvailabilityResult(available=False))

        return RestaurantView(restaurant=restaurant, availability=evaluate(restaurant, now))

    async def load_menu(self, restaurant_id: str, now: Optional[datetime] = None) -> MenuView:
        """Menu is only fetched while the restaurant is accepting orders."""
        view = await self.load_restaurant(restaurant_id, now)
        if not view.availability.available:
            logger.info(f"Restaurant {sanitize_id_for_logging(restaurant_id)} closed, skipping menu load")
            return MenuView(restaurant=view.restaurant, availability=view.availability)

        menu = await self.repository.get_menu(restaurant_id)
        return MenuView(restaurant=view.restaurant, availability=view.availability, menu=menu)

    async def find_menu_item(self, restaurant_id: str, item_id: str) -> Optional[MenuItem]:
        """Catalog entry a cart line is snapshotted from; None when not orderable."""
        return await self.repository.get_menu_item(restaurant_id, item_id)
