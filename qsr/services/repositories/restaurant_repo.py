"""Restaurant Repository - restaurant records and their menus."""
from typing import List, Optional

from qsr.logging import get_logger, sanitize_id_for_logging
from qsr.services.models import Restaurant, MenuItem
from .base import BaseRepository

logger = get_logger(__name__)

RESTAURANT_COLUMNS = (
    "id, name, logo_url, address, opening_time, closing_time, "
    "is_available, unavailable_message"
)
MENU_COLUMNS = "id, restaurant_id, name, price, image_url, available, sort_order"


class RestaurantRepository(BaseRepository):
    """Restaurant and menu read operations."""

    async def get_restaurant(self, restaurant_id: str) -> Optional[Restaurant]:
        """Get restaurant by ID, or None if it does not exist."""
        result = (
            self.client.table("restaurants")
            .select(RESTAURANT_COLUMNS)
            .eq("id", restaurant_id)
            .limit(1)
            .execute()
        )

        if not result.data:
            return None

        return Restaurant(**result.data[0])

    async def get_menu(self, restaurant_id: str) -> List[MenuItem]:
        """Get available menu items ordered by sort_order."""
        try:
            result = (
                self.client.table("menu_items")
                .select(MENU_COLUMNS)
                .eq("restaurant_id", restaurant_id)
                .eq("available", True)
                .order("sort_order")
                .execute()
            )
        except Exception as e:
            logger.error(f"Menu load failed for restaurant {sanitize_id_for_logging(restaurant_id)}: {e}")
            return []

        return [MenuItem(**row) for row in result.data or []]

    async def get_menu_item(self, restaurant_id: str, item_id: str) -> Optional[MenuItem]:
        """Get one orderable item of this restaurant, or None if missing or unavailable."""
        result = (
            self.client.table("menu_items")
            .select(MENU_COLUMNS)
            .eq("id", item_id)
            .eq("restaurant_id", restaurant_id)
            .eq("available", True)
            .limit(1)
            .execute()
        )

        if not result.data:
            return None

        return MenuItem(**result.data[0])
