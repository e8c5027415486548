"""Database Models - Pydantic models for storefront entities."""
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, field_validator

from qsr.services.money import to_decimal as _to_decimal


class Restaurant(BaseModel):
    """Restaurant record as exposed to the storefront."""
    id: str
    name: str
    logo_url: Optional[str] = None
    address: Optional[str] = None
    opening_time: str  # "09:00:00"
    closing_time: str  # "22:00:00"
    is_available: bool = True
    unavailable_message: Optional[str] = None

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("opening_time", "closing_time", mode="before")
    @classmethod
    def time_to_str(cls, v):
        # Postgres "time" columns may arrive as datetime.time
        return v.isoformat() if hasattr(v, "isoformat") else v


class MenuItem(BaseModel):
    """Menu item model."""
    id: str
    restaurant_id: str
    name: str
    price: Decimal
    description: Optional[str] = None
    tags: Optional[List[str]] = None
    is_veg: bool = False
    image_url: Optional[str] = None
    category_name: Optional[str] = None
    available: bool = True
    sort_order: Optional[int] = None

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        return _to_decimal(v)
