"""
Storefront API Pydantic Models
"""
from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    # Name and price are snapshotted from the catalog, never from the client
    item_id: str = Field(min_length=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or less removes the line


class SetMobileRequest(BaseModel):
    mobile_number: str
