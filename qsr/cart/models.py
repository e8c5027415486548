"""Cart models: immutable values with Decimal-based pricing."""
from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Tuple

from qsr.services.money import round_money, multiply


def _snapshot_price(value: Any) -> Decimal:
    """Exact Decimal for a catalog price; an unparsable value raises InvalidOperation."""
    price = value if isinstance(value, Decimal) else Decimal(str(value))
    if not price.is_finite():
        raise ValueError(f"Price must be finite, got {value!r}")
    return price


class OrderType(str, Enum):
    """How the customer receives the order."""
    DINE_IN = "dine_in"
    TAKEAWAY = "takeaway"

    @classmethod
    def parse(cls, value: "OrderType | str | None") -> "OrderType":
        """Parse a query/body value; missing means dine-in."""
        if isinstance(value, cls):
            return value
        if value is None or not str(value).strip():
            return cls.DINE_IN
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown order type: {value!r}") from None


@dataclass(frozen=True)
class MenuItemRef:
    """Snapshot of a menu item taken when it is added to the cart."""
    item_id: str
    name: str
    price: Decimal

    def __post_init__(self):
        object.__setattr__(self, "price", _snapshot_price(self.price))

    @classmethod
    def from_record(cls, record: Any) -> "MenuItemRef":
        """Snapshot a catalog row (dict with ``id``/``item_id``) or MenuItem model."""
        if isinstance(record, cls):
            return record
        if isinstance(record, Mapping):
            item_id = record.get("item_id", record.get("id"))
            return cls(item_id=str(item_id), name=record["name"], price=record["price"])
        return cls(item_id=str(record.id), name=record.name, price=record.price)


@dataclass(frozen=True)
class CartLineItem:
    """Single line inside the cart."""
    item_id: str
    name: str
    price: Decimal
    quantity: int

    def __post_init__(self):
        object.__setattr__(self, "price", _snapshot_price(self.price))

    @property
    def total_price(self) -> Decimal:
        """Total price for all units."""
        return round_money(multiply(self.price, self.quantity))

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "name": self.name,
            "price": str(self.price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        quantity = int(data["quantity"])
        if quantity <= 0:
            raise ValueError(f"Stored line {data['item_id']!r} has non-positive quantity")
        return cls(
            item_id=str(data["item_id"]),
            name=data["name"],
            price=Decimal(str(data["price"])),
            quantity=quantity,
        )


@dataclass(frozen=True)
class CartState:
    """
    Cart scoped to a restaurant + order type.

    Every mutation returns a new value; holders of an older state
    never see later changes.
    """
    restaurant_id: str
    order_type: OrderType
    items: Tuple[CartLineItem, ...] = ()
    # Only meaningful for takeaway
    mobile_number: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "order_type", OrderType.parse(self.order_type))
        object.__setattr__(self, "items", tuple(self.items))

    @classmethod
    def empty(cls, restaurant_id: str, order_type: OrderType | str) -> "CartState":
        return cls(restaurant_id=restaurant_id, order_type=OrderType.parse(order_type))

    @property
    def scope(self) -> Tuple[str, OrderType]:
        return (self.restaurant_id, self.order_type)

    def matches(self, restaurant_id: str, order_type: OrderType | str) -> bool:
        """True when this cart is valid for the given scope."""
        return self.restaurant_id == restaurant_id and self.order_type == OrderType.parse(order_type)

    @property
    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        return round_money(sum((item.total_price for item in self.items), Decimal("0")))

    def find(self, item_id: str) -> Optional[CartLineItem]:
        return next((item for item in self.items if item.item_id == item_id), None)

    def with_item_added(self, ref: MenuItemRef) -> "CartState":
        """Increment an existing line by one, or append a new line of one."""
        if self.find(ref.item_id) is not None:
            items = tuple(
                replace(item, quantity=item.quantity + 1) if item.item_id == ref.item_id else item
                for item in self.items
            )
        else:
            line = CartLineItem(item_id=ref.item_id, name=ref.name, price=ref.price, quantity=1)
            items = self.items + (line,)
        return replace(self, items=items)

    def with_quantity(self, item_id: str, quantity: int) -> "CartState":
        """Set a line's quantity; a non-positive quantity drops the line."""
        items = tuple(
            replace(item, quantity=quantity) if item.item_id == item_id else item
            for item in self.items
            if item.item_id != item_id or quantity > 0
        )
        return replace(self, items=items)

    def with_mobile_number(self, mobile: Optional[str]) -> "CartState":
        return replace(self, mobile_number=mobile)

    def to_dict(self) -> dict:
        """Convert to dictionary for slot storage."""
        data = {
            "restaurant_id": self.restaurant_id,
            "order_type": self.order_type.value,
            "items": [item.to_dict() for item in self.items],
        }
        if self.mobile_number is not None:
            data["mobile_number"] = self.mobile_number
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartState":
        """Create from dictionary. Raises KeyError/ValueError/TypeError on bad payloads."""
        items = [CartLineItem.from_dict(item) for item in data.get("items", [])]
        seen = set()
        for item in items:
            if item.item_id in seen:
                raise ValueError(f"Duplicate line for item {item.item_id!r}")
            seen.add(item.item_id)
        return cls(
            restaurant_id=str(data["restaurant_id"]),
            order_type=OrderType(data["order_type"]),
            items=tuple(items),
            mobile_number=data.get("mobile_number"),
        )
