"""
Restaurant availability window.

Decides whether a restaurant is accepting orders right now from its
configured opening/closing times and the manual ``is_available`` override.
Comparisons use the process's local wall clock; no timezone conversion.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

from qsr.errors import ConfigurationError


@dataclass(frozen=True)
class RestaurantAvailabilityInput:
    """Read-only snapshot of the schedule fields of a restaurant record."""
    opening_time: str  # "09:00:00"
    closing_time: str  # "22:00:00"
    is_available: bool

    @classmethod
    def from_record(cls, record: Any) -> "RestaurantAvailabilityInput":
        """Build from a dict row or any object exposing the three fields."""
        if isinstance(record, cls):
            return record
        if isinstance(record, Mapping):
            return cls(
                opening_time=record["opening_time"],
                closing_time=record["closing_time"],
                is_available=bool(record["is_available"]),
            )
        return cls(
            opening_time=record.opening_time,
            closing_time=record.closing_time,
            is_available=bool(record.is_available),
        )


@dataclass(frozen=True)
class AvailabilityResult:
    available: bool
    next_open_time: Optional[str] = None

    def to_dict(self) -> dict:
        data: dict = {"available": self.available}
        if self.next_open_time is not None:
            data["next_open_time"] = self.next_open_time
        return data


def parse_clock(value: str) -> tuple[int, int]:
    """
    Parse "HH:MM[:SS]" into (hour, minute). Seconds are ignored.

    Raises:
        ConfigurationError: if the value is not a 24-hour clock time
    """
    if not isinstance(value, str):
        raise ConfigurationError(f"Time must be a string, got {type(value).__name__}")

    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ConfigurationError(f"Malformed time {value!r}, expected HH:MM:SS")

    try:
        hour, minute = int(parts[0]), int(parts[1])
        if len(parts) == 3:
            int(parts[2])
    except ValueError as e:
        raise ConfigurationError(f"Malformed time {value!r}, expected HH:MM:SS", raw_error=e) from e

    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        raise ConfigurationError(f"Time {value!r} is out of range")

    return hour, minute


def evaluate(restaurant: Any, now: Optional[datetime] = None) -> AvailabilityResult:
    """
    Evaluate whether the restaurant is accepting orders at ``now``.

    Rules:
    1. Manual override (``is_available`` false) always wins, with no
       next opening time since only an operator can reopen.
    2. Open/close instants are built on ``now``'s calendar date.
    3. If close <= open the window runs overnight and close moves to the
       next day; equal times therefore mean a ~24h window.
    4. Open iff open <= now <= close (both boundaries inclusive). For an
       overnight window the one that opened the previous evening is also
       checked, so 01:00 inside an 18:00 -> 02:00 window counts as open.
    5. When closed, ``next_open_time`` is the configured opening time string.

    Args:
        restaurant: RestaurantAvailabilityInput, dict row, or model instance
        now: Instant to evaluate (defaults to local ``datetime.now()``)

    Returns:
        AvailabilityResult
    """
    snapshot = RestaurantAvailabilityInput.from_record(restaurant)

    if not snapshot.is_available:
        return AvailabilityResult(available=False)

    if now is None:
        now = datetime.now()

    open_h, open_m = parse_clock(snapshot.opening_time)
    close_h, close_m = parse_clock(snapshot.closing_time)

    opens_at = now.replace(hour=open_h, minute=open_m, second=0, microsecond=0)
    closes_at = now.replace(hour=close_h, minute=close_m, second=0, microsecond=0)

    # Overnight restaurants (e.g. 18:00 -> 02:00)
    overnight = closes_at <= opens_at
    if overnight:
        closes_at += timedelta(days=1)

    if opens_at <= now <= closes_at:
        return AvailabilityResult(available=True)

    # Early-morning tail of the window that opened yesterday
    if overnight and opens_at - timedelta(days=1) <= now <= closes_at - timedelta(days=1):
        return AvailabilityResult(available=True)

    return AvailabilityResult(available=False, next_open_time=snapshot.opening_time)


__all__ = [
    "AvailabilityResult",
    "RestaurantAvailabilityInput",
    "evaluate",
    "parse_clock",
]
