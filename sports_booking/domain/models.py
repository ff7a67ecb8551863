"""
Domain models for slot occupancy and booking aggregates.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional, Protocol, Tuple

from .timeslots import format_12h


class Sport(str, Enum):
    """Sports offered by the facility, in reporting order."""
    CRICKET = "Cricket"
    FOOTBALL = "Football"
    PICKLEBALL = "Pickleball"
    GAMING = "Gaming"

    @classmethod
    def parse(cls, value: "str | Sport | None") -> "Sport | None":
        """
        Parse a sport filter value.

        ``None``, an empty string and ``"all"`` mean "no filter".

        Raises:
            ValueError: If the value is not a known sport
        """
        if value is None or isinstance(value, Sport):
            return value
        text = value.strip()
        if not text or text.lower() == "all":
            return None
        for sport in cls:
            if sport.value.lower() == text.lower():
                return sport
        raise ValueError(f"Unknown sport: '{value}'")


class BookingLike(Protocol):
    """Attributes the engine reads from a stored booking."""

    id: str
    sport: str
    date: str
    start_time: str
    end_time: str
    amount: Decimal
    spans_midnight: bool


@dataclass(frozen=True)
class TimeSlot:
    """
    A single point of the day grid.

    Invariant: ``bookings`` holds at most one booking per sport.
    """
    time: str
    bookings: Tuple[BookingLike, ...] = ()

    @property
    def occupied(self) -> bool:
        return bool(self.bookings)

    @property
    def booking(self) -> Optional[BookingLike]:
        """The covering booking, or the first one when several sports share the slot."""
        return self.bookings[0] if self.bookings else None

    @property
    def label(self) -> str:
        return format_12h(self.time)


@dataclass(frozen=True)
class Period:
    """Inclusive date range; both ends are ``YYYY-MM-DD`` strings."""
    start: str
    end: str

    def contains(self, day: str) -> bool:
        # Lexicographic comparison is valid for zero-padded ISO dates
        return self.start <= day <= self.end


def _zero_by_sport(zero):
    return {sport.value: zero for sport in Sport}


@dataclass(frozen=True)
class BookingStats:
    """Booking count and revenue for a period, with per-sport breakdowns."""
    total_bookings: int = 0
    total_revenue: Decimal = Decimal("0")
    bookings_by_sport: Dict[str, int] = field(default_factory=lambda: _zero_by_sport(0))
    revenue_by_sport: Dict[str, Decimal] = field(
        default_factory=lambda: _zero_by_sport(Decimal("0"))
    )


@dataclass(frozen=True)
class MonthlyRevenue:
    """Revenue and booking count for one calendar month."""
    month: str
    revenue: Decimal
    bookings: int
