"""
Booking and revenue aggregates over a reporting period.
"""

import calendar
import re
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sports_booking.core.exceptions import InvalidPeriod, InvalidRange

from .conflicts import parse_iso_date
from .models import BookingLike, BookingStats, MonthlyRevenue, Period, Sport

_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


def month_period(month: str) -> Period:
    """
    Resolve ``YYYY-MM`` to the first and last day of that month.

    Raises:
        InvalidPeriod: If the month is malformed
    """
    match = _MONTH.match(month or "")
    if not match:
        raise InvalidPeriod(f"Malformed month '{month}', expected YYYY-MM")

    year, month_no = int(match.group(1)), int(match.group(2))
    if not 1 <= month_no <= 12 or year < 1:
        raise InvalidPeriod(f"Month '{month}' is out of range")

    last_day = calendar.monthrange(year, month_no)[1]
    return Period(start=f"{month}-01", end=f"{month}-{last_day:02d}")


def resolve_period(
    month: Optional[str] = None,
    date_from: Optional[str] = None,
    date_to: Optional[str] = None,
) -> Period:
    """
    Resolve a reporting period.

    ``month`` takes precedence when both forms are supplied.

    Raises:
        InvalidPeriod: If the period is malformed, reversed, half-open or missing
    """
    if month:
        return month_period(month)

    if not date_from and not date_to:
        raise InvalidPeriod("Either month or from/to must be supplied")
    if not date_from or not date_to:
        raise InvalidPeriod("Both from and to are required for a date range")

    try:
        parse_iso_date(date_from)
        parse_iso_date(date_to)
    except InvalidRange as exc:
        raise InvalidPeriod(str(exc)) from exc

    if date_from > date_to:
        raise InvalidPeriod(f"from ({date_from}) must not be after to ({date_to})")
    return Period(start=date_from, end=date_to)


def _matches(booking: BookingLike, period: Period, sport: Optional[Sport]) -> bool:
    if not period.contains(booking.date):
        return False
    return sport is None or Sport(booking.sport) == sport


def compute_stats(
    bookings: Iterable[BookingLike],
    period: Period,
    sport: Optional[Sport] = None,
) -> BookingStats:
    """
    Count bookings and sum revenue for a period.

    Per-sport maps always carry every sport; sports filtered out or without
    bookings report zero.
    """
    by_sport: Dict[str, int] = {s.value: 0 for s in Sport}
    revenue_by_sport: Dict[str, Decimal] = {s.value: Decimal("0") for s in Sport}

    for booking in bookings:
        if not _matches(booking, period, sport):
            continue
        key = Sport(booking.sport).value
        by_sport[key] += 1
        revenue_by_sport[key] += Decimal(str(booking.amount))

    return BookingStats(
        total_bookings=sum(by_sport.values()),
        total_revenue=sum(revenue_by_sport.values(), Decimal("0")),
        bookings_by_sport=by_sport,
        revenue_by_sport=revenue_by_sport,
    )


def monthly_revenue(
    bookings: Iterable[BookingLike],
    year: int,
    sport: Optional[Sport] = None,
) -> List[MonthlyRevenue]:
    """Revenue per calendar month of ``year`` (always twelve entries)."""
    booking_list = list(bookings)
    series = []

    for month_no in range(1, 13):
        month = f"{year:04d}-{month_no:02d}"
        stats = compute_stats(booking_list, month_period(month), sport)
        series.append(
            MonthlyRevenue(
                month=month,
                revenue=stats.total_revenue,
                bookings=stats.total_bookings,
            )
        )

    return series
