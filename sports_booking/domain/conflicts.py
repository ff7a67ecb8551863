"""
Double-booking detection.

Pure function over already-fetched bookings; the caller owns the
check-then-insert transaction.
"""

import re
from datetime import date as date_cls
from typing import Iterable, Optional, Tuple

from sports_booking.core.exceptions import InvalidRange

from .models import BookingLike, Sport
from .timeslots import MINUTES_PER_DAY, to_minutes

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(value: str) -> date_cls:
    """
    Parse a zero-padded ``YYYY-MM-DD`` string.

    Raises:
        InvalidRange: If the string is not a valid calendar date
    """
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidRange(f"Malformed date '{value}', expected YYYY-MM-DD")
    try:
        return date_cls.fromisoformat(value)
    except ValueError as exc:
        raise InvalidRange(f"Invalid calendar date '{value}'") from exc


def absolute_interval(day: str, start: str, end: str) -> Tuple[int, int]:
    """
    Place a booking on an absolute minute timeline.

    Overnight intervals simply extend past the day boundary, so no splitting
    is needed once both sides share the timeline.
    """
    start_min = to_minutes(start)
    end_min = to_minutes(end)
    if start_min == end_min:
        raise InvalidRange(f"Start time {start} must differ from end time {end}")

    base = parse_iso_date(day).toordinal() * MINUTES_PER_DAY
    if end_min < start_min:
        end_min += MINUTES_PER_DAY
    return base + start_min, base + end_min


def check_conflict(
    sport: "Sport | str",
    day: str,
    start: str,
    end: str,
    existing: Iterable[BookingLike],
) -> Optional[BookingLike]:
    """
    Find the first existing booking that overlaps the requested one.

    Args:
        sport: Sport of the requested booking
        day: Start date of the requested booking
        start: Requested start time
        end: Requested end time (earlier than start for overnight bookings)
        existing: Bookings for the sport on ``day`` and ``day - 1`` at least;
            bookings of other sports are ignored

    Returns:
        The conflicting booking, or None

    Raises:
        InvalidRange: If start equals end or any value is malformed
    """
    try:
        parsed = Sport.parse(sport)
    except ValueError as exc:
        raise InvalidRange(str(exc)) from exc
    if parsed is None:
        raise InvalidRange("A single sport is required for a conflict check")

    sport_value = parsed.value
    new_lo, new_hi = absolute_interval(day, start, end)

    for booking in existing:
        if Sport(booking.sport).value != sport_value:
            continue
        lo, hi = absolute_interval(booking.date, booking.start_time, booking.end_time)
        # Half-open intervals: touching ends are not a conflict
        if new_lo < hi and lo < new_hi:
            return booking

    return None
