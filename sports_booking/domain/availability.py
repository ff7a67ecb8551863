"""
Day-grid occupancy projection.

A booking covers a grid slot ``t`` on the projected day when:

- it is a same-day booking dated that day and ``start <= t < end``
- it is an overnight booking dated that day and ``t >= start``
- it is an overnight booking dated the previous day and ``t < end``
"""

from datetime import timedelta
from typing import Dict, Iterator, List, Optional, Sequence

from sports_booking.core.exceptions import IntegrityViolation

from .conflicts import parse_iso_date
from .models import BookingLike, Sport, TimeSlot
from .timeslots import slot_grid, to_minutes


def covers_slot(booking: BookingLike, day: str, previous_day: str, slot_minutes: int) -> bool:
    """Check whether a booking occupies the given slot of ``day``."""
    start = to_minutes(booking.start_time)
    end = to_minutes(booking.end_time)

    if not booking.spans_midnight:
        return booking.date == day and start <= slot_minutes < end

    if booking.date == day:
        return slot_minutes >= start
    if booking.date == previous_day:
        return slot_minutes < end
    return False


class DayProjection:
    """
    Lazy occupancy view of one calendar day.

    Iterating walks the grid from ``00:00``; every iteration starts over, so
    the projection can be consumed any number of times.
    """

    def __init__(
        self,
        day: str,
        bookings: Sequence[BookingLike],
        sport: Optional[Sport] = None,
        step_minutes: int = 60,
    ):
        self.day = day
        self.previous_day = (parse_iso_date(day) - timedelta(days=1)).isoformat()
        self.sport = sport
        self.step_minutes = step_minutes
        self._grid = slot_grid(step_minutes)
        self._bookings = [
            b for b in bookings
            if b.date in (self.day, self.previous_day)
            and (sport is None or Sport(b.sport) == sport)
        ]

    def __len__(self) -> int:
        return len(self._grid)

    def __iter__(self) -> Iterator[TimeSlot]:
        for slot_time in self._grid:
            yield self._project_slot(slot_time)

    def _project_slot(self, slot_time: str) -> TimeSlot:
        slot_minutes = to_minutes(slot_time)
        by_sport: Dict[Sport, List[BookingLike]] = {}

        for booking in self._bookings:
            if covers_slot(booking, self.day, self.previous_day, slot_minutes):
                by_sport.setdefault(Sport(booking.sport), []).append(booking)

        for sport, matches in by_sport.items():
            if len(matches) > 1:
                ids = ", ".join(str(b.id) for b in matches)
                raise IntegrityViolation(
                    f"{len(matches)} {sport.value} bookings cover {self.day} {slot_time}: {ids}"
                )

        ordered = tuple(by_sport[s][0] for s in Sport if s in by_sport)
        return TimeSlot(time=slot_time, bookings=ordered)


def project_day(
    day: str,
    bookings: Sequence[BookingLike],
    sport: Optional[Sport] = None,
    step_minutes: int = 60,
) -> DayProjection:
    """
    Project slot occupancy for ``day``.

    Args:
        day: Calendar day (``YYYY-MM-DD``)
        bookings: Bookings dated ``day`` and the day before
        sport: Optional sport filter
        step_minutes: Grid step

    Returns:
        A restartable iterable of TimeSlot objects, one per grid slot
    """
    return DayProjection(day, bookings, sport=sport, step_minutes=step_minutes)
