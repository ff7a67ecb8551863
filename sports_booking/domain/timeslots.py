"""
Wall-clock time arithmetic for the fixed slot grid.

Times are ``HH:MM`` strings on a 24-hour clock. Intervals are half-open
``[start, end)``; an interval whose end is not after its start wraps past
midnight and is split into ``[start, 24:00)`` and ``[00:00, end)``.
"""

import re
from typing import List, Tuple, Union

from sports_booking.core.exceptions import InvalidRange

MINUTES_PER_DAY = 24 * 60

_HHMM = re.compile(r"^(\d{1,2}):(\d{1,2})(?::\d{1,2})?$")
_DIGITS = re.compile(r"^\d{1,4}$")
_TWELVE_HOUR = re.compile(r"^(\d{1,2})(?::(\d{2}))?(am|pm)$")


def to_minutes(value: str, allow_end_of_day: bool = False) -> int:
    """
    Convert ``HH:MM`` to minutes since midnight.

    Args:
        value: Time string
        allow_end_of_day: Accept ``24:00`` (returned as 1440)

    Raises:
        InvalidRange: If the string is not a valid time of day
    """
    match = _HHMM.match(str(value).strip())
    if not match:
        raise InvalidRange(f"Malformed time '{value}', expected HH:MM")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if allow_end_of_day and hours == 24 and minutes == 0:
        return MINUTES_PER_DAY
    if hours > 23 or minutes > 59:
        raise InvalidRange(f"Time '{value}' is out of range")
    return hours * 60 + minutes


def from_minutes(minutes: int) -> str:
    """Convert minutes since midnight back to ``HH:MM`` (modulo one day)."""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_time(value: Union[str, int]) -> str:
    """
    Normalize a stored or submitted time value to ``HH:MM``.

    Accepts ``"9:5"``, ``"09:30:00"`` and bare digit forms such as ``"930"``
    or ``930`` (read as ``HHMM`` after left-padding to four digits).
    """
    text = str(value).strip()
    if _DIGITS.match(text):
        digits = text.zfill(4)
        text = f"{digits[:2]}:{digits[2:]}"
    return from_minutes(to_minutes(text))


def spans_midnight(start: str, end: str) -> bool:
    """True when the interval ends earlier in the day than it starts."""
    return to_minutes(end) < to_minutes(start)


def split_interval(start: str, end: str) -> List[Tuple[int, int]]:
    """
    Split an interval into same-day minute ranges.

    Raises:
        InvalidRange: If start and end are equal
    """
    start_min = to_minutes(start)
    end_min = to_minutes(end, allow_end_of_day=True)
    if start_min == end_min:
        raise InvalidRange(f"Start time {start} must differ from end time {end}")

    if end_min > start_min:
        return [(start_min, end_min)]
    pieces = [(start_min, MINUTES_PER_DAY)]
    if end_min > 0:
        pieces.append((0, end_min))
    return pieces


def intervals_overlap(a_start: str, a_end: str, b_start: str, b_end: str) -> bool:
    """
    Check whether two wall-clock intervals share any minute.

    Example:
        22:00-02:00 overlaps 01:00-03:00, 10:00-11:00 does not overlap 11:00-12:00
    """
    for a_lo, a_hi in split_interval(a_start, a_end):
        for b_lo, b_hi in split_interval(b_start, b_end):
            if a_lo < b_hi and b_lo < a_hi:
                return True
    return False


def slot_grid(step_minutes: int = 60) -> Tuple[str, ...]:
    """
    Build the day grid starting at ``00:00``.

    Raises:
        InvalidRange: If the step does not evenly divide the day
    """
    if step_minutes <= 0 or MINUTES_PER_DAY % step_minutes:
        raise InvalidRange(
            f"Slot step must be a positive divisor of {MINUTES_PER_DAY}, got {step_minutes}"
        )
    return tuple(from_minutes(m) for m in range(0, MINUTES_PER_DAY, step_minutes))


def format_12h(value: str) -> str:
    """Format ``HH:MM`` for display: ``13:30`` -> ``1:30pm``, ``00:00`` -> ``12am``."""
    minutes = to_minutes(value)
    hours, mins = divmod(minutes, 60)
    suffix = "pm" if hours >= 12 else "am"
    hours = hours % 12 or 12
    if mins == 0:
        return f"{hours}{suffix}"
    return f"{hours}:{mins:02d}{suffix}"


def parse_12h(label: str) -> str:
    """Inverse of :func:`format_12h`."""
    match = _TWELVE_HOUR.match(label.strip().lower())
    if not match:
        raise InvalidRange(f"Malformed 12-hour time '{label}'")

    hours = int(match.group(1))
    mins = int(match.group(2) or 0)
    if not 1 <= hours <= 12 or mins > 59:
        raise InvalidRange(f"12-hour time '{label}' is out of range")

    hours %= 12
    if match.group(3) == "pm":
        hours += 12
    return f"{hours:02d}:{mins:02d}"
