"""Exception hierarchy for the booking engine."""
from typing import Any, Optional


class BookingError(Exception):
    """Base class for all booking engine errors."""


class InvalidRange(BookingError):
    """Raised when a time range is empty or a time string is malformed."""


class InvalidPeriod(BookingError):
    """Raised when a report month or date range cannot be resolved."""


class ConflictDetected(BookingError):
    """Raised when a new booking overlaps an existing one of the same sport."""

    def __init__(self, message: str, booking: Optional[Any] = None):
        super().__init__(message)
        self.booking = booking


class NotFound(BookingError):
    """Raised when an operation targets a booking id that does not exist."""


class IntegrityViolation(BookingError):
    """Raised when stored bookings break the no-double-booking invariant."""
