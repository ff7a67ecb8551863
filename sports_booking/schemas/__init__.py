"""API schemas."""
from sports_booking.schemas.booking import (
    BookingCreate,
    BookingInDB,
    BookingStatsOut,
    DayAvailability,
    MonthlyRevenueOut,
    MonthlyRevenueReport,
    TimeOptions,
    TimeSlotOut,
)
from sports_booking.schemas.rate import RateOut

__all__ = [
    "BookingCreate",
    "BookingInDB",
    "BookingStatsOut",
    "DayAvailability",
    "MonthlyRevenueOut",
    "MonthlyRevenueReport",
    "TimeOptions",
    "TimeSlotOut",
    "RateOut",
]
