"""
Domain layer - slot arithmetic, conflict detection, occupancy and aggregates.

Pure functions over already-fetched bookings; no database or network access.
"""

from .aggregation import compute_stats, monthly_revenue, resolve_period
from .availability import DayProjection, project_day
from .conflicts import check_conflict
from .models import BookingStats, MonthlyRevenue, Period, Sport, TimeSlot

__all__ = [
    "BookingStats",
    "DayProjection",
    "MonthlyRevenue",
    "Period",
    "Sport",
    "TimeSlot",
    "check_conflict",
    "compute_stats",
    "monthly_revenue",
    "project_day",
    "resolve_period",
]
