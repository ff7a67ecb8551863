"""Booking schemas."""
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Dict, List, Optional
from datetime import datetime
from decimal import Decimal

from sports_booking.core.exceptions import InvalidRange
from sports_booking.domain.conflicts import parse_iso_date
from sports_booking.domain.models import Sport
from sports_booking.domain.timeslots import normalize_time


class BookingCreate(BaseModel):
    """
    Schema for creating a booking.

    Accepts snake_case, camelCase and the stored column casing
    (``Sports``, ``StartTime``, ...).
    """

    sport: Sport = Field(validation_alias=AliasChoices("sport", "Sports", "Sport"))
    date: str = Field(validation_alias=AliasChoices("date", "Date"))
    start_time: str = Field(
        validation_alias=AliasChoices("start_time", "startTime", "StartTime")
    )
    end_time: str = Field(
        validation_alias=AliasChoices("end_time", "endTime", "EndTime")
    )
    amount: Decimal = Field(ge=0, validation_alias=AliasChoices("amount", "Amount"))
    created_by: str = Field(
        default="unknown",
        validation_alias=AliasChoices("created_by", "createdBy", "CreatedBy"),
    )

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        try:
            parse_iso_date(v)
        except InvalidRange as exc:
            raise ValueError(str(exc)) from exc
        return v

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def validate_time(cls, v) -> str:
        """Normalize ``930`` / ``9:30`` / ``09:30:00`` to ``09:30``."""
        try:
            return normalize_time(v)
        except InvalidRange as exc:
            raise ValueError(str(exc)) from exc


class BookingInDB(BaseModel):
    """Schema for booking from database."""

    id: str
    sport: Sport
    date: str
    start_time: str
    end_time: str
    spans_midnight: bool
    amount: float
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TimeSlotOut(BaseModel):
    """Schema for a single grid slot."""

    time: str
    label: str
    available: bool
    booking: Optional[BookingInDB] = None
    bookings: List[BookingInDB] = []


class DayAvailability(BaseModel):
    """Schema for a day's slot grid."""

    date: str
    sport: Optional[Sport] = None
    step_minutes: int
    slots: List[TimeSlotOut]


class TimeOptions(BaseModel):
    """Schema for the booking-creation time picker."""

    step_minutes: int
    times: List[str]
    labels: List[str]


class BookingStatsOut(BaseModel):
    """Schema for the booking report."""

    total_bookings: int
    total_revenue: float
    bookings_by_sport: Dict[str, int]
    revenue_by_sport: Dict[str, float]


class MonthlyRevenueOut(BaseModel):
    """Schema for one month of the revenue series."""

    month: str
    revenue: float
    bookings: int


class MonthlyRevenueReport(BaseModel):
    """Schema for a year of monthly revenue."""

    year: int
    sport: Optional[Sport] = None
    months: List[MonthlyRevenueOut]
