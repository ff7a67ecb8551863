"""Booking endpoints."""
from datetime import date as date_type
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from sports_booking.core.config import settings
from sports_booking.core.database import get_db
from sports_booking.core.exceptions import (
    ConflictDetected,
    IntegrityViolation,
    InvalidPeriod,
    InvalidRange,
    NotFound,
)
from sports_booking.domain.models import Sport, TimeSlot
from sports_booking.domain.timeslots import format_12h, slot_grid
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
from sports_booking.services.booking_service import booking_service

router = APIRouter(prefix="/bookings", tags=["bookings"])


def _parse_sport(value: Optional[str]) -> Optional[Sport]:
    try:
        return Sport.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _slot_out(slot: TimeSlot) -> TimeSlotOut:
    bookings = [BookingInDB.model_validate(b) for b in slot.bookings]
    return TimeSlotOut(
        time=slot.time,
        label=slot.label,
        available=not slot.occupied,
        booking=bookings[0] if bookings else None,
        bookings=bookings,
    )


@router.get("", response_model=List[BookingInDB])
async def list_bookings(
    date: Optional[str] = Query(None, description="Start date (YYYY-MM-DD)"),
    sport: Optional[str] = Query(None, description="Sport name, or 'all'"),
    db: AsyncSession = Depends(get_db),
):
    """
    List bookings, optionally for one date and sport.

    Args:
        date: Only bookings starting on this date
        sport: Only bookings of this sport
        db: Database session

    Returns:
        Bookings ordered by date and start time
    """
    sport_filter = _parse_sport(sport)
    try:
        return await booking_service.list_bookings(db, date, sport_filter)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=BookingInDB, status_code=201)
async def create_booking(
    booking: BookingCreate,
    db: AsyncSession = Depends(get_db),
):
    """
    Create a booking.

    Overnight bookings are given with an end time before the start time,
    e.g. 22:00 to 02:00.

    Args:
        booking: Sport, date, start/end time and amount
        db: Database session

    Returns:
        Created booking
    """
    try:
        return await booking_service.create_booking(db, booking)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictDetected as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/availability", response_model=DayAvailability)
async def get_day_availability(
    date: str = Query(..., description="Date (YYYY-MM-DD)"),
    sport: Optional[str] = Query(None, description="Sport name, or 'all'"),
    step: Optional[int] = Query(None, description="Grid step in minutes"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the slot grid for a day.

    A slot is occupied when a booking starting that day covers it, or when
    an overnight booking from the day before runs into it.

    Args:
        date: Date to project
        sport: Limit to one sport
        step: Grid step in minutes (defaults to DAY_GRID_STEP_MINUTES)
        db: Database session

    Returns:
        One entry per grid slot
    """
    sport_filter = _parse_sport(sport)
    step_minutes = step if step is not None else settings.DAY_GRID_STEP_MINUTES

    try:
        slots = await booking_service.project_day(db, date, sport_filter, step_minutes)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    except IntegrityViolation:
        raise HTTPException(status_code=500, detail="Stored bookings overlap; see server log")

    return DayAvailability(
        date=date,
        sport=sport_filter,
        step_minutes=step_minutes,
        slots=[_slot_out(slot) for slot in slots],
    )


@router.get("/time-options", response_model=TimeOptions)
async def get_time_options(
    step: Optional[int] = Query(None, description="Picker step in minutes"),
):
    """Start/end times offered by the booking form."""
    step_minutes = step if step is not None else settings.PICKER_STEP_MINUTES
    try:
        times = list(slot_grid(step_minutes))
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TimeOptions(
        step_minutes=step_minutes,
        times=times,
        labels=[format_12h(t) for t in times],
    )


@router.get("/report", response_model=BookingStatsOut)
async def get_report(
    month: Optional[str] = Query(None, description="Month (YYYY-MM)"),
    date_from: Optional[str] = Query(None, alias="from", description="First date (YYYY-MM-DD)"),
    date_to: Optional[str] = Query(None, alias="to", description="Last date (YYYY-MM-DD)"),
    sport: Optional[str] = Query(None, description="Sport name, or 'all'"),
    db: AsyncSession = Depends(get_db),
):
    """
    Booking count and revenue for a month or a from/to range.

    ``month`` wins when both are given. With neither, the current month
    is reported.
    """
    sport_filter = _parse_sport(sport)
    if not month and not date_from and not date_to:
        month = date_type.today().strftime("%Y-%m")

    try:
        stats = await booking_service.compute_stats(
            db, month=month, date_from=date_from, date_to=date_to, sport=sport_filter
        )
    except InvalidPeriod as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BookingStatsOut(
        total_bookings=stats.total_bookings,
        total_revenue=float(stats.total_revenue),
        bookings_by_sport=stats.bookings_by_sport,
        revenue_by_sport={k: float(v) for k, v in stats.revenue_by_sport.items()},
    )


@router.get("/report/monthly", response_model=MonthlyRevenueReport)
async def get_monthly_revenue(
    year: Optional[int] = Query(None, ge=1, le=9999, description="Year (defaults to current)"),
    sport: Optional[str] = Query(None, description="Sport name, or 'all'"),
    db: AsyncSession = Depends(get_db),
):
    """Revenue for each month of a year."""
    sport_filter = _parse_sport(sport)
    report_year = year or date_type.today().year

    series = await booking_service.monthly_revenue(db, report_year, sport_filter)
    return MonthlyRevenueReport(
        year=report_year,
        sport=sport_filter,
        months=[
            MonthlyRevenueOut(month=m.month, revenue=float(m.revenue), bookings=m.bookings)
            for m in series
        ],
    )


@router.get("/{booking_id}", response_model=BookingInDB)
async def get_booking(
    booking_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a specific booking by ID."""
    try:
        return await booking_service.get_booking(db, booking_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{booking_id}", status_code=204)
async def delete_booking(
    booking_id: str,
    db: AsyncSession = Depends(get_db),
):
    """
    Delete a booking, freeing its slots.

    Args:
        booking_id: Booking ID
        db: Database session
    """
    try:
        await booking_service.delete_booking(db, booking_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
