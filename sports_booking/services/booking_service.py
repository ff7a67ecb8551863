"""Booking service: conflict-checked writes, day grids and reports."""
import asyncio
import logging
from datetime import timedelta
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sports_booking.core.config import settings
from sports_booking.core.exceptions import ConflictDetected, IntegrityViolation, InvalidRange, NotFound
from sports_booking.domain.aggregation import compute_stats, monthly_revenue, resolve_period
from sports_booking.domain.availability import project_day
from sports_booking.domain.conflicts import check_conflict, parse_iso_date
from sports_booking.domain.models import BookingStats, MonthlyRevenue, Sport, TimeSlot
from sports_booking.models.booking import Booking
from sports_booking.repositories.booking_repository import BookingRepository
from sports_booking.schemas.booking import BookingCreate, BookingInDB

logger = logging.getLogger(__name__)


def _shift(day: str, days: int) -> str:
    return (parse_iso_date(day) + timedelta(days=days)).isoformat()


def _detach(booking: Booking) -> BookingInDB:
    """Copy the plain columns of a booking into a session-free schema."""
    return BookingInDB(
        id=booking.id,
        sport=booking.sport,
        date=booking.date,
        start_time=booking.start_time,
        end_time=booking.end_time,
        spans_midnight=booking.spans_midnight,
        amount=booking.amount,
        created_by=booking.created_by,
    )


class BookingService:
    """
    Service for managing bookings.

    Creation runs check, insert and re-check inside one transaction. Writes
    for the same sport are serialised within the process; across processes
    the (sport, date, start_time) unique constraint and the post-insert
    re-check keep the no-overlap invariant.
    """

    def __init__(self):
        self._locks: Dict[Sport, asyncio.Lock] = {}

    def _lock_for(self, sport: Sport) -> asyncio.Lock:
        if sport not in self._locks:
            self._locks[sport] = asyncio.Lock()
        return self._locks[sport]

    async def _neighbours(self, repo: BookingRepository, sport: Sport, day: str) -> List[Booking]:
        # The day before can bleed into ``day``; a new overnight booking can
        # reach into the day after.
        days = [_shift(day, -1), day, _shift(day, 1)]
        return await repo.list_for_dates(days, sport)

    async def create_booking(self, db: AsyncSession, data: BookingCreate) -> Booking:
        """
        Create a booking if it overlaps no existing booking of its sport.

        Raises:
            InvalidRange: If start equals end
            ConflictDetected: If the slot is taken
        """
        if data.start_time == data.end_time:
            raise InvalidRange(f"Start time {data.start_time} must differ from end time {data.end_time}")

        repo = BookingRepository(db)

        async with self._lock_for(data.sport):
            existing = await self._neighbours(repo, data.sport, data.date)
            conflict = check_conflict(data.sport, data.date, data.start_time, data.end_time, existing)
            if conflict is not None:
                raise ConflictDetected(
                    f"{data.sport.value} is already booked {conflict.date} "
                    f"{conflict.start_time}-{conflict.end_time}",
                    booking=conflict,
                )

            booking = Booking(
                sport=data.sport.value,
                date=data.date,
                start_time=data.start_time,
                end_time=data.end_time,
                amount=data.amount,
                created_by=data.created_by,
            )

            try:
                await repo.insert(booking)

                # Re-check against rows committed by other processes meanwhile
                others = [
                    b for b in await self._neighbours(repo, data.sport, data.date)
                    if b.id != booking.id
                ]
                conflict = check_conflict(data.sport, data.date, data.start_time, data.end_time, others)
                if conflict is not None:
                    # Rollback expires every instance, so detach the clash first
                    snapshot = _detach(conflict)
                    await db.rollback()
                    raise ConflictDetected(
                        f"{data.sport.value} was booked concurrently "
                        f"{snapshot.date} {snapshot.start_time}-{snapshot.end_time}",
                        booking=snapshot,
                    )

                await db.commit()

            except IntegrityError:
                await db.rollback()
                raise ConflictDetected(
                    f"{data.sport.value} is already booked at {data.date} {data.start_time}"
                )

        await db.refresh(booking)
        logger.info(
            f"Created booking {booking.id}: {booking.sport} {booking.date} "
            f"{booking.start_time}-{booking.end_time} by {booking.created_by}"
        )
        return booking

    async def list_bookings(
        self, db: AsyncSession, day: Optional[str] = None, sport: Optional[Sport] = None
    ) -> List[Booking]:
        """List bookings, optionally for one date and sport."""
        if day:
            parse_iso_date(day)
        return await BookingRepository(db).list(day, sport)

    async def get_booking(self, db: AsyncSession, booking_id: str) -> Booking:
        booking = await BookingRepository(db).get(booking_id)
        if not booking:
            raise NotFound(f"Booking {booking_id} not found")
        return booking

    async def delete_booking(self, db: AsyncSession, booking_id: str) -> None:
        """
        Delete a booking, freeing its slots.

        Raises:
            NotFound: If the booking does not exist
        """
        repo = BookingRepository(db)
        booking = await repo.get(booking_id)
        if not booking:
            raise NotFound(f"Booking {booking_id} not found")

        await repo.delete(booking)
        await db.commit()
        logger.info(f"Deleted booking {booking_id}")

    async def project_day(
        self,
        db: AsyncSession,
        day: str,
        sport: Optional[Sport] = None,
        step_minutes: Optional[int] = None,
    ) -> List[TimeSlot]:
        """
        Occupancy of every grid slot of ``day``.

        Raises:
            IntegrityViolation: If two bookings of one sport share a slot
        """
        step = step_minutes if step_minutes is not None else settings.DAY_GRID_STEP_MINUTES
        bookings = await BookingRepository(db).list_for_dates([_shift(day, -1), day], sport)

        try:
            return list(project_day(day, bookings, sport=sport, step_minutes=step))
        except IntegrityViolation:
            logger.error(f"Overlapping bookings found while projecting {day}", exc_info=True)
            raise

    async def compute_stats(
        self,
        db: AsyncSession,
        month: Optional[str] = None,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        sport: Optional[Sport] = None,
    ) -> BookingStats:
        """
        Booking count and revenue for a month or a from/to range.

        Raises:
            InvalidPeriod: If the period cannot be resolved
        """
        period = resolve_period(month=month, date_from=date_from, date_to=date_to)
        bookings = await BookingRepository(db).list_between(period.start, period.end, sport)
        return compute_stats(bookings, period, sport)

    async def monthly_revenue(
        self, db: AsyncSession, year: int, sport: Optional[Sport] = None
    ) -> List[MonthlyRevenue]:
        """Revenue for each month of ``year``."""
        bookings = await BookingRepository(db).list_between(
            f"{year:04d}-01-01", f"{year:04d}-12-31", sport
        )
        return monthly_revenue(bookings, year, sport)


# Singleton instance
booking_service = BookingService()
