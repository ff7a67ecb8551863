"""Booking persistence on an async SQLAlchemy session."""
from typing import Iterable, List, Optional

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from sports_booking.domain.models import Sport
from sports_booking.models.booking import Booking


class BookingRepository:
    """Row-level access to the bookings table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list(self, day: Optional[str] = None, sport: Optional[Sport] = None) -> List[Booking]:
        """List bookings, optionally for one start date and one sport."""
        query = select(Booking)
        if day:
            query = query.where(Booking.date == day)
        if sport is not None:
            query = query.where(Booking.sport == sport.value)

        result = await self.db.execute(query.order_by(Booking.date, Booking.start_time))
        return list(result.scalars().all())

    async def list_for_dates(
        self, days: Iterable[str], sport: Optional[Sport] = None
    ) -> List[Booking]:
        """List bookings whose start date is one of ``days``."""
        query = select(Booking).where(Booking.date.in_(list(days)))
        if sport is not None:
            query = query.where(Booking.sport == sport.value)

        result = await self.db.execute(query.order_by(Booking.date, Booking.start_time))
        return list(result.scalars().all())

    async def list_between(
        self, start: str, end: str, sport: Optional[Sport] = None
    ) -> List[Booking]:
        """List bookings with ``start <= date <= end`` (inclusive)."""
        conditions = [Booking.date >= start, Booking.date <= end]
        if sport is not None:
            conditions.append(Booking.sport == sport.value)

        result = await self.db.execute(
            select(Booking).where(and_(*conditions)).order_by(Booking.date, Booking.start_time)
        )
        return list(result.scalars().all())

    async def get(self, booking_id: str) -> Optional[Booking]:
        result = await self.db.execute(select(Booking).where(Booking.id == booking_id))
        return result.scalar_one_or_none()

    async def insert(self, booking: Booking) -> Booking:
        """Add a booking and flush so the id and constraints are applied."""
        self.db.add(booking)
        await self.db.flush()
        return booking

    async def delete(self, booking: Booking) -> None:
        await self.db.delete(booking)
        await self.db.flush()
