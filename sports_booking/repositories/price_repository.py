"""Read access to the local price master table."""
from decimal import Decimal
from typing import Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from sports_booking.domain.models import Sport
from sports_booking.models.price import Price


class SqlPriceSource:
    """Price source backed by the ``prices`` table."""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self._session_factory = session_factory

    async def get_by_sport(self, sport: Sport) -> Optional[Decimal]:
        """Return the hourly price for a sport, or None when no row exists."""
        async with self._session_factory() as db:
            result = await db.execute(select(Price).where(Price.sport == sport.value))
            price = result.scalar_one_or_none()
        return price.price if price else None
