"""Hourly rate lookup with an in-process cache and static fallbacks."""
import logging
import math
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Protocol

from sports_booking.core.config import settings
from sports_booking.domain.models import Sport

logger = logging.getLogger(__name__)


class PriceSource(Protocol):
    """Anything that can look up a sport's hourly price."""

    async def get_by_sport(self, sport: Sport) -> Optional[Any]:
        """Return the raw price value, or None when there is none."""


class RateCache:
    """Per-sport rate cache. Values stay until cleared."""

    def __init__(self):
        self._rates: Dict[Sport, float] = {}

    def get(self, sport: Sport) -> Optional[float]:
        return self._rates.get(sport)

    def set(self, sport: Sport, rate: float) -> None:
        self._rates[sport] = rate

    def clear(self) -> None:
        self._rates.clear()

    def __contains__(self, sport: Sport) -> bool:
        return sport in self._rates

    def __len__(self) -> int:
        return len(self._rates)


def _to_rate(value: Any) -> Optional[float]:
    """Coerce a price value to a finite, non-negative float."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = float(Decimal(str(value)))
    except (InvalidOperation, ValueError):
        return None
    if not math.isfinite(rate) or rate < 0:
        return None
    return rate


class RateResolver:
    """
    Resolves the suggested hourly rate for a sport.

    A failed or unusable lookup falls back to the static default and that
    default is cached like a real rate, so it sticks until clear_cache().
    """

    def __init__(
        self,
        source: PriceSource,
        defaults: Optional[Mapping[str, float]] = None,
        cache: Optional[RateCache] = None,
    ):
        self.source = source
        self.defaults = dict(defaults if defaults is not None else settings.DEFAULT_RATES)
        self.cache = cache if cache is not None else RateCache()

    async def get_rate_per_hour(self, sport: Sport) -> float:
        """
        Get the hourly rate for a sport.

        Args:
            sport: Sport to price

        Returns:
            Rate from the price table, or the static default
        """
        cached = self.cache.get(sport)
        if cached is not None:
            return cached

        try:
            rate = _to_rate(await self.source.get_by_sport(sport))
        except Exception as e:
            logger.warning(f"Price lookup for {sport.value} failed: {e}")
            rate = None

        if rate is None:
            rate = float(self.defaults.get(sport.value, 0))
            logger.warning(f"Using default rate {rate} for {sport.value}")

        self.cache.set(sport, rate)
        return rate

    def clear_cache(self) -> None:
        """Forget every cached rate (call after the price table changes)."""
        logger.info(f"Clearing {len(self.cache)} cached rate(s)")
        self.cache.clear()


def build_rate_resolver() -> RateResolver:
    """Build the resolver for the configured price source."""
    if settings.PRICE_API_BASE_URL:
        from sports_booking.services.price_client import PriceApiClient

        return RateResolver(PriceApiClient())

    from sports_booking.core.database import AsyncSessionLocal
    from sports_booking.repositories.price_repository import SqlPriceSource

    return RateResolver(SqlPriceSource(AsyncSessionLocal))


# Singleton instance
rate_resolver = build_rate_resolver()


def get_rate_resolver() -> RateResolver:
    """FastAPI dependency returning the shared resolver."""
    return rate_resolver
