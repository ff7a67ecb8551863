"""Rate endpoints."""
from fastapi import APIRouter, Depends, HTTPException

from sports_booking.domain.models import Sport
from sports_booking.schemas.rate import RateOut
from sports_booking.services.rate_resolver import RateResolver, get_rate_resolver

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("/{sport}", response_model=RateOut)
async def get_rate(
    sport: str,
    resolver: RateResolver = Depends(get_rate_resolver),
):
    """
    Suggested hourly rate for a sport.

    Falls back to the configured default when the price master has no
    usable price.
    """
    try:
        parsed = Sport.parse(sport)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if parsed is None:
        raise HTTPException(status_code=400, detail="A single sport is required")

    rate = await resolver.get_rate_per_hour(parsed)
    return RateOut(sport=parsed, price_per_hour=rate)


@router.post("/cache/clear", status_code=204)
async def clear_rate_cache(
    resolver: RateResolver = Depends(get_rate_resolver),
):
    """Drop cached rates so the next lookup reads the price master again."""
    resolver.clear_cache()
