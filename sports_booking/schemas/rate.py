"""Rate schemas."""
from pydantic import BaseModel

from sports_booking.domain.models import Sport


class RateOut(BaseModel):
    """Schema for a sport's suggested hourly rate."""

    sport: Sport
    price_per_hour: float
