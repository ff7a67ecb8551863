"""Price master model."""
from sqlalchemy import Column, DateTime, Integer, Numeric, String
from sqlalchemy.sql import func

from sports_booking.core.database import Base


class Price(Base):
    """Hourly price for a sport. Maintained by the admin price master."""

    __tablename__ = "prices"

    id = Column(Integer, primary_key=True, index=True)
    sport = Column(String, unique=True, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
