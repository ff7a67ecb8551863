"""Booking model."""
import uuid

from sqlalchemy import Boolean, Column, DateTime, Index, Numeric, String, UniqueConstraint
from sqlalchemy.sql import func

from sports_booking.core.database import Base
from sports_booking.domain.timeslots import spans_midnight


def _new_id() -> str:
    return str(uuid.uuid4())


class Booking(Base):
    """Represents a booked time range for one sport."""

    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=_new_id)
    sport = Column(String, nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD start date
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)    # HH:MM, earlier than start when overnight
    spans_midnight = Column(Boolean, nullable=False, default=False)
    amount = Column(Numeric(10, 2), nullable=False)
    created_by = Column(String, nullable=False, default="unknown")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        # Storage-level backstop against double booking
        UniqueConstraint("sport", "date", "start_time", name="uq_bookings_sport_date_start"),
        Index("ix_bookings_sport_date", "sport", "date"),
    )

    def __init__(self, **kwargs):
        # Overnight is decided once, when the row is built
        if "spans_midnight" not in kwargs and "start_time" in kwargs and "end_time" in kwargs:
            kwargs["spans_midnight"] = spans_midnight(kwargs["start_time"], kwargs["end_time"])
        if "id" not in kwargs:
            kwargs["id"] = _new_id()
        super().__init__(**kwargs)

    def __repr__(self) -> str:
        return (
            f"<Booking {self.id} {self.sport} {self.date} "
            f"{self.start_time}-{self.end_time}>"
        )
