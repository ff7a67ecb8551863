"""Database models."""
from sports_booking.models.booking import Booking
from sports_booking.models.price import Price

__all__ = ["Booking", "Price"]
