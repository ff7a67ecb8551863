"""
Tests for day-grid occupancy.
"""

import pytest

from conftest import make_booking
from sports_booking.core.exceptions import IntegrityViolation, InvalidRange
from sports_booking.domain.availability import project_day
from sports_booking.domain.models import Sport


def _occupied(slots):
    return [slot.time for slot in slots if slot.occupied]


class TestProjectDay:
    """Tests for project_day."""

    def test_empty_day_is_free(self):
        slots = list(project_day("2024-03-10", []))
        assert len(slots) == 24
        assert not _occupied(slots)

    def test_same_day_booking(self):
        booking = make_booking(start="10:00", end="12:00")
        slots = list(project_day("2024-03-10", [booking]))
        assert _occupied(slots) == ["10:00", "11:00"]
        assert slots[10].booking is booking

    def test_overnight_booking_dated_today_covers_evening(self):
        booking = make_booking(start="22:00", end="02:00")
        assert _occupied(project_day("2024-03-10", [booking])) == ["22:00", "23:00"]

    def test_overnight_booking_from_yesterday_covers_morning(self):
        booking = make_booking(date="2024-03-09", start="22:00", end="02:00")
        assert _occupied(project_day("2024-03-10", [booking])) == ["00:00", "01:00"]

    def test_same_day_booking_from_yesterday_is_ignored(self):
        booking = make_booking(date="2024-03-09", start="10:00", end="12:00")
        assert not _occupied(project_day("2024-03-10", [booking]))

    def test_sport_filter(self):
        cricket = make_booking(sport="Cricket", start="10:00", end="11:00")
        football = make_booking(sport="Football", start="12:00", end="13:00")
        slots = project_day("2024-03-10", [cricket, football], sport=Sport.FOOTBALL)
        assert _occupied(slots) == ["12:00"]

    def test_different_sports_share_a_slot(self):
        cricket = make_booking(sport="Cricket", start="10:00", end="11:00")
        gaming = make_booking(sport="Gaming", start="10:00", end="11:00")
        slot = list(project_day("2024-03-10", [gaming, cricket]))[10]
        # Ordered by sport, not by input order
        assert slot.bookings == (cricket, gaming)

    def test_overlapping_same_sport_raises(self):
        first = make_booking(start="10:00", end="12:00")
        second = make_booking(start="11:00", end="13:00")
        with pytest.raises(IntegrityViolation):
            list(project_day("2024-03-10", [first, second]))

    def test_projection_can_be_iterated_twice(self):
        projection = project_day("2024-03-10", [make_booking()], step_minutes=30)
        assert len(projection) == 48
        assert list(projection) == list(projection)

    def test_half_hour_grid(self):
        booking = make_booking(start="10:30", end="11:30")
        slots = project_day("2024-03-10", [booking], step_minutes=30)
        assert _occupied(slots) == ["10:30", "11:00"]

    def test_labels(self):
        slots = list(project_day("2024-03-10", []))
        assert slots[0].label == "12am"
        assert slots[13].label == "1pm"

    def test_bad_step_rejected(self):
        with pytest.raises(InvalidRange):
            project_day("2024-03-10", [], step_minutes=7)


class TestOvernightIntoNextDay:
    """A 23:00-01:00 Cricket booking on 2024-01-01."""

    booking = make_booking(date="2024-01-01", start="23:00", end="01:00")

    def test_start_day(self):
        assert _occupied(project_day("2024-01-01", [self.booking], sport=Sport.CRICKET)) == ["23:00"]

    def test_next_day(self):
        assert _occupied(project_day("2024-01-02", [self.booking], sport=Sport.CRICKET)) == ["00:00"]

    def test_next_day_half_hour_grid(self):
        slots = project_day("2024-01-02", [self.booking], sport=Sport.CRICKET, step_minutes=30)
        assert _occupied(slots) == ["00:00", "00:30"]

    def test_other_sport_filter_sees_nothing(self):
        assert not _occupied(project_day("2024-01-02", [self.booking], sport=Sport.FOOTBALL))
