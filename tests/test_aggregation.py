"""
Tests for booking and revenue aggregates.
"""

from decimal import Decimal

import pytest

from conftest import make_booking
from sports_booking.core.exceptions import InvalidPeriod
from sports_booking.domain.aggregation import compute_stats, month_period, monthly_revenue, resolve_period
from sports_booking.domain.models import Period, Sport


class TestResolvePeriod:
    """Tests for period resolution."""

    def test_month(self):
        assert resolve_period(month="2024-02") == Period("2024-02-01", "2024-02-29")

    def test_month_wins_over_range(self):
        period = resolve_period(month="2024-03", date_from="2024-01-01", date_to="2024-01-05")
        assert period == Period("2024-03-01", "2024-03-31")

    def test_range(self):
        assert resolve_period(date_from="2024-01-01", date_to="2024-01-05") == Period(
            "2024-01-01", "2024-01-05"
        )

    @pytest.mark.parametrize(
        "kwargs",
        [
            {},
            {"date_from": "2024-01-01"},
            {"date_to": "2024-01-01"},
            {"date_from": "2024-01-05", "date_to": "2024-01-01"},
            {"date_from": "2024-01-01", "date_to": "Jan 5"},
            {"month": "2024-13"},
            {"month": "March"},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidPeriod):
            resolve_period(**kwargs)

    def test_month_period_december(self):
        assert month_period("2023-12").end == "2023-12-31"


class TestComputeStats:
    """Tests for compute_stats."""

    def test_empty_period_reports_every_sport(self):
        stats = compute_stats([], Period("2024-03-01", "2024-03-31"))
        assert stats.total_bookings == 0
        assert stats.total_revenue == Decimal("0")
        assert set(stats.bookings_by_sport) == {s.value for s in Sport}
        assert all(v == 0 for v in stats.revenue_by_sport.values())

    def test_totals_and_breakdown(self):
        bookings = [
            make_booking(sport="Cricket", date="2024-03-01", amount="600"),
            make_booking(sport="Cricket", date="2024-03-31", amount="600.50"),
            make_booking(sport="Gaming", date="2024-03-15", amount="100"),
            make_booking(sport="Gaming", date="2024-04-01", amount="100"),
        ]
        stats = compute_stats(bookings, Period("2024-03-01", "2024-03-31"))

        assert stats.total_bookings == 3
        assert stats.total_revenue == Decimal("1300.50")
        assert stats.bookings_by_sport["Cricket"] == 2
        assert stats.bookings_by_sport["Football"] == 0
        assert stats.revenue_by_sport["Gaming"] == Decimal("100")

    def test_sport_filter(self):
        bookings = [
            make_booking(sport="Cricket", date="2024-03-01"),
            make_booking(sport="Football", date="2024-03-01", amount="500"),
        ]
        stats = compute_stats(bookings, Period("2024-03-01", "2024-03-31"), Sport.FOOTBALL)
        assert stats.total_bookings == 1
        assert stats.total_revenue == Decimal("500")
        assert stats.bookings_by_sport["Cricket"] == 0

    def test_overnight_booking_counts_on_its_start_date(self):
        overnight = make_booking(date="2024-03-31", start="22:00", end="02:00")
        assert compute_stats([overnight], month_period("2024-03")).total_bookings == 1
        assert compute_stats([overnight], month_period("2024-04")).total_bookings == 0


class TestMonthlyRevenue:
    """Tests for the monthly revenue series."""

    def test_twelve_months(self):
        bookings = [
            make_booking(date="2024-01-10", amount="600"),
            make_booking(date="2024-01-11", amount="400"),
            make_booking(date="2024-07-04", amount="250"),
            make_booking(date="2023-07-04", amount="999"),
        ]
        series = monthly_revenue(bookings, 2024)

        assert [m.month for m in series][:2] == ["2024-01", "2024-02"]
        assert len(series) == 12
        assert series[0].revenue == Decimal("1000")
        assert series[0].bookings == 2
        assert series[6].revenue == Decimal("250")
        assert series[1].bookings == 0

    def test_football_january(self):
        bookings = [
            make_booking(sport="Football", date="2024-01-05", amount="500"),
            make_booking(sport="Football", date="2024-01-12", amount="700"),
            make_booking(sport="Football", date="2024-01-20", amount="300"),
            make_booking(sport="Cricket", date="2024-01-05", amount="1000"),
        ]
        period = resolve_period(month="2024-01")
        stats = compute_stats(bookings, period, Sport.FOOTBALL)

        assert stats.total_bookings == 3
        assert stats.total_revenue == Decimal("1500")
        assert stats.bookings_by_sport["Cricket"] == 0
        assert compute_stats(bookings, period, Sport.FOOTBALL) == stats
