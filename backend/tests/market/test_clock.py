"""Tests for the market-hours gate."""

from datetime import datetime, timedelta, timezone

import pytest

from tickfeed.market.clock import MarketHours, is_market_open

IST = timezone(timedelta(hours=5, minutes=30))


def _ist(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 5, 1, hour, minute, tzinfo=IST)


class TestMarketHours:
    """Unit tests for the fixed-offset trading window."""

    def test_open_at_noon_ist(self):
        assert is_market_open(_ist(12)) is True

    def test_closed_at_eight_pm_ist(self):
        assert is_market_open(_ist(20)) is False

    def test_closed_at_nine_am_ist(self):
        assert is_market_open(_ist(9)) is False

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [
            (9, 59, False),
            (10, 0, True),
            (18, 59, True),
            (19, 0, False),
        ],
    )
    def test_window_edges(self, hour, minute, expected):
        """Test that the window is [10:00, 19:00) local time."""
        assert is_market_open(_ist(hour, minute)) is expected

    def test_converts_from_utc(self):
        """06:30 UTC is 12:00 IST; 14:30 UTC is 20:00 IST."""
        assert is_market_open(datetime(2024, 5, 1, 6, 30, tzinfo=timezone.utc)) is True
        assert is_market_open(datetime(2024, 5, 1, 14, 30, tzinfo=timezone.utc)) is False

    def test_naive_treated_as_utc(self):
        assert is_market_open(datetime(2024, 5, 1, 6, 30)) is True

    def test_local_time(self):
        local = MarketHours().local_time(datetime(2024, 5, 1, 4, 30, tzinfo=timezone.utc))
        assert (local.hour, local.minute) == (10, 0)

    def test_custom_window(self):
        """Test a window defined in a different offset."""
        hours = MarketHours(open_minute=9 * 60 + 30, close_minute=16 * 60, utc_offset_minutes=-240)
        assert hours.is_open(datetime(2024, 5, 1, 14, 0, tzinfo=timezone.utc)) is True
        assert hours.is_open(datetime(2024, 5, 1, 21, 0, tzinfo=timezone.utc)) is False

    def test_default_now(self):
        """Test that calling without a time uses the current clock."""
        assert isinstance(MarketHours().is_open(), bool)
