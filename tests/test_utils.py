# =============================================================================
# tests/test_utils.py - Formatting Utility Tests
# =============================================================================
# Unit tests for relative time and price formatting.
# =============================================================================

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import timeago

from lib.utils import format_price, time_ago, to_cents

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# time_ago Tests
# =============================================================================

class TestTimeAgo:
    """Tests for time_ago."""

    def test_one_day_ago(self):
        """Exactly one day earlier reads as '1 day ago'."""
        assert time_ago(NOW - timedelta(days=1), now=NOW) == "1 day ago"

    @pytest.mark.parametrize(
        "delta, expected",
        [
            (timedelta(seconds=3), "just now"),
            (timedelta(seconds=45), "45 seconds ago"),
            (timedelta(minutes=1), "1 minute ago"),
            (timedelta(minutes=17), "17 minutes ago"),
            (timedelta(hours=1), "1 hour ago"),
            (timedelta(hours=5), "5 hours ago"),
            (timedelta(days=3), "3 days ago"),
            (timedelta(weeks=1), "1 week ago"),
            (timedelta(weeks=3), "3 weeks ago"),
            (timedelta(days=45), "1 month ago"),
            (timedelta(days=200), "6 months ago"),
            (timedelta(days=366), "1 year ago"),
            (timedelta(days=3 * 365 + 10), "3 years ago"),
        ],
    )
    def test_past_units(self, delta, expected):
        assert time_ago(NOW - delta, now=NOW) == expected

    def test_future_timestamp(self):
        """Future timestamps are formatted, not rejected."""
        assert time_ago(NOW + timedelta(hours=2), now=NOW) == "in 2 hours"
        assert time_ago(NOW + timedelta(days=1), now=NOW) == "in 1 day"

    def test_near_future_is_right_now(self):
        assert time_ago(NOW + timedelta(seconds=2), now=NOW) == "right now"

    def test_naive_datetime_is_utc(self):
        """Naive timestamps (e.g. TIMESTAMP WITHOUT TIME ZONE) are read as UTC."""
        naive = (NOW - timedelta(days=2)).replace(tzinfo=None)
        assert time_ago(naive, now=NOW) == "2 days ago"

    def test_iso_string(self):
        """SQLite returns timestamps as text."""
        assert time_ago("2024-06-14 12:00:00", now=NOW) == "1 day ago"
        assert time_ago("2024-06-12T12:00:00+00:00", now=NOW) == "3 days ago"

    def test_other_timezone(self):
        tokyo = timezone(timedelta(hours=9))
        then = datetime(2024, 6, 15, 18, 0, 0, tzinfo=tokyo)  # 09:00 UTC
        assert time_ago(then, now=NOW) == "3 hours ago"

    def test_defaults_to_current_time(self):
        assert time_ago(datetime.now(timezone.utc)) == "just now"

    @pytest.mark.parametrize(
        "delta",
        [timedelta(seconds=9), timedelta(seconds=10), timedelta(hours=30), timedelta(days=-12)],
    )
    def test_agrees_with_timeago(self, delta):
        """Formatting is delegated to the timeago package."""
        assert time_ago(NOW - delta, now=NOW) == timeago.format(NOW - delta, NOW)


# =============================================================================
# Price Tests
# =============================================================================

class TestPrices:
    """Tests for format_price and to_cents."""

    @pytest.mark.parametrize(
        "cents, expected",
        [(0, "$0.00"), (5, "$0.05"), (1250, "$12.50"), (123456789, "$1,234,567.89")],
    )
    def test_format_price(self, cents, expected):
        assert format_price(cents) == expected

    def test_format_missing_price(self):
        assert format_price(None) == ""

    @pytest.mark.parametrize(
        "amount, expected",
        [(Decimal("12.5"), 1250), (Decimal("0.01"), 1), (Decimal("45"), 4500), (Decimal("0.005"), 1)],
    )
    def test_to_cents(self, amount, expected):
        assert to_cents(amount) == expected
