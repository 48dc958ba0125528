# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Formatting helpers used by routes and templates.
# =============================================================================

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

import timeago


# =============================================================================
# Relative Time
# =============================================================================

def _as_utc(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip())
    if value.tzinfo is None:
        # Naive timestamps are stored as UTC
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def time_ago(value: datetime | str, now: datetime | None = None) -> str:
    """
    Format a timestamp relative to now.

    Args:
        value: datetime (naive values are treated as UTC) or ISO-8601 string
        now: Reference time (defaults to the current UTC time)

    Returns:
        Human-readable string such as "just now", "5 minutes ago",
        "1 day ago" or "in 3 hours" for future timestamps

    Example:
        time_ago(now - timedelta(days=1), now=now)  # "1 day ago"
    """
    then = _as_utc(value)
    reference = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    return timeago.format(then, reference)


# =============================================================================
# Money
# =============================================================================

def format_price(cents: int | None) -> str:
    """
    Format a price stored in cents.

    Example:
        format_price(1250)  # "$12.50"
    """
    if cents is None:
        return ""
    return f"${Decimal(cents) / 100:,.2f}"


def to_cents(amount: Decimal) -> int:
    """Convert a currency amount (e.g. Decimal("12.5")) to integer cents."""
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
