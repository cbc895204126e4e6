"""
Date helpers: ISO parsing and day arithmetic used by filtering, seasonality and trending.
"""

from datetime import datetime, timezone
from typing import Optional

# Upper bound used when a date range has no end.
OPEN_RANGE_END = datetime(2099, 12, 31, tzinfo=timezone.utc)


def parse_iso(date_str: Optional[str]) -> Optional[datetime]:
    """Parse an ISO date/datetime string as an aware UTC datetime; None if missing or invalid."""
    if not date_str:
        return None
    try:
        dt = datetime.fromisoformat(date_str.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def days_since(date_str: Optional[str], now: Optional[datetime] = None) -> Optional[float]:
    """Fractional days between date_str and now (UTC); None if date_str does not parse."""
    dt = parse_iso(date_str)
    if dt is None:
        return None
    now = now or datetime.now(timezone.utc)
    return (now - dt).total_seconds() / 86400.0
