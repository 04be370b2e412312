# src/flightsearch/core/durations.py

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Optional

_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")

_CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def parse_iso_duration_to_minutes(duration: Optional[str]) -> int:
    """
    Parse durations like 'PT6H30M', 'PT45M' or 'PT2H' into total minutes.
    Anything without a 'PT' token parses to 0.
    """
    if not duration or not isinstance(duration, str):
        return 0

    match = _DURATION_RE.search(duration)
    if not match:
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    return hours * 60 + minutes


def minutes_to_iso_duration(minutes: int) -> str:
    """Encode minutes back into the 'PT#H#M' grammar."""
    safe = max(0, int(minutes))
    hours, mins = divmod(safe, 60)
    return f"PT{hours}H{mins}M"


def format_duration(minutes: Optional[float]) -> str:
    """'5h 30m', '2h', '45m'."""
    if minutes is None or not math.isfinite(minutes):
        safe = 0
    else:
        safe = max(0, int(minutes))
    hours, mins = divmod(safe, 60)

    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse Amadeus datetime strings like:
      - '2026-02-15T10:30:00'
      - '2026-02-15T10:30:00Z'
      - '2026-02-15T10:30:00+00:00'
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_time(value: Optional[str]) -> str:
    """Time of day as shown on a result card, e.g. '08:05 AM'. '' if unparsable."""
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    return dt.strftime("%I:%M %p")


def format_date(value: Optional[str]) -> str:
    """Short date, e.g. 'Thu, Jan 1'. '' if unparsable."""
    dt = parse_timestamp(value)
    if dt is None:
        return ""
    return f"{dt:%a}, {dt:%b} {dt.day}"


def format_currency(amount: float, currency: str) -> str:
    symbol = _CURRENCY_SYMBOLS.get((currency or "").upper())
    if symbol:
        return f"{symbol}{amount:,.0f}"
    return f"{currency} {amount:,.0f}"


def format_stops(stops: int) -> str:
    if stops <= 0:
        return "Nonstop"
    if stops == 1:
        return "1 stop"
    return f"{stops} stops"
