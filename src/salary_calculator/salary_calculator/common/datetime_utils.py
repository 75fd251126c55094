from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def format_hhmm(hours: int, minutes: int) -> str:
    """Zero-padded 24-hour clock string."""
    return f"{hours:02d}:{minutes:02d}"


def parse_hhmm(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for an "HH:MM" string, or None when malformed.

    Exactly two numeric components are required; seconds are not accepted here.
    """
    if not value:
        return None
    parts = str(value).split(":")
    if len(parts) != 2:
        return None
    try:
        hours, minutes = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    return hours * 60 + minutes


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now().date()
