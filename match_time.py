from __future__ import annotations

import datetime as _dt
from typing import Any, Optional


def require_date_iso(value: Any, *, field: str = "date_iso") -> str:
    """
    Ensure value is a valid YYYY-MM-DD (ISO date) and return normalized date ISO.
    Fail-loud. Never fall back to OS clock.
    """
    if value is None:
        raise ValueError(f"{field} is required (explicit ISO date; OS clock disabled)")
    s = str(value)[:10]
    try:
        _dt.date.fromisoformat(s)
    except ValueError as exc:
        raise ValueError(f"Invalid {field}: {value!r}") from exc
    return s


def date10(value: Any) -> str:
    """Best-effort conversion to YYYY-MM-DD (first 10 chars)."""
    if value is None:
        return ""
    s = str(value).strip()
    if not s:
        return ""
    return s[:10]


def parse_date_iso(value: Any) -> Optional[_dt.date]:
    """Parse ISO date/datetime-like values into ``datetime.date`` (None on failure)."""
    s = date10(value)
    if not s:
        return None
    try:
        return _dt.date.fromisoformat(s)
    except ValueError:
        return None


def shift_date_iso(date_iso: Any, *, days: int) -> str:
    d = _dt.date.fromisoformat(require_date_iso(date_iso))
    return (d + _dt.timedelta(days=int(days))).isoformat()


def day_month_label(date_iso: Any) -> str:
    """``2024-03-07`` -> ``07/03``; empty string for unparsable input."""
    d = parse_date_iso(date_iso)
    if d is None:
        return ""
    return f"{d.day:02d}/{d.month:02d}"


def clock_label(seconds: Any) -> str:
    # MM:SS, minutes keep growing past 59 (match time, not wall time)
    try:
        s = max(0, int(seconds))
    except (TypeError, ValueError):
        s = 0
    return f"{s // 60:02d}:{s % 60:02d}"
