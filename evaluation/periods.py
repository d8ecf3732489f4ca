from __future__ import annotations

"""Time-window filter for score record histories.

Windows compare the record's `session_date` against ISO bounds *lexically*
(``"2024-03-07" >= "2024-03-01"``), inclusive on both ends. The reference
date ("today") is always an explicit argument.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from match_time import date10, require_date_iso, shift_date_iso

from . import config as e_cfg
from .types import ScoreRecord

logger = logging.getLogger(__name__)

CustomBounds = Union[str, Tuple[Optional[str], Optional[str]], None]


def _window(period: str, today: Optional[str], bounds: CustomBounds) -> Optional[Tuple[str, str]]:
    """Return (start, end) inclusive bounds, "" meaning open. None means no filtering."""
    if period == e_cfg.PERIOD_CUSTOM:
        if bounds is None or bounds == "":
            return None
        if isinstance(bounds, str):
            d = date10(bounds)
            return (d, d)
        start, end = (tuple(bounds) + (None, None))[:2]
        start_s, end_s = date10(start), date10(end)
        if not start_s and not end_s:
            return None
        return (start_s, end_s)

    ref = require_date_iso(today, field="today")
    if period == e_cfg.PERIOD_TODAY:
        return (ref, ref)
    if period in e_cfg.ROLLING_WINDOW_DAYS:
        return (shift_date_iso(ref, days=-e_cfg.ROLLING_WINDOW_DAYS[period]), ref)
    if period == e_cfg.PERIOD_THIS_YEAR:
        return (f"{ref[:4]}-01-01", ref)
    return None


def period_filter(
    records: Sequence[ScoreRecord],
    period: str = e_cfg.PERIOD_ALL,
    *,
    today: Optional[str] = None,
    bounds: CustomBounds = None,
) -> List[ScoreRecord]:
    """Keep the records whose session date falls inside the period window.

    - ``all`` returns every record unchanged, in order.
    - ``custom`` with no date selected behaves as ``all``.
    - ``bounds`` for ``custom`` is a single date (that day only) or a
      ``(start, end)`` pair where either side may be None.
    - Records without a session date never match a dated window.
    """
    p = str(period or e_cfg.PERIOD_ALL)
    if p not in e_cfg.PERIODS:
        logger.warning("period_filter: unknown period %r; treating as 'all'", period)
        return list(records)
    if p == e_cfg.PERIOD_ALL:
        return list(records)

    try:
        window = _window(p, today, bounds)
    except ValueError:
        logger.warning("period_filter: invalid reference date %r for period %r; skipping filter", today, p)
        return list(records)
    if window is None:
        return list(records)

    start, end = window
    out: List[ScoreRecord] = []
    for r in records:
        d = r.session_date
        if not d:
            continue
        if start and d < start:
            continue
        if end and d > end:
            continue
        out.append(r)
    return out
