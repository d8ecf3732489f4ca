"""
viewing_context.py

Purpose
-------
Explicit "who is looking at what" value object threaded into the evaluation
and squad layers.

The product keeps the current team, the selected category (age group) and the
selected period in UI state. The core never rediscovers that state on its
own: callers build a ViewingContext and pass it in.

Also hosts the category (age group) helpers used to tag subjects.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

from evaluation import config as e_cfg
from evaluation.periods import period_filter
from evaluation.types import ScoreRecord
from match_time import parse_date_iso, require_date_iso

ALL_CATEGORIES = "all"

# Upper age bound (inclusive) -> age group label. Anything above is professional.
AGE_GROUPS: Tuple[Tuple[int, str], ...] = (
    (7, "Sub-07"),
    (9, "Sub-09"),
    (11, "Sub-11"),
    (13, "Sub-13"),
    (15, "Sub-15"),
    (17, "Sub-17"),
    (20, "Sub-20"),
)
PROFESSIONAL = "Professional"
_PROFESSIONAL_ALIASES = ("principal", "adulto", "senior", "first team")


@dataclass(frozen=True, slots=True)
class ViewingContext:
    today: Optional[str] = None
    team_id: Optional[str] = None
    category_id: str = ALL_CATEGORIES
    period: str = e_cfg.PERIOD_ALL
    bounds: Union[str, Tuple[Optional[str], Optional[str]], None] = None

    def __post_init__(self) -> None:
        if self.today is not None:
            object.__setattr__(self, "today", require_date_iso(self.today, field="today"))
        object.__setattr__(self, "category_id", str(self.category_id or ALL_CATEGORIES))

    def includes_category(self, category_id: Any) -> bool:
        if self.category_id == ALL_CATEGORIES:
            return True
        return category_id is not None and str(category_id) == self.category_id

    def filter_records(self, records: Sequence[ScoreRecord]) -> List[ScoreRecord]:
        return period_filter(records, self.period, today=self.today, bounds=self.bounds)


def normalize_category_name(raw: Any) -> str:
    """Canonical category label: ``"sub 9"`` -> ``"Sub-09"``, ``"adulto"`` -> ``"Professional"``."""
    if not raw:
        return ""
    text = str(raw)
    clean = text.strip().lower()
    if "prof" in clean or clean in _PROFESSIONAL_ALIASES:
        return PROFESSIONAL
    m = re.search(r"\d+", clean)
    if m:
        return f"Sub-{int(m.group(0)):02d}"
    return text[:1].upper() + text[1:]


def age_group_for_birth_date(birth_date: Any, *, on_date: Any) -> str:
    """Age group for a birth date as of ``on_date`` (explicit; no OS clock)."""
    born = parse_date_iso(birth_date)
    if born is None:
        return ""
    ref = parse_date_iso(require_date_iso(on_date, field="on_date"))
    age = ref.year - born.year
    if (ref.month, ref.day) < (born.month, born.day):
        age -= 1
    for upper, label in AGE_GROUPS:
        if age <= upper:
            return label
    return PROFESSIONAL
