from __future__ import annotations

"""Best XI selection (greedy, quota-based).

Algorithm
---------
1. Partition the ranked pool by position category (optionally restricted to
   the current viewing category first).
2. Walk categories in the fixed priority order from ``squad.config``; for each,
   take the top-N not-yet-assigned subjects of that exact position by
   descending score and mark them assigned.
3. Slots with no eligible subject stay empty (placeholder with the role code).

This is deliberately *not* a global optimum. A subject who would raise the
total formation score but is second in their category is never promoted over
a first-place subject of an earlier-processed category. Replacing this with an
assignment solver changes observable output.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from viewing_context import ALL_CATEGORIES

from . import config as s_cfg
from .types import RankedSubject, SquadSlot

logger = logging.getLogger(__name__)


def _picks_by_category(pool: Sequence[RankedSubject]) -> Dict[str, List[RankedSubject]]:
    assigned: Set[str] = set()
    picks: Dict[str, List[RankedSubject]] = {}
    for cat in s_cfg.CATEGORY_PRIORITY:
        quota = int(s_cfg.CATEGORY_QUOTAS.get(cat, 0))
        # sorted() is stable: equal scores keep the incoming pool order
        eligible = sorted(
            (r for r in pool if r.subject.position == cat and r.subject_id not in assigned),
            key=lambda r: -r.score,
        )
        chosen: List[RankedSubject] = []
        for r in eligible:
            if len(chosen) >= quota:
                break
            if r.subject_id in assigned:
                continue
            assigned.add(r.subject_id)
            chosen.append(r)
        picks[cat] = chosen
    return picks


def select_best_eleven(
    ranked_pool: Sequence[RankedSubject],
    *,
    category_id: Optional[str] = ALL_CATEGORIES,
) -> List[SquadSlot]:
    """Assign subjects to the 11 formation slots; always returns 11 entries."""
    cat_filter = str(category_id or ALL_CATEGORIES)
    pool = [
        r for r in ranked_pool
        if cat_filter == ALL_CATEGORIES or str(r.subject.category_id) == cat_filter
    ]
    picks = _picks_by_category(pool)

    slots: List[SquadSlot] = []
    for role, cat, rank, (x, y) in s_cfg.SLOTS:
        chosen = picks.get(cat) or []
        subject = chosen[rank] if rank < len(chosen) else None
        slots.append(SquadSlot(slot_role=role, category=cat, subject=subject, layout_position={"x": x, "y": y}))

    empty = sum(1 for s in slots if s.is_empty)
    if empty:
        logger.debug("select_best_eleven: %s empty slot(s) for category=%s", empty, cat_filter)
    return slots
