from __future__ import annotations

"""Weighted impact analysis of captured tactical events.

Each event gets a signed impact score:

    event_score = RESULT_BASE[result] * PHASE_WEIGHTS[phase] * ACTION_WEIGHTS[action]

so a positive defensive-transition action weighs more than a positive
offensive-organisation one. These numbers feed the audit payload stored with
a capture result and the per-match review screens (phase profile, action
ranking, minute timeline). They never replace the 0..10 record score.

All functions accept any iterable of TacticalEvent and are total.
"""

from typing import Dict, Iterable, List, Optional, Sequence, TypedDict

from evaluation.formulas import mean

from . import config as l_cfg
from .types import Phase, Result, TacticalEvent


class ImpactLevel(TypedDict):
    code: str
    label: str


class ActionImpact(TypedDict):
    action: str
    average: float
    count: int


class TimelineBlock(TypedDict):
    start_seconds: int
    label: str
    score: float
    count: int


def event_score(event: TacticalEvent) -> float:
    base = l_cfg.RESULT_BASE.get(event.result.value, 0.0)
    w_phase = l_cfg.PHASE_WEIGHTS.get(event.phase.value, 1.0)
    w_action = l_cfg.ACTION_WEIGHTS.get(event.action, l_cfg.ACTION_WEIGHT_DEFAULT)
    return base * w_phase * w_action


def average_impact(events: Iterable[TacticalEvent]) -> float:
    return mean(event_score(e) for e in events)


def impact_level(average: float) -> ImpactLevel:
    """Very high is strictly above its cut-off; the other bounds are inclusive."""
    if average > l_cfg.IMPACT_VERY_HIGH_ABOVE:
        code = "very_high_impact"
    elif average >= l_cfg.IMPACT_POSITIVE_FROM:
        code = "positive_impact"
    elif average <= l_cfg.IMPACT_RISK_AT_MOST:
        code = "tactical_risk"
    elif average <= l_cfg.IMPACT_NEGATIVE_AT_MOST:
        code = "negative_impact"
    else:
        code = "neutral"
    return {"code": code, "label": l_cfg.IMPACT_LABELS[code]}


def phase_profile(events: Sequence[TacticalEvent]) -> Dict[str, float]:
    """Mean event score per phase (0.0 for phases without events)."""
    return {p.value: average_impact(e for e in events if e.phase is p) for p in Phase}


def action_ranking(events: Sequence[TacticalEvent], *, top_n: int = 3) -> Dict[str, List[ActionImpact]]:
    """Best/worst actions by mean event score; ties keep first-seen order."""
    grouped: Dict[str, List[float]] = {}
    for e in events:
        grouped.setdefault(e.action, []).append(event_score(e))
    rows: List[ActionImpact] = [
        {"action": a, "average": mean(scores), "count": len(scores)} for a, scores in grouped.items()
    ]
    return {
        "best": sorted(rows, key=lambda r: -r["average"])[:top_n],
        "worst": sorted(rows, key=lambda r: r["average"])[:top_n],
    }


def minute_timeline(
    events: Sequence[TacticalEvent],
    *,
    block_seconds: int = l_cfg.TIMELINE_BLOCK_SECONDS,
) -> List[TimelineBlock]:
    """Mean event score per time block, from 0 up to the last captured second."""
    if not events:
        return []
    step = max(1, int(block_seconds))
    last = max(e.elapsed_seconds for e in events)
    blocks: List[TimelineBlock] = []
    for start in range(0, last + 1, step):
        inside = [e for e in events if start <= e.elapsed_seconds < start + step]
        blocks.append({
            "start_seconds": start,
            "label": f"{start // 60}'",
            "score": average_impact(inside),
            "count": len(inside),
        })
    return blocks


def filter_events(
    events: Sequence[TacticalEvent],
    *,
    phase: Optional[Phase] = None,
    result: Optional[Result] = None,
    window_start: Optional[int] = None,
    window_seconds: int = l_cfg.FILTER_WINDOW_SECONDS,
) -> List[TacticalEvent]:
    out = list(events)
    if phase is not None:
        out = [e for e in out if e.phase is phase]
    if result is not None:
        out = [e for e in out if e.result is result]
    if window_start is not None:
        lo = int(window_start)
        out = [e for e in out if lo <= e.elapsed_seconds < lo + int(window_seconds)]
    return out


def zone_counts(events: Iterable[TacticalEvent]) -> Dict[int, int]:
    counts = {z: 0 for z in range(l_cfg.ZONE_COUNT)}
    for e in events:
        if e.zone_id is not None:
            counts[int(e.zone_id)] = counts.get(int(e.zone_id), 0) + 1
    return counts


def impact_summary(events: Sequence[TacticalEvent]) -> Dict[str, object]:
    """Aggregate impact block stored in capture notes."""
    total = sum(event_score(e) for e in events)
    avg = total / len(events) if events else 0.0
    return {
        "total": round(total, 4),
        "average": round(avg, 4),
        "impact": impact_level(avg)["code"],
        "phases": {k: round(v, 4) for k, v in phase_profile(events).items()},
    }
