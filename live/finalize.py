from __future__ import annotations

"""Reduce a capture log into a persisted score record.

Score
-----
    positive_ratio = positives / total
    score = min(10, round_half_up(positive_ratio * 20) / 2)

Live capture yields one holistic score, not per-attribute granularity, so the
scalar is broadcast into every technical and tactical key; physical stays at
the neutral baseline. An empty log finalizes to the neutral default (5.0).

Notes payload
-------------
The raw events are kept verbatim in ``notes`` as JSON tagged with
``"type": CAPTURE_NOTES_TYPE`` so readers can tell capture-derived records
from manual entries and replay them later.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

from evaluation import config as e_cfg
from evaluation.formulas import round_half_up
from evaluation.types import ScoreRecord, SessionDescriptor, ZonePoint
from match_time import require_date_iso

from . import config as l_cfg
from .analysis import impact_summary
from .types import Result, TacticalEvent

logger = logging.getLogger(__name__)

ORIGIN_CAPTURE = "capture"
ORIGIN_MANUAL = "manual"


@dataclass(frozen=True, slots=True)
class FinalizedCapture:
    """Record plus the session descriptor storage must dedupe/create."""

    record: ScoreRecord
    session: SessionDescriptor

    def to_dict(self) -> Dict[str, Any]:
        return {"record": self.record.to_dict(), "session": self.session.to_dict()}


def positive_ratio(events: Sequence[TacticalEvent]) -> float:
    if not events:
        return 0.0
    positives = sum(1 for e in events if e.result is Result.POSITIVE)
    return positives / len(events)


def capture_score(events: Sequence[TacticalEvent]) -> float:
    if not events:
        return l_cfg.EMPTY_LOG_SCORE
    half_points = round_half_up(positive_ratio(events) * l_cfg.RATIO_HALF_POINTS)
    return min(l_cfg.SCORE_MAX, half_points / 2.0)


def _fill(keys: Sequence[str], value: float) -> Dict[str, float]:
    return {k: float(value) for k in keys}


def build_notes_payload(events: Sequence[TacticalEvent], *, score: float, observations: str = "") -> Dict[str, Any]:
    counts = {r.value: 0 for r in Result}
    for e in events:
        counts[e.result.value] += 1
    return {
        "type": l_cfg.CAPTURE_NOTES_TYPE,
        "score": score,
        "positive_ratio": positive_ratio(events),
        "event_count": len(events),
        "counts": counts,
        "weighted": impact_summary(events),
        "events": [e.to_dict() for e in events],
        "observations": str(observations or ""),
    }


def finalize_capture(
    events: Sequence[TacticalEvent],
    *,
    subject_id: str,
    session_ref: str,
    record_id: str,
    observations: str = "",
    session_date: str = "",
) -> ScoreRecord:
    """Turn one subject's capture log into a ScoreRecord."""
    score = capture_score(events)
    notes = build_notes_payload(events, score=score, observations=observations)
    zone_points: List[ZonePoint] = []
    for e in events:
        if e.zone_id is None:
            continue
        x, y = l_cfg.zone_center(e.zone_id)
        zone_points.append(ZonePoint(x=x, y=y))
    return ScoreRecord(
        id=str(record_id),
        subject_id=str(subject_id),
        session_ref=str(session_ref),
        technical=_fill(list(e_cfg.TECHNICAL_ATTRIBUTES), score),
        physical=_fill(list(e_cfg.PHYSICAL_ATTRIBUTES), l_cfg.PHYSICAL_BASELINE),
        tactical=_fill(list(e_cfg.TACTICAL_ATTRIBUTES), score),
        zone_points=zone_points,
        notes=json.dumps(notes, ensure_ascii=False),
        session_date=session_date,
    )


def build_capture_session(
    *,
    session_id: str,
    session_date: str,
    team_id: str,
    category_id: Optional[str],
    events: Sequence[TacticalEvent],
) -> SessionDescriptor:
    d = require_date_iso(session_date, field="session_date")
    impact = impact_summary(events)["impact"]
    return SessionDescriptor(
        id=str(session_id),
        date=d,
        team_id=str(team_id),
        category_id=(str(category_id) if category_id is not None else None),
        description=f"Tactical capture: {len(events)} actions. Impact: {str(impact).replace('_', ' ')}",
    )


# ---------------------------------------------------------------------------
# Reading notes back
# ---------------------------------------------------------------------------


def parse_capture_notes(notes: Any) -> Optional[Dict[str, Any]]:
    """Return the capture payload of a record's notes, or None for manual notes."""
    if isinstance(notes, Mapping):
        payload: Any = dict(notes)
    else:
        text = str(notes or "").strip()
        if not text.startswith("{"):
            return None
        try:
            payload = json.loads(text)
        except ValueError:
            return None
    if not isinstance(payload, dict) or payload.get("type") != l_cfg.CAPTURE_NOTES_TYPE:
        return None
    return payload


def record_origin(record: ScoreRecord) -> str:
    return ORIGIN_CAPTURE if parse_capture_notes(record.notes) is not None else ORIGIN_MANUAL


def events_from_notes(notes: Any) -> List[TacticalEvent]:
    """Replay stored events; malformed rows are skipped."""
    payload = parse_capture_notes(notes)
    if payload is None:
        return []
    out: List[TacticalEvent] = []
    for row in (payload.get("events") or []):
        if not isinstance(row, Mapping):
            continue
        try:
            out.append(TacticalEvent.from_dict(row))
        except (TypeError, ValueError):
            logger.warning("events_from_notes: malformed event row; skipping", exc_info=True)
    return out


def collect_capture_events(records: Sequence[ScoreRecord]) -> List[TacticalEvent]:
    """All capture events across a subject's capture-derived records, in record order."""
    out: List[TacticalEvent] = []
    for r in records:
        out.extend(events_from_notes(r.notes))
    return out
