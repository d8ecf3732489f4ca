from __future__ import annotations

"""Typed containers used by the evaluation layer.

Score records arrive from storage (or from the live capture finalizer) as
JSON-like mappings. Their expected shape is:

    {
        "id": str,
        "subject_id": str,
        "session_ref": str,
        "session_date": "YYYY-MM-DD" | "",
        "technical": {key: float, ...},
        "physical": {key: float, ...},
        "tactical": {key: float, ...} | None,
        "zone_points": [{"x": float, "y": float}, ...],
        "notes": str,
    }

This module defines:
- Normalized dataclasses used internally (`ScoreRecord`, `ZonePoint`, `SessionDescriptor`)
- TypedDicts used for JSON-like outputs (`RankedAttribute`, `AttributeRanking`, `SeriesPoint`)

Design goal: keep the boundary between "raw storage rows" and "derived view" explicit.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, TypedDict

from match_time import date10

AttributeGroup = Dict[str, float]


def coerce_float(value: Any, default: float = 0.0) -> float:
    try:
        if value is None:
            return float(default)
        return float(value)
    except (TypeError, ValueError):
        return float(default)


def coerce_group(raw: Any) -> AttributeGroup:
    """Copy a mapping of attribute ratings; non-numeric values are dropped."""
    out: AttributeGroup = {}
    if not isinstance(raw, Mapping):
        return out
    for k, v in raw.items():
        if isinstance(v, bool):
            continue
        try:
            out[str(k)] = float(v)
        except (TypeError, ValueError):
            continue
    return out


# ----------------------------
# Normalized internal records
# ----------------------------


@dataclass(frozen=True, slots=True)
class ZonePoint:
    """Location on the pitch in percent of length (x) and width (y)."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y)}


@dataclass(frozen=True, slots=True)
class SessionDescriptor:
    """Session a record belongs to. Storage deduplicates/creates it by (date, team, category)."""

    id: str
    date: str
    team_id: str
    category_id: Optional[str] = None
    description: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "date": str(self.date),
            "team_id": str(self.team_id),
            "category_id": self.category_id,
            "description": str(self.description),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "SessionDescriptor":
        cat = d.get("category_id")
        return cls(
            id=str(d.get("id") or ""),
            date=date10(d.get("date")),
            team_id=str(d.get("team_id") or ""),
            category_id=(str(cat) if cat is not None else None),
            description=str(d.get("description") or ""),
        )


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    """One evaluation instance for a subject (manual entry or capture-derived).

    Notes:
        - `tactical` is None for legacy records; an empty dict means "present but empty".
        - `session_date` is denormalized from the owning session; "" when unknown.
        - Values are expected in 0..10 but are not validated here.
    """

    id: str
    subject_id: str
    session_ref: str
    technical: AttributeGroup = field(default_factory=dict)
    physical: AttributeGroup = field(default_factory=dict)
    tactical: Optional[AttributeGroup] = None
    zone_points: List[ZonePoint] = field(default_factory=list)
    notes: str = ""
    session_date: str = ""

    def group(self, group_type: str) -> Optional[AttributeGroup]:
        if group_type == "technical":
            return self.technical
        if group_type == "physical":
            return self.physical
        if group_type == "tactical":
            return self.tactical
        return None

    def with_session_date(self, date_iso: str) -> "ScoreRecord":
        return replace(self, session_date=date10(date_iso))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "subject_id": str(self.subject_id),
            "session_ref": str(self.session_ref),
            "session_date": str(self.session_date),
            "technical": dict(self.technical),
            "physical": dict(self.physical),
            "tactical": (dict(self.tactical) if self.tactical is not None else None),
            "zone_points": [p.to_dict() for p in self.zone_points],
            "notes": str(self.notes),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "ScoreRecord":
        tactical_raw = d.get("tactical")
        points: List[ZonePoint] = []
        for p in (d.get("zone_points") or []):
            if not isinstance(p, Mapping):
                continue
            points.append(ZonePoint(x=coerce_float(p.get("x")), y=coerce_float(p.get("y"))))
        return cls(
            id=str(d.get("id") or ""),
            subject_id=str(d.get("subject_id") or ""),
            session_ref=str(d.get("session_ref") or ""),
            technical=coerce_group(d.get("technical")),
            physical=coerce_group(d.get("physical")),
            tactical=(coerce_group(tactical_raw) if isinstance(tactical_raw, Mapping) else None),
            zone_points=points,
            notes=str(d.get("notes") or ""),
            session_date=date10(d.get("session_date")),
        )


def attach_session_dates(
    records: Iterable[ScoreRecord],
    sessions: Iterable[SessionDescriptor],
) -> List[ScoreRecord]:
    """Fill `session_date` from the matching session descriptor (by `session_ref`).

    Records whose session is unknown keep their current `session_date`.
    """
    dates = {str(s.id): s.date for s in sessions}
    out: List[ScoreRecord] = []
    for r in records:
        d = dates.get(str(r.session_ref))
        out.append(r.with_session_date(d) if d else r)
    return out


# ----------------------------
# Derived outputs
# ----------------------------


class RankedAttribute(TypedDict):
    key: str
    label: str
    score: float
    group_type: str


class AttributeRanking(TypedDict):
    best: List[RankedAttribute]
    worst: List[RankedAttribute]


class SeriesPoint(TypedDict):
    date: str
    date_label: str
    score: float


class SeedValues(TypedDict):
    technical: AttributeGroup
    physical: AttributeGroup
    tactical: AttributeGroup
