from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from . import config as s_cfg


def norm_position(value: Any) -> str:
    """Normalize a roster position to a category code ("" when unknown)."""
    s = str(value or "").strip().upper().replace(" ", "_")
    if s in s_cfg.POSITIONS:
        return s
    return s_cfg.POSITION_ALIASES.get(s, "")


@dataclass(frozen=True, slots=True)
class Subject:
    """Roster metadata for one subject (from storage)."""

    subject_id: str
    name: str = ""
    position: str = ""
    category_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", norm_position(self.position))

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Subject":
        cat = d.get("category_id")
        return cls(
            subject_id=str(d.get("subject_id") or d.get("id") or ""),
            name=str(d.get("name") or ""),
            position=str(d.get("position") or ""),
            category_id=(str(cat) if cat is not None else None),
        )


@dataclass(frozen=True, slots=True)
class RankedSubject:
    """A subject with its overall average for the current viewing window."""

    subject: Subject
    score: float
    record_count: int = 0

    @property
    def subject_id(self) -> str:
        return self.subject.subject_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject_id": self.subject.subject_id,
            "name": self.subject.name,
            "position": self.subject.position,
            "category_id": self.subject.category_id,
            "score": float(self.score),
            "record_count": int(self.record_count),
        }


@dataclass(frozen=True, slots=True)
class SquadSlot:
    slot_role: str
    category: str
    subject: Optional[RankedSubject]
    layout_position: Dict[str, float]

    @property
    def is_empty(self) -> bool:
        return self.subject is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot_role": self.slot_role,
            "category": self.category,
            "subject": (self.subject.to_dict() if self.subject is not None else None),
            "layout_position": dict(self.layout_position),
        }
