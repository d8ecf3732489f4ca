from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from . import config as l_cfg


class Phase(Enum):
    OFFENSIVE = l_cfg.OFFENSIVE
    DEFENSIVE = l_cfg.DEFENSIVE
    TRANSITION_TO_OFFENSE = l_cfg.TRANSITION_TO_OFFENSE
    TRANSITION_TO_DEFENSE = l_cfg.TRANSITION_TO_DEFENSE

    @property
    def actions(self):
        return list(l_cfg.PHASE_ACTIONS[self.value])

    @property
    def label(self) -> str:
        return l_cfg.PHASE_LABELS[self.value]


class Result(Enum):
    POSITIVE = "POSITIVE"
    NEUTRAL = "NEUTRAL"
    NEGATIVE = "NEGATIVE"


class ClockState(Enum):
    NOT_STARTED = "NOT_STARTED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    HALFTIME = "HALFTIME"


@dataclass(frozen=True, slots=True)
class PendingAction:
    """Action chosen for the active subject, waiting for its result."""

    phase: Phase
    action: str


@dataclass(frozen=True, slots=True)
class TacticalEvent:
    """One committed capture. Immutable; zone tagging replaces the instance."""

    id: str
    timestamp_label: str
    elapsed_seconds: int
    period: int
    phase: Phase
    action: str
    result: Result
    zone_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.id),
            "timestamp_label": str(self.timestamp_label),
            "elapsed_seconds": int(self.elapsed_seconds),
            "period": int(self.period),
            "phase": self.phase.value,
            "action": str(self.action),
            "result": self.result.value,
            "zone_id": (int(self.zone_id) if self.zone_id is not None else None),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "TacticalEvent":
        """Rebuild from a stored payload. Raises ValueError on unknown phase/result."""
        zone = d.get("zone_id")
        return cls(
            id=str(d.get("id") or ""),
            timestamp_label=str(d.get("timestamp_label") or ""),
            elapsed_seconds=int(d.get("elapsed_seconds") or 0),
            period=int(d.get("period") or 1),
            phase=Phase(str(d.get("phase"))),
            action=str(d.get("action") or ""),
            result=Result(str(d.get("result"))),
            zone_id=(int(zone) if zone is not None else None),
        )
