from __future__ import annotations

"""Live tactical capture (in-memory).

- CaptureLog: one subject's ordered, append-only event list.
- MatchTracker: every subject tracked during one match, the shared clock and
  the capture protocol state of the *active* subject.

Capture protocol (strict order)
-------------------------------
1. select_phase   - current phase context; persists across events until changed
2. select_action  - one of the phase's six actions; creates a pending action
3. qualify        - POSITIVE / NEUTRAL / NEGATIVE; commits the event
   (discard_pending drops the pending action instead)
4. tag_zone       - optional; sets the zone of the most recent event only

Rules:
- Steps are no-ops (None / False) while the clock is not running, when no
  subject is active, or when called out of order.
- Values outside the fixed vocabulary raise CaptureProtocolError.
- Switching the active subject never touches the clock or other logs; it
  drops the pending action and the phase context.
- abort discards every log at once; nothing outside memory was mutated.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional, Union

from . import config as l_cfg
from .clock import MatchClock
from .errors import (
    CAPTURE_INVALID_ZONE,
    CAPTURE_UNKNOWN_ACTION,
    CAPTURE_UNKNOWN_PHASE,
    CAPTURE_UNKNOWN_RESULT,
    CAPTURE_UNKNOWN_SUBJECT,
    CaptureProtocolError,
)
from .finalize import FinalizedCapture, build_capture_session, finalize_capture
from .types import PendingAction, Phase, Result, TacticalEvent

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def coerce_phase(value: Union[Phase, str]) -> Phase:
    if isinstance(value, Phase):
        return value
    try:
        return Phase(str(value).strip().upper())
    except ValueError:
        raise CaptureProtocolError(CAPTURE_UNKNOWN_PHASE, f"unknown phase: {value!r}") from None


def coerce_result(value: Union[Result, str]) -> Result:
    if isinstance(value, Result):
        return value
    try:
        return Result(str(value).strip().upper())
    except ValueError:
        raise CaptureProtocolError(CAPTURE_UNKNOWN_RESULT, f"unknown result: {value!r}") from None


def validate_zone(zone_id: Any) -> int:
    """Whole-number zone index; fractional values and strings are rejected, never truncated."""
    if isinstance(zone_id, float) and zone_id.is_integer():
        zone_id = int(zone_id)
    if isinstance(zone_id, bool) or not isinstance(zone_id, int) or not (0 <= zone_id < l_cfg.ZONE_COUNT):
        raise CaptureProtocolError(
            CAPTURE_INVALID_ZONE,
            f"zone_id must be a whole number 0..{l_cfg.ZONE_COUNT - 1}",
            details={"zone_id": zone_id},
        )
    return zone_id


@dataclass(slots=True)
class CaptureLog:
    subject_id: str
    events: List[TacticalEvent] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    @property
    def last(self) -> Optional[TacticalEvent]:
        return self.events[-1] if self.events else None

    def append(self, event: TacticalEvent) -> TacticalEvent:
        self.events.append(event)
        return event

    def tag_last_zone(self, zone_id: int) -> Optional[TacticalEvent]:
        """Set the zone of the most recent event (overwrites). None for an empty log."""
        if not self.events:
            return None
        tagged = replace(self.events[-1], zone_id=validate_zone(zone_id))
        self.events[-1] = tagged
        return tagged

    def counts(self) -> Dict[str, int]:
        out = {r.value: 0 for r in Result}
        for e in self.events:
            out[e.result.value] += 1
        return out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "subject_id": self.subject_id,
            "counts": self.counts(),
            "events": [e.to_dict() for e in self.events],
        }


class MatchTracker:
    """All subjects tracked under one match clock."""

    def __init__(
        self,
        clock: Optional[MatchClock] = None,
        *,
        match_id: Optional[str] = None,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self.match_id = str(match_id or id_factory())
        self.clock = clock if clock is not None else MatchClock()
        self._new_id = id_factory
        self.logs: Dict[str, CaptureLog] = {}
        self.observations: Dict[str, str] = {}
        self.active_subject_id: Optional[str] = None
        self.active_phase: Optional[Phase] = None
        self.pending: Optional[PendingAction] = None

    # -- subjects ------------------------------------------------------------

    def add_subject(self, subject_id: str) -> CaptureLog:
        sid = str(subject_id)
        log = self.logs.get(sid)
        if log is None:
            log = CaptureLog(subject_id=sid)
            self.logs[sid] = log
        if self.active_subject_id is None:
            self.active_subject_id = sid
        return log

    def _require_log(self, subject_id: str) -> CaptureLog:
        log = self.logs.get(str(subject_id))
        if log is None:
            raise CaptureProtocolError(CAPTURE_UNKNOWN_SUBJECT, f"subject not tracked: {subject_id!r}")
        return log

    def _reset_protocol(self) -> None:
        self.pending = None
        self.active_phase = None

    def set_active_subject(self, subject_id: str) -> CaptureLog:
        log = self._require_log(subject_id)
        if log.subject_id != self.active_subject_id:
            if self.pending is not None:
                logger.debug("dropping pending action %r on subject switch", self.pending.action)
            self._reset_protocol()
            self.active_subject_id = log.subject_id
        return log

    def remove_subject(self, subject_id: str) -> Optional[CaptureLog]:
        sid = str(subject_id)
        log = self.logs.pop(sid, None)
        self.observations.pop(sid, None)
        if log is not None and sid == self.active_subject_id:
            self._reset_protocol()
            self.active_subject_id = next(iter(self.logs), None)
        return log

    @property
    def active_log(self) -> Optional[CaptureLog]:
        if self.active_subject_id is None:
            return None
        return self.logs.get(self.active_subject_id)

    def set_observations(self, subject_id: str, text: str) -> None:
        self._require_log(subject_id)
        self.observations[str(subject_id)] = str(text or "")

    # -- protocol ------------------------------------------------------------

    def _capture_open(self, op: str) -> bool:
        if not self.clock.can_capture:
            logger.debug("%s ignored: clock not running (state=%s)", op, self.clock.state.value)
            return False
        if self.active_log is None:
            logger.debug("%s ignored: no active subject", op)
            return False
        return True

    def select_phase(self, phase: Union[Phase, str]) -> bool:
        p = coerce_phase(phase)
        if not self._capture_open("select_phase"):
            return False
        if self.pending is not None:
            return False
        self.active_phase = p
        return True

    def select_action(self, action: str) -> Optional[PendingAction]:
        if not self._capture_open("select_action"):
            return None
        if self.active_phase is None or self.pending is not None:
            return None
        label = str(action)
        if label not in l_cfg.PHASE_ACTIONS[self.active_phase.value]:
            raise CaptureProtocolError(
                CAPTURE_UNKNOWN_ACTION,
                f"action {label!r} is not offered in phase {self.active_phase.value}",
                details={"phase": self.active_phase.value, "actions": self.active_phase.actions},
            )
        self.pending = PendingAction(phase=self.active_phase, action=label)
        return self.pending

    def qualify(self, result: Union[Result, str]) -> Optional[TacticalEvent]:
        """Commit the pending action with its result; returns the new event."""
        r = coerce_result(result)
        if not self._capture_open("qualify"):
            return None
        pending = self.pending
        if pending is None:
            return None
        event = TacticalEvent(
            id=self._new_id(),
            timestamp_label=self.clock.timestamp_label,
            elapsed_seconds=int(self.clock.elapsed_seconds),
            period=int(self.clock.period),
            phase=pending.phase,
            action=pending.action,
            result=r,
        )
        self.pending = None
        return self.active_log.append(event)

    def discard_pending(self) -> bool:
        if self.pending is None:
            return False
        self.pending = None
        return True

    def tag_zone(self, zone_id: int) -> Optional[TacticalEvent]:
        """Tag the active subject's most recent event with a pitch zone."""
        z = validate_zone(zone_id)
        log = self.active_log
        if log is None:
            return None
        return log.tag_last_zone(z)

    # -- lifecycle -----------------------------------------------------------

    def abort(self) -> None:
        """Discard every subject's events for this match."""
        self.logs.clear()
        self.observations.clear()
        self.active_subject_id = None
        self._reset_protocol()

    def finalize_subject(
        self,
        subject_id: str,
        *,
        session_date: str,
        team_id: str,
        category_id: Optional[str] = None,
    ) -> FinalizedCapture:
        """Reduce one subject's log to a score record + session descriptor and stop tracking them."""
        log = self._require_log(subject_id)
        session = build_capture_session(
            session_id=self._new_id(),
            session_date=session_date,
            team_id=team_id,
            category_id=category_id,
            events=log.events,
        )
        record = finalize_capture(
            log.events,
            subject_id=log.subject_id,
            session_ref=session.id,
            record_id=self._new_id(),
            observations=self.observations.get(log.subject_id, ""),
            session_date=session.date,
        )
        self.remove_subject(log.subject_id)
        logger.info(
            "capture finalized match=%s subject=%s events=%s",
            self.match_id,
            log.subject_id,
            len(log.events),
        )
        return FinalizedCapture(record=record, session=session)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "clock": self.clock.to_dict(),
            "active_subject_id": self.active_subject_id,
            "active_phase": (self.active_phase.value if self.active_phase is not None else None),
            "pending_action": (self.pending.action if self.pending is not None else None),
            "subjects": [log.to_dict() for log in self.logs.values()],
        }
