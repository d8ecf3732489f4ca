"""Live match tactical capture subsystem.

Records tactical events for several subjects during a real match and reduces
each subject's log into a score record for the evaluation subsystem.

Public API
----------
- MatchClock / ClockTicker: period state machine and its one-second driver
- MatchTracker / CaptureLog: multi-subject capture protocol
- finalize_capture / FinalizedCapture: log -> ScoreRecord (+ session descriptor)
- record_origin / events_from_notes / collect_capture_events: read captures back

Implementation details live in live.capture, live.finalize and live.analysis.
"""

from .capture import CaptureLog, MatchTracker
from .clock import MatchClock
from .errors import CaptureProtocolError
from .finalize import (
    FinalizedCapture,
    capture_score,
    collect_capture_events,
    events_from_notes,
    finalize_capture,
    parse_capture_notes,
    record_origin,
)
from .ticker import ClockTicker
from .types import ClockState, Phase, Result, TacticalEvent

__all__ = [
    "CaptureLog",
    "CaptureProtocolError",
    "ClockState",
    "ClockTicker",
    "FinalizedCapture",
    "MatchClock",
    "MatchTracker",
    "Phase",
    "Result",
    "TacticalEvent",
    "capture_score",
    "collect_capture_events",
    "events_from_notes",
    "finalize_capture",
    "parse_capture_notes",
    "record_origin",
]
