from __future__ import annotations

"""Match clock state machine (in-memory).

States:
    NOT_STARTED --start--> RUNNING(1)
    RUNNING(1) --end_half--> HALFTIME            (sides flip here)
    HALFTIME --start_second_half--> RUNNING(2)
    RUNNING(p) --toggle--> PAUSED(p) --toggle--> RUNNING(p)   (p = 1 or 2)

- Any other transition is a no-op and returns False.
- Elapsed time advances in whole seconds only through ``tick`` and only while
  running. No time passes in HALFTIME or PAUSED.
- Capture is allowed only while running.

The clock never reads the host clock; a driver (``live.ticker.ClockTicker``
or a test) calls ``tick``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from match_time import clock_label

from . import config as l_cfg
from .types import ClockState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchClock:
    elapsed_seconds: int = 0
    period: int = 1
    running: bool = False
    at_halftime: bool = False
    sides_flipped: bool = False
    started: bool = False
    # Bumped each time the clock enters RUNNING; tick drivers re-align on change.
    run_epoch: int = 0

    @property
    def state(self) -> ClockState:
        if not self.started:
            return ClockState.NOT_STARTED
        if self.at_halftime:
            return ClockState.HALFTIME
        if self.running:
            return ClockState.RUNNING
        return ClockState.PAUSED

    @property
    def can_capture(self) -> bool:
        return bool(self.running)

    @property
    def timestamp_label(self) -> str:
        return clock_label(self.elapsed_seconds)

    def _reject(self, op: str) -> bool:
        logger.debug("MatchClock.%s ignored in state=%s period=%s", op, self.state.value, self.period)
        return False

    # -- transitions ---------------------------------------------------------

    def start(self) -> bool:
        if self.state is not ClockState.NOT_STARTED:
            return self._reject("start")
        self.started = True
        self.period = 1
        self.running = True
        self.run_epoch += 1
        return True

    def end_half(self) -> bool:
        if self.state is not ClockState.RUNNING or self.period != 1:
            return self._reject("end_half")
        self.running = False
        self.at_halftime = True
        self.sides_flipped = not self.sides_flipped
        return True

    def start_second_half(self) -> bool:
        if self.state is not ClockState.HALFTIME:
            return self._reject("start_second_half")
        self.at_halftime = False
        self.period = 2
        self.running = True
        self.run_epoch += 1
        return True

    def toggle(self) -> bool:
        if self.state not in (ClockState.RUNNING, ClockState.PAUSED):
            return self._reject("toggle")
        self.running = not self.running
        if self.running:
            self.run_epoch += 1
        return True

    def press(self) -> bool:
        """Single main-button flow: start, end first half, start second half, then pause/resume.

        Pressing while the first half is paused resumes it (the half only ends
        from a running first half).
        """
        st = self.state
        if st is ClockState.NOT_STARTED:
            return self.start()
        if st is ClockState.RUNNING and self.period == 1:
            return self.end_half()
        if st is ClockState.HALFTIME:
            return self.start_second_half()
        return self.toggle()

    @property
    def button_label(self) -> str:
        st = self.state
        if st is ClockState.NOT_STARTED:
            return "Start"
        if st is ClockState.RUNNING and self.period == 1:
            return "Half-time"
        if st is ClockState.HALFTIME:
            return "Second half"
        if st is ClockState.RUNNING:
            return "Pause"
        return "Resume"

    # -- time ----------------------------------------------------------------

    def tick(self, seconds: int = l_cfg.SECONDS_PER_TICK) -> bool:
        """Advance by whole seconds while running. Returns whether time advanced."""
        if not self.running:
            return False
        step = int(seconds)
        if step <= 0:
            return False
        self.elapsed_seconds += step
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "elapsed_seconds": int(self.elapsed_seconds),
            "timestamp_label": self.timestamp_label,
            "period": int(self.period),
            "running": bool(self.running),
            "at_halftime": bool(self.at_halftime),
            "sides_flipped": bool(self.sides_flipped),
            "button_label": self.button_label,
        }
