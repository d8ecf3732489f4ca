from __future__ import annotations

"""One-second tick driver for MatchClock.

The ticker is the only timer-driven mutation in the live subsystem:
- ``start`` spawns at most one background task; calling it again is a no-op,
  so the clock is never double-ticked.
- ``stop`` cancels and awaits the task; safe to call repeatedly.
- The interval is slept in ``TICK_SLICES`` slices. A slice that finds the
  clock stopped, or resumed since the previous slice, resets the count, so a
  second only accrues from uninterrupted running time. Pause/resume cycles
  never add time.

Granularity is whole seconds; the driver never reads wall-clock time.
"""

import asyncio
import logging
from typing import Optional

from . import config as l_cfg
from .clock import MatchClock

logger = logging.getLogger(__name__)


class ClockTicker:
    def __init__(self, clock: MatchClock, *, interval: float = l_cfg.TICK_INTERVAL_SECONDS) -> None:
        self.clock = clock
        self.interval = float(interval)
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _run(self) -> None:
        slice_seconds = self.interval / l_cfg.TICK_SLICES
        epoch = self.clock.run_epoch
        slices = 0
        while True:
            try:
                await asyncio.sleep(slice_seconds)
            except asyncio.CancelledError:
                logger.debug("ClockTicker cancelled at %ss", self.clock.elapsed_seconds)
                raise
            if not self.clock.running or self.clock.run_epoch != epoch:
                # Paused or resumed since the last slice: the next second starts over.
                epoch = self.clock.run_epoch
                slices = 0
                continue
            slices += 1
            if slices >= l_cfg.TICK_SLICES:
                slices = 0
                self.clock.tick()

    def start(self) -> bool:
        """Spawn the tick task on the running loop. Returns False if already active."""
        if self.active:
            return False
        self._task = asyncio.get_running_loop().create_task(self._run())
        return True

    async def stop(self) -> None:
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
