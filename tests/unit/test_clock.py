"""
Tests for the match clock state machine and its ticker

Covers:
1. Legal transitions - start, half-time, second half, pause/resume
2. Illegal transitions - no-ops returning False
3. tick - time only accrues while running
4. press - single main-button flow and labels
5. ClockTicker - idempotent start, cancel-safe stop
"""

import asyncio

import pytest

from live.clock import MatchClock
from live.ticker import ClockTicker
from live.types import ClockState


class TestTransitions:
    def test_full_match_flow(self):
        clock = MatchClock()
        assert clock.state is ClockState.NOT_STARTED
        assert clock.start()
        assert (clock.state, clock.period) == (ClockState.RUNNING, 1)
        assert clock.end_half()
        assert clock.state is ClockState.HALFTIME
        assert clock.sides_flipped is True
        assert clock.start_second_half()
        assert (clock.state, clock.period) == (ClockState.RUNNING, 2)
        assert clock.toggle()
        assert clock.state is ClockState.PAUSED
        assert clock.toggle()
        assert clock.state is ClockState.RUNNING

    def test_pause_in_first_half_keeps_period(self):
        clock = MatchClock()
        clock.start()
        assert clock.toggle()
        assert (clock.state, clock.period) == (ClockState.PAUSED, 1)
        assert clock.toggle()
        assert (clock.state, clock.period) == (ClockState.RUNNING, 1)

    @pytest.mark.parametrize("op", ["end_half", "start_second_half", "toggle"])
    def test_illegal_before_start(self, op):
        clock = MatchClock()
        assert getattr(clock, op)() is False
        assert clock.state is ClockState.NOT_STARTED

    def test_illegal_transitions_are_noops(self):
        clock = MatchClock()
        clock.start()
        assert clock.start() is False
        assert clock.start_second_half() is False
        clock.end_half()
        assert clock.toggle() is False
        assert clock.end_half() is False
        assert clock.state is ClockState.HALFTIME
        clock.start_second_half()
        assert clock.end_half() is False
        assert clock.sides_flipped is True

    def test_cannot_end_half_while_paused(self):
        clock = MatchClock()
        clock.start()
        clock.toggle()
        assert clock.end_half() is False
        assert clock.state is ClockState.PAUSED

    def test_run_epoch_bumps_on_every_resume(self):
        clock = MatchClock()
        clock.start()
        assert clock.run_epoch == 1
        clock.toggle()
        assert clock.run_epoch == 1
        clock.toggle()
        assert clock.run_epoch == 2
        clock.end_half()
        clock.start_second_half()
        assert clock.run_epoch == 3


class TestTick:
    def test_only_running_accrues_time(self):
        clock = MatchClock()
        assert clock.tick() is False
        clock.start()
        for _ in range(65):
            clock.tick()
        assert clock.elapsed_seconds == 65
        assert clock.timestamp_label == "01:05"
        clock.toggle()
        assert clock.tick() is False
        clock.toggle()
        clock.end_half()
        assert clock.tick(30) is False
        assert clock.elapsed_seconds == 65

    def test_elapsed_continues_in_second_half(self):
        clock = MatchClock()
        clock.start()
        clock.tick(2700)
        clock.end_half()
        clock.start_second_half()
        clock.tick(1)
        assert clock.elapsed_seconds == 2701
        assert clock.timestamp_label == "45:01"

    def test_non_positive_tick_is_ignored(self):
        clock = MatchClock()
        clock.start()
        assert clock.tick(0) is False
        assert clock.elapsed_seconds == 0

    def test_capture_only_while_running(self):
        clock = MatchClock()
        assert not clock.can_capture
        clock.start()
        assert clock.can_capture
        clock.toggle()
        assert not clock.can_capture


class TestPress:
    def test_button_flow(self):
        clock = MatchClock()
        seen = []
        for _ in range(5):
            seen.append(clock.button_label)
            assert clock.press()
        assert seen == ["Start", "Half-time", "Second half", "Pause", "Resume"]
        assert (clock.state, clock.period) == (ClockState.RUNNING, 2)

    def test_press_resumes_paused_first_half(self):
        clock = MatchClock()
        clock.start()
        clock.toggle()
        assert clock.button_label == "Resume"
        clock.press()
        assert (clock.state, clock.period) == (ClockState.RUNNING, 1)

    def test_to_dict(self):
        clock = MatchClock()
        clock.start()
        clock.tick(5)
        d = clock.to_dict()
        assert d["state"] == "RUNNING"
        assert d["timestamp_label"] == "00:05"
        assert d["button_label"] == "Half-time"


class TestClockTicker:
    @pytest.mark.asyncio
    async def test_ticks_while_running(self):
        clock = MatchClock()
        clock.start()
        ticker = ClockTicker(clock, interval=0.01)
        assert ticker.start() is True
        await asyncio.sleep(0.2)
        await ticker.stop()
        assert clock.elapsed_seconds > 0
        assert not ticker.active

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self):
        clock = MatchClock()
        ticker = ClockTicker(clock, interval=0.01)
        assert ticker.start() is True
        assert ticker.start() is False
        await ticker.stop()

    @pytest.mark.asyncio
    async def test_no_time_while_paused(self):
        clock = MatchClock()
        ticker = ClockTicker(clock, interval=0.01)
        ticker.start()
        await asyncio.sleep(0.05)
        await ticker.stop()
        assert clock.elapsed_seconds == 0

    @pytest.mark.asyncio
    async def test_stop_is_safe_twice(self):
        ticker = ClockTicker(MatchClock(), interval=0.01)
        await ticker.stop()
        ticker.start()
        await ticker.stop()
        await ticker.stop()
        assert not ticker.active

    @pytest.mark.asyncio
    async def test_pause_resume_cycles_do_not_add_time(self):
        clock = MatchClock()
        clock.start()
        clock.toggle()
        ticker = ClockTicker(clock, interval=0.2)
        ticker.start()
        # Ten short runs of 0.06s each, 0.6s of running time in total.
        for _ in range(10):
            await asyncio.sleep(0.17)
            clock.toggle()
            await asyncio.sleep(0.06)
            clock.toggle()
            await asyncio.sleep(0.17)
        await ticker.stop()
        assert clock.elapsed_seconds <= 1
