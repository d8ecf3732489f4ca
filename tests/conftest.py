"""
Global test fixtures for the team evaluation server

Provides record/subject factories and a tracker with a running clock.
"""

import sys
from pathlib import Path

import pytest

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evaluation.types import ScoreRecord
from live.capture import MatchTracker
from squad.types import RankedSubject, Subject


@pytest.fixture
def make_record():
    """
    Build a ScoreRecord with sensible defaults

    Usage:
        r = make_record(technical={"passing": 8}, session_date="2024-03-07")
    """
    counter = {"n": 0}

    def _create(technical=None, physical=None, tactical=None, session_date="", subject_id="s1", notes=""):
        counter["n"] += 1
        return ScoreRecord(
            id=f"r{counter['n']}",
            subject_id=subject_id,
            session_ref=f"sess{counter['n']}",
            technical=dict(technical or {}),
            physical=dict(physical or {}),
            tactical=(dict(tactical) if tactical is not None else None),
            notes=notes,
            session_date=session_date,
        )

    return _create


@pytest.fixture
def make_ranked():
    """Build a RankedSubject: make_ranked("gk1", "GOALKEEPER", 7.5)"""
    def _create(subject_id, position, score, category_id=None):
        subject = Subject(subject_id=subject_id, name=subject_id.upper(), position=position, category_id=category_id)
        return RankedSubject(subject=subject, score=score, record_count=1)

    return _create


@pytest.fixture
def ids():
    """Deterministic id factory for trackers."""
    counter = {"n": 0}

    def _next():
        counter["n"] += 1
        return f"id{counter['n']}"

    return _next


@pytest.fixture
def running_tracker(ids):
    """Tracker with subjects p1 (active) and p2, clock already running."""
    tracker = MatchTracker(match_id="m1", id_factory=ids)
    tracker.add_subject("p1")
    tracker.add_subject("p2")
    tracker.clock.start()
    return tracker
