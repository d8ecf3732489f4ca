from __future__ import annotations

"""In-memory registry of live matches being tracked.

One entry per live tracking flow: the MatchTracker plus (optionally) the
server-side ClockTicker driving its clock. Nothing here is persisted; a
finalized record is returned to the caller, who hands it to storage.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException

from live.capture import MatchTracker
from live.ticker import ClockTicker

logger = logging.getLogger(__name__)


@dataclass
class LiveMatch:
    tracker: MatchTracker
    ticker: Optional[ClockTicker] = None


_MATCHES: Dict[str, LiveMatch] = {}


def create_match(subject_ids: Iterable[str], *, auto_tick: bool = True) -> LiveMatch:
    """Create a tracker. Must be called from a running event loop when auto_tick is set."""
    tracker = MatchTracker()
    for sid in subject_ids:
        tracker.add_subject(sid)
    ticker = None
    if auto_tick:
        ticker = ClockTicker(tracker.clock)
        ticker.start()
    entry = LiveMatch(tracker=tracker, ticker=ticker)
    _MATCHES[tracker.match_id] = entry
    logger.info("live match created match=%s subjects=%s", tracker.match_id, len(tracker.logs))
    return entry


def get_match(match_id: str) -> LiveMatch:
    entry = _MATCHES.get(str(match_id))
    if entry is None:
        raise HTTPException(status_code=404, detail={"code": "MATCH_NOT_FOUND", "match_id": str(match_id)})
    return entry


def list_match_ids() -> List[str]:
    return list(_MATCHES.keys())


async def drop_match(match_id: str) -> bool:
    """Stop the ticker and forget the match (abort or last subject finalized)."""
    entry = _MATCHES.pop(str(match_id), None)
    if entry is None:
        return False
    if entry.ticker is not None:
        await entry.ticker.stop()
    entry.tracker.abort()
    return True


async def shutdown() -> None:
    for match_id in list(_MATCHES.keys()):
        await drop_match(match_id)
