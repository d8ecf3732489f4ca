from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from live.analysis import action_ranking, impact_summary, minute_timeline, zone_counts
from live.errors import CaptureProtocolError
from app.schemas.live import (
    ActionRequest,
    CreateMatchRequest,
    FinalizeRequest,
    ObservationsRequest,
    PhaseRequest,
    ResultRequest,
    SubjectRequest,
    TickRequest,
    ZoneRequest,
)
from app.services import live_registry

logger = logging.getLogger(__name__)

router = APIRouter()

_CLOCK_ACTIONS = ("start", "end_half", "start_second_half", "toggle", "press")


def _protocol_error(exc: CaptureProtocolError) -> HTTPException:
    status = 404 if exc.code == "CAPTURE_UNKNOWN_SUBJECT" else 400
    return HTTPException(
        status_code=status,
        detail={"code": exc.code, "message": exc.message, "details": exc.details},
    )


def _state(match_id: str, **extra: Any) -> Dict[str, Any]:
    entry = live_registry.get_match(match_id)
    out = entry.tracker.to_dict()
    out["auto_tick"] = bool(entry.ticker is not None and entry.ticker.active)
    out.update(extra)
    return out


@router.post("/api/live/matches")
async def api_live_create_match(req: CreateMatchRequest):
    entry = live_registry.create_match(req.subject_ids, auto_tick=req.auto_tick)
    return _state(entry.tracker.match_id)


@router.get("/api/live/matches")
async def api_live_list_matches():
    return {"match_ids": live_registry.list_match_ids()}


@router.get("/api/live/matches/{match_id}")
async def api_live_get_match(match_id: str):
    return _state(match_id)


@router.get("/api/live/matches/{match_id}/analysis/{subject_id}")
async def api_live_subject_analysis(match_id: str, subject_id: str):
    """Review data for one tracked subject: impact, action ranking, timeline, zones."""
    tracker = live_registry.get_match(match_id).tracker
    log = tracker.logs.get(str(subject_id))
    if log is None:
        raise HTTPException(status_code=404, detail={"code": "CAPTURE_UNKNOWN_SUBJECT", "subject_id": subject_id})
    return {
        "subject_id": log.subject_id,
        "impact": impact_summary(log.events),
        "actions": action_ranking(log.events),
        "timeline": minute_timeline(log.events),
        "zones": zone_counts(log.events),
    }


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------


@router.post("/api/live/matches/{match_id}/clock/tick")
async def api_live_clock_tick(match_id: str, req: TickRequest):
    """Manual tick for clients that drive the clock themselves (auto_tick=False)."""
    clock = live_registry.get_match(match_id).tracker.clock
    if req.seconds < 0:
        raise HTTPException(status_code=400, detail="seconds must be >= 0")
    return _state(match_id, ok=clock.tick(req.seconds))


@router.post("/api/live/matches/{match_id}/clock/{action}")
async def api_live_clock_action(match_id: str, action: str):
    clock = live_registry.get_match(match_id).tracker.clock
    if action not in _CLOCK_ACTIONS:
        raise HTTPException(status_code=404, detail=f"unknown clock action: {action}")
    ok = getattr(clock, action)()
    return _state(match_id, ok=ok)


# ---------------------------------------------------------------------------
# Subjects
# ---------------------------------------------------------------------------


@router.post("/api/live/matches/{match_id}/subjects")
async def api_live_add_subject(match_id: str, req: SubjectRequest):
    live_registry.get_match(match_id).tracker.add_subject(req.subject_id)
    return _state(match_id)


@router.delete("/api/live/matches/{match_id}/subjects/{subject_id}")
async def api_live_remove_subject(match_id: str, subject_id: str):
    removed = live_registry.get_match(match_id).tracker.remove_subject(subject_id)
    if removed is None:
        raise HTTPException(status_code=404, detail={"code": "CAPTURE_UNKNOWN_SUBJECT", "subject_id": subject_id})
    return _state(match_id)


@router.post("/api/live/matches/{match_id}/active")
async def api_live_set_active(match_id: str, req: SubjectRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        tracker.set_active_subject(req.subject_id)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return _state(match_id)


@router.post("/api/live/matches/{match_id}/observations")
async def api_live_observations(match_id: str, req: ObservationsRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        tracker.set_observations(req.subject_id, req.text)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return {"ok": True, "subject_id": req.subject_id}


# ---------------------------------------------------------------------------
# Capture protocol
# ---------------------------------------------------------------------------


@router.post("/api/live/matches/{match_id}/phase")
async def api_live_phase(match_id: str, req: PhaseRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        ok = tracker.select_phase(req.phase)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return _state(match_id, ok=ok)


@router.post("/api/live/matches/{match_id}/action")
async def api_live_action(match_id: str, req: ActionRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        pending = tracker.select_action(req.action)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return _state(match_id, ok=pending is not None)


@router.post("/api/live/matches/{match_id}/result")
async def api_live_result(match_id: str, req: ResultRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        event = tracker.qualify(req.result)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return _state(match_id, ok=event is not None, event=(event.to_dict() if event is not None else None))


@router.post("/api/live/matches/{match_id}/discard")
async def api_live_discard(match_id: str):
    ok = live_registry.get_match(match_id).tracker.discard_pending()
    return _state(match_id, ok=ok)


@router.post("/api/live/matches/{match_id}/zone")
async def api_live_zone(match_id: str, req: ZoneRequest):
    tracker = live_registry.get_match(match_id).tracker
    try:
        event = tracker.tag_zone(req.zone_id)
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    return _state(match_id, ok=event is not None, event=(event.to_dict() if event is not None else None))


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


@router.post("/api/live/matches/{match_id}/finalize")
async def api_live_finalize(match_id: str, req: FinalizeRequest):
    """Reduce one subject's log to a score record; the caller persists the result."""
    tracker = live_registry.get_match(match_id).tracker
    try:
        finalized = tracker.finalize_subject(
            req.subject_id,
            session_date=req.session_date,
            team_id=req.team_id,
            category_id=req.category_id,
        )
    except CaptureProtocolError as exc:
        raise _protocol_error(exc)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    closed = not tracker.logs
    if closed:
        await live_registry.drop_match(match_id)
        logger.info("live match closed match=%s (all subjects finalized)", match_id)
    out = finalized.to_dict()
    out["match_closed"] = closed
    return out


@router.delete("/api/live/matches/{match_id}")
async def api_live_abort(match_id: str):
    """Discard every capture of the match without producing records."""
    live_registry.get_match(match_id)
    await live_registry.drop_match(match_id)
    return {"ok": True, "match_id": match_id}
