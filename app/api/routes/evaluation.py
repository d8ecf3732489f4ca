from __future__ import annotations

from fastapi import APIRouter, HTTPException

from evaluation import seed_averages, summarize, total_score
from live.analysis import impact_summary
from live.finalize import collect_capture_events, record_origin
from app.schemas.evaluation import EvaluationSummaryRequest, ScoreRecordIn, SeedRequest
from app.services.evaluation_facade import build_context, to_records

router = APIRouter()


@router.post("/api/evaluation/summary")
async def api_evaluation_summary(req: EvaluationSummaryRequest):
    """Radar/ranking/evolution summary for one subject's records in the selected window."""
    try:
        context = build_context(req)
        records = to_records(req.records, req.sessions)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    window = context.filter_records(records)
    out = summarize(window)
    out["period"] = context.period
    out["origins"] = {
        "capture": sum(1 for r in window if record_origin(r) == "capture"),
        "manual": sum(1 for r in window if record_origin(r) == "manual"),
    }
    out["capture_impact"] = impact_summary(collect_capture_events(window))
    return out


@router.post("/api/evaluation/seed")
async def api_evaluation_seed(req: SeedRequest):
    """Default attribute values for a new manual record (all past records, unfiltered)."""
    try:
        records = to_records(req.records)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return seed_averages(records)


@router.post("/api/evaluation/score")
async def api_evaluation_score(req: ScoreRecordIn):
    """Normalized 0..10 score of a single record."""
    return {"id": req.id, "score": total_score(req.technical, req.physical, req.tactical)}
