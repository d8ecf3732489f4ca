from __future__ import annotations

from fastapi import APIRouter, HTTPException

from evaluation.formulas import round_decimals
from squad import rank_pool, select_best_eleven, team_average, team_evolution, top_ranked
from app.schemas.squad import SquadRequest
from app.services.evaluation_facade import build_context, group_by_subject, to_records, to_subjects

router = APIRouter()


@router.post("/api/squad/best-eleven")
async def api_squad_best_eleven(req: SquadRequest):
    """Roster ranking + Best XI for the viewing category and period."""
    try:
        context = build_context(req, team_id=req.team_id, category_id=req.category_id)
        subjects = to_subjects(req.subjects)
        by_subject = group_by_subject(to_records(req.records, req.sessions))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    ranked = rank_pool(subjects, by_subject, context=context)
    slots = select_best_eleven(ranked, category_id=context.category_id)
    return {
        "team_id": req.team_id,
        "category_id": context.category_id,
        "period": context.period,
        "team_average": round_decimals(team_average(ranked), 1),
        "top": [r.to_dict() for r in top_ranked(ranked)],
        "ranking": [r.to_dict() for r in ranked],
        "best_eleven": [s.to_dict() for s in slots],
        "evolution": team_evolution(subjects, by_subject, context=context),
    }
