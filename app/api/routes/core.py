from __future__ import annotations

from fastapi import APIRouter

from evaluation import config as e_cfg
from live import config as l_cfg
from live.types import Result
from squad import config as s_cfg
from viewing_context import AGE_GROUPS, PROFESSIONAL

router = APIRouter()


@router.get("/")
async def root():
    """Health check."""
    return {"message": "Team evaluation server. See /docs for the API."}


@router.get("/api/vocabulary")
async def api_vocabulary():
    """Fixed vocabularies the client renders forms and capture buttons from.

    Note:
        - Attribute keys are the current schema; legacy records may carry other
          keys, which every aggregate still accepts.
    """
    return {
        "attributes": {g: dict(labels) for g, labels in e_cfg.ATTRIBUTES_BY_GROUP.items()},
        "rating": {"min": e_cfg.RATING_MIN, "max": e_cfg.RATING_MAX, "step": e_cfg.RATING_STEP},
        "periods": list(e_cfg.PERIODS),
        "phases": [
            {"phase": p, "label": l_cfg.PHASE_LABELS[p], "actions": list(actions)}
            for p, actions in l_cfg.PHASE_ACTIONS.items()
        ],
        "results": [r.value for r in Result],
        "zones": [
            {"zone_id": z, "center": dict(zip(("x", "y"), l_cfg.zone_center(z)))}
            for z in range(l_cfg.ZONE_COUNT)
        ],
        "positions": list(s_cfg.POSITIONS),
        "categories": [label for _, label in AGE_GROUPS] + [PROFESSIONAL],
    }
