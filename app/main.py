from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.router import api_router
from app.services import live_registry

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Stop every tick task; unfinalized captures are discarded (nothing persisted).
    open_matches = live_registry.list_match_ids()
    if open_matches:
        logger.warning("shutdown: discarding %s open live match(es)", len(open_matches))
    await live_registry.shutdown()


app = FastAPI(title="Team evaluation server", lifespan=lifespan)


def _cors_origins() -> list:
    raw = (os.environ.get("TEAM_EVAL_CORS_ORIGINS") or "*").strip()
    return [o.strip() for o in raw.split(",") if o.strip()] or ["*"]


app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router)
