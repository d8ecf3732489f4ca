from fastapi import APIRouter

from app.api.routes import core, evaluation, squad, live

api_router = APIRouter()
api_router.include_router(core.router)
api_router.include_router(evaluation.router)
api_router.include_router(squad.router)
api_router.include_router(live.router)
