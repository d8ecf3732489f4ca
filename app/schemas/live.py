from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CreateMatchRequest(BaseModel):
    subject_ids: List[str] = Field(default_factory=list)
    auto_tick: bool = True  # run the one-second ticker server-side


class SubjectRequest(BaseModel):
    subject_id: str


class PhaseRequest(BaseModel):
    phase: str  # OFFENSIVE | DEFENSIVE | TRANSITION_TO_OFFENSE | TRANSITION_TO_DEFENSE


class ActionRequest(BaseModel):
    action: str


class ResultRequest(BaseModel):
    result: str  # POSITIVE | NEUTRAL | NEGATIVE


class ZoneRequest(BaseModel):
    zone_id: int  # 0..11


class ObservationsRequest(BaseModel):
    subject_id: str
    text: str = ""


class TickRequest(BaseModel):
    seconds: int = 1


class FinalizeRequest(BaseModel):
    subject_id: str
    session_date: str  # YYYY-MM-DD
    team_id: str
    category_id: Optional[str] = None
