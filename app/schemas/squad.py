from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.evaluation import PeriodSelection, ScoreRecordIn, SessionIn


class SubjectIn(BaseModel):
    subject_id: str
    name: str = ""
    position: str = ""  # GOALKEEPER | FULLBACK | CENTER_BACK | DEFENSIVE_MID | MIDFIELDER | WINGER | STRIKER
    category_id: Optional[str] = None


class SquadRequest(PeriodSelection):
    team_id: Optional[str] = None
    category_id: str = "all"
    subjects: List[SubjectIn] = Field(default_factory=list)
    records: List[ScoreRecordIn] = Field(default_factory=list)
    sessions: List[SessionIn] = Field(default_factory=list)
