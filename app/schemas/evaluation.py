from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ZonePointIn(BaseModel):
    x: float
    y: float


class ScoreRecordIn(BaseModel):
    id: str
    subject_id: str
    session_ref: str = ""
    session_date: Optional[str] = None  # YYYY-MM-DD, may be resolved from `sessions`
    technical: Dict[str, float] = Field(default_factory=dict)
    physical: Dict[str, float] = Field(default_factory=dict)
    tactical: Optional[Dict[str, float]] = None  # None for legacy records
    zone_points: List[ZonePointIn] = Field(default_factory=list)
    notes: str = ""


class SessionIn(BaseModel):
    id: str
    date: str  # YYYY-MM-DD
    team_id: str = ""
    category_id: Optional[str] = None
    description: str = ""


class PeriodSelection(BaseModel):
    period: str = "all"  # all | today | last7days | last30days | thisYear | custom
    today: Optional[str] = None  # reference date, required for dated periods
    custom_date: Optional[str] = None  # custom: single day
    custom_start: Optional[str] = None  # custom: range
    custom_end: Optional[str] = None


class EvaluationSummaryRequest(PeriodSelection):
    records: List[ScoreRecordIn] = Field(default_factory=list)
    sessions: List[SessionIn] = Field(default_factory=list)


class SeedRequest(BaseModel):
    records: List[ScoreRecordIn] = Field(default_factory=list)
