from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple, Union

from evaluation import config as e_cfg
from evaluation.types import ScoreRecord, SessionDescriptor, attach_session_dates
from squad.types import Subject
from viewing_context import ViewingContext

from app.schemas.evaluation import PeriodSelection, ScoreRecordIn, SessionIn
from app.schemas.squad import SubjectIn


def to_records(rows: Sequence[ScoreRecordIn], sessions: Sequence[SessionIn] = ()) -> List[ScoreRecord]:
    """Request rows -> ScoreRecord, resolving session dates from `sessions` when given."""
    records = [ScoreRecord.from_dict(r.model_dump()) for r in rows]
    if sessions:
        records = attach_session_dates(records, [SessionDescriptor.from_dict(s.model_dump()) for s in sessions])
    return records


def to_subjects(rows: Sequence[SubjectIn]) -> List[Subject]:
    return [Subject.from_dict(r.model_dump()) for r in rows]


def group_by_subject(records: Sequence[ScoreRecord]) -> Dict[str, List[ScoreRecord]]:
    out: Dict[str, List[ScoreRecord]] = {}
    for r in records:
        out.setdefault(r.subject_id, []).append(r)
    return out


def custom_bounds(sel: PeriodSelection) -> Union[str, Tuple[Optional[str], Optional[str]], None]:
    if sel.custom_date:
        return sel.custom_date
    if sel.custom_start or sel.custom_end:
        return (sel.custom_start, sel.custom_end)
    return None


def build_context(sel: PeriodSelection, *, team_id: Optional[str] = None, category_id: str = "all") -> ViewingContext:
    """Build the explicit viewing context. Raises ValueError for a bad reference date."""
    if sel.period not in (e_cfg.PERIOD_ALL, e_cfg.PERIOD_CUSTOM) and not sel.today:
        raise ValueError(f"today is required for period {sel.period!r}")
    return ViewingContext(
        today=sel.today,
        team_id=team_id,
        category_id=category_id,
        period=sel.period,
        bounds=custom_bounds(sel),
    )
