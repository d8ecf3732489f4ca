from __future__ import annotations

"""Team-level ranking built on the per-subject evaluation summaries.

- rank_pool: every visible subject with its overall average, best first
- team_average / top_ranked: dashboard headline numbers
- team_evolution: per-date mean of record totals across the visible roster

Visibility is decided by the explicit ViewingContext (category + period).
"""

from typing import Dict, Iterable, List, Mapping, Sequence

from evaluation import config as e_cfg
from evaluation.aggregation import overall_average, record_total
from evaluation.formulas import mean, round_decimals
from evaluation.types import ScoreRecord, SeriesPoint
from match_time import day_month_label
from viewing_context import ViewingContext

from .types import RankedSubject, Subject


def visible_subjects(subjects: Iterable[Subject], context: ViewingContext) -> List[Subject]:
    return [s for s in subjects if context.includes_category(s.category_id)]


def rank_pool(
    subjects: Iterable[Subject],
    records_by_subject: Mapping[str, Sequence[ScoreRecord]],
    *,
    context: ViewingContext,
) -> List[RankedSubject]:
    """Rank visible subjects by overall average (descending, stable).

    Subjects with no records in the window rank with 0.0 and record_count 0 so
    the UI can show a placeholder instead of dropping them.
    """
    rows: List[RankedSubject] = []
    for s in visible_subjects(subjects, context):
        window = context.filter_records(list(records_by_subject.get(s.subject_id) or []))
        rows.append(RankedSubject(subject=s, score=overall_average(window), record_count=len(window)))
    return sorted(rows, key=lambda r: -r.score)


def team_average(ranked: Sequence[RankedSubject]) -> float:
    """Mean of the subjects' overall averages; 0.0 for an empty roster."""
    return mean(r.score for r in ranked)


def top_ranked(ranked: Sequence[RankedSubject], n: int = e_cfg.RANKING_TOP_N) -> List[RankedSubject]:
    return list(ranked[: max(0, int(n))])


def team_evolution(
    subjects: Iterable[Subject],
    records_by_subject: Mapping[str, Sequence[ScoreRecord]],
    *,
    context: ViewingContext,
) -> List[SeriesPoint]:
    """Mean record total per session date across the visible roster, ascending by date."""
    by_date: Dict[str, List[float]] = {}
    for s in visible_subjects(subjects, context):
        for r in context.filter_records(list(records_by_subject.get(s.subject_id) or [])):
            if not r.session_date:
                continue
            by_date.setdefault(r.session_date, []).append(record_total(r))
    return [
        {
            "date": d,
            "date_label": day_month_label(d),
            "score": round_decimals(mean(by_date[d]), e_cfg.AVERAGE_DECIMALS),
        }
        for d in sorted(by_date.keys())
    ]
