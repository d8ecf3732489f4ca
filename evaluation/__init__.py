"""Performance evaluation subsystem (score normalization + history aggregation).

Turns score records (manual entries or live-capture results) into one
normalized 0..10 score used uniformly by rankings, radar summaries and squad
selection.

Public API
----------
- total_score / group_average
- period_filter
- overall_average / attribute_averages / rank_attributes
- seed_averages / evolution_series / summarize

Pure math lives in evaluation.formulas; window filtering in evaluation.periods.
"""

from .aggregation import (
    attribute_averages,
    evolution_series,
    has_data,
    overall_average,
    rank_attributes,
    seed_averages,
    summarize,
)
from .formulas import group_average, total_score
from .periods import period_filter
from .types import RankedAttribute, ScoreRecord, SessionDescriptor, ZonePoint, attach_session_dates

__all__ = [
    "RankedAttribute",
    "ScoreRecord",
    "SessionDescriptor",
    "ZonePoint",
    "attach_session_dates",
    "total_score",
    "group_average",
    "period_filter",
    "has_data",
    "overall_average",
    "attribute_averages",
    "rank_attributes",
    "seed_averages",
    "evolution_series",
    "summarize",
]
