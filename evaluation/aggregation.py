from __future__ import annotations

"""Per-subject history summaries.

Turns a subject's score records (optionally pre-filtered with
``evaluation.periods.period_filter``) into comparable summaries:

- overall_average: mean total score
- attribute_averages: sparse per-key averages for one group
- rank_attributes: best/worst attributes across groups
- seed_averages: default ratings for a brand-new record
- evolution_series: total score over time

Every function is total. Absence is represented by 0.0, an empty list or None;
callers render a "not enough data" state instead of treating it as failure.

Sparse averaging
----------------
A key present in only 2 of 10 records is averaged over those 2 records. We
never zero-fill missing keys: legacy and current schemas coexist and zero-fill
would drag rankings toward whatever the older schema did not measure.
"""

from typing import Dict, List, Optional, Sequence

from match_time import day_month_label

from . import config as e_cfg
from .formulas import mean, round_decimals, round_half_up, total_score
from .types import AttributeGroup, AttributeRanking, RankedAttribute, ScoreRecord, SeedValues, SeriesPoint


def record_total(record: ScoreRecord) -> float:
    return total_score(record.technical, record.physical, record.tactical)


def has_data(records: Sequence[ScoreRecord]) -> bool:
    """True when there is at least one record (a real 0 vs. "no data")."""
    return len(records) > 0


def overall_average(records: Sequence[ScoreRecord]) -> float:
    """Mean of ``total_score`` across records; 0.0 when empty."""
    return mean(record_total(r) for r in records)


def _collect(records: Sequence[ScoreRecord], group_type: str) -> Dict[str, List[float]]:
    # dict preserves first-seen key order
    values: Dict[str, List[float]] = {}
    for r in records:
        group = r.group(group_type)
        if not group:
            continue
        for k, v in group.items():
            values.setdefault(str(k), []).append(float(v))
    return values


def attribute_averages(records: Sequence[ScoreRecord], group_type: str) -> Dict[str, float]:
    """Average each key over the records that actually carry it, rounded to 1 decimal."""
    return {
        k: round_decimals(mean(vs), e_cfg.AVERAGE_DECIMALS)
        for k, vs in _collect(records, group_type).items()
    }


def has_tactical(records: Sequence[ScoreRecord]) -> bool:
    return any(r.tactical is not None for r in records)


def rank_attributes(
    records: Sequence[ScoreRecord],
    *,
    top_n: int = e_cfg.RANKING_TOP_N,
) -> Optional[AttributeRanking]:
    """Best and worst ``top_n`` attributes by average.

    Ties keep first-seen order (technical keys, then physical, then tactical).
    Tactical attributes participate only when at least one record carries a
    tactical group. Returns None when there are no records.
    """
    if not records:
        return None

    groups = [e_cfg.GROUP_TECHNICAL, e_cfg.GROUP_PHYSICAL]
    if has_tactical(records):
        groups.append(e_cfg.GROUP_TACTICAL)

    flat: List[RankedAttribute] = []
    for g in groups:
        for k, score in attribute_averages(records, g).items():
            flat.append({"key": k, "label": e_cfg.attribute_label(k), "score": score, "group_type": g})

    # sorted() is stable, so equal scores stay in first-seen order in both lists
    best = sorted(flat, key=lambda a: -a["score"])[:top_n]
    worst = sorted(flat, key=lambda a: a["score"])[:top_n]
    return {"best": best, "worst": worst}


def seed_averages(all_past_records: Sequence[ScoreRecord]) -> SeedValues:
    """Default ratings for a new record of a subject with prior history.

    Each key defaults to its historical mean over *all* past records (not a
    filtered window) rounded to the nearest 0.5; keys with no prior data
    default to the neutral midpoint. Usability aid only; not a score.
    """
    out: Dict[str, AttributeGroup] = {}
    for g in e_cfg.GROUP_TYPES:
        history = _collect(all_past_records, g)
        keys = list(e_cfg.ATTRIBUTES_BY_GROUP[g].keys())
        keys += [k for k in history.keys() if k not in e_cfg.ATTRIBUTES_BY_GROUP[g]]
        seeded: AttributeGroup = {}
        for k in keys:
            vs = history.get(k)
            seeded[k] = round_half_up(mean(vs), e_cfg.RATING_STEP) if vs else e_cfg.NEUTRAL_RATING
        out[g] = seeded
    return {
        "technical": out[e_cfg.GROUP_TECHNICAL],
        "physical": out[e_cfg.GROUP_PHYSICAL],
        "tactical": out[e_cfg.GROUP_TACTICAL],
    }


def evolution_series(records: Sequence[ScoreRecord]) -> List[SeriesPoint]:
    """Total score per record, ascending by session date (not insertion order)."""
    ordered = sorted(records, key=lambda r: r.session_date)
    return [
        {
            "date": r.session_date,
            "date_label": day_month_label(r.session_date),
            "score": round_decimals(record_total(r), e_cfg.AVERAGE_DECIMALS),
        }
        for r in ordered
    ]


def summarize(records: Sequence[ScoreRecord]) -> Dict[str, object]:
    """Bundle every summary for one (already filtered) record set."""
    return {
        "has_data": has_data(records),
        "record_count": len(records),
        "overall_average": round_decimals(overall_average(records), e_cfg.AVERAGE_DECIMALS),
        "attribute_averages": {g: attribute_averages(records, g) for g in e_cfg.GROUP_TYPES},
        "ranking": rank_attributes(records),
        "evolution": evolution_series(records),
    }
