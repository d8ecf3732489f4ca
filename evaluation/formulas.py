from __future__ import annotations

"""Score normalization math (SSOT).

This module contains the *pure* math that turns attribute groups into a single
comparable 0..10 score. Ranking, radar summaries, squad selection and the live
capture finalizer all go through these functions.

Design goals
------------
- **Pure functions**: no storage access, no logging.
- **Total**: empty or missing groups resolve to 0.0, never raise.
- **No clamping**: inputs are assumed pre-clamped to 0..10 by the form layer.
  Out-of-range values are averaged as given.
"""

import math
from typing import Iterable, List, Mapping, Optional


def mean(values: Iterable[float]) -> float:
    """Arithmetic mean; 0.0 for an empty iterable."""
    total = 0.0
    n = 0
    for v in values:
        total += float(v)
        n += 1
    return total / n if n > 0 else 0.0


def round_half_up(value: float, step: float = 1.0) -> float:
    """Round ``value`` to the nearest multiple of ``step`` with halves rounded up.

    Python's ``round`` uses banker's rounding (``round(2.5) == 2``); ratings and
    seeds use the conventional half-up rule instead.
    """
    if step <= 0:
        return float(value)
    q = float(value) / float(step)
    # 1e-9 absorbs binary noise such as 0.35 / 0.1 == 3.4999999999999996
    return math.floor(q + 0.5 + 1e-9) * float(step)


def round_decimals(value: float, decimals: int = 1) -> float:
    return round(round_half_up(value, 10.0 ** -int(decimals)), int(decimals))


def _values(group: Optional[Mapping[str, float]]) -> List[float]:
    if not group:
        return []
    return [float(v) for v in group.values()]


def group_average(group: Optional[Mapping[str, float]]) -> float:
    """Mean of a single attribute group; 0.0 for an empty/None group."""
    return mean(_values(group))


def total_score(
    technical: Optional[Mapping[str, float]],
    physical: Optional[Mapping[str, float]],
    tactical: Optional[Mapping[str, float]] = None,
) -> float:
    """Flatten every supplied group into one list and return its mean.

    Legacy records carry no tactical group; only technical + physical are then
    averaged. Returns 0.0 when every group is empty.
    """
    flat = _values(technical) + _values(physical)
    if tactical is not None:
        flat += _values(tactical)
    return mean(flat)
