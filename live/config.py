from __future__ import annotations

"""Tuning parameters for live match tactical capture.

This module is the single place to tune capture behavior.

Capture vocabulary
------------------
- Four phases; each phase offers exactly six actions.
- Results are POSITIVE / NEUTRAL / NEGATIVE.

Pitch zones
-----------
- 12 fixed zones on a 4 x 3 grid (columns along the pitch length from the
  own goal, rows across the width). zone_id = row * ZONE_COLUMNS + column.

Impact weighting
----------------
- event_score = RESULT_BASE[result] * PHASE_WEIGHTS[phase] * ACTION_WEIGHTS[action]
- Used for audit/analysis summaries stored next to a capture result. The 0..10
  score written into attribute groups comes from the positive ratio only.
"""

from typing import Dict, List, Tuple

# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

TICK_INTERVAL_SECONDS: float = 1.0
SECONDS_PER_TICK: int = 1
# The ticker sleeps in this many slices per interval so a resume restarts the second.
TICK_SLICES: int = 10

# ---------------------------------------------------------------------------
# Vocabulary
# ---------------------------------------------------------------------------

OFFENSIVE = "OFFENSIVE"
DEFENSIVE = "DEFENSIVE"
TRANSITION_TO_OFFENSE = "TRANSITION_TO_OFFENSE"
TRANSITION_TO_DEFENSE = "TRANSITION_TO_DEFENSE"

PHASE_ACTIONS: Dict[str, List[str]] = {
    OFFENSIVE: [
        "Support",
        "Width",
        "Possession retention",
        "Between the lines",
        "Depth",
        "Penetration",
    ],
    DEFENSIVE: [
        "Line closing",
        "Cover",
        "Protecting the centre",
        "Containment",
        "Active marking",
        "Direct pressure",
    ],
    TRANSITION_TO_OFFENSE: [
        "Immediate support",
        "Strategic pause",
        "Vertical pass",
        "Progressive carry",
        "Attacking space",
        "Speeding up play",
    ],
    TRANSITION_TO_DEFENSE: [
        "Organised retreat",
        "Passing lane closing",
        "Delay",
        "Depth protection",
        "Counter-press",
        "Tactical foul",
    ],
}

PHASE_LABELS: Dict[str, str] = {
    OFFENSIVE: "Offensive organisation",
    DEFENSIVE: "Defensive organisation",
    TRANSITION_TO_OFFENSE: "Offensive transition",
    TRANSITION_TO_DEFENSE: "Defensive transition",
}

# ---------------------------------------------------------------------------
# Zones
# ---------------------------------------------------------------------------

ZONE_COLUMNS: int = 4
ZONE_ROWS: int = 3
ZONE_COUNT: int = ZONE_COLUMNS * ZONE_ROWS


def zone_center(zone_id: int) -> Tuple[float, float]:
    """Centre of a zone in pitch percent coordinates (x along length, y across width)."""
    col = int(zone_id) % ZONE_COLUMNS
    row = int(zone_id) // ZONE_COLUMNS
    x = (col + 0.5) * (100.0 / ZONE_COLUMNS)
    y = (row + 0.5) * (100.0 / ZONE_ROWS)
    return (round(x, 2), round(y, 2))


# ---------------------------------------------------------------------------
# Finalize
# ---------------------------------------------------------------------------

# Notes discriminator for capture-derived score records.
CAPTURE_NOTES_TYPE: str = "TACTICAL_CAPTURE_V2"

SCORE_MAX: float = 10.0
# positive ratio (0..1) -> 0..20 half-points -> 0..10 in 0.5 steps
RATIO_HALF_POINTS: float = 20.0

# Live capture carries no physical information; physical stays at this baseline.
PHYSICAL_BASELINE: float = 5.0
# Score of an empty capture log.
EMPTY_LOG_SCORE: float = 5.0

# ---------------------------------------------------------------------------
# Impact weighting
# ---------------------------------------------------------------------------

RESULT_BASE: Dict[str, float] = {
    "POSITIVE": 1.0,
    "NEUTRAL": 0.0,
    "NEGATIVE": -1.0,
}

PHASE_WEIGHTS: Dict[str, float] = {
    OFFENSIVE: 1.0,
    DEFENSIVE: 1.2,
    TRANSITION_TO_OFFENSE: 1.4,
    TRANSITION_TO_DEFENSE: 1.5,
}

ACTION_WEIGHTS: Dict[str, float] = {
    # Offensive organisation
    "Support": 0.8,
    "Width": 0.9,
    "Possession retention": 0.9,
    "Between the lines": 1.1,
    "Depth": 1.2,
    "Penetration": 1.3,
    # Defensive organisation
    "Line closing": 0.9,
    "Cover": 1.0,
    "Protecting the centre": 1.1,
    "Containment": 1.1,
    "Active marking": 1.2,
    "Direct pressure": 1.3,
    # Offensive transition
    "Immediate support": 0.9,
    "Strategic pause": 1.0,
    "Vertical pass": 1.2,
    "Progressive carry": 1.3,
    "Attacking space": 1.4,
    "Speeding up play": 1.5,
    # Defensive transition
    "Organised retreat": 1.0,
    "Passing lane closing": 1.1,
    "Delay": 1.2,
    "Depth protection": 1.3,
    "Counter-press": 1.4,
    "Tactical foul": 1.5,
}

ACTION_WEIGHT_DEFAULT: float = 1.0

# Impact level cut-offs on the mean event score, checked in this order:
#   > VERY_HIGH_ABOVE          very_high_impact
#   >= POSITIVE_FROM           positive_impact
#   <= RISK_AT_MOST            tactical_risk
#   <= NEGATIVE_AT_MOST        negative_impact
#   otherwise                  neutral
IMPACT_VERY_HIGH_ABOVE: float = 0.60
IMPACT_POSITIVE_FROM: float = 0.30
IMPACT_RISK_AT_MOST: float = -0.60
IMPACT_NEGATIVE_AT_MOST: float = -0.30

IMPACT_LABELS: Dict[str, str] = {
    "very_high_impact": "Very high impact",
    "positive_impact": "Positive impact",
    "neutral": "Neutral impact",
    "negative_impact": "Negative impact",
    "tactical_risk": "Tactical risk",
}

# Analysis windows
TIMELINE_BLOCK_SECONDS: int = 60
FILTER_WINDOW_SECONDS: int = 300
