from __future__ import annotations

"""Tuning parameters and attribute schema for the evaluation subsystem.

This module is the single place to tune evaluation behavior.

Attribute schema
----------------
- Three attribute groups per score record: technical, physical, tactical.
- Ratings are stored in 0..10 with a 0.5 step.
- Tactical is optional (legacy records predate it).
- Keys below describe the *current* schema only. Historical records may carry
  other keys; aggregation never assumes a fixed key set.

Periods
-------
- Period windows compare ISO date strings lexically (inclusive bounds).
- The reference date is always passed in explicitly; never use the host OS clock.
"""

from typing import Dict, Tuple

RATING_MIN: float = 0.0
RATING_MAX: float = 10.0
RATING_STEP: float = 0.5

# Midpoint used wherever a rating has no data yet (new-record seeds, empty captures).
NEUTRAL_RATING: float = 5.0

# Display rounding for attribute averages and series points.
AVERAGE_DECIMALS: int = 1

# Best/worst summary size.
RANKING_TOP_N: int = 3

GROUP_TECHNICAL: str = "technical"
GROUP_PHYSICAL: str = "physical"
GROUP_TACTICAL: str = "tactical"

GROUP_TYPES: Tuple[str, ...] = (GROUP_TECHNICAL, GROUP_PHYSICAL, GROUP_TACTICAL)

# ---------------------------------------------------------------------------
# Current attribute schema (key -> label)
# ---------------------------------------------------------------------------

TECHNICAL_ATTRIBUTES: Dict[str, str] = {
    "ball_control": "Ball control",
    "carrying": "Carrying",
    "passing": "Passing",
    "receiving": "Receiving",
    "dribbling": "Dribbling",
    "finishing": "Finishing",
    "crossing": "Crossing",
    "tackling": "Tackling",
    "interception": "Interception",
}

PHYSICAL_ATTRIBUTES: Dict[str, str] = {
    "speed": "Speed",
    "agility": "Agility",
    "endurance": "Endurance",
    "strength": "Strength",
    "coordination": "Coordination",
    "mobility": "Mobility",
    "stability": "Stability",
}

TACTICAL_ATTRIBUTES: Dict[str, str] = {
    # Defending
    "def_positioning": "Positioning",
    "def_pressure": "Pressure",
    "def_cover": "Cover",
    "def_closing": "Closing down",
    "def_timing": "Timing",
    "def_tactical_tackle": "Tactical tackle",
    "def_reaction": "Reaction",
    # Build-up
    "build_pass_quality": "Pass quality",
    "build_vision": "Vision",
    "build_support": "Support play",
    "build_mobility": "Off-ball mobility",
    "build_circulation": "Ball circulation",
    "build_line_breaking": "Line breaking",
    "build_decision_making": "Decision making",
    # Attacking
    "att_movement": "Movement",
    "att_space_attack": "Attacking space",
    "att_one_v_one": "1v1",
    "att_final_pass": "Final pass",
    "att_efficient_finishing": "Efficient finishing",
    "att_tempo": "Tempo",
    "att_set_pieces": "Set pieces",
}

ATTRIBUTES_BY_GROUP: Dict[str, Dict[str, str]] = {
    GROUP_TECHNICAL: TECHNICAL_ATTRIBUTES,
    GROUP_PHYSICAL: PHYSICAL_ATTRIBUTES,
    GROUP_TACTICAL: TACTICAL_ATTRIBUTES,
}

# ---------------------------------------------------------------------------
# Period filter
# ---------------------------------------------------------------------------

PERIOD_ALL: str = "all"
PERIOD_TODAY: str = "today"
PERIOD_LAST_7_DAYS: str = "last7days"
PERIOD_LAST_30_DAYS: str = "last30days"
PERIOD_THIS_YEAR: str = "thisYear"
PERIOD_CUSTOM: str = "custom"

PERIODS: Tuple[str, ...] = (
    PERIOD_ALL,
    PERIOD_TODAY,
    PERIOD_LAST_7_DAYS,
    PERIOD_LAST_30_DAYS,
    PERIOD_THIS_YEAR,
    PERIOD_CUSTOM,
)

# Rolling windows: number of days subtracted from the reference date (inclusive).
ROLLING_WINDOW_DAYS: Dict[str, int] = {
    PERIOD_LAST_7_DAYS: 7,
    PERIOD_LAST_30_DAYS: 30,
}


def attribute_label(key: str) -> str:
    """Human label for an attribute key (falls back to a prettified key)."""
    for labels in ATTRIBUTES_BY_GROUP.values():
        if key in labels:
            return labels[key]
    return str(key).replace("_", " ").strip().capitalize()
