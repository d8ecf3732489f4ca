from __future__ import annotations

"""Formation definition for Best XI selection (4-3-3).

Single place to tune the formation:
- CATEGORY_PRIORITY: order in which position categories are filled
- CATEGORY_QUOTAS: slots per category
- SLOTS: the 11 rendered slots in layout order (role code, category, pitch position)

Layout positions are percentages from the left touchline (x) and from the
own goal line (y), matching the pitch widget's coordinate space.
"""

from typing import Dict, Tuple

# Position categories (stored on subjects as these codes)
GOALKEEPER = "GOALKEEPER"
FULLBACK = "FULLBACK"
CENTER_BACK = "CENTER_BACK"
DEFENSIVE_MID = "DEFENSIVE_MID"
MIDFIELDER = "MIDFIELDER"
WINGER = "WINGER"
STRIKER = "STRIKER"

POSITIONS: Tuple[str, ...] = (
    GOALKEEPER,
    FULLBACK,
    CENTER_BACK,
    DEFENSIVE_MID,
    MIDFIELDER,
    WINGER,
    STRIKER,
)

# Greedy fill order. Earlier categories pick first; this is not a global optimum.
CATEGORY_PRIORITY: Tuple[str, ...] = (
    GOALKEEPER,
    FULLBACK,
    CENTER_BACK,
    DEFENSIVE_MID,
    MIDFIELDER,
    WINGER,
    STRIKER,
)

CATEGORY_QUOTAS: Dict[str, int] = {
    GOALKEEPER: 1,
    FULLBACK: 2,
    CENTER_BACK: 2,
    DEFENSIVE_MID: 1,
    MIDFIELDER: 2,
    WINGER: 2,
    STRIKER: 1,
}

# (role code, category, rank within category, (x, y))
SLOTS: Tuple[Tuple[str, str, int, Tuple[float, float]], ...] = (
    ("GK", GOALKEEPER, 0, (50.0, 5.0)),
    ("LB", FULLBACK, 0, (15.0, 22.0)),
    ("CB", CENTER_BACK, 0, (38.0, 18.0)),
    ("CB", CENTER_BACK, 1, (62.0, 18.0)),
    ("RB", FULLBACK, 1, (85.0, 22.0)),
    ("CM", MIDFIELDER, 0, (30.0, 45.0)),
    ("DM", DEFENSIVE_MID, 0, (50.0, 38.0)),
    ("CM", MIDFIELDER, 1, (70.0, 45.0)),
    ("LW", WINGER, 0, (20.0, 70.0)),
    ("ST", STRIKER, 0, (50.0, 78.0)),
    ("RW", WINGER, 1, (80.0, 70.0)),
)

# Loose spellings seen in roster imports -> position category
POSITION_ALIASES: Dict[str, str] = {
    "GK": GOALKEEPER,
    "GOLEIRO": GOALKEEPER,
    "LATERAL": FULLBACK,
    "FB": FULLBACK,
    "ZAGUEIRO": CENTER_BACK,
    "CB": CENTER_BACK,
    "VOLANTE": DEFENSIVE_MID,
    "DM": DEFENSIVE_MID,
    "MEIO_CAMPO": MIDFIELDER,
    "MEIO-CAMPO": MIDFIELDER,
    "CM": MIDFIELDER,
    "ATACANTE": WINGER,
    "W": WINGER,
    "CENTROAVANTE": STRIKER,
    "ST": STRIKER,
}
