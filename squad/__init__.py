"""Squad views: roster ranking and Best XI selection.

Public API
----------
- rank_pool: visible subjects ranked by overall average
- team_average / top_ranked / team_evolution
- select_best_eleven: greedy 4-3-3 slot assignment
"""

from .ranking import rank_pool, team_average, team_evolution, top_ranked
from .selection import select_best_eleven
from .types import RankedSubject, SquadSlot, Subject

__all__ = [
    "RankedSubject",
    "SquadSlot",
    "Subject",
    "rank_pool",
    "team_average",
    "team_evolution",
    "top_ranked",
    "select_best_eleven",
]
