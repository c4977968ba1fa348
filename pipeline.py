import logging
from typing import List

from aggregation import (
    aggregate_climber_stats, aggregate_division_stats, aggregate_team_stats, filter_by_comp, is_all_comps,
)
from awards import compute_fun_stats
from constants import ALL_COMPS
from models import ResultEntry, RosterEntry, Standings

logger = logging.getLogger(__name__)


def compute_standings(roster: List[RosterEntry], results: List[ResultEntry], comp_filter=ALL_COMPS) -> Standings:
    """Run every stage for one competition filter and return a fresh Standings.

    Nothing is reused between calls; changing the filter means calling this
    again with the raw rows.
    """
    comp_filter = ALL_COMPS if is_all_comps(comp_filter) else str(comp_filter)
    filtered = filter_by_comp(results, comp_filter)

    climber_stats = aggregate_climber_stats(roster, filtered)
    team_stats = aggregate_team_stats(climber_stats, roster)
    division_stats = aggregate_division_stats(climber_stats, roster)
    fun_stats = compute_fun_stats(filtered, climber_stats, team_stats)

    logger.info("Computed standings for comp=%s: %d climbers, %d teams, %d results",
                comp_filter, len(climber_stats), len(team_stats), len(filtered))
    return Standings(
        comp_filter=comp_filter,
        climber_stats=climber_stats,
        team_stats=team_stats,
        division_stats=division_stats,
        fun_stats=fun_stats,
    )
