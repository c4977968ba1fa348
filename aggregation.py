"""Climber, team and division standings built from roster + results."""

import logging
from typing import Iterable, List

import pandas as pd

from constants import ALL_COMPS, DIVISIONS
from models import ClimberStats, CompBreakdown, ResultEntry, RosterEntry, TeamStats
from scoring import compute_points

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["comp_id", "boulder_id", "climber_id", "points", "attempts", "top", "flash", "zone_only"]


def results_frame(results: Iterable[ResultEntry]) -> pd.DataFrame:
    """One row per result with derived points/attempts/top/flash/zone-only columns."""
    rows = [
        {
            "comp_id": r.comp_id,
            "boulder_id": r.boulder_id,
            "climber_id": r.climber_id,
            "points": compute_points(r),
            "attempts": r.attempts,
            "top": int(r.top_completed),
            "flash": int(r.is_flash),
            "zone_only": int(r.zone_completed and not r.top_completed),
        }
        for r in results
    ]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def is_all_comps(comp_id) -> bool:
    return comp_id is None or comp_id == "" or comp_id == ALL_COMPS


def filter_by_comp(results: List[ResultEntry], comp_id) -> List[ResultEntry]:
    if is_all_comps(comp_id):
        return list(results)
    return [r for r in results if r.comp_id == comp_id]


def competition_options(results: Iterable[ResultEntry]) -> List[tuple]:
    """Distinct (comp_id, comp_date) pairs in the order they first appear."""
    seen = {}
    for r in results:
        if r.comp_id not in seen:
            seen[r.comp_id] = r.comp_date
    return list(seen.items())


def aggregate_climber_stats(roster: List[RosterEntry], results: List[ResultEntry],
                            comp_filter=None) -> dict[str, ClimberStats]:
    """Per-climber totals for every rostered climber.

    Climbers with no results keep zero totals. The first roster row for a
    climber_id decides their name, team and division. Results for climbers
    missing from the roster are skipped with a warning.
    """
    climber_stats = {}
    for entry in roster:
        if entry.climber_id in climber_stats:
            continue
        climber_stats[entry.climber_id] = ClimberStats(
            climber_id=entry.climber_id,
            climber_name=entry.climber_name,
            team_id=entry.team_id,
            team_name=entry.team_name,
            division=entry.division,
        )

    df = results_frame(filter_by_comp(results, comp_filter))
    known = df["climber_id"].isin(list(climber_stats.keys()))
    for climber_id in df.loc[~known, "climber_id"]:
        logger.warning("Climber %s in results but not found in teams data", climber_id)
    df = df[known]

    # groups come out in first-appearance order, so breakdowns fill in result order
    per_comp = df.groupby(["climber_id", "comp_id"], sort=False)[["points", "attempts"]].sum()
    for (climber_id, comp_id), row in per_comp.iterrows():
        stats = climber_stats[climber_id]
        points, attempts = int(row["points"]), int(row["attempts"])
        stats.total_points += points
        stats.total_attempts += attempts
        stats.comp_breakdown[comp_id] = CompBreakdown(points=points, attempts=attempts)

    return climber_stats


def aggregate_team_stats(climber_stats: dict[str, ClimberStats],
                         roster: List[RosterEntry]) -> dict[str, TeamStats]:
    team_stats = {}
    for entry in roster:
        team = team_stats.get(entry.team_id)
        if team is None:
            team = team_stats[entry.team_id] = TeamStats(team_id=entry.team_id, team_name=entry.team_name)
        if entry.climber_id not in team.climbers:
            team.climbers.append(entry.climber_id)

    for stats in climber_stats.values():
        team = team_stats.get(stats.team_id)
        if team is None:
            continue
        team.total_points += stats.total_points
        team.total_attempts += stats.total_attempts

    return team_stats


def aggregate_division_stats(climber_stats: dict[str, ClimberStats],
                             roster: List[RosterEntry]) -> dict[str, List[ClimberStats]]:
    division_stats = {name: [] for name in DIVISIONS}
    for climber_id, stats in climber_stats.items():
        bucket = division_stats.get(stats.division)
        if bucket is None:
            logger.warning("Unknown division: %s for climber %s", stats.division, climber_id)
            continue
        bucket.append(stats)
    return division_stats
