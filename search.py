from typing import List

from models import ResultEntry, Standings
from scoring import compute_points


def search_teams(query: str, standings: Standings) -> List[dict]:
    """Teams whose name contains ``query`` (any case), with their members."""
    q = (query or "").strip().lower()
    if not q:
        return []

    matches = []
    for team_id, team in standings.team_stats.items():
        if q not in team.team_name.lower():
            continue
        members = [
            {
                "climber_name": c.climber_name,
                "division": c.division,
                "total_points": c.total_points,
                "total_attempts": c.total_attempts,
            }
            for c in standings.climber_stats.values()
            if c.team_id == team_id
        ]
        matches.append({
            "team_id": team_id,
            "team_name": team.team_name,
            "total_points": team.total_points,
            "total_attempts": team.total_attempts,
            "members": members,
        })
    return matches


def search_climbers(query: str, standings: Standings, results: List[ResultEntry]) -> List[dict]:
    """Climbers whose name contains ``query``, with every result they logged.

    Totals follow the current filter; the per-boulder rows always cover all
    competitions.
    """
    q = (query or "").strip().lower()
    if not q:
        return []

    matches = []
    for climber_id, climber in standings.climber_stats.items():
        if q not in climber.climber_name.lower():
            continue
        rows = [
            {
                "comp_id": r.comp_id,
                "comp_date": r.comp_date,
                "boulder_id": r.boulder_id,
                "zone_completed": r.zone_completed,
                "top_completed": r.top_completed,
                "points": compute_points(r),
                "attempts": r.attempts,
            }
            for r in results
            if r.climber_id == climber_id
        ]
        matches.append({
            "climber_id": climber_id,
            "climber_name": climber.climber_name,
            "team_name": climber.team_name,
            "division": climber.division,
            "total_points": climber.total_points,
            "total_attempts": climber.total_attempts,
            "results": rows,
        })
    return matches
