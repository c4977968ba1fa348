"""Fun-stat awards computed over one (possibly competition-filtered) result set.

Every award is independent and comes back as None when nothing qualifies.
Climber awards only ever name climbers present in the roster; boulder
awards count every result row.
"""

from typing import Callable, List, Optional, Sequence

import pandas as pd

from aggregation import results_frame
from constants import EFFICIENCY_TOLERANCE, TIE_JOINER
from models import (
    BoulderAttemptsAward, ClimberStats, EfficiencyAward, FlashMasterAward, FunStats,
    PerfectScoreAward, ResultEntry, TeamAttemptsAward, TeamStats, TryHardAward, ZoneHeroAward,
)

MULTIPLE_COMPS = "Multiple"


def pick_winners(candidates: Sequence, metric: Callable, maximize: bool = True,
                 tie_break: Optional[Callable] = None, tolerance: float = 0.0) -> List:
    """Return every candidate sharing the best metric (and best tie-break).

    Candidates are stable-sorted by ``metric``; those equal to the leader
    (or strictly closer than ``tolerance``) survive. ``tie_break`` returns a
    value to minimize among the survivors. Winners come back best metric
    first; exact ties keep input order, so the first element is the
    first-seen leader.
    """
    if not candidates:
        return []
    ordered = sorted(candidates, key=metric, reverse=maximize)
    best = metric(ordered[0])
    if tolerance:
        leaders = [c for c in ordered if abs(metric(c) - best) < tolerance]
    else:
        leaders = [c for c in ordered if metric(c) == best]

    if tie_break is not None:
        leaders = sorted(leaders, key=tie_break)
        best_tie = tie_break(leaders[0])
        leaders = [c for c in leaders if tie_break(c) == best_tie]
    return leaders


def _joined(winners: List[dict], key: str = "name") -> str:
    return TIE_JOINER.join(w[key] for w in winners)


# ─── Team / boulder awards ──────────────────────────────────────────

def most_attempts_team(team_stats: dict[str, TeamStats]) -> TeamAttemptsAward | None:
    winners = pick_winners(list(team_stats.values()), metric=lambda t: t.total_attempts)
    if not winners:
        return None
    return TeamAttemptsAward(winners[0].team_name, attempts=winners[0].total_attempts)


def _boulder_totals(df: pd.DataFrame) -> List[dict]:
    if df.empty:
        return []
    per_boulder = df.groupby(["comp_id", "boulder_id"], sort=False)["attempts"].sum().reset_index()
    return [
        {"comp_id": rec["comp_id"], "boulder_id": rec["boulder_id"], "attempts": int(rec["attempts"])}
        for rec in per_boulder.to_dict("records")
    ]


def most_attempts_boulder(boulders: List[dict]) -> BoulderAttemptsAward | None:
    winners = pick_winners(boulders, metric=lambda b: b["attempts"])
    if not winners:
        return None
    top = winners[0]
    return BoulderAttemptsAward(top["boulder_id"], comp_id=top["comp_id"], attempts=top["attempts"])


def least_attempts_boulder(boulders: List[dict]) -> BoulderAttemptsAward | None:
    tried = [b for b in boulders if b["attempts"] > 0]
    winners = pick_winners(tried, metric=lambda b: b["attempts"], maximize=False)
    if not winners:
        return None
    low = winners[0]
    return BoulderAttemptsAward(low["boulder_id"], comp_id=low["comp_id"], attempts=low["attempts"])


# ─── Climber awards ─────────────────────────────────────────────────

def _counts_by_climber(df: pd.DataFrame, column: str, climber_stats: dict) -> dict:
    """Per-climber count of rows flagged in ``column``, first-flagged first."""
    flagged = df[(df[column] > 0) & df["climber_id"].isin(list(climber_stats.keys()))]
    if flagged.empty:
        return {}
    counts = flagged.groupby("climber_id", sort=False)[column].sum()
    return {climber_id: int(n) for climber_id, n in counts.items()}


def try_hard_award(df: pd.DataFrame, climber_stats: dict[str, ClimberStats]) -> TryHardAward | None:
    tops = _counts_by_climber(df, "top", climber_stats)
    candidates = [
        {"name": c.climber_name, "attempts": c.total_attempts, "tops": tops[c.climber_id]}
        for c in climber_stats.values()
        if tops.get(c.climber_id, 0) > 0
    ]
    winners = pick_winners(candidates, metric=lambda c: c["attempts"], tie_break=lambda c: -c["tops"])
    if not winners:
        return None
    return TryHardAward(_joined(winners), attempts=winners[0]["attempts"], tops=winners[0]["tops"],
                        is_tie=len(winners) > 1)


def flash_master(df: pd.DataFrame, climber_stats: dict[str, ClimberStats]) -> FlashMasterAward | None:
    flashes = _counts_by_climber(df, "flash", climber_stats)
    candidates = [
        {"name": climber_stats[cid].climber_name, "flashes": n, "attempts": climber_stats[cid].total_attempts}
        for cid, n in flashes.items()
    ]
    winners = pick_winners(candidates, metric=lambda c: c["flashes"], tie_break=lambda c: c["attempts"])
    if not winners:
        return None
    return FlashMasterAward(_joined(winners), flashes=winners[0]["flashes"], attempts=winners[0]["attempts"],
                            is_tie=len(winners) > 1)


def efficiency_king(climber_stats: dict[str, ClimberStats]) -> EfficiencyAward | None:
    candidates = [
        {"name": c.climber_name, "ratio": c.total_points / c.total_attempts}
        for c in climber_stats.values()
        if c.total_attempts > 0
    ]
    winners = pick_winners(candidates, metric=lambda c: c["ratio"], tolerance=EFFICIENCY_TOLERANCE)
    if not winners:
        return None
    return EfficiencyAward(_joined(winners), ratio=winners[0]["ratio"], is_tie=len(winners) > 1)


def perfect_score(df: pd.DataFrame, climber_stats: dict[str, ClimberStats]) -> PerfectScoreAward | None:
    """Climber(s) who topped every boulder of a competition in the fewest attempts.

    A competition's boulder count is the number of distinct boulder_ids
    seen for it. Qualifying (climber, competition) pairs from all
    competitions are pooled and compared on attempts in that competition.
    """
    if df.empty:
        return None
    boulders_per_comp = df.groupby("comp_id", sort=False)["boulder_id"].nunique().to_dict()
    attempts = df.groupby(["comp_id", "climber_id"], sort=False)["attempts"].sum().to_dict()
    topped = df[df["top"] > 0]
    tops = topped.groupby(["comp_id", "climber_id"], sort=False)["top"].sum()

    qualifiers = []
    for (comp_id, climber_id), n in tops.items():
        total = boulders_per_comp.get(comp_id, 0)
        if total == 0 or n != total or climber_id not in climber_stats:
            continue
        qualifiers.append({
            "name": climber_stats[climber_id].climber_name,
            "comp_id": comp_id,
            "boulders": int(total),
            "attempts": int(attempts[(comp_id, climber_id)]),
        })
    if not qualifiers:
        return None

    # pooled comp by comp, comps in the order they first produced a qualifier
    comp_order = {}
    for q in qualifiers:
        comp_order.setdefault(q["comp_id"], len(comp_order))
    pooled = sorted(qualifiers, key=lambda q: comp_order[q["comp_id"]])

    winners = pick_winners(pooled, metric=lambda q: q["attempts"], maximize=False)
    first = winners[0]
    others = len(pooled) - len(winners)

    if len(winners) == 1:
        return PerfectScoreAward(first["name"], comp_id=first["comp_id"], boulders=first["boulders"],
                                 attempts=first["attempts"], other_comps_count=others)

    if len({w["comp_id"] for w in winners}) == 1:
        name, comp_id = _joined(winners), first["comp_id"]
    else:
        name = TIE_JOINER.join(f"{w['name']} (Comp {w['comp_id']})" for w in winners)
        comp_id = MULTIPLE_COMPS
    return PerfectScoreAward(name, comp_id=comp_id, boulders=first["boulders"], attempts=first["attempts"],
                             winner_count=len(winners), other_comps_count=others, is_tie=True)


def zone_hero(df: pd.DataFrame, climber_stats: dict[str, ClimberStats]) -> ZoneHeroAward | None:
    zones = _counts_by_climber(df, "zone_only", climber_stats)
    candidates = [
        {"name": climber_stats[cid].climber_name, "zones": n, "attempts": climber_stats[cid].total_attempts}
        for cid, n in zones.items()
    ]
    winners = pick_winners(candidates, metric=lambda c: c["zones"], tie_break=lambda c: c["attempts"])
    if not winners:
        return None
    return ZoneHeroAward(_joined(winners), zones=winners[0]["zones"], attempts=winners[0]["attempts"],
                         is_tie=len(winners) > 1)


def compute_fun_stats(results: List[ResultEntry], climber_stats: dict[str, ClimberStats],
                      team_stats: dict[str, TeamStats]) -> FunStats:
    df = results_frame(results)
    boulders = _boulder_totals(df)
    return FunStats(
        most_attempts_team=most_attempts_team(team_stats),
        most_attempts_boulder=most_attempts_boulder(boulders),
        least_attempts_boulder=least_attempts_boulder(boulders),
        try_hard_award=try_hard_award(df, climber_stats),
        flash_master=flash_master(df, climber_stats),
        efficiency_king=efficiency_king(climber_stats),
        perfect_score=perfect_score(df, climber_stats),
        zone_hero=zone_hero(df, climber_stats),
    )
