"""Typed records for roster rows, result rows, standings and awards."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RosterEntry:
    """One (team, climber) pairing from teams.csv."""
    team_id: str
    team_name: str
    climber_id: str
    climber_name: str
    division: str


@dataclass(frozen=True)
class ResultEntry:
    """One climber's effort on one boulder, from results.csv."""
    comp_id: str
    comp_date: str
    boulder_id: str
    climber_id: str
    attempts_to_zone: int = 0
    attempts_to_top: int = 0
    zone_completed: bool = False
    top_completed: bool = False

    @property
    def attempts(self) -> int:
        return self.attempts_to_zone + self.attempts_to_top

    @property
    def is_flash(self) -> bool:
        return self.top_completed and self.attempts_to_top == 1


@dataclass
class CompBreakdown:
    points: int = 0
    attempts: int = 0


@dataclass
class ClimberStats:
    climber_id: str
    climber_name: str
    team_id: str
    team_name: str
    division: str
    total_points: int = 0
    total_attempts: int = 0
    comp_breakdown: dict[str, CompBreakdown] = field(default_factory=dict)


@dataclass
class TeamStats:
    team_id: str
    team_name: str
    total_points: int = 0
    total_attempts: int = 0
    climbers: list[str] = field(default_factory=list)


# ─── Awards ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Award:
    """Base award: the winner's display name, plus whether it is shared."""
    winner: str
    is_tie: bool = field(default=False, kw_only=True)


@dataclass(frozen=True)
class TeamAttemptsAward(Award):
    attempts: int


@dataclass(frozen=True)
class BoulderAttemptsAward(Award):
    comp_id: str
    attempts: int

    @property
    def boulder_id(self) -> str:
        return self.winner


@dataclass(frozen=True)
class TryHardAward(Award):
    attempts: int
    tops: int


@dataclass(frozen=True)
class FlashMasterAward(Award):
    flashes: int
    attempts: int


@dataclass(frozen=True)
class EfficiencyAward(Award):
    ratio: float

    @property
    def ratio_display(self) -> str:
        return f"{self.ratio:.2f}"


@dataclass(frozen=True)
class PerfectScoreAward(Award):
    comp_id: str        # "Multiple" when tied winners come from different comps
    boulders: int
    attempts: int
    winner_count: int = 1
    other_comps_count: int = 0


@dataclass(frozen=True)
class ZoneHeroAward(Award):
    zones: int
    attempts: int


@dataclass
class FunStats:
    most_attempts_team: TeamAttemptsAward | None = None
    most_attempts_boulder: BoulderAttemptsAward | None = None
    least_attempts_boulder: BoulderAttemptsAward | None = None
    try_hard_award: TryHardAward | None = None
    flash_master: FlashMasterAward | None = None
    efficiency_king: EfficiencyAward | None = None
    perfect_score: PerfectScoreAward | None = None
    zone_hero: ZoneHeroAward | None = None


@dataclass
class Standings:
    """Everything the dashboard renders for one competition filter."""
    comp_filter: str
    climber_stats: dict[str, ClimberStats]
    team_stats: dict[str, TeamStats]
    division_stats: dict[str, list[ClimberStats]]
    fun_stats: FunStats
