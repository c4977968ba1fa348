import os
import sys

import pytest

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)

from models import ResultEntry, RosterEntry


def roster_entry(team_id, team_name, climber_id, climber_name, division="Beginner"):
    return RosterEntry(team_id, team_name, climber_id, climber_name, division)


def result(comp_id, boulder_id, climber_id, attempts_to_zone=0, attempts_to_top=0,
           zone=False, top=False, comp_date="2025-01-01"):
    return ResultEntry(
        comp_id=comp_id,
        comp_date=comp_date,
        boulder_id=boulder_id,
        climber_id=climber_id,
        attempts_to_zone=attempts_to_zone,
        attempts_to_top=attempts_to_top,
        zone_completed=zone,
        top_completed=top,
    )


@pytest.fixture
def example_roster():
    """Two climbers on one team."""
    return [
        roster_entry("T1", "Alpha", "C1", "A"),
        roster_entry("T1", "Alpha", "C2", "B"),
    ]


@pytest.fixture
def example_results():
    return [
        result("comp1", "b1", "C1", 0, 5, zone=True, top=True),
        result("comp1", "b1", "C2", 0, 10, zone=True, top=False),
    ]


@pytest.fixture
def league_roster():
    """Three teams across all divisions, plus one climber in a division we don't run."""
    return [
        roster_entry("T1", "Crimpers", "C1", "Amy", "Beginner"),
        roster_entry("T1", "Crimpers", "C2", "Zed", "Intermediate"),
        roster_entry("T2", "Slopers", "C3", "Bea", "Advanced"),
        roster_entry("T2", "Slopers", "C4", "Cal", "Beginner"),
        roster_entry("T3", "Dynos", "C5", "Dee", "Expert"),
    ]


@pytest.fixture
def league_results():
    return [
        # comp 1: two boulders
        result("1", "b1", "C1", 1, 1, zone=True, top=True, comp_date="2025-01-10"),
        result("1", "b2", "C1", 2, 3, zone=True, top=True, comp_date="2025-01-10"),
        result("1", "b1", "C2", 2, 0, zone=True, top=False, comp_date="2025-01-10"),
        result("1", "b2", "C3", 4, 4, zone=True, top=False, comp_date="2025-01-10"),
        # comp 2: one boulder
        result("2", "b1", "C3", 1, 1, zone=True, top=True, comp_date="2025-02-14"),
        result("2", "b1", "C4", 3, 0, zone=False, top=False, comp_date="2025-02-14"),
        result("2", "b1", "C5", 1, 2, zone=True, top=True, comp_date="2025-02-14"),
    ]
