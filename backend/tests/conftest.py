"""
Shared fixtures for the simulator test suite.
"""

import os
import tempfile

# Point the task store at a throwaway database before the app is imported
_DB_DIR = tempfile.mkdtemp(prefix="season-sim-tests-")
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite+aiosqlite:///{os.path.join(_DB_DIR, 'tasks.db')}"
)

import pytest

from app.simulator.models import TeamRecord, RemainingMatchup, ScheduledMatchup, WeekMatchups


def make_team(team_id: str, wins: int = 0, losses: int = 0, ties: int = 0,
              points_for: float = 0.0, rank: int = 1) -> TeamRecord:
    """Build a TeamRecord with a name derived from its id."""
    return TeamRecord(
        id=team_id,
        name=f"Team {team_id}",
        wins=wins,
        losses=losses,
        ties=ties,
        points_for=points_for,
        rank=rank
    )


def make_week(week: int, *pairs) -> WeekMatchups:
    """Build a week of matchups from (team1_id, team2_id) pairs."""
    return WeekMatchups(
        week=week,
        matchups=[
            ScheduledMatchup(team1_id=a, team1_name=f"Team {a}", team2_id=b, team2_name=f"Team {b}")
            for a, b in pairs
        ]
    )


@pytest.fixture
def settled_league():
    """Four teams with distinct records, ranked 1-4."""
    return [
        make_team("a", wins=8, losses=2, points_for=1100.0, rank=1),
        make_team("b", wins=6, losses=4, points_for=1050.0, rank=2),
        make_team("c", wins=4, losses=6, points_for=990.0, rank=3),
        make_team("d", wins=2, losses=8, points_for=900.0, rank=4),
    ]


@pytest.fixture
def tied_pair():
    """Two teams with identical 5-5 records and points-for."""
    return [
        make_team("a", wins=5, losses=5, points_for=1000.0, rank=1),
        make_team("b", wins=5, losses=5, points_for=1000.0, rank=2),
    ]


@pytest.fixture
def open_league():
    """Six teams, two weeks left, nothing decided."""
    teams = [
        make_team("t1", wins=7, losses=3, points_for=1210.5, rank=1),
        make_team("t2", wins=6, losses=4, points_for=1180.0, rank=2),
        make_team("t3", wins=6, losses=4, points_for=1102.25, rank=3),
        make_team("t4", wins=5, losses=5, points_for=1099.0, rank=4),
        make_team("t5", wins=3, losses=7, points_for=1010.0, rank=5),
        make_team("t6", wins=3, losses=7, points_for=980.75, rank=6),
    ]
    weeks = [
        make_week(11, ("t1", "t2"), ("t3", "t4"), ("t5", "t6")),
        make_week(12, ("t1", "t3"), ("t2", "t5"), ("t4", "t6")),
    ]
    remaining = [
        RemainingMatchup(team1_id=m.team1_id, team2_id=m.team2_id)
        for w in weeks for m in w.matchups
    ]
    return teams, weeks, remaining
