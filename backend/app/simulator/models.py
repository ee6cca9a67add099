"""
Data models for the season outcome simulator.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional


@dataclass(frozen=True)
class TeamRecord:
    """Snapshot of one team's standing at simulation time."""

    id: str
    name: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_for: float = 0.0
    rank: int = 1

    @property
    def games_played(self) -> int:
        return self.wins + self.losses + self.ties

    def with_result(self, won: bool) -> 'TeamRecord':
        """Return a copy of this record with one more win or loss."""
        if won:
            return replace(self, wins=self.wins + 1)
        return replace(self, losses=self.losses + 1)


@dataclass(frozen=True)
class RemainingMatchup:
    """An unplayed game between two teams. Side order carries no meaning."""

    team1_id: str
    team2_id: str

    def is_between(self, team_a: str, team_b: str) -> bool:
        return {self.team1_id, self.team2_id} == {team_a, team_b}


@dataclass(frozen=True)
class ScheduledMatchup:
    """A future matchup with display names, as published in the weekly schedule."""

    team1_id: str
    team1_name: str
    team2_id: str
    team2_name: str

    def to_remaining(self) -> RemainingMatchup:
        return RemainingMatchup(team1_id=self.team1_id, team2_id=self.team2_id)


@dataclass
class WeekMatchups:
    """All scheduled matchups for one future week."""

    week: int
    matchups: List[ScheduledMatchup] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None


@dataclass
class LeagueSettings:
    """League configuration relevant to the simulation.

    Zero values mean the platform did not report the setting; see
    ``schedule.resolve_playoff_spots`` and ``schedule.resolve_playoff_start_week``.
    """

    league_name: str = ""
    playoff_spots: int = 0
    start_week: int = 1
    end_week: int = 22
    playoff_start_week: int = 0


@dataclass
class SimResult:
    """Aggregated Monte Carlo outcome for a single team."""

    team_id: str
    name: str
    wins: int
    losses: int
    ties: int
    points_for: float
    current_rank: int
    playoff_prob: float = 0.0
    last_place_prob: float = 0.0
    avg_rank: float = 0.0
    rank_dist: List[float] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "team_id": self.team_id,
            "name": self.name,
            "wins": self.wins,
            "losses": self.losses,
            "ties": self.ties,
            "points_for": self.points_for,
            "current_rank": self.current_rank,
            "playoff_prob": self.playoff_prob,
            "last_place_prob": self.last_place_prob,
            "avg_rank": self.avg_rank,
            "rank_dist": list(self.rank_dist)
        }


@dataclass
class ScenarioMatchup:
    """Playoff odds for every team under each forced result of one matchup."""

    team1_id: str
    team1_name: str
    team2_id: str
    team2_name: str
    team1_baseline_prob: float
    team2_baseline_prob: float
    if_team1_wins: Dict[str, float] = field(default_factory=dict)
    if_team2_wins: Dict[str, float] = field(default_factory=dict)
    stakes: float = 0.0

    def to_dict(self) -> dict:
        return {
            "team1_id": self.team1_id,
            "team1_name": self.team1_name,
            "team2_id": self.team2_id,
            "team2_name": self.team2_name,
            "team1_baseline_prob": self.team1_baseline_prob,
            "team2_baseline_prob": self.team2_baseline_prob,
            "if_team1_wins": dict(self.if_team1_wins),
            "if_team2_wins": dict(self.if_team2_wins),
            "stakes": self.stakes
        }


@dataclass
class WeekScenario:
    """Scenario report for one remaining week."""

    week: int
    matchups: List[ScenarioMatchup] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "week": self.week,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "matchups": [m.to_dict() for m in self.matchups]
        }
