"""
Pydantic schemas for API request/response validation.
"""

from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from ..core.config import BASELINE_TRIALS, SCENARIO_TRIALS


# ============== Input Schemas ==============

class TeamRecordIn(BaseModel):
    """Current standing of one team."""
    id: str = Field(..., min_length=1, max_length=100)
    name: str
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    ties: int = Field(default=0, ge=0)
    points_for: float = Field(default=0.0, ge=0)
    rank: int = Field(default=1, ge=1)


class MatchupSideIn(BaseModel):
    """One side of a scheduled matchup."""
    id: str
    name: str = ""


class MatchupIn(BaseModel):
    """A scheduled matchup. Anything other than two sides is ignored."""
    teams: List[MatchupSideIn]


class WeekMatchupsIn(BaseModel):
    """Scheduled matchups for one future week."""
    week: int = Field(..., ge=1)
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    matchups: List[MatchupIn] = []


class LeagueSettingsIn(BaseModel):
    """League settings. Zero means not reported by the platform."""
    league_name: str = ""
    playoff_spots: int = Field(default=0, ge=0)
    start_week: int = Field(default=1, ge=0)
    end_week: int = Field(default=22, ge=0)
    playoff_start_week: int = Field(default=0, ge=0)


# ============== Simulation Schemas ==============

class SimulationRunRequest(BaseModel):
    """Run a baseline simulation and schedule the scenario pass."""
    league_id: str = Field(default="local", min_length=1, max_length=100)
    current_week: int = Field(..., ge=0)
    settings: LeagueSettingsIn = LeagueSettingsIn()
    standings: List[TeamRecordIn]
    weeks: List[WeekMatchupsIn] = []
    n_simulations: int = Field(default=BASELINE_TRIALS, ge=1, le=100000)
    scenario_simulations: int = Field(default=SCENARIO_TRIALS, ge=1, le=100000)
    strength_model: str = Field(default="blended", pattern="^(blended|laplace)$")
    seed: Optional[int] = None
    include_scenarios: bool = True


class SimResultResponse(BaseModel):
    """Simulation results for a single team."""
    team_id: str
    name: str
    wins: int
    losses: int
    ties: int
    points_for: float
    current_rank: int
    playoff_prob: float
    last_place_prob: float
    avg_rank: float
    rank_dist: List[float]


class SimulationRunResponse(BaseModel):
    """Baseline simulation results."""
    league_id: str
    league_name: str
    current_week: int
    playoff_spots: int
    playoff_start_week: int
    weeks_remaining: int
    games_remaining: int
    n_simulations: int
    teams: List[SimResultResponse]
    scenario_task_id: Optional[str] = None


class SimulationTaskResponse(BaseModel):
    """Scenario task status response."""
    task_id: str
    status: str  # pending, running, completed, failed
    progress: int  # 0-100
    error: Optional[str] = None


class ScenarioMatchupResponse(BaseModel):
    """Playoff odds under each result of one matchup."""
    team1_id: str
    team1_name: str
    team2_id: str
    team2_name: str
    team1_baseline_prob: float
    team2_baseline_prob: float
    if_team1_wins: Dict[str, float]
    if_team2_wins: Dict[str, float]
    stakes: float


class WeekScenarioResponse(BaseModel):
    """Scenario report for one remaining week."""
    week: int
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    matchups: List[ScenarioMatchupResponse]


class ScenarioResultsResponse(BaseModel):
    """Full scenario pass results."""
    task_id: str
    league_id: str
    current_week: int
    n_simulations: int
    weeks: List[WeekScenarioResponse]


# ============== Error Schemas ==============

class ErrorResponse(BaseModel):
    """API error response."""
    detail: str
    code: Optional[str] = None
