"""
Fantasy Season Outcome Simulator

Monte Carlo simulation of playoff odds, finishing rank distributions and
per-matchup stakes.
"""

from .models import (
    TeamRecord,
    RemainingMatchup,
    ScheduledMatchup,
    WeekMatchups,
    LeagueSettings,
    SimResult,
    ScenarioMatchup,
    WeekScenario
)
from .strength import calculate_strengths, win_probability, simulate_match, NEUTRAL_STRENGTH
from .engine import (
    simulate_season,
    apply_outcome,
    remove_first_matchup,
    BASELINE_SIMULATIONS,
    SCENARIO_SIMULATIONS
)
from .tiebreakers import order_standings, DEFAULT_JITTER
from .scenarios import (
    build_week_scenarios,
    build_matchup_scenario,
    simulate_forced_result,
    calculate_stakes,
    sort_by_stakes
)
from .schedule import (
    resolve_playoff_spots,
    resolve_playoff_start_week,
    remaining_weeks,
    parse_week_matchups,
    flatten_remaining
)

__all__ = [
    # Models
    "TeamRecord",
    "RemainingMatchup",
    "ScheduledMatchup",
    "WeekMatchups",
    "LeagueSettings",
    "SimResult",
    "ScenarioMatchup",
    "WeekScenario",
    # Strength
    "calculate_strengths",
    "win_probability",
    "simulate_match",
    "NEUTRAL_STRENGTH",
    # Engine
    "simulate_season",
    "apply_outcome",
    "remove_first_matchup",
    "BASELINE_SIMULATIONS",
    "SCENARIO_SIMULATIONS",
    # Tiebreakers
    "order_standings",
    "DEFAULT_JITTER",
    # Scenarios
    "build_week_scenarios",
    "build_matchup_scenario",
    "simulate_forced_result",
    "calculate_stakes",
    "sort_by_stakes",
    # Schedule
    "resolve_playoff_spots",
    "resolve_playoff_start_week",
    "remaining_weeks",
    "parse_week_matchups",
    "flatten_remaining",
]
