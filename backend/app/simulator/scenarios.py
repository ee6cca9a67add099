"""
Matchup scenario generation.

For every remaining matchup, forces each side to win, re-simulates the rest
of the season and reports how every team's playoff odds move relative to the
baseline run. The combined swing for the two participants ("stakes") ranks
which games matter most.
"""

import logging
import random
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Sequence

from .models import (
    TeamRecord,
    RemainingMatchup,
    ScheduledMatchup,
    WeekMatchups,
    SimResult,
    ScenarioMatchup,
    WeekScenario
)
from .engine import SCENARIO_SIMULATIONS, apply_outcome, remove_first_matchup, simulate_season
from .tiebreakers import DEFAULT_JITTER


logger = logging.getLogger(__name__)


def calculate_stakes(
    baseline_probs: Dict[str, float],
    team1_id: str,
    team2_id: str,
    if_team1_wins: Dict[str, float]
) -> float:
    """
    Combined playoff probability swing for both participants when team 1 wins.

    ``baseline_probs`` and ``if_team1_wins`` should come from the same strength
    model. Otherwise the gap between the two models is counted as swing.

    Returns 0 when the forced result leaves both teams where the baseline had them.
    """
    team1_swing = abs(if_team1_wins.get(team1_id, 0.0) - baseline_probs.get(team1_id, 0.0))
    team2_swing = abs(if_team1_wins.get(team2_id, 0.0) - baseline_probs.get(team2_id, 0.0))
    return team1_swing + team2_swing


def simulate_forced_result(
    teams: Sequence[TeamRecord],
    remaining: Sequence[RemainingMatchup],
    winner_id: str,
    loser_id: str,
    playoff_spots: int,
    n_simulations: int = SCENARIO_SIMULATIONS,
    strength_model: str = "laplace",
    rng: Optional[random.Random] = None,
    jitter: float = DEFAULT_JITTER
) -> Dict[str, float]:
    """
    Playoff probability for every team given one game's result.

    The winner and loser records are updated on copies and the first
    occurrence of the game is dropped from the schedule before re-simulating.

    Returns:
        Dict mapping team_id -> conditional playoff probability
    """
    adjusted_teams = apply_outcome(teams, winner_id, loser_id)
    adjusted_remaining = remove_first_matchup(remaining, winner_id, loser_id)

    results = simulate_season(
        adjusted_teams,
        adjusted_remaining,
        playoff_spots,
        n_simulations=n_simulations,
        strength_model=strength_model,
        rng=rng,
        jitter=jitter
    )
    return {r.team_id: r.playoff_prob for r in results}


def build_matchup_scenario(
    teams: Sequence[TeamRecord],
    remaining: Sequence[RemainingMatchup],
    matchup: ScheduledMatchup,
    playoff_spots: int,
    baseline_probs: Dict[str, float],
    n_simulations: int = SCENARIO_SIMULATIONS,
    strength_model: str = "laplace",
    rng: Optional[random.Random] = None,
    jitter: float = DEFAULT_JITTER
) -> ScenarioMatchup:
    """Simulate both results of one matchup and score its stakes."""
    if rng is None:
        rng = random.Random()

    # Each branch gets its own generator so branches are reproducible independently
    team1_rng = random.Random(rng.getrandbits(64))
    team2_rng = random.Random(rng.getrandbits(64))

    if_team1_wins = simulate_forced_result(
        teams, remaining, matchup.team1_id, matchup.team2_id, playoff_spots,
        n_simulations=n_simulations, strength_model=strength_model,
        rng=team1_rng, jitter=jitter
    )
    if_team2_wins = simulate_forced_result(
        teams, remaining, matchup.team2_id, matchup.team1_id, playoff_spots,
        n_simulations=n_simulations, strength_model=strength_model,
        rng=team2_rng, jitter=jitter
    )

    return ScenarioMatchup(
        team1_id=matchup.team1_id,
        team1_name=matchup.team1_name,
        team2_id=matchup.team2_id,
        team2_name=matchup.team2_name,
        team1_baseline_prob=baseline_probs.get(matchup.team1_id, 0.0),
        team2_baseline_prob=baseline_probs.get(matchup.team2_id, 0.0),
        if_team1_wins=if_team1_wins,
        if_team2_wins=if_team2_wins,
        stakes=calculate_stakes(baseline_probs, matchup.team1_id, matchup.team2_id, if_team1_wins)
    )


def build_week_scenarios(
    teams: Sequence[TeamRecord],
    remaining: Sequence[RemainingMatchup],
    weeks: Sequence[WeekMatchups],
    playoff_spots: int,
    baseline: Sequence[SimResult],
    n_simulations: int = SCENARIO_SIMULATIONS,
    strength_model: str = "laplace",
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    jitter: float = DEFAULT_JITTER,
    progress_callback: Optional[Callable[[float], None]] = None
) -> List[WeekScenario]:
    """
    Build per-week scenario reports for every remaining matchup.

    Cost is two scenario simulations per matchup, so this should run after
    the baseline has been returned to the caller.

    Args:
        teams: Current team standings
        remaining: Full remaining schedule, flattened across weeks
        weeks: Structured matchups per remaining week, used for reporting
        playoff_spots: Number of playoff spots
        baseline: Baseline results to measure swings against
        n_simulations: Simulations per forced result
        strength_model: Strength model for the reruns
        rng: Random generator to draw from
        seed: Seed for a fresh generator when ``rng`` is omitted
        jitter: Magnitude of the points-for tie-break draw
        progress_callback: Optional callback for progress updates (receives percent complete)

    Returns:
        WeekScenario list in ascending week order; matchups keep schedule order
    """
    if rng is None:
        rng = random.Random(seed)

    baseline_probs = {r.team_id: r.playoff_prob for r in baseline}
    ordered_weeks = sorted(weeks, key=lambda w: w.week)
    total = sum(len(w.matchups) for w in ordered_weeks)
    done = 0

    scenarios = []
    for week in ordered_weeks:
        week_scenario = WeekScenario(
            week=week.week,
            start_date=week.start_date,
            end_date=week.end_date
        )
        for matchup in week.matchups:
            week_scenario.matchups.append(build_matchup_scenario(
                teams, remaining, matchup, playoff_spots, baseline_probs,
                n_simulations=n_simulations, strength_model=strength_model,
                rng=rng, jitter=jitter
            ))
            done += 1
            if progress_callback:
                progress_callback(done / total * 100)
        scenarios.append(week_scenario)

    logger.info(
        "Built scenarios for %d matchups across %d weeks (%d simulations each)",
        total, len(scenarios), n_simulations
    )
    return scenarios


def sort_by_stakes(scenarios: Sequence[WeekScenario]) -> List[WeekScenario]:
    """Return copies of the week reports with matchups ordered by stakes, highest first."""
    return [
        replace(week, matchups=sorted(week.matchups, key=lambda m: m.stakes, reverse=True))
        for week in scenarios
    ]
