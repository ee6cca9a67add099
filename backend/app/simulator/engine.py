"""
Monte Carlo simulation engine for season outcome probabilities.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from .models import TeamRecord, RemainingMatchup, SimResult
from .strength import calculate_strengths, get_strength, simulate_match
from .tiebreakers import DEFAULT_JITTER, draw_jitter, order_standings


logger = logging.getLogger(__name__)

BASELINE_SIMULATIONS = 10000
SCENARIO_SIMULATIONS = 3000


def apply_outcome(
    teams: Sequence[TeamRecord],
    winner_id: str,
    loser_id: str
) -> List[TeamRecord]:
    """
    Apply a forced result to the standings.

    Args:
        teams: Current standings (left untouched)
        winner_id: Team credited with the win
        loser_id: Team charged with the loss

    Returns:
        New list of team records with the result applied
    """
    updated = []
    for team in teams:
        if team.id == winner_id:
            updated.append(team.with_result(won=True))
        elif team.id == loser_id:
            updated.append(team.with_result(won=False))
        else:
            updated.append(team)
    return updated


def remove_first_matchup(
    remaining: Sequence[RemainingMatchup],
    team_a: str,
    team_b: str
) -> List[RemainingMatchup]:
    """
    Return a copy of the schedule with the first game between two teams removed.

    Only one occurrence is dropped, so teams meeting twice keep their other game.
    """
    result = list(remaining)
    for idx, matchup in enumerate(result):
        if matchup.is_between(team_a, team_b):
            del result[idx]
            break
    return result


def simulate_season(
    teams: Sequence[TeamRecord],
    remaining: Sequence[RemainingMatchup],
    playoff_spots: int,
    n_simulations: int = BASELINE_SIMULATIONS,
    strengths: Optional[Dict[str, float]] = None,
    strength_model: str = "blended",
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    jitter: float = DEFAULT_JITTER,
    progress_callback: Optional[Callable[[float], None]] = None
) -> List[SimResult]:
    """
    Run Monte Carlo simulation of the remaining season.

    Each trial plays every remaining matchup with the strength model, sorts
    the final table by wins then points-for, and tallies each team's rank.
    An empty schedule is valid: every trial reproduces the current table.
    Note that an empty schedule cannot be told apart from a schedule that
    has not been published yet; callers must check that before calling.

    Args:
        teams: Current team standings
        remaining: Remaining matchups (order irrelevant, duplicates allowed)
        playoff_spots: Number of playoff spots
        n_simulations: Number of simulations to run
        strengths: Precomputed strengths; computed from ``teams`` if omitted
        strength_model: Model used when ``strengths`` is omitted
        rng: Random generator to draw from
        seed: Seed for a fresh generator when ``rng`` is omitted
        jitter: Magnitude of the per-trial points-for tie-break draw
        progress_callback: Optional callback for progress updates (receives percent complete)

    Returns:
        One SimResult per team, in the order of ``teams``

    Raises:
        ValueError: If n_simulations < 1 or playoff_spots < 0
    """
    if n_simulations < 1:
        raise ValueError(f"n_simulations must be at least 1, got {n_simulations}")
    if playoff_spots < 0:
        raise ValueError(f"playoff_spots cannot be negative, got {playoff_spots}")

    num_teams = len(teams)
    if num_teams == 0:
        return []

    if rng is None:
        rng = random.Random(seed)
    if strengths is None:
        strengths = calculate_strengths(teams, strength_model)

    # Stable integer position per team for the hot loop
    positions = {team.id: idx for idx, team in enumerate(teams)}
    base_wins = [team.wins for team in teams]
    points_for = [team.points_for for team in teams]

    games = []
    unknown_ids = set()
    for matchup in remaining:
        games.append((
            positions.get(matchup.team1_id),
            positions.get(matchup.team2_id),
            get_strength(strengths, matchup.team1_id),
            get_strength(strengths, matchup.team2_id),
        ))
        unknown_ids.update(
            tid for tid in (matchup.team1_id, matchup.team2_id) if tid not in positions
        )
    if unknown_ids:
        logger.warning(
            "Schedule references teams missing from standings: %s (neutral strength, wins untracked)",
            ", ".join(sorted(unknown_ids))
        )

    rank_counts = [[0] * num_teams for _ in range(num_teams)]
    rank_sums = [0] * num_teams

    for sim_idx in range(n_simulations):
        # Report progress periodically
        if progress_callback and sim_idx % 100 == 0:
            progress_callback(sim_idx / n_simulations * 100)

        sim_wins = list(base_wins)

        for pos1, pos2, strength1, strength2 in games:
            if simulate_match(strength1, strength2, rng):
                winner = pos1
            else:
                winner = pos2
            if winner is not None:
                sim_wins[winner] += 1

        tiebreak = draw_jitter(num_teams, rng, jitter)
        final_order = order_standings(sim_wins, points_for, tiebreak)

        for rank_idx, pos in enumerate(final_order):
            rank_counts[pos][rank_idx] += 1
            rank_sums[pos] += rank_idx + 1

    # Final progress update
    if progress_callback:
        progress_callback(100)

    spots = min(playoff_spots, num_teams)
    results = []
    for pos, team in enumerate(teams):
        counts = rank_counts[pos]
        results.append(SimResult(
            team_id=team.id,
            name=team.name,
            wins=team.wins,
            losses=team.losses,
            ties=team.ties,
            points_for=team.points_for,
            current_rank=team.rank,
            playoff_prob=sum(counts[:spots]) / n_simulations,
            last_place_prob=counts[-1] / n_simulations,
            avg_rank=rank_sums[pos] / n_simulations,
            rank_dist=[c / n_simulations for c in counts]
        ))

    logger.debug(
        "Simulated %d seasons: %d teams, %d remaining games, %d playoff spots",
        n_simulations, num_teams, len(games), spots
    )
    return results
