"""
Team strength models and the single-game win model.

Two strength models are available:

- ``blended`` (default for baseline runs): 60% Bayesian-smoothed win rate
  (prior of 2.5 wins in 5 games) plus 40% normalized points-for per game.
- ``laplace`` (used for scenario reruns): Laplace-smoothed win rate,
  (wins + 2) / (games + 4).

A game between strengths s1 and s2 is won by side 1 with probability
s1 / (s1 + s2).
"""

import logging
import random
from typing import Callable, Dict, Iterable, Sequence

from .models import TeamRecord


logger = logging.getLogger(__name__)

NEUTRAL_STRENGTH = 0.5

WIN_RATE_WEIGHT = 0.6
SCORING_WEIGHT = 0.4
PPG_NORM_MIN = 0.1
PPG_NORM_MAX = 0.9


def bayes_win_rate(team: TeamRecord) -> float:
    """Win rate with a prior equivalent to 2.5 wins in 5 games."""
    return (team.wins + 2.5) / (team.games_played + 5)


def laplace_win_rate(team: TeamRecord) -> float:
    """Win rate with add-two smoothing: (wins + 2) / (games + 4)."""
    return (team.wins + 2) / (team.games_played + 4)


def league_average_ppg(teams: Iterable[TeamRecord]) -> float:
    """
    Average points-for per game across teams that have played.

    Returns 1.0 when no team has played a game yet.
    """
    ppgs = [t.points_for / t.games_played for t in teams if t.games_played > 0]
    if not ppgs:
        return 1.0
    avg = sum(ppgs) / len(ppgs)
    # A league where every team scored zero would otherwise divide by zero
    return avg if avg > 0 else 1.0


def blended_strength(team: TeamRecord, league_ppg: float) -> float:
    """
    Blend of smoothed win rate and relative scoring volume.

    Teams without a game played get a neutral scoring signal of 0.5.
    """
    if team.games_played > 0:
        team_ppg = team.points_for / team.games_played
        ppg_norm = (team_ppg / league_ppg) * 0.5
    else:
        ppg_norm = 0.5
    ppg_norm = min(max(ppg_norm, PPG_NORM_MIN), PPG_NORM_MAX)

    return WIN_RATE_WEIGHT * bayes_win_rate(team) + SCORING_WEIGHT * ppg_norm


def _blended_strengths(teams: Sequence[TeamRecord]) -> Dict[str, float]:
    league_ppg = league_average_ppg(teams)
    return {t.id: blended_strength(t, league_ppg) for t in teams}


def _laplace_strengths(teams: Sequence[TeamRecord]) -> Dict[str, float]:
    return {t.id: laplace_win_rate(t) for t in teams}


STRENGTH_MODELS: Dict[str, Callable[[Sequence[TeamRecord]], Dict[str, float]]] = {
    "blended": _blended_strengths,
    "laplace": _laplace_strengths,
}


def calculate_strengths(
    teams: Sequence[TeamRecord],
    model: str = "blended"
) -> Dict[str, float]:
    """
    Compute a strength in (0, 1) for every team.

    Args:
        teams: Current standings
        model: ``"blended"`` or ``"laplace"``

    Returns:
        Dict mapping team_id -> strength

    Raises:
        ValueError: If the model name is unknown
    """
    try:
        strength_fn = STRENGTH_MODELS[model]
    except KeyError:
        supported = ", ".join(sorted(STRENGTH_MODELS))
        raise ValueError(f"Unknown strength model: {model}. Supported: {supported}")
    return strength_fn(teams)


def get_strength(strengths: Dict[str, float], team_id: str) -> float:
    """Look up a team's strength, falling back to neutral for unknown teams."""
    strength = strengths.get(team_id)
    if strength is None:
        logger.debug("No strength for team %s, using neutral %.1f", team_id, NEUTRAL_STRENGTH)
        return NEUTRAL_STRENGTH
    return strength


def win_probability(strength1: float, strength2: float) -> float:
    """Probability that side 1 beats side 2."""
    total = strength1 + strength2
    if total <= 0:
        return 0.5
    return strength1 / total


def simulate_match(strength1: float, strength2: float, rng: random.Random) -> bool:
    """Draw one game. Returns True if side 1 wins."""
    return rng.random() < win_probability(strength1, strength2)
