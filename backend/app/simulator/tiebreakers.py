"""
Final standings ordering for a simulated season.

Order:
1. Wins (descending)
2. Points-for (descending)
3. Random jitter, drawn fresh each trial, so exact points-for ties resolve
   differently across trials instead of always in input order
"""

import random
from typing import List, Sequence


DEFAULT_JITTER = 0.01


def draw_jitter(count: int, rng: random.Random, jitter: float = DEFAULT_JITTER) -> List[float]:
    """Draw one tie-break value in [0, jitter) per team. Zero jitter disables it."""
    if jitter <= 0:
        return [0.0] * count
    return [rng.random() * jitter for _ in range(count)]


def order_standings(
    wins: Sequence[int],
    points_for: Sequence[float],
    jitter: Sequence[float]
) -> List[int]:
    """
    Order team positions from first to last place.

    The jitter is a separate final key rather than an offset on points-for,
    so it can only separate teams whose wins and points-for are identical.
    Fully identical keys keep input order.

    Args:
        wins: Simulated wins by team position
        points_for: Points-for by team position
        jitter: Tie-break draws by team position

    Returns:
        Team positions, best first
    """
    return sorted(
        range(len(wins)),
        key=lambda i: (wins[i], points_for[i], jitter[i]),
        reverse=True
    )
