"""
Gather everything a simulation run needs from a league data source.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List

from .base import LeagueDataSource
from ..simulator.models import TeamRecord, LeagueSettings, RemainingMatchup, WeekMatchups
from ..simulator.schedule import (
    resolve_playoff_spots,
    resolve_playoff_start_week,
    remaining_weeks,
    flatten_remaining
)


logger = logging.getLogger(__name__)


@dataclass
class SimulationInputs:
    """Standings and remaining schedule for one league at one point in the season."""

    league_id: str
    current_week: int
    teams: List[TeamRecord]
    settings: LeagueSettings
    playoff_spots: int
    playoff_start_week: int
    weeks: List[WeekMatchups] = field(default_factory=list)
    remaining: List[RemainingMatchup] = field(default_factory=list)


async def load_simulation_inputs(
    source: LeagueDataSource,
    league_id: str,
    current_week: int
) -> SimulationInputs:
    """
    Fetch standings, settings and every remaining regular season week.

    Weeks are fetched concurrently. A week the source cannot provide raises
    ScheduleUnavailableError rather than being treated as "no games left".

    Args:
        source: League data source
        league_id: The league identifier
        current_week: Last week already reflected in the standings

    Returns:
        SimulationInputs ready for the engine
    """
    teams, settings = await asyncio.gather(
        source.fetch_standings(league_id),
        source.fetch_league_settings(league_id)
    )

    playoff_spots = resolve_playoff_spots(settings, len(teams))
    playoff_start_week = resolve_playoff_start_week(settings)
    week_numbers = remaining_weeks(current_week, playoff_start_week)

    weeks = list(await asyncio.gather(
        *(source.fetch_week_matchups(league_id, w) for w in week_numbers)
    ))
    remaining = flatten_remaining(weeks)

    logger.info(
        "Loaded league %s from %s: %d teams, %d playoff spots, %d weeks / %d games remaining",
        league_id, source.platform_name, len(teams), playoff_spots, len(weeks), len(remaining)
    )

    return SimulationInputs(
        league_id=league_id,
        current_week=current_week,
        teams=list(teams),
        settings=settings,
        playoff_spots=playoff_spots,
        playoff_start_week=playoff_start_week,
        weeks=weeks,
        remaining=remaining
    )
