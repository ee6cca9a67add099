"""
Remaining-schedule helpers: which weeks are left, and how weekly matchups
become the flat list the engine plays out.
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import LeagueSettings, RemainingMatchup, ScheduledMatchup, WeekMatchups


logger = logging.getLogger(__name__)

DEFAULT_END_WEEK = 22

# (team_id, team_name) for one side of a published matchup
MatchupSide = Tuple[str, str]


def default_playoff_spots(num_teams: int) -> int:
    """Playoff spots to assume when the league does not report them."""
    return 4 if num_teams <= 8 else 6


def resolve_playoff_spots(settings: LeagueSettings, num_teams: int) -> int:
    if settings.playoff_spots > 0:
        return settings.playoff_spots
    return default_playoff_spots(num_teams)


def resolve_playoff_start_week(settings: LeagueSettings) -> int:
    """Reported playoff start week, or two weeks before the season ends."""
    if settings.playoff_start_week > 0:
        return settings.playoff_start_week
    end_week = settings.end_week or DEFAULT_END_WEEK
    return end_week - 2


def remaining_weeks(current_week: int, playoff_start_week: int) -> List[int]:
    """Regular season weeks strictly after the current week and before the playoffs."""
    return list(range(current_week + 1, playoff_start_week))


def parse_week_matchups(
    week: int,
    raw_matchups: Iterable[Sequence[MatchupSide]],
    start_date: Optional[str] = None,
    end_date: Optional[str] = None
) -> WeekMatchups:
    """
    Build a week's schedule from published matchups.

    Only head-to-head matchups with exactly two sides are kept.
    """
    matchups = []
    for sides in raw_matchups:
        if len(sides) != 2:
            logger.debug("Skipping week %d matchup with %d sides", week, len(sides))
            continue
        (team1_id, team1_name), (team2_id, team2_name) = sides
        matchups.append(ScheduledMatchup(
            team1_id=team1_id,
            team1_name=team1_name,
            team2_id=team2_id,
            team2_name=team2_name
        ))
    return WeekMatchups(week=week, matchups=matchups, start_date=start_date, end_date=end_date)


def flatten_remaining(weeks: Iterable[WeekMatchups]) -> List[RemainingMatchup]:
    """Flatten weekly schedules into the engine's remaining-matchup list."""
    return [m.to_remaining() for week in weeks for m in week.matchups]
