"""
In-memory league data source.

Serves standings, settings and weekly matchups that the caller already has,
e.g. the payload of an API request.
"""

from typing import Dict, Iterable, List

from .base import LeagueDataSource, LeagueNotFoundError, ScheduleUnavailableError
from ..simulator.models import TeamRecord, LeagueSettings, WeekMatchups


class StaticLeagueSource(LeagueDataSource):
    """League data source backed by pre-loaded data for a single league."""

    def __init__(
        self,
        league_id: str,
        standings: Iterable[TeamRecord],
        settings: LeagueSettings,
        weeks: Iterable[WeekMatchups] = ()
    ):
        self.league_id = league_id
        self._standings = list(standings)
        self._settings = settings
        self._weeks: Dict[int, WeekMatchups] = {w.week: w for w in weeks}

    @property
    def platform_name(self) -> str:
        return "static"

    def _check_league(self, league_id: str) -> None:
        if league_id != self.league_id:
            raise LeagueNotFoundError(f"League {league_id} not found")

    async def fetch_standings(self, league_id: str) -> List[TeamRecord]:
        self._check_league(league_id)
        return list(self._standings)

    async def fetch_league_settings(self, league_id: str) -> LeagueSettings:
        self._check_league(league_id)
        return self._settings

    async def fetch_week_matchups(self, league_id: str, week: int) -> WeekMatchups:
        self._check_league(league_id)
        try:
            return self._weeks[week]
        except KeyError:
            raise ScheduleUnavailableError(f"No schedule provided for week {week}")
