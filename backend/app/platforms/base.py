"""
Abstract base class for league data sources.

The simulator never talks to a fantasy platform directly. A data source
supplies the current standings, the league settings and the published
matchups of each future week in the simulator's own types.
"""

from abc import ABC, abstractmethod
from typing import List

from ..simulator.models import TeamRecord, LeagueSettings, WeekMatchups


class LeagueDataSource(ABC):
    """Abstract base class for league data sources."""

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Return the source name (e.g., 'static')."""
        pass

    @abstractmethod
    async def fetch_standings(self, league_id: str) -> List[TeamRecord]:
        """
        Fetch current standings.

        Args:
            league_id: The league identifier

        Returns:
            One TeamRecord per team

        Raises:
            LeagueNotFoundError: If the league doesn't exist
        """
        pass

    @abstractmethod
    async def fetch_league_settings(self, league_id: str) -> LeagueSettings:
        """
        Fetch league settings including playoff configuration.

        Args:
            league_id: The league identifier

        Returns:
            LeagueSettings (zero values for settings the platform omits)
        """
        pass

    @abstractmethod
    async def fetch_week_matchups(self, league_id: str, week: int) -> WeekMatchups:
        """
        Fetch the scheduled matchups of one week.

        An empty ``matchups`` list means the week has no games. A week whose
        schedule cannot be retrieved must raise instead.

        Args:
            league_id: The league identifier
            week: The week number

        Raises:
            ScheduleUnavailableError: If the week's schedule is not available
        """
        pass


class LeagueNotFoundError(Exception):
    """Raised when a league cannot be found."""
    pass


class ScheduleUnavailableError(Exception):
    """Raised when a week's schedule cannot be retrieved or is not yet published."""
    pass


class PlatformError(Exception):
    """Raised when there's an error communicating with the data source."""
    pass
