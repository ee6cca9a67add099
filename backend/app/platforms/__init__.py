"""
League data sources.

Provides a unified interface for fetching the standings and schedule the
simulator consumes.
"""

from .base import (
    LeagueDataSource,
    LeagueNotFoundError,
    ScheduleUnavailableError,
    PlatformError
)
from .static import StaticLeagueSource
from .loader import SimulationInputs, load_simulation_inputs


__all__ = [
    "LeagueDataSource",
    "LeagueNotFoundError",
    "ScheduleUnavailableError",
    "PlatformError",
    "StaticLeagueSource",
    "SimulationInputs",
    "load_simulation_inputs",
]
