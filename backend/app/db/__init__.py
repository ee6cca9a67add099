"""
Database module.
"""

from .database import (
    engine,
    async_session_maker,
    get_db,
    create_tables
)
from .models import Base, SimulationTask
from .repositories import SimulationTaskRepository

__all__ = [
    # Database
    "engine",
    "async_session_maker",
    "get_db",
    "create_tables",
    # Models
    "Base",
    "SimulationTask",
    # Repositories
    "SimulationTaskRepository",
]
