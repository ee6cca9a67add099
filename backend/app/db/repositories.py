"""
Repository pattern for database operations.
"""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from .models import SimulationTask


class SimulationTaskRepository:
    """Repository for simulation task operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, league_id: str, current_week: int) -> SimulationTask:
        """Create a new simulation task."""
        task = SimulationTask(
            id=str(uuid4()),
            league_id=league_id,
            current_week=current_week,
            status="pending",
            progress=0
        )
        self.session.add(task)
        await self.session.flush()
        await self.session.refresh(task)
        return task

    async def get_by_id(self, task_id: str) -> Optional[SimulationTask]:
        """Get a task by ID."""
        result = await self.session.execute(
            select(SimulationTask).where(SimulationTask.id == task_id)
        )
        return result.scalar_one_or_none()

    async def update_progress(self, task: SimulationTask, progress: int) -> None:
        """Update task progress."""
        task.progress = progress
        task.status = "running"
        await self.session.flush()

    async def complete(self, task: SimulationTask, results: dict) -> None:
        """Mark task as completed with results."""
        task.status = "completed"
        task.progress = 100
        task.results_json = json.dumps(results)
        task.completed_at = datetime.now(timezone.utc)
        await self.session.flush()

    async def fail(self, task: SimulationTask, error_message: str) -> None:
        """Mark task as failed with error message."""
        task.status = "failed"
        task.error_message = error_message
        task.completed_at = datetime.now(timezone.utc)
        await self.session.flush()

    async def cleanup_old_tasks(self, hours: int = 24) -> int:
        """
        Remove tasks older than specified hours.

        Returns:
            Number of tasks deleted
        """
        cutoff = datetime.now(timezone.utc) - timedelta(hours=hours)
        result = await self.session.execute(
            delete(SimulationTask)
            .where(SimulationTask.created_at < cutoff)
        )
        return result.rowcount
