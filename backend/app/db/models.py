"""
SQLAlchemy database models.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import String, Integer, DateTime, Text, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class SimulationTask(Base):
    """Deferred scenario pass for a simulation run."""

    __tablename__ = "simulation_tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID
    league_id: Mapped[str] = mapped_column(String(100), nullable=False)
    current_week: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    results_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc)
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    __table_args__ = (
        Index("ix_simulation_tasks_status", "status"),
    )

    def __repr__(self) -> str:
        return f"<SimulationTask(id={self.id}, league_id={self.league_id}, status={self.status})>"
