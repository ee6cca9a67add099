"""
Core configuration and logging setup.
"""

from .config import (
    LOG_LEVEL,
    CORS_ORIGINS,
    BASELINE_TRIALS,
    SCENARIO_TRIALS,
    TIEBREAK_JITTER,
    SCENARIO_STRENGTH_MODEL
)
from .logging_config import setup_logging

__all__ = [
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "BASELINE_TRIALS",
    "SCENARIO_TRIALS",
    "TIEBREAK_JITTER",
    "SCENARIO_STRENGTH_MODEL",
    "setup_logging",
]
