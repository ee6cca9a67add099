"""
Environment-driven configuration.
"""

import os


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# CORS configuration
# In production, replace with specific frontend URL
CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")

# Simulation defaults
BASELINE_TRIALS = _get_int("SIM_BASELINE_TRIALS", 10000)
SCENARIO_TRIALS = _get_int("SIM_SCENARIO_TRIALS", 3000)
TIEBREAK_JITTER = _get_float("SIM_JITTER", 0.01)
# Unset means scenario reruns use the same model as the baseline they are compared to
SCENARIO_STRENGTH_MODEL = os.getenv("SIM_SCENARIO_STRENGTH", "").lower() or None
