"""
Logging setup for the API process.
"""

import logging


def setup_logging(log_level: str = "INFO") -> None:
    """Configure console logging for the simulator service."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return  # Already configured (e.g. by uvicorn or pytest)

    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root_logger.addHandler(handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s)", log_level)
