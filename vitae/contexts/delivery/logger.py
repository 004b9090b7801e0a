"""
Delivery context logger.

Provides logging interface for the HTTP layer with automatic [api] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[api]"


def setup_api_logger(log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    Setup logger for the API process.

    Args:
        log_dir: Directory for this server session (console only when None)

    Returns:
        Path to log file, if any
    """
    return _setup_logger(context_name="api", log_dir=log_dir, extra_provenance={"Service": "vitae-api"})


def _log_info(message: str) -> None:
    """Log info message with [api] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [api] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")
