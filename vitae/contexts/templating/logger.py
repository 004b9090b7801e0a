"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Optional[Path] = None, phase: str = "compose") -> Optional[Path]:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session (console only when None)
        phase: Phase name for provenance ("compose" or "preview")

    Returns:
        Path to log file, if any

    Example:
        from vitae.contexts.templating.logger import setup_templating_logger, _log_debug

        log_file = setup_templating_logger(log_dir, phase="preview")
        _log_debug("Composing preview...")
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [template] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
