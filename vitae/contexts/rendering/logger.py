"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path] = None, strategy: str = "server") -> Optional[Path]:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this export session (console only when None)
        strategy: Export strategy recorded in the provenance header

    Returns:
        Path to log file, if any

    Example:
        from vitae.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, strategy="capture")
        _log_info("Starting export...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Strategy": strategy,
            "Render timeout (ms)": os.getenv("VITAE_RENDER_TIMEOUT_MS", "default"),
            "Browser args": os.getenv("VITAE_BROWSER_ARGS", "default"),
        },
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(title: str, template_id: Optional[str], strategy: str) -> None:
    """Log start of an export with context."""
    _log_info(f"Starting export: {title or '(untitled)'}")
    _log_debug(f"  Template: {template_id or '(default)'}")
    _log_debug(f"  Strategy: {strategy}")


def log_export_result(result, elapsed_time: float) -> None:
    """
    Log a successful export.

    Args:
        result: ExportResult from an exporter
        elapsed_time: Time taken to export, in seconds
    """
    pages = result.page_count if result.page_count is not None else "?"
    _log_success(
        f"{result.filename}: {pages} page(s), {len(result.content)} bytes "
        f"via {result.strategy.value} ({elapsed_time:.2f}s)"
    )


def log_export_failure(error, elapsed_time: float) -> None:
    """
    Log a failed export.

    Args:
        error: ExportError raised by an exporter
        elapsed_time: Time spent before failing, in seconds
    """
    _log_error(f"Export failed [{error.category.value}] after {elapsed_time:.2f}s: {error.message}")
    if error.original_error is not None:
        # Use opt(raw=True) so multi-line browser errors keep their formatting
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nORIGINAL ERROR:\n{'=' * 80}\n{error.original_error}\n"
        )
