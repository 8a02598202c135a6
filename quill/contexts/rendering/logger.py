"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from quill.utils.config import get_settings
from quill.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, rasterizer: str, verbose: bool = False) -> Path:
    """
    Setup logger for an export session.

    The provenance header records the rasterizer and the export settings in
    effect, so a log file alone explains how its PDF was produced.

    Args:
        log_dir: Directory for this export session
        rasterizer: Name of the rasterizer in use
        verbose: Also show DEBUG messages on the console

    Returns:
        Path to log file

    Example:
        from quill.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, rasterizer="playwright")
        _log_info("Starting export...")
    """
    export_settings = get_settings().export
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={
            "Rasterizer": rasterizer,
            "Upscale": f"{export_settings.upscale}x",
            "Page": f"{export_settings.page.width_mm}x{export_settings.page.height_mm}mm",
        },
        console_level="DEBUG" if verbose else "INFO",
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


def log_export_start(export_id: str, filename: str, template: str, upscale: int) -> None:
    """Log start of an export run."""
    _log_info(f"Starting export {export_id}: {filename}")
    _log_debug(f"  Template: {template}")
    _log_debug(f"  Upscale: {upscale}x")


def log_export_result(result, elapsed_time: float) -> None:
    """
    Log the outcome of an export run.

    Args:
        result: ExportResult from ExportPipeline.export()
        elapsed_time: Time taken
    """
    if result.success:
        _log_success(f"{result.filename}: export succeeded ({elapsed_time:.2f}s)")
        _log_info(f"  PDF: {result.pdf_path}")
        _log_debug(f"  Pages: {result.page_count}")
        if result.clipped:
            _log_warning("  Content is taller than one page and was clipped at the page bottom")
    else:
        failed_in = result.failed_in.value if result.failed_in else "unknown"
        _log_error(f"{result.filename}: export failed while {failed_in} ({elapsed_time:.2f}s)")
        for i, err in enumerate(result.errors, 1):
            _log_error(f"  Error {i}: {err}")
        _log_debug(f"  States: {' -> '.join(s.value for s in result.states)}")
