"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from loguru directly.
Sinks are configured by whichever entry point owns the session
(see quill.utils.logger.setup_logger).
"""

from loguru import logger

CONTEXT_PREFIX = "[edit]"


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_scale_clamped(requested: float, applied: float) -> None:
    """Log that a content scale outside the allowed range was clamped."""
    _log_warning(f"Content scale {requested} out of range, clamped to {applied}")


def log_missing_target(operation: str, section_id: str, item_id: str = None) -> None:
    """Log an operation that found nothing to act on (a no-op by contract)."""
    if item_id is None:
        target = f"section {section_id!r}"
    else:
        target = f"item {item_id!r} in section {section_id!r}"
    _log_debug(f"{operation}: {target} not found, nothing to do")
