"""
Logger setup for Tier 1 (detailed) logging.

One loguru configuration per export session: a full DEBUG log file in the
session directory plus a colorized console stream. Context prefixes
([edit], [template], [render]) come from the wrappers in
contexts/{context}/logger.py, never from here.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import quill

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <7} | {message}"
CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <7}</level> | <level>{message}</level>"

# Console colors per level; loguru defaults apply to the rest
LEVEL_COLORS = {
    "DEBUG": "<dim>",
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, object]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route all log output to <log_dir>/<context_name>.log and the console.

    Existing sinks (including loguru's default stderr sink) are removed, so
    calling this again starts a fresh session.

    Args:
        context_name: Log file stem (e.g., "render")
        log_dir: Session directory, created if missing
        extra_provenance: Additional key-value pairs for the provenance header
        level_colors: Console color overrides (e.g., {"INFO": "<cyan>"})
        console_level: Lowest level shown on the console ("DEBUG" for verbose runs)

    Returns:
        Path to log file

    Example:
        from quill.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/export_20261017_123456"),
            extra_provenance={"Rasterizer": "playwright"},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict[str, object]] = None) -> None:
    """
    Write the session header: how QUILL was invoked and with which settings.

    Args:
        extra_context: Additional key-value pairs (rasterizer, template, ...)
    """
    provenance = {
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        "QUILL": quill.__version__,
        "Settings override": os.getenv("QUILL_SETTINGS_PATH") or "none",
        **(extra_context or {}),
    }

    logger.info("=" * 80)
    for key, value in provenance.items():
        logger.info(f"{key}: {value}")
    logger.info("=" * 80)
