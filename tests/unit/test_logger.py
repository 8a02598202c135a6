"""Unit tests for logger setup."""

import pytest
from loguru import logger

from quill.contexts.rendering.logger import _log_debug, setup_rendering_logger


@pytest.fixture
def reset_logger():
    yield
    logger.remove()


@pytest.mark.unit
def test_setup_rendering_logger(tmp_path, reset_logger):
    """Test the log file gets the provenance header and prefixed debug messages."""
    log_dir = tmp_path / "export_20261017_120000"

    log_file = setup_rendering_logger(log_dir, rasterizer="playwright")
    _log_debug("Surface rendered")
    logger.complete()

    assert log_file == log_dir / "render.log"
    content = log_file.read_text()
    assert "Rasterizer: playwright" in content
    assert "Working directory:" in content
    assert "[render] Surface rendered" in content
