"""
Shared utilities for QUILL.

Common functionality used across contexts:
- Logging setup and export event log
- Configuration loading
- Text helpers
- PDF inspection
"""

from quill.utils.config import get_settings, load_settings
from quill.utils.timestamp import now, now_exact, today

__all__ = ["get_settings", "load_settings", "now", "now_exact", "today"]
