"""
Settings loading for QUILL.

Defaults ship in quill/config/settings.yaml. A user override file can be
supplied through QUILL_SETTINGS_PATH (or passed explicitly); it is merged on
top of the defaults, so it only needs the keys it changes.

Examples:
    >>> settings = load_settings()
    >>> settings.export.upscale
    4
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "config" / "settings.yaml"


def load_settings(override_path: Optional[Path] = None) -> DictConfig:
    """
    Load default settings, merged with an optional override YAML.

    Args:
        override_path: YAML file with overrides (default: QUILL_SETTINGS_PATH env, if set)

    Returns:
        Read-only merged DictConfig

    Raises:
        FileNotFoundError: If the override file does not exist
    """
    if override_path is None and os.getenv("QUILL_SETTINGS_PATH"):
        override_path = Path(os.getenv("QUILL_SETTINGS_PATH"))

    settings = OmegaConf.load(DEFAULT_SETTINGS_PATH)

    if override_path is not None:
        override_path = Path(override_path)
        if not override_path.exists():
            raise FileNotFoundError(f"Settings override not found: {override_path}")
        settings = OmegaConf.merge(settings, OmegaConf.load(override_path))

    OmegaConf.set_readonly(settings, True)
    return settings


@lru_cache(maxsize=1)
def get_settings() -> DictConfig:
    """Process-wide settings, loaded once."""
    return load_settings()
