"""
Text processing utilities for naming and display.
"""

import re
from typing import Optional

WHITESPACE_RUN = re.compile(r"\s+")


def collapse_whitespace(text: str, separator: str = " ") -> str:
    """
    Replace every run of whitespace with a single separator.

    Example:
        >>> collapse_whitespace("Max   K.\\tSilva", "-")
        'Max-K.-Silva'
    """
    return WHITESPACE_RUN.sub(separator, text)


def slugify_name(full_name: Optional[str]) -> str:
    """
    Build a filename slug from a person's name.

    Lower-cases the name and collapses whitespace runs into single hyphens.
    Punctuation is kept as typed, so "Max K. Silva" becomes "max-k.-silva".
    Surrounding whitespace is dropped rather than turned into hyphens.

    Returns:
        Slug string (empty if the name is blank)
    """
    if not full_name:
        return ""
    return collapse_whitespace(full_name.strip(), "-").lower()
