"""
PDF inspection helpers.

Helper functions:
    page_count: Quick page count without full extraction.
    page_size_mm: Media box of a page, in millimetres.
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Tuple, Union

from PyPDF2 import PdfReader

POINTS_PER_MM = 72 / 25.4


def _reader(source: Union[Path, bytes]) -> PdfReader:
    if isinstance(source, (bytes, bytearray)):
        return PdfReader(BytesIO(source))
    return PdfReader(str(source))


def page_count(source: Union[Path, bytes]) -> Optional[int]:
    """Get page count from a PDF file or PDF bytes, or None if unreadable."""
    try:
        return len(_reader(source).pages)
    except Exception:
        return None


def page_size_mm(source: Union[Path, bytes], page_index: int = 0) -> Tuple[float, float]:
    """
    Width and height of one page in millimetres.

    Raises:
        IndexError: If the page does not exist
    """
    page = _reader(source).pages[page_index]
    width = float(page.mediabox.width) / POINTS_PER_MM
    height = float(page.mediabox.height) / POINTS_PER_MM
    return width, height
