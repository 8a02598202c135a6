"""
PDF encoding of rasters.

Places a raster on A4 pages: the image spans the full page width (210 mm)
and its height follows from its aspect ratio.

By default a single page is written. Content taller than one page runs off
the bottom of that page and is clipped; EncodedPDF.clipped reports it.
With paginate=True the image is instead continued on as many further pages
as it needs, each page showing the next page-height slice.
"""

import math
from dataclasses import dataclass
from io import BytesIO

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from quill.contexts.rendering.exceptions import EncodeError
from quill.contexts.rendering.rasterizer import Raster
from quill.utils.config import get_settings

# Rounding slack when deciding whether the image overflows a page
OVERFLOW_TOLERANCE_MM = 0.01


@dataclass(frozen=True)
class PageSpec:
    width_mm: float = 210.0
    height_mm: float = 297.0

    @classmethod
    def from_settings(cls) -> "PageSpec":
        page = get_settings().export.page
        return cls(width_mm=float(page.width_mm), height_mm=float(page.height_mm))


@dataclass(frozen=True)
class EncodedPDF:
    """
    Attributes:
        data: PDF bytes
        page_count: Pages written
        image_height_mm: Height of the placed image
        clipped: Whether part of the image fell below the last page
    """

    data: bytes
    page_count: int
    image_height_mm: float
    clipped: bool


def encode_pdf(raster: Raster, page: PageSpec = None, paginate: bool = False) -> EncodedPDF:
    """
    Encode a raster as an image-based PDF.

    Args:
        raster: Captured image
        page: Physical page size (default: from settings)
        paginate: Continue tall images on extra pages instead of clipping

    Returns:
        EncodedPDF

    Raises:
        EncodeError: If the raster is empty or the PDF cannot be produced
    """
    page = page or PageSpec.from_settings()

    if raster.width <= 0 or raster.height <= 0:
        raise EncodeError(f"Raster has no area ({raster.width}x{raster.height})")

    image_height_mm = page.width_mm / raster.aspect_ratio
    pages_needed = max(1, math.ceil((image_height_mm - OVERFLOW_TOLERANCE_MM) / page.height_mm))
    page_total = pages_needed if paginate else 1

    buffer = BytesIO()
    try:
        pdf = canvas.Canvas(buffer, pagesize=(page.width_mm * mm, page.height_mm * mm))
        image = ImageReader(BytesIO(raster.png))
        for index in range(page_total):
            # Image top sits at the page top, shifted up one page height per page
            bottom_mm = page.height_mm - image_height_mm + index * page.height_mm
            pdf.drawImage(
                image,
                0,
                bottom_mm * mm,
                width=page.width_mm * mm,
                height=image_height_mm * mm,
            )
            pdf.showPage()
        pdf.save()
    except Exception as e:
        raise EncodeError("PDF encoding failed", e) from e

    return EncodedPDF(
        data=buffer.getvalue(),
        page_count=page_total,
        image_height_mm=image_height_mm,
        clipped=pages_needed > page_total,
    )
