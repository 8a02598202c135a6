"""Unit tests for raster handling and PDF encoding."""

from io import BytesIO

import pytest
from PIL import Image

from quill.contexts.rendering.encoder import PageSpec, encode_pdf
from quill.contexts.rendering.exceptions import EncodeError, RasterizeError
from quill.contexts.rendering.rasterizer import Raster
from quill.utils.pdf_processing import page_count, page_size_mm


def _png(width: int, height: int) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.mark.unit
def test_raster_from_png():
    raster = Raster.from_png(_png(84, 120), scale=4)

    assert (raster.width, raster.height) == (84, 120)
    assert raster.scale == 4
    assert raster.aspect_ratio == pytest.approx(0.7)


@pytest.mark.unit
def test_raster_from_invalid_bytes():
    with pytest.raises(RasterizeError):
        Raster.from_png(b"not an image")


@pytest.mark.unit
def test_page_spec_from_settings():
    assert PageSpec.from_settings() == PageSpec(210.0, 297.0)


@pytest.mark.unit
def test_a4_raster_fills_one_page():
    encoded = encode_pdf(Raster.from_png(_png(210, 297)))

    assert encoded.page_count == 1
    assert not encoded.clipped
    assert encoded.image_height_mm == pytest.approx(297.0)
    assert page_count(encoded.data) == 1

    width, height = page_size_mm(encoded.data)
    assert width == pytest.approx(210.0, abs=0.1)
    assert height == pytest.approx(297.0, abs=0.1)


@pytest.mark.unit
def test_short_raster_stays_on_one_page():
    encoded = encode_pdf(Raster.from_png(_png(210, 100)))
    assert encoded.page_count == 1
    assert not encoded.clipped
    assert encoded.image_height_mm == pytest.approx(100.0)


@pytest.mark.unit
def test_tall_raster_clipped_by_default():
    """Test content taller than a page is cut off on a single page."""
    encoded = encode_pdf(Raster.from_png(_png(210, 594)))

    assert encoded.page_count == 1
    assert encoded.clipped
    assert page_count(encoded.data) == 1


@pytest.mark.unit
def test_tall_raster_paginated():
    encoded = encode_pdf(Raster.from_png(_png(210, 700)), paginate=True)

    assert encoded.page_count == 3
    assert not encoded.clipped
    assert page_count(encoded.data) == 3


@pytest.mark.unit
def test_custom_page_size():
    encoded = encode_pdf(Raster.from_png(_png(100, 100)), page=PageSpec(width_mm=100, height_mm=150))

    width, height = page_size_mm(encoded.data)
    assert width == pytest.approx(100.0, abs=0.1)
    assert height == pytest.approx(150.0, abs=0.1)


@pytest.mark.unit
def test_empty_raster_rejected():
    with pytest.raises(EncodeError):
        encode_pdf(Raster(png=b"", width=0, height=10))


@pytest.mark.unit
def test_unreadable_pdf_page_count():
    assert page_count(b"%PDF-garbage") is None
