"""Unit tests for content scaling."""

import pytest

from quill.contexts.templating.scaling import PAGE_HEIGHT_MM, ScaleTransform


@pytest.mark.unit
def test_unit_scale_is_identity():
    assert ScaleTransform.from_scale(1.0) == ScaleTransform.identity()
    assert ScaleTransform.identity().as_style() == {
        "width": "100%",
        "transform": "scale(1)",
        "transform-origin": "top left",
        "min-height": "297mm",
    }


@pytest.mark.unit
def test_shrinking_widens_layout_box():
    transform = ScaleTransform.from_scale(0.8)

    assert transform.width_percent == pytest.approx(125.0)
    assert transform.min_height_mm == pytest.approx(PAGE_HEIGHT_MM / 0.8)
    assert transform.as_style()["width"] == "125%"
    assert transform.as_style()["transform"] == "scale(0.8)"
    assert transform.as_style()["min-height"] == "371.25mm"


@pytest.mark.unit
@pytest.mark.parametrize("scale", [0.75, 0.8, 0.95, 1.0, 1.1, 1.3])
def test_visible_size_is_one_page(scale):
    """Test the scaled content always covers exactly the page width and height."""
    transform = ScaleTransform.from_scale(scale)
    assert transform.visible_width_percent == pytest.approx(100.0)
    assert transform.visible_min_height_mm == pytest.approx(PAGE_HEIGHT_MM)


@pytest.mark.unit
def test_custom_page_height():
    assert ScaleTransform.from_scale(0.5, page_height_mm=100).min_height_mm == pytest.approx(200)


@pytest.mark.unit
@pytest.mark.parametrize("scale", [0, -0.5])
def test_non_positive_scale_rejected(scale):
    with pytest.raises(ValueError):
        ScaleTransform.from_scale(scale)
