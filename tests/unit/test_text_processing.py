"""Unit tests for name slugs and export file names."""

import pytest

from quill.contexts.rendering.pipeline import export_filename
from quill.utils.text_processing import collapse_whitespace, slugify_name


@pytest.mark.unit
@pytest.mark.parametrize(
    "full_name,expected",
    [
        ("Max K. Silva", "max-k.-silva"),
        ("Ana   Maria\tSouza", "ana-maria-souza"),
        ("  João Pedro  ", "joão-pedro"),
        ("Zé", "zé"),
        ("", ""),
        ("   ", ""),
        (None, ""),
    ],
)
def test_slugify_name(full_name, expected):
    assert slugify_name(full_name) == expected


@pytest.mark.unit
def test_export_filename():
    assert export_filename("Max K. Silva") == "curriculo-max-k.-silva.pdf"
    assert export_filename("Max K. Silva", prefix="resume") == "resume-max-k.-silva.pdf"


@pytest.mark.unit
@pytest.mark.parametrize("full_name", ["", "  ", None])
def test_export_filename_without_name(full_name):
    assert export_filename(full_name) == "curriculo.pdf"


@pytest.mark.unit
def test_collapse_whitespace():
    assert collapse_whitespace("a  b\n\nc") == "a b c"
    assert collapse_whitespace("a  b", "_") == "a_b"
