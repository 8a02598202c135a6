"""Unit tests for section reordering."""

import pytest

from quill.contexts.editing.exceptions import ReorderError
from quill.contexts.editing.reordering import DragResult, apply_drag, move_section

SECTIONS = ("obj", "edu", "qual", "lang", "courses")


@pytest.mark.unit
@pytest.mark.parametrize(
    "source,destination,expected",
    [
        (0, 2, ("edu", "qual", "obj", "lang", "courses")),
        (4, 0, ("courses", "obj", "edu", "qual", "lang")),
        (1, 1, SECTIONS),
        (3, 4, ("obj", "edu", "qual", "courses", "lang")),
    ],
)
def test_move_section(source, destination, expected):
    assert move_section(SECTIONS, source, destination) == expected


@pytest.mark.unit
def test_move_section_without_destination_is_identity():
    assert move_section(SECTIONS, 2, None) == SECTIONS


@pytest.mark.unit
def test_every_move_is_a_single_relocation():
    """Test each (source, destination) pair moves one entry and keeps the rest in order."""
    for source in range(len(SECTIONS)):
        for destination in range(len(SECTIONS)):
            result = move_section(SECTIONS, source, destination)

            assert sorted(result) == sorted(SECTIONS)
            assert result[destination] == SECTIONS[source]
            rest_before = [s for s in SECTIONS if s != SECTIONS[source]]
            rest_after = [s for s in result if s != SECTIONS[source]]
            assert rest_after == rest_before


@pytest.mark.unit
@pytest.mark.parametrize("source,destination", [(5, 0), (-1, 0), (0, 5), (0, -1)])
def test_out_of_range_indices_rejected(source, destination):
    original = list(SECTIONS)

    with pytest.raises(ReorderError) as exc_info:
        move_section(original, source, destination)

    assert exc_info.value.source_index == source
    assert exc_info.value.destination_index == destination
    assert original == list(SECTIONS)


@pytest.mark.unit
def test_drag_result_cancelled():
    assert DragResult(source_index=1).cancelled
    assert not DragResult(source_index=1, destination_index=0).cancelled


@pytest.mark.unit
def test_apply_drag():
    assert apply_drag(SECTIONS, DragResult(4, 0))[0] == "courses"
    assert apply_drag(SECTIONS, DragResult(4)) == SECTIONS
