"""
Section Reordering Engine

Turns a completed drag gesture into a new section order. The drag source is
a black box that reports, on gesture completion, the index the section was
picked up from and the index it was dropped on (None when the gesture was
cancelled or dropped outside the list).

Only sections are reorderable; items inside a section are appended and
removed, never dragged.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, TypeVar

from quill.contexts.editing.exceptions import ReorderError

T = TypeVar("T")


@dataclass(frozen=True)
class DragResult:
    """
    Outcome of one drag gesture.

    Attributes:
        source_index: Position the section was picked up from
        destination_index: Position it was dropped on, or None if cancelled
    """

    source_index: int
    destination_index: Optional[int] = None

    @property
    def cancelled(self) -> bool:
        return self.destination_index is None


def move_section(
    sections: Sequence[T], source_index: int, destination_index: Optional[int]
) -> Tuple[T, ...]:
    """
    Relocate one entry, keeping every other entry in its relative order.

    Both indices are validated before anything is moved, so a bad request
    never produces a partially applied order.

    Args:
        sections: Current order
        source_index: Index of the entry to move
        destination_index: Index the entry should end up at, or None for a no-op

    Returns:
        New tuple with the same entries

    Raises:
        ReorderError: If either index is out of range

    Example:
        >>> move_section(("a", "b", "c"), 2, 0)
        ('c', 'a', 'b')
    """
    current = tuple(sections)

    if destination_index is None:
        return current

    size = len(current)
    if not 0 <= source_index < size:
        raise ReorderError("Source index out of range", source_index, destination_index)
    if not 0 <= destination_index < size:
        raise ReorderError("Destination index out of range", source_index, destination_index)

    reordered = list(current)
    moved = reordered.pop(source_index)
    reordered.insert(destination_index, moved)
    return tuple(reordered)


def apply_drag(sections: Sequence[T], result: DragResult) -> Tuple[T, ...]:
    """Apply a DragResult to a sequence (identity when the drag was cancelled)."""
    return move_section(sections, result.source_index, result.destination_index)
