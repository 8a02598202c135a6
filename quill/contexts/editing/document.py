"""
Resume Document Structure

Defines the canonical in-memory resume document and every operation that
edits it. Documents are immutable: each operation returns a new snapshot
and leaves the receiver untouched, so a session only ever swaps whole
documents.

Sections and items are identified by id. Positions are transient (they move
with every reorder), so removal and updates always go through ids.
"""

import math
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Callable, Iterable, Optional, Sequence, Tuple, Union

from quill.contexts.editing.exceptions import (
    DuplicateIdError,
    InvalidFieldError,
    InvalidTemplateError,
    ReorderError,
)
from quill.contexts.editing.ids import new_id
from quill.contexts.editing.logger import log_missing_target, log_scale_clamped
from quill.contexts.editing.reordering import DragResult, apply_drag
from quill.utils.config import get_settings

_document_settings = get_settings().document

CONTENT_SCALE_MIN = float(_document_settings.content_scale.min)
CONTENT_SCALE_MAX = float(_document_settings.content_scale.max)
DEFAULT_PRIMARY_COLOR = str(_document_settings.default_color)
NEW_SECTION_TITLE = str(_document_settings.new_section_title)


class TemplateType(str, Enum):
    """Closed set of visual templates."""

    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"


class SectionType(str, Enum):
    """Kind of section; decides which item fields matter and how it renders."""

    TEXT = "text"
    LIST = "list"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"


NEW_SECTION_TYPE = SectionType(_document_settings.new_section_type)


def coerce_template(value: Union[TemplateType, str]) -> TemplateType:
    """
    Convert a template name to TemplateType.

    Raises:
        InvalidTemplateError: If the value is not a known template
    """
    try:
        return TemplateType(value)
    except ValueError:
        raise InvalidTemplateError(value, [t.value for t in TemplateType]) from None


def coerce_section_type(value: Union[SectionType, str]) -> SectionType:
    """
    Convert a section type name to SectionType.

    Raises:
        InvalidFieldError: If the value is not a known section type
    """
    try:
        return SectionType(value)
    except ValueError:
        raise InvalidFieldError(value, [t.value for t in SectionType], record="section type") from None


def clamp_content_scale(scale: float) -> float:
    """
    Bring a content scale into [CONTENT_SCALE_MIN, CONTENT_SCALE_MAX].

    Out-of-range values are clamped (and logged), not rejected. Values that
    are not positive finite numbers cannot be clamped meaningfully and raise.

    Raises:
        ValueError: If scale is not a positive finite number
    """
    if isinstance(scale, bool) or not isinstance(scale, (int, float)):
        raise ValueError(f"Content scale must be a number, got {scale!r}")
    if not math.isfinite(scale) or scale <= 0:
        raise ValueError(f"Content scale must be a positive finite number, got {scale!r}")

    clamped = min(max(float(scale), CONTENT_SCALE_MIN), CONTENT_SCALE_MAX)
    if clamped != scale:
        log_scale_clamped(scale, clamped)
    return clamped


def _check_unique_ids(entries: Iterable, container: str) -> None:
    seen = set()
    for entry in entries:
        if entry.id in seen:
            raise DuplicateIdError(f"Duplicate id {entry.id!r} in {container}")
        seen.add(entry.id)


@dataclass(frozen=True)
class PersonalInfo:
    """
    Identity and contact block shown at the top of every template.

    Empty strings and None both mean "absent"; templates omit absent fields,
    except the name which always renders (possibly as a placeholder).
    """

    full_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: Optional[str] = None
    photo_url: Optional[str] = None
    summary: str = ""


PERSONAL_FIELDS = tuple(f.name for f in fields(PersonalInfo))


@dataclass(frozen=True)
class SectionItem:
    """
    One entry in a section (a job, a degree, a skill line).

    Attributes:
        id: Stable identifier, unique within the parent section
        title: Company or school; fallback skill text for skills sections
        subtitle: Role or degree
        date: Free-form period, e.g. "2020 - 2022"
        description: Details; the skill text for skills sections
    """

    id: str
    title: str = ""
    subtitle: str = ""
    date: str = ""
    description: str = ""

    @property
    def skill_label(self) -> str:
        """Text a skills section shows for this item: description, else title."""
        return self.description or self.title


ITEM_FIELDS = ("title", "subtitle", "date", "description")


@dataclass(frozen=True)
class Section:
    """
    Named, ordered, typed group of items.

    Attributes:
        id: Stable identifier, unique within the document and never reused
        title: User-editable heading
        type: Section kind (see SectionType)
        items: Items in display order
        is_visible: Hidden sections are kept in the document but not rendered
    """

    id: str
    title: str = ""
    type: SectionType = SectionType.EXPERIENCE
    items: Tuple[SectionItem, ...] = ()
    is_visible: bool = True

    def __post_init__(self):
        object.__setattr__(self, "type", coerce_section_type(self.type))
        object.__setattr__(self, "items", tuple(self.items))
        _check_unique_ids(self.items, f"section {self.id!r}")

    def item(self, item_id: str) -> Optional[SectionItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def with_new_item(self) -> "Section":
        fresh = SectionItem(id=new_id(i.id for i in self.items))
        return replace(self, items=self.items + (fresh,))

    def with_item_field(self, item_id: str, field_name: str, value: str) -> "Section":
        if field_name not in ITEM_FIELDS:
            raise InvalidFieldError(field_name, ITEM_FIELDS, record="item")
        items = tuple(
            replace(i, **{field_name: value}) if i.id == item_id else i for i in self.items
        )
        return replace(self, items=items)

    def without_item(self, item_id: str) -> "Section":
        return replace(self, items=tuple(i for i in self.items if i.id != item_id))


@dataclass(frozen=True)
class ResumeDocument:
    """
    Complete resume being edited in a session.

    Attributes:
        personal_info: Identity, contact, photo reference and summary
        sections: Sections in display order
        template: Active visual template
        primary_color: Accent color used by the templates
        content_scale: Density factor, always within the allowed range
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    sections: Tuple[Section, ...] = ()
    template: TemplateType = TemplateType.MODERN
    primary_color: str = DEFAULT_PRIMARY_COLOR
    content_scale: float = 1.0

    def __post_init__(self):
        object.__setattr__(self, "template", coerce_template(self.template))
        object.__setattr__(self, "sections", tuple(self.sections))
        object.__setattr__(self, "content_scale", clamp_content_scale(self.content_scale))
        _check_unique_ids(self.sections, "document")

    # Queries

    def section(self, section_id: str) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)

    def item(self, section_id: str, item_id: str) -> Optional[SectionItem]:
        section = self.section(section_id)
        return section.item(item_id) if section else None

    @property
    def visible_sections(self) -> Tuple[Section, ...]:
        return tuple(s for s in self.sections if s.is_visible)

    # Document-level operations

    def set_personal_field(self, field_name: str, value: Optional[str]) -> "ResumeDocument":
        if field_name not in PERSONAL_FIELDS:
            raise InvalidFieldError(field_name, PERSONAL_FIELDS, record="personal info")
        return replace(self, personal_info=replace(self.personal_info, **{field_name: value}))

    def set_template(self, template: Union[TemplateType, str]) -> "ResumeDocument":
        return replace(self, template=coerce_template(template))

    def set_primary_color(self, color: str) -> "ResumeDocument":
        return replace(self, primary_color=color)

    def set_content_scale(self, scale: float) -> "ResumeDocument":
        return replace(self, content_scale=clamp_content_scale(scale))

    # Section-level operations

    def add_section(
        self,
        title: str = NEW_SECTION_TITLE,
        section_type: Union[SectionType, str] = NEW_SECTION_TYPE,
    ) -> "ResumeDocument":
        """Append an empty visible section with a fresh id."""
        section = Section(
            id=new_id(s.id for s in self.sections),
            title=title,
            type=section_type,
        )
        return replace(self, sections=self.sections + (section,))

    def remove_section(self, section_id: str) -> "ResumeDocument":
        """Drop the section with this id; no-op if it is not there."""
        if self.section(section_id) is None:
            log_missing_target("remove_section", section_id)
            return self
        return replace(self, sections=tuple(s for s in self.sections if s.id != section_id))

    def update_section(self, section_id: str, new_section: Section) -> "ResumeDocument":
        """Replace a section wholesale. The replacement keeps the original id."""
        return self._map_section(
            "update_section", section_id, lambda _: replace(new_section, id=section_id)
        )

    def rename_section(self, section_id: str, title: str) -> "ResumeDocument":
        return self._map_section("rename_section", section_id, lambda s: replace(s, title=title))

    def set_section_type(
        self, section_id: str, section_type: Union[SectionType, str]
    ) -> "ResumeDocument":
        section_type = coerce_section_type(section_type)
        return self._map_section(
            "set_section_type", section_id, lambda s: replace(s, type=section_type)
        )

    def set_section_visibility(self, section_id: str, visible: bool) -> "ResumeDocument":
        return self._map_section(
            "set_section_visibility", section_id, lambda s: replace(s, is_visible=visible)
        )

    def reorder_sections(self, new_order: Sequence[Section]) -> "ResumeDocument":
        """
        Adopt a new section order.

        Only the ids of new_order are used; section contents always come from
        this document.

        Raises:
            ReorderError: If new_order is not a permutation of the current sections
        """
        new_order = tuple(new_order)
        if sorted(s.id for s in new_order) != sorted(s.id for s in self.sections):
            raise ReorderError("New order must contain exactly the current sections")
        by_id = {s.id: s for s in self.sections}
        return replace(self, sections=tuple(by_id[s.id] for s in new_order))

    def apply_drag(self, result: DragResult) -> "ResumeDocument":
        """Apply a completed drag gesture to the section order."""
        return replace(self, sections=apply_drag(self.sections, result))

    # Item-level operations

    def add_item(self, section_id: str) -> "ResumeDocument":
        """Append an empty item with a fresh id to a section."""
        return self._map_section("add_item", section_id, lambda s: s.with_new_item())

    def update_item(
        self, section_id: str, item_id: str, field_name: str, value: str
    ) -> "ResumeDocument":
        if field_name not in ITEM_FIELDS:
            raise InvalidFieldError(field_name, ITEM_FIELDS, record="item")
        if self.item(section_id, item_id) is None:
            log_missing_target("update_item", section_id, item_id)
            return self
        return self._map_section(
            "update_item", section_id, lambda s: s.with_item_field(item_id, field_name, value)
        )

    def remove_item(self, section_id: str, item_id: str) -> "ResumeDocument":
        """Drop an item by id; no-op if the section or item is not there."""
        if self.item(section_id, item_id) is None:
            log_missing_target("remove_item", section_id, item_id)
            return self
        return self._map_section("remove_item", section_id, lambda s: s.without_item(item_id))

    def _map_section(
        self, operation: str, section_id: str, change: Callable[[Section], Section]
    ) -> "ResumeDocument":
        if self.section(section_id) is None:
            log_missing_target(operation, section_id)
            return self
        sections = tuple(change(s) if s.id == section_id else s for s in self.sections)
        return replace(self, sections=sections)
