"""
Template Projection

Maps a ResumeDocument onto the render tree of its selected template. The
three templates read the same document but lay it out differently:

- modern:  dark header (name, title, photo), contact strip, then summary and
           every section in document order under accent-colored rules
- minimal: side panel (photo, identity, contact, skills sections) next to a
           main region (summary, every other section in document order)
- classic: centered header, summary, then every section in document order;
           skills as a two-column checklist, others as date | content rows

Each template class keeps one render strategy per section type in a
dispatch table, so layout code never branches on section types inline.

Rules shared by all templates:
- hidden sections (is_visible False) are not projected
- a section without items still shows its heading
- item title and subtitle always render (blank if missing); date and
  description are left out when empty
- skills items show their description, or their title when there is none
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Type

from quill.contexts.editing.document import (
    PersonalInfo,
    ResumeDocument,
    Section,
    SectionItem,
    SectionType,
    TemplateType,
)
from quill.contexts.templating.exceptions import UnknownTemplateError
from quill.contexts.templating.logger import log_projection
from quill.contexts.templating.render_tree import RenderNode, el, text
from quill.contexts.templating.scaling import ScaleTransform
from quill.utils.config import get_settings

CONTACT_FIELDS = ("address", "phone", "email", "linkedin")

SectionRenderer = Callable[["TemplateProjection", Section, ResumeDocument], RenderNode]


@dataclass(frozen=True)
class TemplateLabels:
    """Fixed headings the templates print, and the empty-name placeholder."""

    name_placeholder: str
    modern_summary: str
    minimal_summary: str
    minimal_contact: str
    classic_summary: str

    @classmethod
    def from_settings(cls) -> "TemplateLabels":
        labels = get_settings().templates.labels
        return cls(**{name: str(labels[name]) for name in cls.__dataclass_fields__})


class TemplateProjection:
    """
    Base class for template projections.

    Subclasses set template_type, fill section_renderers (section type ->
    strategy) and default_renderer, and implement project().
    """

    template_type: TemplateType
    section_renderers: Dict[SectionType, SectionRenderer] = {}
    default_renderer: SectionRenderer

    def __init__(self, labels: TemplateLabels):
        self.labels = labels

    def project(self, document: ResumeDocument, handle: Optional[str] = None) -> RenderNode:
        raise NotImplementedError

    def render_items(self, section: Section, document: ResumeDocument) -> RenderNode:
        renderer = self.section_renderers.get(section.type, type(self).default_renderer)
        return renderer(self, section, document)

    # Building blocks shared by all templates

    def _root(self, document: ResumeDocument, handle: Optional[str], *children) -> RenderNode:
        attrs = {"id": handle} if handle else {}
        return el(
            "div",
            *children,
            role="document",
            cls=f"print-area template-{self.template_type.value}",
            data_template=self.template_type.value,
            **attrs,
        )

    def _scaled(self, document: ResumeDocument, *children, cls: str = "") -> RenderNode:
        transform = ScaleTransform.from_scale(document.content_scale)
        return el("div", *children, role="scaled-content", cls=cls, style=transform.as_style())

    def _section(self, section: Section, *children, cls: str = "") -> RenderNode:
        return el(
            "section",
            *children,
            role="section",
            cls=cls,
            data_section_id=section.id,
            data_section_type=section.type.value,
        )

    def _photo(self, info: PersonalInfo, cls: str) -> Optional[RenderNode]:
        if not info.photo_url:
            return None
        return el(
            "div",
            el("img", role="photo", src=info.photo_url, alt="Profile", crossorigin="anonymous"),
            cls=cls,
        )

    def _contacts(self, info: PersonalInfo, tag: str = "div", cls: str = "contact") -> List[RenderNode]:
        nodes = []
        for field_name in CONTACT_FIELDS:
            value = getattr(info, field_name)
            if value:
                node = text(tag, value, role="contact", cls=f"{cls} contact-{field_name}")
                node.attrs["data-field"] = field_name
                nodes.append(node)
        return nodes

    def _summary(self, info: PersonalInfo, heading: str, heading_style=None, cls: str = "") -> Optional[RenderNode]:
        if not info.summary:
            return None
        return el(
            "div",
            text("h3", heading, role="summary-heading", cls="heading", style=heading_style),
            text("p", info.summary, role="summary", cls="summary-text"),
            role="summary-block",
            cls=cls,
        )

    def _entry_fields(self, item: SectionItem) -> List[Optional[RenderNode]]:
        """Title, date, subtitle, description nodes of a structured entry."""
        return [
            el(
                "div",
                text("h4", item.title, role="item-title", cls="item-title"),
                text("span", item.date, role="item-date", cls="item-date") if item.date else None,
                cls="entry-head",
            ),
            text("div", item.subtitle, role="item-subtitle", cls="item-subtitle"),
            text("p", item.description, role="item-description", cls="item-description")
            if item.description
            else None,
        ]

    @staticmethod
    def _skill(item: SectionItem, tag: str, cls: str = "skill") -> RenderNode:
        return text(tag, item.skill_label, role="skill", cls=cls)


class ModernProjection(TemplateProjection):
    template_type = TemplateType.MODERN

    def _render_skill_chips(self, section: Section, document: ResumeDocument) -> RenderNode:
        return el("div", *(self._skill(i, "span", "skill chip") for i in section.items), cls="chips")

    def _render_entries(self, section: Section, document: ResumeDocument) -> RenderNode:
        return el(
            "div",
            *(el("div", *self._entry_fields(i), role="item", cls="entry") for i in section.items),
            cls="entries",
        )

    section_renderers = {SectionType.SKILLS: _render_skill_chips}
    default_renderer = _render_entries

    def project(self, document: ResumeDocument, handle: Optional[str] = None) -> RenderNode:
        info = document.personal_info
        rule = {"border-color": document.primary_color}

        header = el(
            "header",
            el(
                "div",
                text("h1", info.full_name or self.labels.name_placeholder, role="name", cls="name"),
                text("p", info.title, role="title", cls="title") if info.title else None,
                cls="identity",
            ),
            self._photo(info, cls="photo photo-round"),
            role="header",
            cls="modern-header",
        )
        contact_strip = el("div", *self._contacts(info), role="contact-strip", cls="contact-strip")

        body = el(
            "div",
            self._summary(info, self.labels.modern_summary, heading_style=rule),
            *(
                self._section(
                    section,
                    text("h3", section.title, role="section-heading", cls="heading", style=rule),
                    self.render_items(section, document),
                )
                for section in document.visible_sections
            ),
            role="body",
            cls="modern-body",
        )

        return self._root(document, handle, self._scaled(document, header, contact_strip, body))


class MinimalProjection(TemplateProjection):
    template_type = TemplateType.MINIMAL

    # Section types shown in the side panel; everything else goes to the main region
    side_panel_types = frozenset({SectionType.SKILLS})

    def _render_skill_list(self, section: Section, document: ResumeDocument) -> RenderNode:
        return el("ul", *(self._skill(i, "li") for i in section.items), cls="skill-list")

    def _render_entries(self, section: Section, document: ResumeDocument) -> RenderNode:
        return el(
            "div",
            *(el("div", *self._entry_fields(i), role="item", cls="entry") for i in section.items),
            cls="entries",
        )

    section_renderers = {SectionType.SKILLS: _render_skill_list}
    default_renderer = _render_entries

    def project(self, document: ResumeDocument, handle: Optional[str] = None) -> RenderNode:
        info = document.personal_info
        side_sections = [s for s in document.visible_sections if s.type in self.side_panel_types]
        main_sections = [s for s in document.visible_sections if s.type not in self.side_panel_types]

        side_panel = el(
            "aside",
            el(
                "div",
                self._photo(info, cls="photo photo-round"),
                text("h1", info.full_name, role="name", cls="name"),
                text("p", info.title, role="title", cls="title") if info.title else None,
                cls="identity",
            ),
            el(
                "div",
                text("div", self.labels.minimal_contact, role="contact-heading", cls="panel-heading"),
                *self._contacts(info),
                role="contact-block",
                cls="contact-block",
            ),
            *(
                self._section(
                    section,
                    text("div", section.title, role="section-heading", cls="panel-heading"),
                    self.render_items(section, document),
                )
                for section in side_sections
            ),
            role="side-panel",
            cls="side-panel",
            style={"background-color": document.primary_color},
        )

        main_region = el(
            "main",
            self._summary(info, self.labels.minimal_summary),
            *(
                self._section(
                    section,
                    text("h3", section.title, role="section-heading", cls="heading"),
                    self.render_items(section, document),
                )
                for section in main_sections
            ),
            role="main-region",
            cls="main-region",
        )

        return self._root(
            document, handle, self._scaled(document, side_panel, main_region, cls="minimal-layout")
        )


class ClassicProjection(TemplateProjection):
    template_type = TemplateType.CLASSIC

    def _render_checklist(self, section: Section, document: ResumeDocument) -> RenderNode:
        return el(
            "div",
            *(
                el("div", el("span", cls="bullet"), self._skill(i, "span"), role="item", cls="check")
                for i in section.items
            ),
            cls="checklist",
        )

    def _render_rows(self, section: Section, document: ResumeDocument) -> RenderNode:
        rows = []
        for item in section.items:
            date_cell = el(
                "div",
                text("span", item.date, role="item-date", cls="item-date") if item.date else None,
                cls="date-cell",
            )
            content_cell = el(
                "div",
                text("h4", item.title, role="item-title", cls="item-title"),
                text("div", item.subtitle, role="item-subtitle", cls="item-subtitle"),
                text("p", item.description, role="item-description", cls="item-description")
                if item.description
                else None,
                cls="content-cell",
            )
            rows.append(el("div", date_cell, content_cell, role="item", cls="entry-row"))
        return el("div", *rows, cls="rows")

    section_renderers = {SectionType.SKILLS: _render_checklist}
    default_renderer = _render_rows

    def project(self, document: ResumeDocument, handle: Optional[str] = None) -> RenderNode:
        info = document.personal_info

        contact_line = []
        for index, node in enumerate(self._contacts(info, tag="span")):
            if index:
                contact_line.append(text("span", "•", cls="separator"))
            contact_line.append(node)

        header = el(
            "header",
            text("h1", info.full_name, role="name", cls="name"),
            text("p", info.title, role="title", cls="title") if info.title else None,
            el("div", *contact_line, role="contact-line", cls="contact-line"),
            role="header",
            cls="classic-header",
            style={"border-color": document.primary_color},
        )

        body = el(
            "div",
            self._summary(info, self.labels.classic_summary),
            *(
                self._section(
                    section,
                    text("h3", section.title, role="section-heading", cls="heading"),
                    self.render_items(section, document),
                )
                for section in document.visible_sections
            ),
            role="body",
            cls="classic-body",
        )

        return self._root(document, handle, self._scaled(document, header, body, cls="classic-page"))


PROJECTIONS: Dict[TemplateType, Type[TemplateProjection]] = {
    TemplateType.MODERN: ModernProjection,
    TemplateType.MINIMAL: MinimalProjection,
    TemplateType.CLASSIC: ClassicProjection,
}


def get_projection(template: TemplateType, labels: Optional[TemplateLabels] = None) -> TemplateProjection:
    """
    Raises:
        UnknownTemplateError: If no projection is registered for template
    """
    try:
        projection_class = PROJECTIONS[template]
    except KeyError:
        raise UnknownTemplateError(template) from None
    return projection_class(labels or TemplateLabels.from_settings())


def project(
    document: ResumeDocument,
    labels: Optional[TemplateLabels] = None,
    handle: Optional[str] = None,
) -> RenderNode:
    """
    Project a document through its selected template.

    Pure: the same document (and labels) always yields an equal tree.

    Args:
        document: Document to project
        labels: Template headings (default: from settings)
        handle: Element id given to the root node, used to locate the
                rendered document on the surface

    Returns:
        Root RenderNode

    Raises:
        UnknownTemplateError: If the template has no projection
    """
    tree = get_projection(document.template, labels).project(document, handle=handle)
    log_projection(
        document.template.value,
        len(document.visible_sections),
        len(document.sections) - len(document.visible_sections),
    )
    return tree
