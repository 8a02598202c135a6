"""
Editing Context

Responsibilities:
- Owns the resume document model and every operation that edits it
- Translates drag gestures into new section orders
- Manages local photo handles
- Loads seed documents from YAML

Owns: ResumeDocument, EditorSession, reordering, photo handles
Never: Knows how a document looks on screen or on paper
"""

from quill.contexts.editing.document import (
    PersonalInfo,
    ResumeDocument,
    Section,
    SectionItem,
    SectionType,
    TemplateType,
)
from quill.contexts.editing.loader import default_document, load_document
from quill.contexts.editing.reordering import DragResult, move_section
from quill.contexts.editing.session import EditorSession

__all__ = [
    # Data structures
    "PersonalInfo",
    "ResumeDocument",
    "Section",
    "SectionItem",
    "SectionType",
    "TemplateType",
    # Reordering
    "DragResult",
    "move_section",
    # Session and loading
    "EditorSession",
    "default_document",
    "load_document",
]
