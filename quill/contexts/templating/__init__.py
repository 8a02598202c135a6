"""
Templating Context

Responsibilities:
- Projects a resume document into the render tree of its template
- Scales content so the visible page stays one physical page
- Serializes render trees to HTML

Owns: Template projections, render tree, content scaling, HTML templates
Never: Edits the document or produces files
"""

from quill.contexts.templating.html import render_html, render_tree_html
from quill.contexts.templating.projection import TemplateLabels, get_projection, project
from quill.contexts.templating.render_tree import RenderNode
from quill.contexts.templating.scaling import ScaleTransform

__all__ = [
    # Projection
    "project",
    "get_projection",
    "TemplateLabels",
    "RenderNode",
    # Scaling
    "ScaleTransform",
    # HTML
    "render_html",
    "render_tree_html",
]
