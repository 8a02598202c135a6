"""
HTML rendering of projected documents.

Serializes a render tree into a standalone HTML page (stylesheet included)
that a browser engine can lay out and rasterize.
"""

from typing import Callable, Optional

from jinja2 import TemplateError

from quill.contexts.editing.document import ResumeDocument
from quill.contexts.editing.photos import is_photo_handle
from quill.contexts.templating.exceptions import TemplateRenderError
from quill.contexts.templating.logger import _log_debug, _log_warning
from quill.contexts.templating.projection import TemplateLabels, project
from quill.contexts.templating.registries import TemplateRegistry
from quill.contexts.templating.render_tree import RenderNode, map_tree
from quill.utils.config import get_settings

PhotoResolver = Callable[[Optional[str]], Optional[str]]

PAGE_TEMPLATE = "page"

_default_registry: Optional[TemplateRegistry] = None


def _registry() -> TemplateRegistry:
    global _default_registry
    if _default_registry is None:
        _default_registry = TemplateRegistry()
    return _default_registry


def remote_only(reference: Optional[str]) -> Optional[str]:
    """Photo resolver used when no photo store is available: local handles are dropped."""
    return None if is_photo_handle(reference) else reference


def resolve_photos(tree: RenderNode, photo_resolver: PhotoResolver) -> RenderNode:
    """
    Point every photo node at a loadable source.

    Photos whose reference cannot be resolved are removed from the tree.
    """

    def change(node: RenderNode) -> Optional[RenderNode]:
        if node.role != "photo":
            return node
        source = photo_resolver(node.attrs.get("src"))
        if not source:
            _log_warning("Photo reference could not be resolved, leaving it out")
            return None
        node.attrs = {**node.attrs, "src": source}
        return node

    return map_tree(tree, change)


def render_tree_html(
    tree: RenderNode,
    title: str = "",
    lang: str = "pt-BR",
    registry: Optional[TemplateRegistry] = None,
) -> str:
    """
    Serialize a render tree as a complete HTML page.

    Raises:
        TemplateRenderError: If the page template fails to render
    """
    registry = registry or _registry()
    page = get_settings().export.page

    try:
        template = registry.get_template(PAGE_TEMPLATE)
        return template.render(
            root=tree,
            title=title,
            lang=lang,
            page_width_mm=page.width_mm,
            page_height_mm=page.height_mm,
        )
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render HTML page",
            template_name=PAGE_TEMPLATE,
            template_path=registry.get_template_path(PAGE_TEMPLATE),
            original_error=e,
        ) from e


def render_html(
    document: ResumeDocument,
    photo_resolver: Optional[PhotoResolver] = None,
    handle: Optional[str] = None,
    labels: Optional[TemplateLabels] = None,
    registry: Optional[TemplateRegistry] = None,
) -> str:
    """
    Project a document and serialize it as HTML.

    Args:
        document: Document to render
        photo_resolver: Maps photo references to loadable sources
                        (default: keep remote URLs, drop local handles)
        handle: Element id for the document root
        labels: Template headings (default: from settings)
        registry: Template registry (default: shared registry)

    Returns:
        Complete HTML page
    """
    tree = project(document, labels=labels, handle=handle)
    tree = resolve_photos(tree, photo_resolver or remote_only)
    html = render_tree_html(tree, title=document.personal_info.full_name, registry=registry)
    _log_debug(f"Rendered HTML: {len(html)} characters")
    return html
