"""
Render tree

Projection output: a small element tree that says what goes on the page and
in which structure, independent of how it is finally drawn. Each node has a
semantic role ("name", "section-heading", "item-title", ...) so content can
be located without knowing the template's markup.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterator, List, Optional, Tuple

VOID_TAGS = frozenset({"img", "br", "hr"})


@dataclass
class RenderNode:
    """
    One element of the render tree.

    Attributes:
        tag: Element name (div, h1, img, ...)
        role: Semantic role, empty for purely structural nodes
        text: Text content; None for containers
        classes: Style classes
        style: Inline style declarations
        attrs: Other attributes (src, alt, data-*)
        children: Child nodes in display order
    """

    tag: str
    role: str = ""
    text: Optional[str] = None
    classes: Tuple[str, ...] = ()
    style: Dict[str, str] = field(default_factory=dict)
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["RenderNode"] = field(default_factory=list)

    @property
    def is_void(self) -> bool:
        return self.tag in VOID_TAGS

    @property
    def style_css(self) -> str:
        return "; ".join(f"{key}: {value}" for key, value in self.style.items())

    @property
    def html_attrs(self) -> Dict[str, str]:
        """All markup attributes: class, data-role, explicit attrs, style."""
        attrs = {}
        if self.classes:
            attrs["class"] = " ".join(self.classes)
        if self.role:
            attrs["data-role"] = self.role
        attrs.update(self.attrs)
        if self.style:
            attrs["style"] = self.style_css
        return attrs

    def walk(self) -> Iterator["RenderNode"]:
        """Depth-first, document-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, role: str) -> List["RenderNode"]:
        return [node for node in self.walk() if node.role == role]

    def find(self, role: str) -> Optional["RenderNode"]:
        return next((node for node in self.walk() if node.role == role), None)

    def texts(self, role: str) -> List[str]:
        """Text of every node with this role, in document order."""
        return [node.text for node in self.find_all(role)]


def el(
    tag: str,
    *children: Optional[RenderNode],
    role: str = "",
    cls: str = "",
    style: Optional[Dict[str, str]] = None,
    **attrs: str,
) -> RenderNode:
    """
    Build a container node. None children are skipped, so optional parts
    can be passed inline.

    Attribute names use underscores for hyphens (data_section_id -> data-section-id).
    """
    return RenderNode(
        tag=tag,
        role=role,
        classes=tuple(cls.split()),
        style=dict(style or {}),
        attrs={name.replace("_", "-"): value for name, value in attrs.items()},
        children=[child for child in children if child is not None],
    )


def text(
    tag: str,
    value: Optional[str],
    role: str = "",
    cls: str = "",
    style: Optional[Dict[str, str]] = None,
) -> RenderNode:
    """Build a text node; None becomes an empty string."""
    return RenderNode(
        tag=tag,
        role=role,
        text=value or "",
        classes=tuple(cls.split()),
        style=dict(style or {}),
    )


def map_tree(
    node: RenderNode, change: Callable[[RenderNode], Optional[RenderNode]]
) -> Optional[RenderNode]:
    """
    Rebuild a tree bottom-up, applying change to every node.

    change returns the node to keep (possibly a modified copy) or None to
    drop it together with its subtree. The input tree is not modified.
    """
    children = [map_tree(child, change) for child in node.children]
    rebuilt = replace(node, children=[child for child in children if child is not None])
    return change(rebuilt)
