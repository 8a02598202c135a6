"""
Preview surface.

The live rendering of the current document, present only while the preview
view is showing. It re-renders whenever the session publishes a new
document, and acknowledges each completed render through a one-shot event
that the export pipeline awaits instead of sleeping for a fixed time.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from quill.contexts.editing.document import ResumeDocument
from quill.contexts.editing.session import EditorSession
from quill.contexts.rendering.exceptions import SurfaceNotReadyError, TargetNotFoundError
from quill.contexts.rendering.logger import _log_debug
from quill.contexts.rendering.view import View, ViewState
from quill.contexts.templating.html import render_html
from quill.utils.config import get_settings


@dataclass(frozen=True)
class RenderTarget:
    """
    A completed render, addressable by handle.

    Attributes:
        handle: Element id of the rendered document
        html: Full HTML page containing that element
        document: Snapshot the render was made from
    """

    handle: str
    html: str
    document: ResumeDocument


class PreviewSurface:
    """
    Rendered preview of the session's document.

    Mounted when the view switches to PREVIEW and unmounted when it leaves.
    While mounted, every new document snapshot is rendered and acknowledged.
    """

    def __init__(
        self,
        session: EditorSession,
        view_state: ViewState,
        handle: Optional[str] = None,
    ):
        self.session = session
        self.view_state = view_state
        self.handle = handle or str(get_settings().export.surface_handle)
        self._target: Optional[RenderTarget] = None
        self._rendered = asyncio.Event()

        view_state.subscribe(self._on_view_change)
        session.subscribe(self._on_document_change)

        if view_state.view == View.PREVIEW:
            self.mount()

    @property
    def is_mounted(self) -> bool:
        return self._target is not None

    def mount(self) -> None:
        self._render(self.session.document)

    def unmount(self) -> None:
        self._target = None
        self._rendered = asyncio.Event()
        _log_debug(f"Surface #{self.handle} unmounted")

    def acknowledge(self) -> None:
        """Signal that the latest render is complete."""
        self._rendered.set()

    async def wait_until_rendered(self, timeout: float) -> None:
        """
        Wait for the render-complete signal.

        Raises:
            SurfaceNotReadyError: If no render is acknowledged within timeout seconds
        """
        try:
            await asyncio.wait_for(self._rendered.wait(), timeout)
        except asyncio.TimeoutError:
            raise SurfaceNotReadyError(
                f"Surface #{self.handle} did not finish rendering within {timeout}s"
            ) from None

    def resolve(self, handle: str) -> RenderTarget:
        """
        Look up the live render for a handle.

        Raises:
            TargetNotFoundError: If nothing is mounted under that handle
        """
        if self._target is None or handle != self.handle:
            raise TargetNotFoundError(handle)
        return self._target

    def _render(self, document: ResumeDocument) -> None:
        html = render_html(document, photo_resolver=self.session.resolve_photo, handle=self.handle)
        self._target = RenderTarget(handle=self.handle, html=html, document=document)
        _log_debug(f"Surface #{self.handle} rendered '{document.template.value}' template")
        self.acknowledge()

    def _on_view_change(self, old: View, new: View) -> None:
        if new == View.PREVIEW:
            self.mount()
        elif old == View.PREVIEW:
            self.unmount()

    def _on_document_change(self, document: ResumeDocument) -> None:
        if self.is_mounted:
            self._render(document)
