"""
Editing session.

Owns the single live ResumeDocument. Edits are applied copy-on-write: each
one produces a new document that replaces the current one wholesale, and
subscribers (the preview surface, for instance) are told about the new
snapshot. The session also owns the photo store and releases the handle of
any photo that stops being referenced.
"""

from typing import Callable, List, Optional

from quill.contexts.editing.document import ResumeDocument
from quill.contexts.editing.loader import default_document
from quill.contexts.editing.logger import _log_debug, _log_info
from quill.contexts.editing.photos import PhotoStore, is_photo_handle
from quill.contexts.editing.reordering import DragResult

DocumentListener = Callable[[ResumeDocument], None]


class EditorSession:
    """
    Single-owner holder of the document being edited.

    Example:
        >>> session = EditorSession()
        >>> session.edit(lambda doc: doc.add_section())
        >>> session.apply_drag(DragResult(source_index=5, destination_index=0))
    """

    def __init__(
        self,
        document: Optional[ResumeDocument] = None,
        photo_store: Optional[PhotoStore] = None,
    ):
        self._document = document if document is not None else default_document()
        self.photos = photo_store if photo_store is not None else PhotoStore()
        self._listeners: List[DocumentListener] = []

    @property
    def document(self) -> ResumeDocument:
        return self._document

    def subscribe(self, listener: DocumentListener) -> Callable[[], None]:
        """Register a listener for new snapshots. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def edit(self, change: Callable[[ResumeDocument], ResumeDocument]) -> ResumeDocument:
        """
        Apply one document operation and adopt its result.

        Args:
            change: Function from the current snapshot to the next one,
                    usually a bound ResumeDocument operation in a lambda

        Returns:
            The new current document
        """
        self._replace(change(self._document))
        return self._document

    def apply_drag(self, result: DragResult) -> ResumeDocument:
        """Apply a completed drag gesture from the section list."""
        if result.cancelled:
            _log_debug("Drag cancelled, section order unchanged")
            return self._document
        return self.edit(lambda doc: doc.apply_drag(result))

    def set_photo(self, data: bytes, mime_type: str) -> str:
        """
        Use a locally selected image as the profile photo.

        The previous local photo, if any, is released.

        Returns:
            Handle now stored in personal_info.photo_url
        """
        handle = self.photos.acquire(data, mime_type)
        self.edit(lambda doc: doc.set_personal_field("photo_url", handle))
        _log_info(f"Photo replaced ({len(data)} bytes, {mime_type})")
        return handle

    def clear_photo(self) -> ResumeDocument:
        return self.edit(lambda doc: doc.set_personal_field("photo_url", None))

    def resolve_photo(self, reference: Optional[str]) -> Optional[str]:
        return self.photos.resolve(reference)

    def _replace(self, new_document: ResumeDocument) -> None:
        if new_document is self._document:
            return

        previous_photo = self._document.personal_info.photo_url
        self._document = new_document

        if previous_photo != new_document.personal_info.photo_url and is_photo_handle(previous_photo):
            self.photos.release(previous_photo)
            _log_debug(f"Released photo handle {previous_photo}")

        for listener in list(self._listeners):
            listener(new_document)
