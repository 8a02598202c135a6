"""
Local photo handles.

An uploaded photo is held in a PhotoStore and referenced from the document by
an opaque "blob:<uuid>" handle, so the document itself stays small and
immutable. Every handle must be released when the photo it names is replaced
or cleared; EditorSession does that automatically.
"""

import base64
import uuid
from dataclasses import dataclass
from typing import Dict, Optional

HANDLE_PREFIX = "blob:"


@dataclass(frozen=True)
class Photo:
    data: bytes
    mime_type: str

    def as_data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def is_photo_handle(reference: Optional[str]) -> bool:
    return bool(reference) and reference.startswith(HANDLE_PREFIX)


class PhotoStore:
    """Holds the bytes of locally selected photos behind revocable handles."""

    def __init__(self):
        self._photos: Dict[str, Photo] = {}

    def __len__(self) -> int:
        return len(self._photos)

    def __contains__(self, handle: str) -> bool:
        return handle in self._photos

    def acquire(self, data: bytes, mime_type: str) -> str:
        """
        Store photo bytes and return a new handle for them.

        Raises:
            ValueError: If the data is empty or the type is not an image type
        """
        if not data:
            raise ValueError("Photo data is empty")
        if not mime_type or not mime_type.startswith("image/"):
            raise ValueError(f"Not an image type: {mime_type!r}")

        handle = f"{HANDLE_PREFIX}{uuid.uuid4()}"
        self._photos[handle] = Photo(data=bytes(data), mime_type=mime_type)
        return handle

    def release(self, handle: Optional[str]) -> bool:
        """Forget a handle. Returns False if it was not held (releasing twice is harmless)."""
        return self._photos.pop(handle, None) is not None

    def resolve(self, reference: Optional[str]) -> Optional[str]:
        """
        Turn a photo reference into something a renderer can load.

        Handles become data URIs; any other reference (a remote URL) is
        returned as-is. A released or unknown handle resolves to None.
        """
        if not reference:
            return None
        if is_photo_handle(reference):
            photo = self._photos.get(reference)
            return photo.as_data_uri() if photo else None
        return reference
