"""Custom exceptions for the rendering context.

Every failure the export pipeline can run into is an ExportError. The
pipeline catches them, reports them and ends the run in the failed state.
"""

from typing import Optional


class ExportError(Exception):
    """Base class for export failures."""

    pass


class TargetNotFoundError(ExportError):
    """Raised when the surface handle does not resolve to a live render."""

    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"Render target not found: #{handle}")


class SurfaceNotReadyError(ExportError):
    """Raised when the surface does not confirm a render of the current document in time."""

    pass


class RasterizeError(ExportError):
    """
    Raised when capturing the rendered surface fails.

    Attributes:
        message: Error description
        original_error: Underlying rasterizer error, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(message)


class EncodeError(ExportError):
    """
    Raised when turning a raster into a PDF file fails.

    Attributes:
        message: Error description
        original_error: Underlying encoder or filesystem error, if any
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        if original_error:
            message = f"{message}: {original_error}"
        super().__init__(message)
