"""
Rendering Context

Responsibilities:
- Keeps the live preview surface in sync with the document
- Rasterizes the preview at high resolution
- Encodes rasters into A4 PDF files
- Runs the export state machine and restores the UI afterwards

Owns: View state, preview surface, rasterizers, PDF encoding, export pipeline
Never: Modifies document content
"""

from quill.contexts.rendering.encoder import EncodedPDF, PageSpec, encode_pdf
from quill.contexts.rendering.exceptions import (
    EncodeError,
    ExportError,
    RasterizeError,
    SurfaceNotReadyError,
    TargetNotFoundError,
)
from quill.contexts.rendering.pipeline import (
    ExportPipeline,
    ExportResult,
    ExportState,
    export_filename,
)
from quill.contexts.rendering.rasterizer import PlaywrightRasterizer, Raster, Rasterizer
from quill.contexts.rendering.surface import PreviewSurface, RenderTarget
from quill.contexts.rendering.view import View, ViewState

__all__ = [
    # Pipeline
    "ExportPipeline",
    "ExportResult",
    "ExportState",
    "export_filename",
    # Collaborators
    "View",
    "ViewState",
    "PreviewSurface",
    "RenderTarget",
    "Rasterizer",
    "PlaywrightRasterizer",
    "Raster",
    "PageSpec",
    "EncodedPDF",
    "encode_pdf",
    # Errors
    "ExportError",
    "TargetNotFoundError",
    "SurfaceNotReadyError",
    "RasterizeError",
    "EncodeError",
]
