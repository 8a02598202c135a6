"""
Export Pipeline

Turns the live preview into a PDF file:

    IDLE -> PREPARING -> RENDERING -> RASTERIZING -> ENCODING -> DONE
                  \\___________\\______________\\___________\\-> FAILED

- PREPARING:   switch to the preview view if needed and wait for the
               surface's render-complete signal
- RENDERING:   resolve the surface handle to a render of the current document
- RASTERIZING: capture that render at the upscale factor
- ENCODING:    place the raster on A4 page(s) and write the file

Only one export runs at a time: while one is in flight, further calls
return None without doing anything. Whatever the outcome, the busy flag is
cleared and the view the user was on is restored.
"""

import os
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig

from quill.contexts.editing.session import EditorSession
from quill.contexts.rendering.encoder import EncodedPDF, PageSpec, encode_pdf
from quill.contexts.rendering.exceptions import (
    EncodeError,
    ExportError,
    RasterizeError,
    SurfaceNotReadyError,
)
from quill.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_export_result,
    log_export_start,
)
from quill.contexts.rendering.rasterizer import Raster, Rasterizer
from quill.contexts.rendering.surface import PreviewSurface, RenderTarget
from quill.contexts.rendering.view import View, ViewState
from quill.utils.config import get_settings
from quill.utils.event_logging import log_export_event, log_state_change
from quill.utils.text_processing import slugify_name
from quill.utils.timestamp import now, today

load_dotenv()
RESULTS_PATH = Path(os.getenv("RESULTS_PATH", "outs/results"))


class ExportState(str, Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    RENDERING = "rendering"
    RASTERIZING = "rasterizing"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


TERMINAL_STATES = frozenset({ExportState.DONE, ExportState.FAILED})


@dataclass
class ExportResult:
    """
    Result of one export run.

    Attributes:
        success: Whether a PDF file was written
        export_id: Identifier of the run
        filename: Output file name
        states: States visited, in order, ending in DONE or FAILED
        pdf_path: Path of the written PDF (None if failed)
        page_count: Pages in the written PDF
        clipped: Content overflowed the single page and was cut off
        errors: Error messages (empty on success)
    """

    success: bool
    export_id: str
    filename: str
    states: List[ExportState] = field(default_factory=list)
    pdf_path: Optional[Path] = None
    page_count: Optional[int] = None
    clipped: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def final_state(self) -> ExportState:
        return self.states[-1]

    @property
    def failed_in(self) -> Optional[ExportState]:
        """Last non-terminal state reached before failing (None on success)."""
        if self.success:
            return None
        active = [s for s in self.states if s not in TERMINAL_STATES]
        return active[-1] if active else None


def export_filename(full_name: Optional[str], prefix: str = "curriculo") -> str:
    """
    Output file name for a person's resume.

    Example:
        >>> export_filename("Max K. Silva")
        'curriculo-max-k.-silva.pdf'
    """
    slug = slugify_name(full_name)
    return f"{prefix}-{slug}.pdf" if slug else f"{prefix}.pdf"


class ExportPipeline:
    """
    Coordinates view, surface, rasterizer and encoder for one PDF export.

    Args:
        session: Editing session holding the document
        view_state: Shared view state and busy flag
        surface: Preview surface bound to the same session and view state
        rasterizer: Capture collaborator
        output_dir: Directory for PDFs (default: RESULTS_PATH/<today>)
        settings: Settings tree (default: process settings)
        events_file: Export event log (default: EXPORT_EVENTS_FILE)
    """

    def __init__(
        self,
        session: EditorSession,
        view_state: ViewState,
        surface: PreviewSurface,
        rasterizer: Rasterizer,
        output_dir: Optional[Path] = None,
        settings: Optional[DictConfig] = None,
        events_file: Optional[Path] = None,
    ):
        export_settings = (settings or get_settings()).export

        self.session = session
        self.view_state = view_state
        self.surface = surface
        self.rasterizer = rasterizer
        self.output_dir = Path(output_dir) if output_dir else RESULTS_PATH / today()
        self.events_file = events_file

        self.upscale = int(export_settings.upscale)
        self.settle_timeout_s = float(export_settings.settle_timeout_s)
        self.filename_prefix = str(export_settings.filename_prefix)
        self.paginate = bool(export_settings.paginate)
        self.page = PageSpec(
            width_mm=float(export_settings.page.width_mm),
            height_mm=float(export_settings.page.height_mm),
        )

        self.state = ExportState.IDLE
        self._run_id = ""
        self._export_count = 0
        self._states: List[ExportState] = []

    @property
    def is_busy(self) -> bool:
        return self.view_state.is_downloading

    async def export(self) -> Optional[ExportResult]:
        """
        Export the current document as a PDF file.

        Returns:
            ExportResult, or None if another export was already running
        """
        if self.view_state.is_downloading:
            _log_warning("Export already in progress, ignoring request")
            # The in-flight run may belong to another pipeline sharing this view state
            in_flight = self._run_id if self.state is not ExportState.IDLE else ""
            self._record_event(log_export_event, "export_skipped", in_flight)
            return None

        # Set before the first await so overlapping calls see it
        self.view_state.is_downloading = True
        previous_view = self.view_state.view

        document = self.session.document
        self._export_count += 1
        self._run_id = f"{now()}_{self._export_count:03d}"
        self._states = [ExportState.IDLE]
        result = ExportResult(
            success=False,
            export_id=self._run_id,
            filename=export_filename(document.personal_info.full_name, self.filename_prefix),
            states=self._states,
        )

        log_export_start(self._run_id, result.filename, document.template.value, self.upscale)
        start_time = time.time()

        try:
            self._transition(ExportState.PREPARING)
            await self._prepare()

            self._transition(ExportState.RENDERING)
            target = self._resolve_target()

            self._transition(ExportState.RASTERIZING)
            raster = await self._capture(target)

            self._transition(ExportState.ENCODING)
            encoded = self._encode(raster)
            result.pdf_path = self._write(result.filename, encoded)
            result.page_count = encoded.page_count
            result.clipped = encoded.clipped

            self._transition(ExportState.DONE)
            result.success = True
        except ExportError as e:
            _log_error(f"Export failed: {e}")
            result.errors.append(str(e))
            self._transition(ExportState.FAILED, error=str(e))
        except Exception as e:
            _log_error(f"Unexpected export failure: {type(e).__name__}: {e}")
            result.errors.append(f"Unexpected error: {e}")
            self._transition(ExportState.FAILED, error=str(e))
        finally:
            self.view_state.is_downloading = False
            self.view_state.switch_to(previous_view)
            self.state = ExportState.IDLE

        log_export_result(result, time.time() - start_time)
        return result

    async def _prepare(self) -> None:
        if self.view_state.view != View.PREVIEW:
            _log_debug("Switching to preview view for export")
            try:
                self.view_state.switch_to(View.PREVIEW)
            except ExportError:
                raise
            except Exception as e:
                raise SurfaceNotReadyError(
                    f"Surface #{self.surface.handle} failed to render: {e}"
                ) from e
        await self.surface.wait_until_rendered(self.settle_timeout_s)

    def _resolve_target(self) -> RenderTarget:
        target = self.surface.resolve(self.surface.handle)
        if target.document != self.session.document:
            raise SurfaceNotReadyError(f"Surface #{target.handle} shows an outdated document")
        return target

    async def _capture(self, target: RenderTarget) -> Raster:
        try:
            return await self.rasterizer.capture(target, self.upscale)
        except ExportError:
            raise
        except Exception as e:
            raise RasterizeError(f"{self.rasterizer.name} rasterizer failed", e) from e

    def _encode(self, raster: Raster) -> EncodedPDF:
        try:
            return encode_pdf(raster, page=self.page, paginate=self.paginate)
        except ExportError:
            raise
        except Exception as e:
            raise EncodeError("Unexpected encoder failure", e) from e

    def _write(self, filename: str, encoded: EncodedPDF) -> Path:
        pdf_path = self.output_dir / filename
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            pdf_path.write_bytes(encoded.data)
        except OSError as e:
            if pdf_path.exists():
                pdf_path.unlink()
            raise EncodeError(f"Could not write {pdf_path}", e) from e
        return pdf_path

    def _transition(self, new_state: ExportState, **extra_fields) -> None:
        old_state = self.state
        self.state = new_state
        self._states.append(new_state)
        _log_debug(f"Export {self._run_id}: {old_state.value} -> {new_state.value}")
        self._record_event(
            log_state_change, self._run_id, old_state.value, new_state.value, **extra_fields
        )

    def _record_event(self, log_fn, *args, **extra_fields) -> None:
        try:
            log_fn(*args, source="rendering", events_file=self.events_file, **extra_fields)
        except OSError as e:
            _log_warning(f"Could not write export event to {self.events_file}: {e}")
