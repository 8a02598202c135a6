"""
Integration tests for the export pipeline.

The browser capture is replaced by a fake rasterizer that returns a blank
PNG of a chosen size; everything else (view state, surface, encoder, file
output, event log) is real.
"""

import asyncio
from io import BytesIO

import pytest
from omegaconf import OmegaConf
from PIL import Image

from quill.contexts.editing import EditorSession
from quill.contexts.rendering import (
    ExportPipeline,
    ExportState,
    PreviewSurface,
    Raster,
    Rasterizer,
    TargetNotFoundError,
    View,
    ViewState,
)
from quill.contexts.templating.exceptions import TemplateRenderError
from quill.utils.config import get_settings
from quill.utils.event_logging import get_recent_events
from quill.utils.pdf_processing import page_count

SUCCESS_STATES = [
    ExportState.IDLE,
    ExportState.PREPARING,
    ExportState.RENDERING,
    ExportState.RASTERIZING,
    ExportState.ENCODING,
    ExportState.DONE,
]


def _png(width: int, height: int) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (width, height), color=(255, 255, 255)).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeRasterizer(Rasterizer):
    name = "fake"

    def __init__(self, width: int = 210, height: int = 297, error: Exception = None):
        self.png = _png(width, height)
        self.error = error
        self.calls = []

    async def capture(self, target, scale):
        self.calls.append((target.handle, scale))
        # Yield like a real capture would
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return Raster.from_png(self.png, scale=scale)


class DetachedSurface(PreviewSurface):
    """Surface whose element cannot be found."""

    def resolve(self, handle):
        raise TargetNotFoundError(handle)


class SilentSurface(PreviewSurface):
    """Surface that never reports a finished render."""

    def acknowledge(self):
        pass


class FrozenSurface(PreviewSurface):
    """Surface that ignores document changes after mounting."""

    def _on_document_change(self, document):
        pass


class BrokenSurface(PreviewSurface):
    """Surface whose page template fails to render."""

    def _render(self, document):
        raise TemplateRenderError("page template broke", template_name="page.html.jinja")


def _settings(**export_overrides):
    return OmegaConf.merge(get_settings(), {"export": export_overrides})


def _make_pipeline(
    tmp_path,
    rasterizer=None,
    view=View.EDITOR,
    surface_class=PreviewSurface,
    settings=None,
    output_dir=None,
):
    session = EditorSession()
    view_state = ViewState(view)
    surface = surface_class(session, view_state)
    pipeline = ExportPipeline(
        session,
        view_state,
        surface,
        rasterizer or FakeRasterizer(),
        output_dir=output_dir or tmp_path / "out",
        settings=settings,
        events_file=tmp_path / "events.log",
    )
    return pipeline


@pytest.mark.integration
def test_export_success(tmp_path):
    pipeline = _make_pipeline(tmp_path)

    result = asyncio.run(pipeline.export())

    assert result.success
    assert result.states == SUCCESS_STATES
    assert result.final_state is ExportState.DONE
    assert result.failed_in is None
    assert result.errors == []
    assert result.filename == "curriculo-max-k.-silva.pdf"
    assert result.pdf_path == tmp_path / "out" / "curriculo-max-k.-silva.pdf"
    assert result.pdf_path.exists()
    assert page_count(result.pdf_path) == 1
    assert result.page_count == 1
    assert not result.clipped


@pytest.mark.integration
def test_export_captures_surface_at_upscale(tmp_path):
    rasterizer = FakeRasterizer()
    pipeline = _make_pipeline(tmp_path, rasterizer)

    asyncio.run(pipeline.export())

    assert rasterizer.calls == [("resume-preview-id", 4)]


@pytest.mark.integration
@pytest.mark.parametrize("start_view", [View.HOME, View.EDITOR, View.PREVIEW])
def test_view_restored_after_export(tmp_path, start_view):
    pipeline = _make_pipeline(tmp_path, view=start_view)

    result = asyncio.run(pipeline.export())

    assert result.success
    assert pipeline.view_state.view is start_view
    assert not pipeline.view_state.is_downloading
    assert pipeline.state is ExportState.IDLE


@pytest.mark.integration
def test_state_changes_logged(tmp_path):
    pipeline = _make_pipeline(tmp_path)

    result = asyncio.run(pipeline.export())

    events = get_recent_events(n=100, export_id=result.export_id, events_file=tmp_path / "events.log")
    assert [e["new_state"] for e in events] == [s.value for s in SUCCESS_STATES[1:]]


@pytest.mark.integration
def test_uses_current_document(tmp_path):
    """Test the exported file is named after the document at export time."""
    pipeline = _make_pipeline(tmp_path)
    pipeline.session.edit(lambda doc: doc.set_personal_field("full_name", "Ana  Maria Souza"))

    result = asyncio.run(pipeline.export())

    assert result.pdf_path.name == "curriculo-ana-maria-souza.pdf"


# ============================================================================
# Failures
# ============================================================================


@pytest.mark.integration
def test_target_not_found(tmp_path):
    pipeline = _make_pipeline(tmp_path, surface_class=DetachedSurface)

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.final_state is ExportState.FAILED
    assert result.failed_in is ExportState.RENDERING
    assert "resume-preview-id" in result.errors[0]
    assert result.pdf_path is None
    assert not (tmp_path / "out").exists()
    assert pipeline.view_state.view is View.EDITOR
    assert not pipeline.view_state.is_downloading


@pytest.mark.integration
def test_rasterize_failure(tmp_path):
    rasterizer = FakeRasterizer(error=RuntimeError("browser crashed"))
    pipeline = _make_pipeline(tmp_path, rasterizer)

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.failed_in is ExportState.RASTERIZING
    assert "browser crashed" in result.errors[0]
    assert not (tmp_path / "out").exists()
    assert pipeline.view_state.view is View.EDITOR
    assert not pipeline.view_state.is_downloading


@pytest.mark.integration
def test_rasterizer_target_not_found(tmp_path):
    rasterizer = FakeRasterizer(error=TargetNotFoundError("resume-preview-id"))
    pipeline = _make_pipeline(tmp_path, rasterizer)

    result = asyncio.run(pipeline.export())

    assert result.failed_in is ExportState.RASTERIZING
    assert result.errors == ["Render target not found: #resume-preview-id"]


@pytest.mark.integration
def test_surface_never_ready(tmp_path):
    pipeline = _make_pipeline(
        tmp_path, surface_class=SilentSurface, settings=_settings(settle_timeout_s=0.05)
    )

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.failed_in is ExportState.PREPARING
    assert "did not finish rendering" in result.errors[0]
    assert pipeline.rasterizer.calls == []
    assert pipeline.view_state.view is View.EDITOR


@pytest.mark.integration
def test_stale_render_rejected(tmp_path):
    pipeline = _make_pipeline(tmp_path, view=View.PREVIEW, surface_class=FrozenSurface)
    pipeline.session.edit(lambda doc: doc.rename_section("edu", "Educação"))

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.failed_in is ExportState.RENDERING
    assert "outdated" in result.errors[0]
    assert pipeline.rasterizer.calls == []


@pytest.mark.integration
def test_write_failure(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    pipeline = _make_pipeline(tmp_path, output_dir=blocker)

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.failed_in is ExportState.ENCODING
    assert blocker.read_text() == "not a directory"
    assert not pipeline.view_state.is_downloading


@pytest.mark.integration
def test_failure_logged_as_state_change(tmp_path):
    pipeline = _make_pipeline(tmp_path, FakeRasterizer(error=RuntimeError("boom")))

    result = asyncio.run(pipeline.export())

    events = get_recent_events(n=100, export_id=result.export_id, events_file=tmp_path / "events.log")
    assert events[-1]["new_state"] == "failed"
    assert events[-1]["old_state"] == "rasterizing"
    assert "boom" in events[-1]["error"]


@pytest.mark.integration
def test_export_after_failure_succeeds(tmp_path):
    rasterizer = FakeRasterizer(error=RuntimeError("first try"))
    pipeline = _make_pipeline(tmp_path, rasterizer)

    first = asyncio.run(pipeline.export())
    rasterizer.error = None
    second = asyncio.run(pipeline.export())

    assert not first.success
    assert second.success
    assert first.export_id != second.export_id


@pytest.mark.integration
def test_surface_render_error_fails_export(tmp_path):
    pipeline = _make_pipeline(tmp_path, surface_class=BrokenSurface)

    result = asyncio.run(pipeline.export())

    assert not result.success
    assert result.final_state is ExportState.FAILED
    assert result.failed_in is ExportState.PREPARING
    assert "page template broke" in result.errors[0]
    assert pipeline.rasterizer.calls == []
    assert pipeline.view_state.view is View.EDITOR
    assert not pipeline.view_state.is_downloading
    assert pipeline.state is ExportState.IDLE


@pytest.mark.integration
def test_unwritable_event_log_does_not_stop_export(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    pipeline = _make_pipeline(tmp_path)
    pipeline.events_file = blocker / "events.log"

    result = asyncio.run(pipeline.export())

    assert result.success
    assert result.states == SUCCESS_STATES
    assert result.pdf_path.exists()


# ============================================================================
# Re-entrancy
# ============================================================================


@pytest.mark.integration
def test_concurrent_exports_run_once(tmp_path):
    """Test a second export requested while one is running does nothing."""
    rasterizer = FakeRasterizer()
    pipeline = _make_pipeline(tmp_path, rasterizer)

    async def export_twice():
        return await asyncio.gather(pipeline.export(), pipeline.export())

    results = asyncio.run(export_twice())

    finished = [r for r in results if r is not None]
    assert len(finished) == 1
    assert finished[0].success
    assert len(rasterizer.calls) == 1
    assert len(list((tmp_path / "out").iterdir())) == 1

    skipped = get_recent_events(n=100, event_type="export_skipped", events_file=tmp_path / "events.log")
    assert len(skipped) == 1
    assert skipped[0]["export_id"] == finished[0].export_id


@pytest.mark.integration
def test_busy_pipeline_returns_none(tmp_path):
    pipeline = _make_pipeline(tmp_path)
    pipeline.view_state.is_downloading = True

    assert asyncio.run(pipeline.export()) is None
    assert pipeline.rasterizer.calls == []

    skipped = get_recent_events(n=100, event_type="export_skipped", events_file=tmp_path / "events.log")
    assert skipped[0]["export_id"] == ""


# ============================================================================
# Pagination
# ============================================================================


@pytest.mark.integration
def test_tall_content_clipped_by_default(tmp_path):
    pipeline = _make_pipeline(tmp_path, FakeRasterizer(width=210, height=500))

    result = asyncio.run(pipeline.export())

    assert result.success
    assert result.clipped
    assert page_count(result.pdf_path) == 1


@pytest.mark.integration
def test_tall_content_paginated(tmp_path):
    pipeline = _make_pipeline(
        tmp_path, FakeRasterizer(width=210, height=500), settings=_settings(paginate=True)
    )

    result = asyncio.run(pipeline.export())

    assert result.success
    assert not result.clipped
    assert result.page_count == 2
    assert page_count(result.pdf_path) == 2
