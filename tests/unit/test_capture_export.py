"""Unit tests for capture-based export with a fake capture surface."""

import pytest

from vitae.contexts.rendering.capture_export import CAPTURE_SELECTOR, CaptureExporter, CaptureState
from vitae.contexts.rendering.exceptions import (
    ExportError,
    ExportErrorCategory,
    RenderTimeoutError,
)
from vitae.contexts.rendering.results import ExportStrategy


def exporter_with(surface, **kwargs):
    return CaptureExporter(surface_factory=lambda: surface, **kwargs)


@pytest.mark.unit
def test_capture_success(fake_surface, sample_resume):
    """Test a full capture: mount, settle, rasterize, paginate."""
    surface = fake_surface()
    exporter = exporter_with(surface, settle_timeout_ms=1234, settle_delay_ms=7)

    result = exporter.export(sample_resume, "classic")

    assert result.strategy is ExportStrategy.CAPTURE
    assert result.filename == "Alex_Morgan_Resume.pdf"
    # 3000px tall capture at scale 2 spans two A4 pages
    assert result.page_count == 2
    assert 'id="resume-capture-target"' in surface.html
    assert surface.settle_calls == [(CAPTURE_SELECTOR, 1234, 7)]
    assert surface.rasterized
    assert surface.closed
    assert exporter.state is CaptureState.IDLE
    assert exporter.last_outcome is CaptureState.DONE


@pytest.mark.unit
def test_empty_content_never_rasterizes(fake_surface, sample_resume):
    """Test that too little text fails before any rasterization."""
    surface = fake_surface(text="   Alex   ")
    exporter = exporter_with(surface)

    with pytest.raises(ExportError) as exc_info:
        exporter.export(sample_resume)

    assert exc_info.value.category is ExportErrorCategory.EMPTY_CONTENT
    assert exc_info.value.http_status == 422
    assert not surface.rasterized
    assert surface.closed
    assert exporter.state is CaptureState.IDLE
    assert exporter.last_outcome is CaptureState.FAILED


@pytest.mark.unit
def test_successful_export_passes_through_done(fake_surface, sample_resume):
    """Test the full state sequence of a successful capture."""
    exporter = exporter_with(fake_surface())

    exporter.export(sample_resume)

    assert exporter.history == [
        CaptureState.AWAITING_OFFSCREEN_RENDER,
        CaptureState.CAPTURING,
        CaptureState.DONE,
        CaptureState.IDLE,
    ]


@pytest.mark.unit
def test_failed_export_passes_through_failed(fake_surface, sample_resume):
    """Test the state sequence when the capture is rejected as empty."""
    exporter = exporter_with(fake_surface(text=""))

    with pytest.raises(ExportError):
        exporter.export(sample_resume)

    assert exporter.history == [
        CaptureState.AWAITING_OFFSCREEN_RENDER,
        CaptureState.FAILED,
        CaptureState.IDLE,
    ]


@pytest.mark.unit
def test_min_text_length_is_configurable(fake_surface, sample_resume):
    """Test the empty-content threshold."""
    surface = fake_surface(text="Alex")
    result = exporter_with(surface, min_text_length=4).export(sample_resume)
    assert result.page_count == 2


@pytest.mark.unit
def test_settle_timeout_is_target_not_found(fake_surface, sample_resume):
    """Test that a target that never settles is TARGET_NOT_FOUND."""
    surface = fake_surface(settle_error=RenderTimeoutError("never visible"))
    exporter = exporter_with(surface)

    with pytest.raises(ExportError) as exc_info:
        exporter.export(sample_resume)

    assert exc_info.value.category is ExportErrorCategory.TARGET_NOT_FOUND
    assert not surface.rasterized
    assert surface.closed


@pytest.mark.unit
def test_missing_library_is_reported(sample_resume):
    """Test that a surface factory reporting a missing library keeps its category."""

    def factory():
        raise ExportError(ExportErrorCategory.LIBRARY_UNAVAILABLE)

    exporter = CaptureExporter(surface_factory=factory)

    with pytest.raises(ExportError) as exc_info:
        exporter.export(sample_resume)

    assert exc_info.value.category is ExportErrorCategory.LIBRARY_UNAVAILABLE
    assert exporter.state is CaptureState.IDLE


@pytest.mark.unit
def test_unexpected_errors_are_generic(fake_surface, sample_resume):
    """Test that unclassified failures are GENERIC and still close the surface."""
    surface = fake_surface(png=b"not a png")
    exporter = exporter_with(surface)

    with pytest.raises(ExportError) as exc_info:
        exporter.export(sample_resume)

    assert exc_info.value.category is ExportErrorCategory.GENERIC
    assert surface.closed
    assert exporter.last_outcome is CaptureState.FAILED


@pytest.mark.unit
def test_second_export_while_pending_is_busy(fake_surface, sample_resume):
    """Test that only one capture runs at a time."""
    surface = fake_surface()
    exporter = exporter_with(surface)
    observed = {}

    def export_again():
        observed["state"] = exporter.state
        observed["busy"] = exporter.busy
        with pytest.raises(ExportError) as exc_info:
            exporter.export(sample_resume)
        observed["category"] = exc_info.value.category

    surface.on_mount = export_again
    exporter.export(sample_resume)

    assert observed["state"] is CaptureState.AWAITING_OFFSCREEN_RENDER
    assert observed["busy"]
    assert observed["category"] is ExportErrorCategory.BUSY
    assert not exporter.busy


@pytest.mark.unit
def test_state_is_capturing_during_rasterization(fake_surface, sample_resume):
    """Test the state machine transition into CAPTURING."""
    surface = fake_surface()
    exporter = exporter_with(surface)
    observed = []
    surface.on_rasterize = lambda: observed.append(exporter.state)

    exporter.export(sample_resume)

    assert observed == [CaptureState.CAPTURING]


@pytest.mark.unit
def test_retry_after_failure(fake_surface, sample_resume):
    """Test that a failed attempt resets to IDLE so the next one can run."""
    surfaces = [fake_surface(text=""), fake_surface()]
    exporter = CaptureExporter(surface_factory=lambda: surfaces.pop(0))

    with pytest.raises(ExportError):
        exporter.export(sample_resume)
    result = exporter.export(sample_resume)

    assert result.page_count == 2
    assert exporter.last_outcome is CaptureState.DONE


@pytest.mark.unit
def test_generation_errors_do_not_open_a_surface():
    """Test that a missing résumé fails before any surface is created."""
    opened = []
    exporter = CaptureExporter(surface_factory=lambda: opened.append(1))

    with pytest.raises(ExportError) as exc_info:
        exporter.export(None)

    assert exc_info.value.category is ExportErrorCategory.DOCUMENT_GENERATION
    assert opened == []
