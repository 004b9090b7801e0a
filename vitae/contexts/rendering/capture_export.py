"""
Capture-Based PDF Export

Mounts the composed résumé in an off-screen, page-sized container of a
headless page, waits for it to settle, checks that it holds real content,
then rasterizes it and paginates the image into a PDF.

One export runs at a time per exporter. The state machine is:

    IDLE -> AWAITING_OFFSCREEN_RENDER -> CAPTURING -> DONE | FAILED -> IDLE
"""

import os
import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Protocol

from dotenv import load_dotenv

from vitae.contexts.rendering.exceptions import (
    ExportError,
    ExportErrorCategory,
    RenderTimeoutError,
)
from vitae.contexts.rendering.logger import (
    _log_debug,
    _log_warning,
    log_export_failure,
    log_export_result,
    log_export_start,
)
from vitae.contexts.rendering.rasterize import page_size_px, png_to_pdf
from vitae.contexts.rendering.results import ExportResult, ExportStrategy
from vitae.contexts.rendering.server_export import BROWSER_ARGS
from vitae.contexts.templating.exceptions import MissingResumeDataError, TemplateRenderError
from vitae.contexts.templating.html_generator import (
    CAPTURE_TARGET_ID,
    ResumeHTMLGenerator,
    StyleInput,
)
from vitae.contexts.templating.resume_data_structure import ResumeData
from vitae.utils.pdf_processing import page_count
from vitae.utils.text_processing import pdf_filename

load_dotenv()

SETTLE_TIMEOUT_MS = int(os.getenv("VITAE_SETTLE_TIMEOUT_MS", "5000"))
# Roughly one animation frame after the target appears
SETTLE_DELAY_MS = int(os.getenv("VITAE_SETTLE_DELAY_MS", "16"))
MIN_TEXT_LENGTH = int(os.getenv("VITAE_MIN_TEXT_LENGTH", "20"))
CAPTURE_SCALE = 2

CAPTURE_SELECTOR = f"#{CAPTURE_TARGET_ID}"


class CaptureState(str, Enum):
    IDLE = "idle"
    AWAITING_OFFSCREEN_RENDER = "awaiting_offscreen_render"
    CAPTURING = "capturing"
    DONE = "done"
    FAILED = "failed"


class CaptureSurface(Protocol):
    """Somewhere a document can be mounted, inspected and rasterized."""

    def mount(self, html: str) -> None: ...

    def wait_for_settle(self, selector: str, timeout_ms: int, delay_ms: int) -> None: ...

    def text_content(self, selector: str) -> str: ...

    def rasterize(self, selector: str) -> bytes: ...

    def close(self) -> None: ...


class PlaywrightCaptureSurface:
    """
    Headless Chromium page used as the capture surface.

    The viewport is one A4 page wide; the capture target sits just right of
    it, so it is laid out at full size but never shown.
    """

    def __init__(self, playwright, browser, context, page):
        self._playwright = playwright
        self._browser = browser
        self._context = context
        self._page = page

    @classmethod
    def open(cls, scale: float = CAPTURE_SCALE, args: Optional[List[str]] = None) -> "PlaywrightCaptureSurface":
        try:
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            raise ExportError(
                ExportErrorCategory.LIBRARY_UNAVAILABLE,
                strategy=ExportStrategy.CAPTURE.value,
                original_error=e,
            ) from e

        width, height = page_size_px(1)
        playwright = sync_playwright().start()
        try:
            browser = playwright.chromium.launch(args=BROWSER_ARGS if args is None else args)
            context = browser.new_context(
                java_script_enabled=False,
                device_scale_factor=scale,
                viewport={"width": width, "height": height},
            )
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise
        return cls(playwright, browser, context, page)

    def mount(self, html: str) -> None:
        self._page.set_content(html, wait_until="load")

    def wait_for_settle(self, selector: str, timeout_ms: int, delay_ms: int) -> None:
        from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

        try:
            self._page.wait_for_selector(selector, state="visible", timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise RenderTimeoutError(f"{selector} not rendered within {timeout_ms}ms") from e
        self._page.wait_for_timeout(delay_ms)

    def text_content(self, selector: str) -> str:
        return self._page.inner_text(selector)

    def rasterize(self, selector: str) -> bytes:
        return self._page.locator(selector).screenshot(type="png", animations="disabled")

    def close(self) -> None:
        try:
            self._context.close()
            self._browser.close()
        finally:
            self._playwright.stop()


SurfaceFactory = Callable[[], CaptureSurface]


class CaptureExporter:
    """
    Exports résumés by rasterizing an off-screen render.

    Attributes:
        state: Current CaptureState (IDLE between exports)
        last_outcome: DONE or FAILED for the most recent export, None before any
        history: States passed through by the most recent export, ending in IDLE
    """

    strategy = ExportStrategy.CAPTURE

    def __init__(
        self,
        generator: Optional[ResumeHTMLGenerator] = None,
        surface_factory: Optional[SurfaceFactory] = None,
        settle_timeout_ms: int = SETTLE_TIMEOUT_MS,
        settle_delay_ms: int = SETTLE_DELAY_MS,
        min_text_length: int = MIN_TEXT_LENGTH,
        scale: float = CAPTURE_SCALE,
    ):
        self.generator = generator or ResumeHTMLGenerator()
        self.surface_factory = surface_factory or (lambda: PlaywrightCaptureSurface.open(scale))
        self.settle_timeout_ms = settle_timeout_ms
        self.settle_delay_ms = settle_delay_ms
        self.min_text_length = min_text_length
        self.scale = scale

        self.state = CaptureState.IDLE
        self.last_outcome: Optional[CaptureState] = None
        self.history: List[CaptureState] = []
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def _transition(self, state: CaptureState) -> None:
        self.state = state
        self.history.append(state)
        _log_debug(f"Capture state: {state.value}")

    def export(
        self,
        resume: ResumeData,
        template_id: Optional[str] = None,
        style: StyleInput = None,
        title: Optional[str] = None,
    ) -> ExportResult:
        """
        Export a résumé to PDF through an off-screen capture.

        Args:
            resume: Résumé to export
            template_id: Registered template id (unknown ids use the default)
            style: StyleParams or editor design settings
            title: Document title; defaults to "<name> Resume"

        Returns:
            ExportResult with the PDF bytes and a sanitized filename

        Raises:
            ExportError: BUSY while another export is pending, otherwise
                DOCUMENT_GENERATION, LIBRARY_UNAVAILABLE, TARGET_NOT_FOUND,
                EMPTY_CONTENT or GENERIC
        """
        if not self._lock.acquire(blocking=False):
            raise ExportError(ExportErrorCategory.BUSY, strategy=self.strategy.value)

        title = title or (resume.display_title if resume is not None else "")
        self.history = []
        log_export_start(title, template_id, self.strategy.value)
        start_time = time.time()

        try:
            content = self._capture(resume, template_id, style, title)
            self._transition(CaptureState.DONE)
            self.last_outcome = CaptureState.DONE
        except ExportError as e:
            self._transition(CaptureState.FAILED)
            self.last_outcome = CaptureState.FAILED
            log_export_failure(e, time.time() - start_time)
            raise
        finally:
            self._transition(CaptureState.IDLE)
            self._lock.release()

        result = ExportResult(
            filename=pdf_filename(title),
            content=content,
            page_count=page_count(content),
            strategy=self.strategy,
        )
        log_export_result(result, time.time() - start_time)
        return result

    def _capture(
        self, resume: ResumeData, template_id: Optional[str], style: StyleInput, title: str
    ) -> bytes:
        try:
            html = self.generator.generate_document(
                resume, template_id, style, title=title, capture=True
            )
        except (TemplateRenderError, MissingResumeDataError) as e:
            raise ExportError(
                ExportErrorCategory.DOCUMENT_GENERATION,
                strategy=self.strategy.value,
                original_error=e,
            ) from e

        self._transition(CaptureState.AWAITING_OFFSCREEN_RENDER)
        try:
            surface = self.surface_factory()
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(
                ExportErrorCategory.GENERIC,
                strategy=self.strategy.value,
                original_error=e,
            ) from e

        try:
            return self._capture_on(surface, html)
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(
                ExportErrorCategory.GENERIC,
                strategy=self.strategy.value,
                original_error=e,
            ) from e
        finally:
            try:
                surface.close()
            except Exception as e:
                _log_warning(f"Failed to close capture surface: {e}")

    def _capture_on(self, surface: CaptureSurface, html: str) -> bytes:
        surface.mount(html)
        try:
            surface.wait_for_settle(CAPTURE_SELECTOR, self.settle_timeout_ms, self.settle_delay_ms)
        except RenderTimeoutError as e:
            raise ExportError(
                ExportErrorCategory.TARGET_NOT_FOUND,
                strategy=self.strategy.value,
                original_error=e,
            ) from e

        text_length = len(" ".join(surface.text_content(CAPTURE_SELECTOR).split()))
        if text_length < self.min_text_length:
            raise ExportError(
                ExportErrorCategory.EMPTY_CONTENT,
                message=(
                    "Your resume looks empty. Add some content before exporting "
                    f"({text_length} characters found)."
                ),
                strategy=self.strategy.value,
            )

        self._transition(CaptureState.CAPTURING)
        _log_debug(f"Capturing {CAPTURE_SELECTOR} at scale {self.scale}")
        png = surface.rasterize(CAPTURE_SELECTOR)
        return png_to_pdf(png, self.scale)
