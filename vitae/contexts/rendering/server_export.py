"""
Server-Rendered PDF Export

Prints the self-contained HTML of a composed résumé with a headless Chromium
(playwright). One browser is launched per export and closed on every exit
path, so concurrent exports share no state.
"""

import os
import time
from typing import Any, Dict, List, Optional, Protocol

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
from vitae.contexts.rendering.results import ExportResult, ExportStrategy
from vitae.contexts.templating.defaults import PAGE_FORMAT
from vitae.contexts.templating.exceptions import MissingResumeDataError, TemplateRenderError
from vitae.contexts.templating.html_generator import ResumeHTMLGenerator, StyleInput
from vitae.contexts.templating.resume_data_structure import ResumeData
from vitae.utils.pdf_processing import page_count
from vitae.utils.text_processing import pdf_filename

load_dotenv()

RENDER_TIMEOUT_MS = int(os.getenv("VITAE_RENDER_TIMEOUT_MS", "30000"))
# Chromium flags; the defaults suit containers without a user namespace
BROWSER_ARGS: List[str] = os.getenv(
    "VITAE_BROWSER_ARGS", "--no-sandbox --disable-dev-shm-usage"
).split()

# One retry on a fresh page after a render timeout
MAX_RENDER_ATTEMPTS = 2


class BrowserPage(Protocol):
    def set_content(self, html: str, wait_until: str, timeout: int) -> None: ...

    def pdf(self, **options: Any) -> bytes: ...

    def close(self) -> None: ...


class Browser(Protocol):
    def new_page(self) -> BrowserPage: ...

    def close(self) -> None: ...


class BrowserLauncher(Protocol):
    """Starts a browser for one export. Tests inject fakes here."""

    def launch(self) -> Browser: ...


class PlaywrightPage:
    """Playwright page in its own JavaScript-free context."""

    def __init__(self, context, page):
        self._context = context
        self._page = page

    def set_content(self, html: str, wait_until: str, timeout: int) -> None:
        from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

        try:
            self._page.set_content(html, wait_until=wait_until, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise RenderTimeoutError(f"Page did not settle within {timeout}ms") from e

    def pdf(self, **options: Any) -> bytes:
        return self._page.pdf(**options)

    def close(self) -> None:
        self._context.close()


class PlaywrightBrowser:
    """Chromium browser that also owns the playwright driver it was started with."""

    def __init__(self, playwright, browser):
        self._playwright = playwright
        self._browser = browser

    def new_page(self) -> PlaywrightPage:
        # Résumé HTML is static; scripts never need to run
        context = self._browser.new_context(java_script_enabled=False)
        return PlaywrightPage(context, context.new_page())

    def close(self) -> None:
        try:
            self._browser.close()
        finally:
            self._playwright.stop()


class PlaywrightLauncher:
    """
    Launches headless Chromium through playwright's sync API.

    playwright is imported lazily so the templating side works without it.
    """

    def __init__(self, args: Optional[List[str]] = None, headless: bool = True):
        self.args = BROWSER_ARGS if args is None else args
        self.headless = headless

    def launch(self) -> PlaywrightBrowser:
        try:
            from playwright.sync_api import sync_playwright
        except ImportError as e:
            raise ExportError(
                ExportErrorCategory.LIBRARY_UNAVAILABLE,
                strategy=ExportStrategy.SERVER.value,
                original_error=e,
            ) from e

        playwright = sync_playwright().start()
        try:
            browser = playwright.chromium.launch(headless=self.headless, args=self.args)
        except Exception:
            playwright.stop()
            raise
        return PlaywrightBrowser(playwright, browser)


def pdf_options(margin: str) -> Dict[str, Any]:
    """page.pdf() options for the A4 page box every export shares."""
    return {
        "format": PAGE_FORMAT,
        "print_background": True,
        "margin": {"top": margin, "right": margin, "bottom": margin, "left": margin},
        "prefer_css_page_size": True,
    }


class ServerExporter:
    """
    Exports résumés by printing their HTML in a headless browser.

    Example:
        exporter = ServerExporter()
        result = exporter.export(ResumeData.from_dict(payload), template_id="classic")
        Path(result.filename).write_bytes(result.content)
    """

    strategy = ExportStrategy.SERVER

    def __init__(
        self,
        generator: Optional[ResumeHTMLGenerator] = None,
        launcher: Optional[BrowserLauncher] = None,
        render_timeout_ms: int = RENDER_TIMEOUT_MS,
        max_attempts: int = MAX_RENDER_ATTEMPTS,
    ):
        self.generator = generator or ResumeHTMLGenerator()
        self.launcher = launcher or PlaywrightLauncher()
        self.render_timeout_ms = render_timeout_ms
        self.max_attempts = max_attempts

    def export(
        self,
        resume: ResumeData,
        template_id: Optional[str] = None,
        style: StyleInput = None,
        title: Optional[str] = None,
    ) -> ExportResult:
        """
        Export a résumé to PDF.

        Args:
            resume: Résumé to export
            template_id: Registered template id (unknown ids use the default)
            style: StyleParams or editor design settings
            title: Document title; defaults to "<name> Resume"

        Returns:
            ExportResult with the PDF bytes and a sanitized filename

        Raises:
            ExportError: DOCUMENT_GENERATION, LIBRARY_UNAVAILABLE,
                BROWSER_LAUNCH, RENDER_TIMEOUT or GENERIC
        """
        title = title or (resume.display_title if resume is not None else "")
        log_export_start(title, template_id, self.strategy.value)
        start_time = time.time()

        try:
            # Generation errors surface before any browser is started
            try:
                document = self.generator.compose(resume, template_id, style)
                html = self.generator.render_html(document, title=title)
            except (TemplateRenderError, MissingResumeDataError) as e:
                raise ExportError(
                    ExportErrorCategory.DOCUMENT_GENERATION,
                    strategy=self.strategy.value,
                    original_error=e,
                ) from e

            content = self.render_pdf(html, margin=document.style.margin_css)
        except ExportError as e:
            log_export_failure(e, time.time() - start_time)
            raise

        result = ExportResult(
            filename=pdf_filename(title),
            content=content,
            page_count=page_count(content),
            strategy=self.strategy,
        )
        log_export_result(result, time.time() - start_time)
        return result

    def render_pdf(self, html: str, margin: str = "0.5in") -> bytes:
        """
        Print HTML to PDF bytes in a freshly launched browser.

        Args:
            html: Self-contained HTML document
            margin: Page margin applied on every side

        Returns:
            PDF bytes

        Raises:
            ExportError: LIBRARY_UNAVAILABLE, BROWSER_LAUNCH, RENDER_TIMEOUT or GENERIC
        """
        try:
            browser = self.launcher.launch()
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(
                ExportErrorCategory.BROWSER_LAUNCH,
                strategy=self.strategy.value,
                original_error=e,
            ) from e
        _log_debug("Browser launched")

        try:
            return self._print(browser, html, margin)
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(
                ExportErrorCategory.GENERIC,
                strategy=self.strategy.value,
                original_error=e,
            ) from e
        finally:
            self._close_browser(browser)

    def _print(self, browser: Browser, html: str, margin: str) -> bytes:
        last_timeout: Optional[RenderTimeoutError] = None

        for attempt in range(1, self.max_attempts + 1):
            page = browser.new_page()
            try:
                page.set_content(html, wait_until="networkidle", timeout=self.render_timeout_ms)
                return page.pdf(**pdf_options(margin))
            except RenderTimeoutError as e:
                last_timeout = e
                _log_warning(f"Render timed out (attempt {attempt}/{self.max_attempts})")
            finally:
                page.close()

        raise ExportError(
            ExportErrorCategory.RENDER_TIMEOUT,
            strategy=self.strategy.value,
            original_error=last_timeout,
        )

    def _close_browser(self, browser: Browser) -> None:
        try:
            browser.close()
        except Exception as e:
            # The PDF (or the original failure) matters more than a failed close
            _log_warning(f"Failed to close browser: {e}")
        else:
            _log_debug("Browser closed")
