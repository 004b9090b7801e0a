"""Shared fixtures: sample résumés and fake browser surfaces for the export pipeline."""

import io
import json
from pathlib import Path

import pytest
from PIL import Image

from vitae.contexts.rendering.exceptions import RenderTimeoutError
from vitae.contexts.templating import ResumeData, get_default_registry

SAMPLE_RESUME_PATH = Path(__file__).resolve().parents[1] / "data" / "sample_resume.json"


def make_pdf(pages: int = 1) -> bytes:
    """Small but valid PDF with the given number of blank pages."""
    images = [Image.new("RGB", (60, 85), "white") for _ in range(pages)]
    buffer = io.BytesIO()
    images[0].save(buffer, format="PDF", save_all=True, append_images=images[1:])
    return buffer.getvalue()


def make_png(width: int, height: int) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), "white").save(buffer, format="PNG")
    return buffer.getvalue()


class FakePage:
    def __init__(self, browser):
        self.browser = browser
        self.closed = False

    def set_content(self, html, wait_until, timeout):
        self.browser.launcher.set_content_calls.append(
            {"html": html, "wait_until": wait_until, "timeout": timeout}
        )
        if self.browser.launcher.timeouts_remaining > 0:
            self.browser.launcher.timeouts_remaining -= 1
            raise RenderTimeoutError("page never reached network idle")

    def pdf(self, **options):
        self.browser.launcher.pdf_calls.append(options)
        if self.browser.launcher.pdf_error is not None:
            raise self.browser.launcher.pdf_error
        return self.browser.launcher.pdf_bytes

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, launcher):
        self.launcher = launcher
        self.pages = []

    def new_page(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    def close(self):
        self.launcher.closed += 1


class FakeLauncher:
    """BrowserLauncher double that counts launches and closes."""

    def __init__(self, launch_error=None, timeouts=0, pdf_error=None, pages=1):
        self.launch_error = launch_error
        self.timeouts_remaining = timeouts
        self.pdf_error = pdf_error
        self.pdf_bytes = make_pdf(pages)
        self.launched = 0
        self.closed = 0
        self.browsers = []
        self.set_content_calls = []
        self.pdf_calls = []

    def launch(self):
        if self.launch_error is not None:
            raise self.launch_error
        self.launched += 1
        browser = FakeBrowser(self)
        self.browsers.append(browser)
        return browser


class FakeSurface:
    """CaptureSurface double recording every step of a capture."""

    def __init__(self, text="Alex Morgan Senior Software Engineer", png=None, settle_error=None):
        self.text = text
        self.png = png if png is not None else make_png(1587, 3000)
        self.settle_error = settle_error
        self.html = None
        self.settle_calls = []
        self.rasterized = False
        self.closed = False
        self.on_mount = None
        self.on_rasterize = None

    def mount(self, html):
        self.html = html
        if self.on_mount is not None:
            self.on_mount()

    def wait_for_settle(self, selector, timeout_ms, delay_ms):
        self.settle_calls.append((selector, timeout_ms, delay_ms))
        if self.settle_error is not None:
            raise self.settle_error

    def text_content(self, selector):
        return self.text

    def rasterize(self, selector):
        if self.on_rasterize is not None:
            self.on_rasterize()
        self.rasterized = True
        return self.png

    def close(self):
        self.closed = True


@pytest.fixture
def sample_resume_dict():
    return json.loads(SAMPLE_RESUME_PATH.read_text(encoding="utf-8"))


@pytest.fixture
def sample_resume(sample_resume_dict):
    return ResumeData.from_dict(sample_resume_dict)


@pytest.fixture
def jane_doe():
    """Only a personal header has content; summary and experience are empty."""
    return ResumeData.from_dict(
        {
            "personalInfo": {
                "firstName": "Jane",
                "lastName": "Doe",
                "email": "jane.doe@example.com",
                "phone": "+1 555 0199",
                "location": "Austin, TX",
            },
            "summary": "",
            "experience": [],
            "education": [],
            "skills": {"technical": [], "soft": []},
            "projects": [],
            "certifications": [],
            "sectionOrder": ["personal", "summary", "experience"],
        }
    )


@pytest.fixture
def registry():
    return get_default_registry()


@pytest.fixture
def fake_launcher():
    return FakeLauncher


@pytest.fixture
def fake_surface():
    return FakeSurface


@pytest.fixture
def png_factory():
    return make_png
