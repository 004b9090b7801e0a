"""Unit tests for raster pagination."""

import io

import pytest
from PIL import Image

from vitae.contexts.rendering.rasterize import page_size_px, png_to_pdf, slice_pages
from vitae.utils.pdf_processing import is_a4, page_count, page_sizes


@pytest.mark.unit
def test_page_size_px():
    """Test A4 in CSS pixels at 1x and 2x."""
    assert page_size_px(1) == (794, 1123)
    assert page_size_px(2) == (1587, 2245)


@pytest.mark.unit
def test_short_capture_is_one_padded_page():
    """Test that a short capture fills one page with white below it."""
    pages = slice_pages(Image.new("RGB", (1587, 500), "black"), scale=2)

    assert len(pages) == 1
    assert pages[0].size == (1587, 2245)
    assert pages[0].getpixel((10, 10)) == (0, 0, 0)
    assert pages[0].getpixel((10, 2000)) == (255, 255, 255)


@pytest.mark.unit
def test_long_capture_spans_pages():
    """Test that page breaks fall at whole page heights."""
    assert len(slice_pages(Image.new("RGB", (1587, 2245 * 2)), scale=2)) == 2
    assert len(slice_pages(Image.new("RGB", (1587, 2245 * 2 + 1)), scale=2)) == 3


@pytest.mark.unit
def test_capture_is_fitted_to_page_width():
    """Test that a capture at another width is scaled to the page width."""
    pages = slice_pages(Image.new("RGB", (794, 1123)), scale=2)

    assert len(pages) == 1
    assert pages[0].size == (1587, 2245)


@pytest.mark.unit
def test_png_to_pdf_makes_a4_pages(png_factory):
    """Test that the assembled PDF has A4 pages."""
    pdf = png_to_pdf(png_factory(1587, 5000), scale=2)

    assert page_count(pdf) == 3
    assert all(is_a4(size) for size in page_sizes(pdf))


@pytest.mark.unit
def test_png_to_pdf_handles_transparency():
    """Test that RGBA captures are flattened for PDF output."""
    buffer = io.BytesIO()
    Image.new("RGBA", (1587, 100), (0, 0, 0, 0)).save(buffer, format="PNG")

    assert page_count(png_to_pdf(buffer.getvalue(), scale=2)) == 1
