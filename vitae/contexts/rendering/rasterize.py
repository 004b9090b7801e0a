"""
Raster Pagination

Slices a full-length capture of the résumé into A4 pages and assembles them
into a PDF with Pillow. Page breaks fall at fixed heights; CSS break rules do
not apply to a raster.
"""

import io
from typing import List, Tuple

from PIL import Image

from vitae.contexts.templating.defaults import PAGE_HEIGHT_MM, PAGE_WIDTH_MM

# CSS reference pixel density
CSS_DPI = 96
MM_PER_INCH = 25.4


def page_size_px(scale: float) -> Tuple[int, int]:
    """A4 page size in device pixels at the given capture scale."""
    width = round(PAGE_WIDTH_MM / MM_PER_INCH * CSS_DPI * scale)
    height = round(PAGE_HEIGHT_MM / MM_PER_INCH * CSS_DPI * scale)
    return width, height


def slice_pages(image: Image.Image, scale: float) -> List[Image.Image]:
    """
    Cut a capture into page-sized images, top to bottom.

    The capture is first fitted to the page width. The last page is padded
    with white so every page has the same size.

    Args:
        image: Full-length capture of the page-sized container
        scale: Device pixel ratio the capture was taken at

    Returns:
        One RGB image per page (at least one)
    """
    page_width, page_height = page_size_px(scale)
    image = image.convert("RGB")

    if image.width != page_width:
        fitted_height = max(1, round(image.height * page_width / image.width))
        image = image.resize((page_width, fitted_height), Image.LANCZOS)

    pages = []
    for top in range(0, image.height, page_height):
        page = Image.new("RGB", (page_width, page_height), "white")
        page.paste(image.crop((0, top, page_width, min(top + page_height, image.height))), (0, 0))
        pages.append(page)

    return pages or [Image.new("RGB", (page_width, page_height), "white")]


def png_to_pdf(png: bytes, scale: float = 2) -> bytes:
    """
    Paginate a PNG capture into a multi-page A4 PDF.

    Args:
        png: PNG bytes of the rasterized container
        scale: Device pixel ratio the capture was taken at

    Returns:
        PDF bytes with one image per page and no margin
    """
    with Image.open(io.BytesIO(png)) as image:
        pages = slice_pages(image, scale)

    buffer = io.BytesIO()
    # Resolution maps device pixels back to the A4 page box
    pages[0].save(
        buffer,
        format="PDF",
        save_all=True,
        append_images=pages[1:],
        resolution=CSS_DPI * scale,
    )
    return buffer.getvalue()
