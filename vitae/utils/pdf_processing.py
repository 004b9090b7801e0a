"""
PDF inspection helpers for exported résumés.

Helper functions:
    page_count: Quick page count without full extraction.
    page_sizes: Page box of every page, in points.
    extract_text: Text of every page joined in reading order.
    normalize_for_matching: Fuzzy matching key for extracted text.
"""

import io
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pdfplumber
from PyPDF2 import PdfReader

PdfSource = Union[Path, bytes]

# A4 in PDF points (1/72 inch)
A4_POINTS = (595.28, 841.89)


def _open_source(pdf: PdfSource):
    return io.BytesIO(pdf) if isinstance(pdf, (bytes, bytearray)) else str(pdf)


def page_count(pdf: PdfSource) -> Optional[int]:
    """Get page count from a PDF path or in-memory bytes, or None if unreadable."""
    try:
        reader = PdfReader(_open_source(pdf))
        return len(reader.pages)
    except Exception:
        return None


def page_sizes(pdf: PdfSource) -> List[Tuple[float, float]]:
    """(width, height) of each page in points."""
    reader = PdfReader(_open_source(pdf))
    return [(float(page.mediabox.width), float(page.mediabox.height)) for page in reader.pages]


def is_a4(size: Tuple[float, float], tolerance: float = 2.0) -> bool:
    """Whether a page size matches A4 portrait within tolerance points."""
    width, height = size
    return abs(width - A4_POINTS[0]) <= tolerance and abs(height - A4_POINTS[1]) <= tolerance


def extract_text(pdf: PdfSource, max_pages: Optional[int] = None) -> str:
    """
    Extract the text layer of a PDF.

    Raster exports have no text layer and yield an empty string.

    Args:
        pdf: PDF path or bytes
        max_pages: Only read the first max_pages pages

    Returns:
        Page texts joined by newlines
    """
    with pdfplumber.open(_open_source(pdf)) as document:
        pages = document.pages if max_pages is None else document.pages[:max_pages]
        return "\n".join(page.extract_text() or "" for page in pages)


def normalize_for_matching(text: str) -> str:
    """Keep only lowercase alphanumeric characters for fuzzy text matching."""
    return "".join(c for c in text.lower() if c.isalnum())
