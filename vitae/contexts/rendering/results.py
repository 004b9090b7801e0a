"""
Export results shared by both export strategies.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class ExportStrategy(str, Enum):
    """How a composed document becomes a PDF."""

    # Headless browser prints the HTML with the browser's PDF engine
    SERVER = "server"
    # Document is rasterized off-screen and the image is paginated
    CAPTURE = "capture"


@dataclass
class ExportResult:
    """
    Result of a successful export.

    Attributes:
        filename: Download filename derived from the résumé title
        content: PDF bytes
        page_count: Number of pages in the PDF (None if not available)
        strategy: Strategy that produced the PDF
    """

    filename: str
    content: bytes
    page_count: Optional[int]
    strategy: ExportStrategy

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    def write_to(self, directory: Path) -> Path:
        """Write the PDF into directory under its filename and return the path."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        pdf_path = directory / self.filename
        pdf_path.write_bytes(self.content)
        return pdf_path
