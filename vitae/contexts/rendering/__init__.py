"""
Rendering Context

Responsibilities:
- Exports composed résumés to PDF (server-rendered or capture-based)
- Manages the headless browser lifecycle for each export
- Paginates raster captures onto A4 pages
- Classifies export failures for user-facing messages

Owns: PDF generation, browser lifecycle, export error categories
Never: Modifies résumé content or template markup
"""

from vitae.contexts.rendering.capture_export import (
    CaptureExporter,
    CaptureState,
    CaptureSurface,
    PlaywrightCaptureSurface,
)
from vitae.contexts.rendering.exceptions import (
    ExportError,
    ExportErrorCategory,
    RenderTimeoutError,
)
from vitae.contexts.rendering.exporter import create_exporter, export_resume, parse_strategy
from vitae.contexts.rendering.rasterize import png_to_pdf
from vitae.contexts.rendering.results import ExportResult, ExportStrategy
from vitae.contexts.rendering.server_export import (
    BrowserLauncher,
    PlaywrightLauncher,
    ServerExporter,
)

__all__ = [
    "ExportStrategy",
    "ExportResult",
    "ExportError",
    "ExportErrorCategory",
    "RenderTimeoutError",
    "ServerExporter",
    "BrowserLauncher",
    "PlaywrightLauncher",
    "CaptureExporter",
    "CaptureState",
    "CaptureSurface",
    "PlaywrightCaptureSurface",
    "png_to_pdf",
    "create_exporter",
    "export_resume",
    "parse_strategy",
]
