"""
Export Orchestration

Single entry point used by the CLI and the HTTP layer to export a résumé with
either strategy.
"""

from typing import Any, Dict, Optional, Union

from vitae.contexts.rendering.capture_export import CaptureExporter
from vitae.contexts.rendering.results import ExportResult, ExportStrategy
from vitae.contexts.rendering.server_export import ServerExporter
from vitae.contexts.templating.html_generator import StyleInput
from vitae.contexts.templating.resume_data_structure import ResumeData

EXPORTER_CLASSES = {
    ExportStrategy.SERVER: ServerExporter,
    ExportStrategy.CAPTURE: CaptureExporter,
}

Exporter = Union[ServerExporter, CaptureExporter]


def parse_strategy(strategy: Union[str, ExportStrategy, None]) -> ExportStrategy:
    """
    Resolve a strategy name, defaulting to server rendering.

    Raises:
        ValueError: If the name is not a known strategy
    """
    if strategy is None:
        return ExportStrategy.SERVER
    try:
        return ExportStrategy(strategy)
    except ValueError:
        known = ", ".join(s.value for s in ExportStrategy)
        raise ValueError(f"Unknown export strategy {strategy!r} (expected one of: {known})")


def create_exporter(strategy: Union[str, ExportStrategy, None] = None, **kwargs: Any) -> Exporter:
    """Build an exporter for a strategy; kwargs go to the exporter's constructor."""
    return EXPORTER_CLASSES[parse_strategy(strategy)](**kwargs)


def export_resume(
    resume: Union[ResumeData, Dict[str, Any]],
    template_id: Optional[str] = None,
    strategy: Union[str, ExportStrategy, None] = None,
    style: StyleInput = None,
    title: Optional[str] = None,
    exporter: Optional[Exporter] = None,
) -> ExportResult:
    """
    Export a résumé to PDF.

    Args:
        resume: ResumeData, or the editor's camelCase JSON
        template_id: Registered template id (unknown ids use the default)
        strategy: "server" (default) or "capture"; ignored when exporter is given
        style: StyleParams or editor design settings
        title: Document title; defaults to "<name> Resume"
        exporter: Exporter to use instead of building one

    Returns:
        ExportResult with the PDF bytes

    Raises:
        ExportError: If the export fails
    """
    if isinstance(resume, dict):
        resume = ResumeData.from_dict(resume)
    if exporter is None:
        exporter = create_exporter(strategy)
    return exporter.export(resume, template_id=template_id, style=style, title=title)
