"""
HTML Generator

Converts ResumeData into composed documents and self-contained HTML.
"""

from typing import Any, Dict, Optional, Union

from jinja2 import TemplateError

from vitae.contexts.templating.composer import DocumentNode
from vitae.contexts.templating.defaults import PAGE_HEIGHT_MM, PAGE_WIDTH_MM
from vitae.contexts.templating.exceptions import MissingResumeDataError, TemplateRenderError
from vitae.contexts.templating.registries import TemplateRegistry, get_default_registry
from vitae.contexts.templating.resume_components_data_structures import StyleParams
from vitae.contexts.templating.resume_data_structure import ResumeData

# Element id of the page-sized container used for capture-based export
CAPTURE_TARGET_ID = "resume-capture-target"

StyleInput = Union[StyleParams, Dict[str, Any], None]


class ResumeHTMLGenerator:
    """Composes résumés with registered templates and wraps them as HTML documents."""

    def __init__(self, registry: TemplateRegistry = None):
        self.registry = registry or get_default_registry()

    def compose(
        self,
        resume: ResumeData,
        template_id: Optional[str] = None,
        style: StyleInput = None,
    ) -> DocumentNode:
        """
        Compose a résumé with a template, falling back to the default template.

        Args:
            resume: Résumé to compose
            template_id: Registered template id; unknown ids use the default template
            style: StyleParams, or a dict of editor design settings to apply
                on top of the template's defaults

        Returns:
            DocumentNode for preview or export
        """
        if resume is None:
            raise MissingResumeDataError("Cannot compose a document without resume data")

        renderer = self.registry.resolve_or_default(template_id)
        if not isinstance(style, StyleParams):
            style = StyleParams.for_template(renderer.config, style)
        return renderer(resume, style)

    def render_html(self, document: DocumentNode, title: str = "", capture: bool = False) -> str:
        """
        Wrap a composed document in a self-contained HTML page.

        All CSS is inlined and no external resources are referenced.

        Args:
            document: Composed document
            title: <title> of the page
            capture: Place the body in an off-screen, page-sized container
                for capture-based export

        Returns:
            Complete HTML document string
        """
        template_name = "structure/document.html.jinja"
        try:
            template = self.registry.get_template(template_name)
            return template.render(
                title=title or "Resume",
                document=document,
                capture=capture,
                capture_target_id=CAPTURE_TARGET_ID,
                page_width_mm=PAGE_WIDTH_MM,
                page_height_mm=PAGE_HEIGHT_MM,
            )
        except TemplateError as e:
            raise TemplateRenderError(
                "Failed to render HTML document",
                template_id=document.template_id,
                template_name=template_name,
                original_error=e,
            ) from e

    def generate_document(
        self,
        resume: ResumeData,
        template_id: Optional[str] = None,
        style: StyleInput = None,
        title: str = "",
        capture: bool = False,
    ) -> str:
        """Compose and wrap in one step."""
        document = self.compose(resume, template_id, style)
        return self.render_html(document, title=title or resume.display_title, capture=capture)


def compose_resume(
    resume: ResumeData,
    template_id: Optional[str] = None,
    style: StyleInput = None,
    registry: TemplateRegistry = None,
) -> DocumentNode:
    """Compose a résumé into a DocumentNode (see ResumeHTMLGenerator.compose)."""
    return ResumeHTMLGenerator(registry).compose(resume, template_id, style)


def generate_html_document(
    resume: ResumeData,
    template_id: Optional[str] = None,
    style: StyleInput = None,
    title: str = "",
    registry: TemplateRegistry = None,
) -> str:
    """Self-contained HTML for a résumé (see ResumeHTMLGenerator.generate_document)."""
    return ResumeHTMLGenerator(registry).generate_document(resume, template_id, style, title)
