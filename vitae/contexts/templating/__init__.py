"""
Templating Context

Responsibilities:
- Owns the résumé data model (ResumeData and its sections)
- Manages the template registry (catalog metadata + Jinja2 templates)
- Renders sections per template style and composes them in section order
- Produces self-contained HTML for preview and export

Owns: Résumé data model, template catalog, section rendering, composition
Never: Launches browsers or writes PDFs
"""

from vitae.contexts.templating.composer import (
    DocumentNode,
    TemplateRenderer,
    compose_document,
    effective_order,
    partition_columns,
)
from vitae.contexts.templating.exceptions import MissingResumeDataError, TemplateRenderError
from vitae.contexts.templating.html_generator import (
    CAPTURE_TARGET_ID,
    ResumeHTMLGenerator,
    compose_resume,
    generate_html_document,
)
from vitae.contexts.templating.registries import TemplateRegistry, get_default_registry
from vitae.contexts.templating.resume_components_data_structures import (
    LayoutKind,
    StyleParams,
    TemplateConfig,
)
from vitae.contexts.templating.resume_data_structure import (
    Certification,
    CustomSection,
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeData,
    SectionKey,
    Skills,
)
from vitae.contexts.templating.section_renderer import SectionFragment, SectionRenderer

__all__ = [
    # Data model
    "ResumeData",
    "PersonalInfo",
    "Experience",
    "Education",
    "Skills",
    "Project",
    "Certification",
    "CustomSection",
    "SectionKey",
    # Template metadata and registry
    "TemplateConfig",
    "LayoutKind",
    "StyleParams",
    "TemplateRegistry",
    "get_default_registry",
    # Rendering and composition
    "SectionFragment",
    "SectionRenderer",
    "DocumentNode",
    "TemplateRenderer",
    "compose_document",
    "effective_order",
    "partition_columns",
    "ResumeHTMLGenerator",
    "compose_resume",
    "generate_html_document",
    "CAPTURE_TARGET_ID",
    # Errors
    "TemplateRenderError",
    "MissingResumeDataError",
]
