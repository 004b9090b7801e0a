"""
Section Renderer

Renders one résumé section (personal header, summary, experience, ...) for a
given template style. Each section key has exactly one handler in a closed
dispatch table; a handler returns a SectionFragment, or None when the section
has nothing to show so that no empty heading ever reaches the document.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from jinja2 import TemplateError
from markupsafe import Markup

from vitae.contexts.templating.defaults import PRESENT_TOKEN, SECTION_TITLES
from vitae.contexts.templating.exceptions import TemplateRenderError
from vitae.contexts.templating.resume_components_data_structures import (
    StyleParams,
    TemplateConfig,
)
from vitae.contexts.templating.resume_data_structure import ResumeData, SectionKey
from vitae.utils.timestamp import format_date_range, format_month_year

if TYPE_CHECKING:
    from vitae.contexts.templating.registries import TemplateRegistry


@dataclass(frozen=True)
class SectionFragment:
    """
    Rendered markup for one section.

    Attributes:
        key: Section key the fragment was rendered for
        title: Heading text shown above the section ("" for headless sections)
        html: Escaped section markup
    """

    key: SectionKey
    title: str
    html: Markup


class SectionRenderer:
    """Renders sections of one résumé with one template's style."""

    def __init__(self, registry: "TemplateRegistry", config: TemplateConfig, style: StyleParams):
        self.registry = registry
        self.config = config
        self.style = style

    def title_for(self, key: SectionKey) -> str:
        """Heading for a section, honoring the template's title overrides."""
        return self.config.section_titles.get(key.value, SECTION_TITLES[key])

    def render(self, key: SectionKey, resume: ResumeData) -> Optional[SectionFragment]:
        """
        Render a single section.

        Args:
            key: Section to render
            resume: Résumé to read the section slice from

        Returns:
            SectionFragment, or None when the section is empty
        """
        return SECTION_HANDLERS[key](self, resume)

    def build_fragment(self, key: SectionKey, **context: Any) -> SectionFragment:
        title = self.title_for(key)
        template = self.registry.get_section_template(self.config.id, key.value)
        try:
            html = template.render(
                title=title,
                style=self.style,
                template_id=self.config.id,
                present=PRESENT_TOKEN,
                **context,
            )
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render '{key.value}' section",
                template_id=self.config.id,
                template_name=template.name,
                original_error=e,
            ) from e
        return SectionFragment(key=key, title=title, html=Markup(html.strip()))


def _render_personal(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    info = resume.personal_info
    if info.is_empty:
        return None
    return renderer.build_fragment(SectionKey.PERSONAL, info=info)


def _render_summary(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    if not resume.has_content(SectionKey.SUMMARY):
        return None
    # summary is TrustedMarkup, so autoescaping leaves it as-is
    return renderer.build_fragment(SectionKey.SUMMARY, summary=resume.summary)


def _render_experience(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    if not resume.experience:
        return None
    entries = [
        {
            "title": job.title,
            "company": job.company,
            "location": job.location or "",
            "dates": format_date_range(job.start_date, job.end_date, job.current),
            "description": job.description or "",
            "bullets": job.visible_bullets,
        }
        for job in resume.experience
    ]
    return renderer.build_fragment(SectionKey.EXPERIENCE, entries=entries)


def _render_education(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    if not resume.education:
        return None
    entries = [
        {
            "degree": edu.degree,
            "field": edu.field or "",
            "institution": edu.institution,
            "dates": format_date_range(edu.start_date, edu.end_date),
            "gpa": edu.gpa or "",
        }
        for edu in resume.education
    ]
    return renderer.build_fragment(SectionKey.EDUCATION, entries=entries)


def _render_skills(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    skills = resume.skills
    if skills.is_empty:
        return None
    groups = [
        {"label": label, "items": items}
        for label, items in (("Technical", skills.technical), ("Soft Skills", skills.soft))
        if items
    ]
    return renderer.build_fragment(SectionKey.SKILLS, groups=groups, skills=skills)


def _render_projects(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    if not resume.projects:
        return None
    entries = [
        {
            "name": project.name,
            "url": project.url or "",
            "technologies": project.technologies,
            "dates": format_date_range(project.start_date, project.end_date),
            # TrustedMarkup, inserted without escaping
            "description": project.description,
        }
        for project in resume.projects
    ]
    return renderer.build_fragment(SectionKey.PROJECTS, entries=entries)


def _render_certifications(
    renderer: SectionRenderer, resume: ResumeData
) -> Optional[SectionFragment]:
    if not resume.certifications:
        return None
    entries = [
        {
            "name": cert.name,
            "issuer": cert.issuer,
            "date": format_month_year(cert.date),
            "url": cert.url or "",
        }
        for cert in resume.certifications
    ]
    return renderer.build_fragment(SectionKey.CERTIFICATIONS, entries=entries)


def _render_custom(renderer: SectionRenderer, resume: ResumeData) -> Optional[SectionFragment]:
    sections: List[Dict[str, str]] = [
        {"key": section.key, "label": section.label, "content": section.content}
        for section in resume.custom_sections
        if section.content.strip()
    ]
    if not sections:
        return None
    return renderer.build_fragment(SectionKey.CUSTOM, sections=sections)


SectionHandler = Callable[[SectionRenderer, ResumeData], Optional[SectionFragment]]

SECTION_HANDLERS: Dict[SectionKey, SectionHandler] = {
    SectionKey.PERSONAL: _render_personal,
    SectionKey.SUMMARY: _render_summary,
    SectionKey.EXPERIENCE: _render_experience,
    SectionKey.EDUCATION: _render_education,
    SectionKey.SKILLS: _render_skills,
    SectionKey.PROJECTS: _render_projects,
    SectionKey.CERTIFICATIONS: _render_certifications,
    SectionKey.CUSTOM: _render_custom,
}

_unhandled = set(SectionKey) - set(SECTION_HANDLERS)
if _unhandled:
    raise RuntimeError(f"Section keys without a renderer: {sorted(k.value for k in _unhandled)}")
