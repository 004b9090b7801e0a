"""Unit tests for per-section rendering."""

import pytest

from vitae.contexts.templating.resume_components_data_structures import StyleParams
from vitae.contexts.templating.resume_data_structure import ResumeData, SectionKey
from vitae.contexts.templating.section_renderer import SECTION_HANDLERS, SectionRenderer


def renderer_for(registry, template_id="classic"):
    config = registry.get_config(template_id)
    return SectionRenderer(registry, config, StyleParams.for_template(config))


def resume_with_job(**job):
    entry = {"title": "Engineer", "company": "Initech", "startDate": "2019-05"}
    entry.update(job)
    return ResumeData.from_dict({"experience": [entry]})


@pytest.mark.unit
def test_every_section_key_has_a_handler():
    """Test that the dispatch table is exhaustive."""
    assert set(SECTION_HANDLERS) == set(SectionKey)


@pytest.mark.unit
def test_bullets_filter_empty_entries(registry):
    """Test that ["A", "", "B", None] renders exactly two bullets."""
    resume = resume_with_job(bullets=["A", "", "B", None])
    fragment = renderer_for(registry).render(SectionKey.EXPERIENCE, resume)

    assert fragment.html.count("<li>") == 2
    assert "<li>A</li>" in fragment.html
    assert "<li>B</li>" in fragment.html


@pytest.mark.unit
def test_current_role_renders_present(registry):
    """Test that current=True shows Present and hides the stored end date."""
    resume = resume_with_job(current=True, endDate="2020-01")
    fragment = renderer_for(registry).render(SectionKey.EXPERIENCE, resume)

    assert "May 2019 - Present" in fragment.html
    assert "Jan 2020" not in fragment.html


@pytest.mark.unit
def test_unparseable_dates_render_verbatim(registry):
    """Test that odd date strings are shown as entered."""
    resume = resume_with_job(startDate="Fall '18", endDate="2020-01")
    fragment = renderer_for(registry).render(SectionKey.EXPERIENCE, resume)

    assert "Fall &#39;18 - Jan 2020" in fragment.html


@pytest.mark.unit
@pytest.mark.parametrize(
    "key",
    [
        SectionKey.PERSONAL,
        SectionKey.SUMMARY,
        SectionKey.EXPERIENCE,
        SectionKey.EDUCATION,
        SectionKey.SKILLS,
        SectionKey.PROJECTS,
        SectionKey.CERTIFICATIONS,
        SectionKey.CUSTOM,
    ],
)
def test_empty_sections_render_nothing(registry, key):
    """Test that a section without data yields no fragment at all."""
    assert renderer_for(registry).render(key, ResumeData.empty()) is None


@pytest.mark.unit
def test_whitespace_summary_is_empty(registry):
    """Test that a blank summary does not produce an empty heading."""
    resume = ResumeData.from_dict({"summary": "   "})
    assert renderer_for(registry).render(SectionKey.SUMMARY, resume) is None


@pytest.mark.unit
def test_plain_text_is_escaped(registry):
    """Test that user text never becomes markup."""
    resume = resume_with_job(company="<script>alert('x')</script>", bullets=["<b>bold?</b>"])
    fragment = renderer_for(registry).render(SectionKey.EXPERIENCE, resume)

    assert "<script>" not in fragment.html
    assert "&lt;script&gt;" in fragment.html
    assert "&lt;b&gt;bold?&lt;/b&gt;" in fragment.html


@pytest.mark.unit
def test_trusted_rich_text_is_not_escaped(registry):
    """Test that summary and project descriptions keep their formatting."""
    resume = ResumeData.from_dict(
        {
            "summary": "Built <strong>things</strong>",
            "projects": [{"name": "kit", "description": "Uses <em>asyncio</em>"}],
        }
    )
    renderer = renderer_for(registry)

    assert "<strong>things</strong>" in renderer.render(SectionKey.SUMMARY, resume).html
    assert "<em>asyncio</em>" in renderer.render(SectionKey.PROJECTS, resume).html


@pytest.mark.unit
def test_script_urls_are_not_linked(registry):
    """Test that project and certification links only carry safe schemes."""
    resume = ResumeData.from_dict(
        {
            "projects": [{"name": "kit", "url": "javascript:alert(document.cookie)"}],
            "certifications": [{"name": "CKA", "url": "javascript:alert(2)"}],
        }
    )
    renderer = renderer_for(registry)
    projects = renderer.render(SectionKey.PROJECTS, resume).html
    certifications = renderer.render(SectionKey.CERTIFICATIONS, resume).html

    assert "href" not in projects
    assert "href" not in certifications
    assert "CKA" in certifications


@pytest.mark.unit
def test_safe_urls_are_linked(registry):
    """Test that http(s) and scheme-less links render as anchors."""
    resume = ResumeData.from_dict(
        {
            "projects": [{"name": "kit", "url": "github.com/alexmorgan/tracekit"}],
            "certifications": [{"name": "CKA", "url": "https://cncf.io/cka"}],
        }
    )
    renderer = renderer_for(registry)

    assert 'href="github.com/alexmorgan/tracekit"' in renderer.render(SectionKey.PROJECTS, resume).html
    assert 'href="https://cncf.io/cka"' in renderer.render(SectionKey.CERTIFICATIONS, resume).html


@pytest.mark.unit
def test_template_section_titles(registry, sample_resume):
    """Test catalog heading overrides and defaults."""
    modern = renderer_for(registry, "modern").render(SectionKey.SUMMARY, sample_resume)
    minimalist = renderer_for(registry, "minimalist").render(SectionKey.SUMMARY, sample_resume)

    assert modern.title == "Professional Summary"
    assert minimalist.title == "Summary"
    assert "Professional Summary" in modern.html


@pytest.mark.unit
def test_skills_groups(registry):
    """Test technical and soft skill groups, duplicates kept."""
    resume = ResumeData.from_dict({"skills": {"technical": ["SQL", "SQL"], "soft": []}})
    fragment = renderer_for(registry).render(SectionKey.SKILLS, resume)

    assert "Technical" in fragment.html
    assert "Soft Skills" not in fragment.html
    assert fragment.html.count("<li>SQL</li>") == 2


@pytest.mark.unit
def test_theme_override_is_used(registry):
    """Test that the tech theme renders skills with its own markup."""
    resume = ResumeData.from_dict({"skills": {"technical": ["Rust"]}})
    fragment = renderer_for(registry, "tech").render(SectionKey.SKILLS, resume)

    assert "<code>Rust</code>" in fragment.html


@pytest.mark.unit
def test_custom_sections_skip_blank_content(registry):
    """Test that each filled custom section renders under its label."""
    resume = ResumeData.from_dict(
        {
            "customSections": [
                {"key": "talks", "label": "Talks", "content": "PyCon"},
                {"key": "blank", "label": "Blank", "content": "  "},
            ]
        }
    )
    fragment = renderer_for(registry).render(SectionKey.CUSTOM, resume)

    assert 'data-custom-key="talks"' in fragment.html
    assert "Blank" not in fragment.html


@pytest.mark.unit
def test_personal_header(registry, jane_doe):
    """Test the contact header."""
    fragment = renderer_for(registry).render(SectionKey.PERSONAL, jane_doe)

    assert fragment.title == ""
    assert "Jane Doe" in fragment.html
    assert "jane.doe@example.com" in fragment.html
