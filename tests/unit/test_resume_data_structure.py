"""Unit tests for the résumé data model."""

import pytest
from markupsafe import Markup

from vitae.contexts.templating.resume_data_structure import (
    Education,
    Experience,
    PersonalInfo,
    ResumeData,
    SectionKey,
    Skills,
)


@pytest.mark.unit
def test_from_dict_reads_camel_case(sample_resume):
    """Test that editor JSON maps onto the dataclasses."""
    assert sample_resume.personal_info.full_name == "Alex Morgan"
    assert sample_resume.personal_info.title == "Senior Software Engineer"
    assert sample_resume.experience[0].start_date == "2021-03"
    assert sample_resume.experience[0].current is True
    assert sample_resume.education[0].institution == "Oregon State University"
    assert sample_resume.skills.soft == ["Mentoring", "Technical writing"]
    assert sample_resume.custom_sections[0].label == "Talks"


@pytest.mark.unit
def test_from_dict_tolerates_missing_and_null_fields():
    """Test that absent keys and nulls become empty values."""
    resume = ResumeData.from_dict({"personalInfo": None, "experience": None, "skills": None})

    assert resume.personal_info.is_empty
    assert resume.experience == []
    assert resume.skills.is_empty
    assert resume.section_order == []
    assert str(resume.summary) == ""


@pytest.mark.unit
def test_from_dict_rejects_non_mapping():
    """Test that a non-dict payload is a TypeError."""
    with pytest.raises(TypeError):
        ResumeData.from_dict(["not", "a", "resume"])


@pytest.mark.unit
def test_bullets_keep_empty_entries_until_render():
    """Test that empty bullets survive parsing and are filtered by visible_bullets."""
    job = Experience.from_dict({"title": "Engineer", "bullets": ["A", "", "B", None, "   "]})

    assert job.bullets == ["A", "", "B", None, "   "]
    assert job.visible_bullets == ["A", "B"]


@pytest.mark.unit
def test_education_accepts_school_alias():
    """Test that older records using 'school' still fill institution."""
    edu = Education.from_dict({"degree": "B.A.", "school": "Reed College"})
    assert edu.institution == "Reed College"


@pytest.mark.unit
def test_skills_bare_list_is_technical():
    """Test that a plain skills list is read as technical skills."""
    skills = Skills.from_dict(["Go", "Rust", "Go"])
    assert skills.technical == ["Go", "Rust", "Go"]
    assert skills.soft == []


@pytest.mark.unit
def test_summary_is_trusted_markup_without_active_content():
    """Test that rich text is admitted as Markup with scripts removed."""
    resume = ResumeData.from_dict(
        {"summary": '<b>Lead</b><script>alert(1)</script><a href="javascript:evil()">x</a>'}
    )

    assert isinstance(resume.summary, Markup)
    assert "<b>Lead</b>" in resume.summary
    assert "script" not in resume.summary
    assert "javascript:" not in resume.summary


@pytest.mark.unit
def test_contact_items_skip_blank_values():
    """Test that only filled contact details are listed, in display order."""
    info = PersonalInfo(email="a@b.c", phone=" ", location="Berlin", github="github.com/a")
    assert info.contact_items == ["a@b.c", "Berlin", "github.com/a"]


@pytest.mark.unit
def test_has_content_per_section(jane_doe):
    """Test content detection for the Jane Doe résumé."""
    assert jane_doe.has_content(SectionKey.PERSONAL)
    assert not jane_doe.has_content(SectionKey.SUMMARY)
    assert not jane_doe.has_content(SectionKey.EXPERIENCE)
    assert not jane_doe.has_content(SectionKey.CUSTOM)


@pytest.mark.unit
def test_section_key_parse():
    """Test that parsing accepts known keys loosely and rejects the rest."""
    assert SectionKey.parse("experience") is SectionKey.EXPERIENCE
    assert SectionKey.parse(" Skills ") is SectionKey.SKILLS
    assert SectionKey.parse(SectionKey.CUSTOM) is SectionKey.CUSTOM
    assert SectionKey.parse("hobbies") is None
    assert SectionKey.parse(None) is None


@pytest.mark.unit
def test_to_dict_round_trips_editor_shape(sample_resume_dict):
    """Test that to_dict emits the camelCase shape from_dict reads."""
    resume = ResumeData.from_dict(sample_resume_dict)
    again = ResumeData.from_dict(resume.to_dict())

    assert again == resume
    assert resume.to_dict()["sectionOrder"] == sample_resume_dict["sectionOrder"]


@pytest.mark.unit
def test_display_title():
    """Test the default document title."""
    assert ResumeData.from_dict({"personalInfo": {"firstName": "Ana"}}).display_title == "Ana Resume"
    assert ResumeData.empty().display_title == ""
