"""
Resume Data Structure

Defines the normalized, template-agnostic representation of a résumé for VITAE.
This structure is the interface between the editor/store layer and the
Templating and Rendering contexts.

Templating owns:
- Converting editor JSON (camelCase) into ResumeData instances
- Rendering ResumeData through visual templates

The render/export pipeline treats ResumeData as read-only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from markupsafe import Markup

from vitae.utils.text_processing import trusted_markup


class SectionKey(str, Enum):
    """Closed set of résumé content blocks that can appear in a section order."""

    PERSONAL = "personal"
    SUMMARY = "summary"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    SKILLS = "skills"
    PROJECTS = "projects"
    CERTIFICATIONS = "certifications"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> Optional["SectionKey"]:
        """Return the matching key, or None for anything outside the closed set."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def _text(value: Any) -> str:
    """Coerce an optional JSON scalar to a string ("" for None)."""
    if value is None:
        return ""
    return str(value)


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text if text else None


def _string_list(values: Any) -> List[str]:
    """Coerce a JSON array of strings, keeping order and duplicates."""
    if not values:
        return []
    return [_text(value) for value in values if value is not None]


@dataclass(frozen=True)
class PersonalInfo:
    """
    Contact header of a résumé.

    first_name, last_name and email are needed for a usable export, but empty
    strings are tolerated so a half-filled résumé still renders.
    """

    first_name: str = ""
    last_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name.strip(), self.last_name.strip()) if part)

    @property
    def contact_items(self) -> List[str]:
        """Non-empty contact details in display order."""
        items = [self.email, self.phone, self.location, self.website, self.linkedin, self.github]
        return [item.strip() for item in items if item and item.strip()]

    @property
    def is_empty(self) -> bool:
        return not (self.full_name or self.title.strip() or self.contact_items)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PersonalInfo":
        data = data or {}
        return cls(
            first_name=_text(data.get("firstName")),
            last_name=_text(data.get("lastName")),
            title=_text(data.get("title")),
            email=_text(data.get("email")),
            phone=_text(data.get("phone")),
            location=_text(data.get("location")),
            website=_optional_text(data.get("website")),
            linkedin=_optional_text(data.get("linkedin")),
            github=_optional_text(data.get("github")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "title": self.title,
            "email": self.email,
            "phone": self.phone,
            "location": self.location,
            "website": self.website,
            "linkedin": self.linkedin,
            "github": self.github,
        }


@dataclass(frozen=True)
class Experience:
    """
    A position held.

    Attributes:
        current: When True the end date is ignored and rendered as "Present"
        bullets: Achievement lines; empty entries are dropped at render time
    """

    id: str = ""
    title: str = ""
    company: str = ""
    location: Optional[str] = None
    start_date: str = ""
    end_date: Optional[str] = None
    current: bool = False
    description: Optional[str] = None
    bullets: List[Optional[str]] = field(default_factory=list)

    @property
    def visible_bullets(self) -> List[str]:
        return [bullet for bullet in self.bullets if bullet and bullet.strip()]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Experience":
        # Bullets keep None/"" entries; filtering is a rendering concern
        bullets = data.get("bullets") or []
        return cls(
            id=_text(data.get("id")),
            title=_text(data.get("title")),
            company=_text(data.get("company")),
            location=_optional_text(data.get("location")),
            start_date=_text(data.get("startDate")),
            end_date=_optional_text(data.get("endDate")),
            current=bool(data.get("current", False)),
            description=_optional_text(data.get("description")),
            bullets=[None if bullet is None else str(bullet) for bullet in bullets],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "current": self.current,
            "description": self.description,
            "bullets": list(self.bullets),
        }


@dataclass(frozen=True)
class Education:
    id: str = ""
    degree: str = ""
    field: Optional[str] = None
    institution: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    gpa: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Education":
        return cls(
            id=_text(data.get("id")),
            degree=_text(data.get("degree")),
            field=_optional_text(data.get("field")),
            # Older records call the institution "school"
            institution=_text(data.get("institution") or data.get("school")),
            start_date=_text(data.get("startDate")),
            end_date=_optional_text(data.get("endDate")),
            gpa=_optional_text(data.get("gpa")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "degree": self.degree,
            "field": self.field,
            "institution": self.institution,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "gpa": self.gpa,
        }


@dataclass(frozen=True)
class Skills:
    """Skill lists. Duplicates are kept and render twice."""

    technical: List[str] = field(default_factory=list)
    soft: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.technical or self.soft)

    @classmethod
    def from_dict(cls, data: Any) -> "Skills":
        # A bare list is treated as technical skills
        if isinstance(data, list):
            return cls(technical=_string_list(data))
        data = data or {}
        return cls(
            technical=_string_list(data.get("technical")),
            soft=_string_list(data.get("soft")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"technical": list(self.technical), "soft": list(self.soft)}


@dataclass(frozen=True)
class Project:
    """
    A portfolio project.

    description is TrustedMarkup: editor rich text inserted without escaping.
    """

    id: str = ""
    name: str = ""
    description: Markup = field(default_factory=Markup)
    url: Optional[str] = None
    technologies: List[str] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name") or data.get("title")),
            description=trusted_markup(data.get("description")),
            url=_optional_text(data.get("url")),
            technologies=_string_list(data.get("technologies")),
            start_date=_optional_text(data.get("startDate")),
            end_date=_optional_text(data.get("endDate")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": str(self.description),
            "url": self.url,
            "technologies": list(self.technologies),
            "startDate": self.start_date,
            "endDate": self.end_date,
        }


@dataclass(frozen=True)
class Certification:
    id: str = ""
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Certification":
        return cls(
            id=_text(data.get("id")),
            name=_text(data.get("name")),
            issuer=_text(data.get("issuer")),
            date=_text(data.get("date")),
            url=_optional_text(data.get("url")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "issuer": self.issuer,
            "date": self.date,
            "url": self.url,
        }


@dataclass(frozen=True)
class CustomSection:
    """User-defined block. Content is plain text and is escaped on render."""

    key: str = ""
    label: str = ""
    content: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CustomSection":
        return cls(
            key=_text(data.get("key")),
            label=_text(data.get("label")),
            content=_text(data.get("content")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"key": self.key, "label": self.label, "content": self.content}


@dataclass(frozen=True)
class ResumeData:
    """
    Root aggregate of a résumé.

    Attributes:
        personal_info: Contact header
        summary: TrustedMarkup rich text (bold/italic/line breaks pass through)
        experience: Positions in display order
        education: Degrees in display order
        skills: Technical and soft skill lists
        projects: Projects in display order
        certifications: Certifications in display order
        section_order: Raw section order as stored; may hold unknown keys
        custom_sections: User-defined blocks rendered by the "custom" key
    """

    personal_info: PersonalInfo = field(default_factory=PersonalInfo)
    summary: Markup = field(default_factory=Markup)
    experience: List[Experience] = field(default_factory=list)
    education: List[Education] = field(default_factory=list)
    skills: Skills = field(default_factory=Skills)
    projects: List[Project] = field(default_factory=list)
    certifications: List[Certification] = field(default_factory=list)
    section_order: List[str] = field(default_factory=list)
    custom_sections: List[CustomSection] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "ResumeData":
        """Blank résumé a new editor session starts from."""
        return cls()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeData":
        """
        Build ResumeData from the editor/store JSON shape.

        Missing keys and null values fall back to empty values; the shape is
        not validated beyond that.

        Args:
            data: Dict with camelCase keys (personalInfo, sectionOrder, ...)

        Returns:
            ResumeData instance

        Raises:
            TypeError: If data is not a mapping
        """
        if not isinstance(data, dict):
            raise TypeError(f"Resume data must be a mapping, got {type(data).__name__}")

        return cls(
            personal_info=PersonalInfo.from_dict(data.get("personalInfo")),
            summary=trusted_markup(data.get("summary")),
            experience=[Experience.from_dict(item) for item in data.get("experience") or []],
            education=[Education.from_dict(item) for item in data.get("education") or []],
            skills=Skills.from_dict(data.get("skills")),
            projects=[Project.from_dict(item) for item in data.get("projects") or []],
            certifications=[
                Certification.from_dict(item) for item in data.get("certifications") or []
            ],
            section_order=_string_list(data.get("sectionOrder")),
            custom_sections=[
                CustomSection.from_dict(item) for item in data.get("customSections") or []
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "personalInfo": self.personal_info.to_dict(),
            "summary": str(self.summary),
            "experience": [item.to_dict() for item in self.experience],
            "education": [item.to_dict() for item in self.education],
            "skills": self.skills.to_dict(),
            "projects": [item.to_dict() for item in self.projects],
            "certifications": [item.to_dict() for item in self.certifications],
            "sectionOrder": list(self.section_order),
            "customSections": [item.to_dict() for item in self.custom_sections],
        }

    def has_content(self, key: SectionKey) -> bool:
        """Whether the section for this key has anything to show."""
        if key is SectionKey.PERSONAL:
            return not self.personal_info.is_empty
        if key is SectionKey.SUMMARY:
            return bool(str(self.summary).strip())
        if key is SectionKey.EXPERIENCE:
            return bool(self.experience)
        if key is SectionKey.EDUCATION:
            return bool(self.education)
        if key is SectionKey.SKILLS:
            return not self.skills.is_empty
        if key is SectionKey.PROJECTS:
            return bool(self.projects)
        if key is SectionKey.CERTIFICATIONS:
            return bool(self.certifications)
        return any(section.content.strip() for section in self.custom_sections)

    @property
    def display_title(self) -> str:
        """Default document title used for export filenames."""
        name = self.personal_info.full_name
        return f"{name} Resume" if name else ""
