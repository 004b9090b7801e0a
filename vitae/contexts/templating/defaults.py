"""
Default values for VITAE rendering.

Provides shared defaults used by:
- resume_components_data_structures.py (StyleParams fallbacks)
- composer.py (section order and sidebar partition)
- section_renderer.py (section headings)
"""

from typing import Any, Dict, List

from vitae.contexts.templating.resume_data_structure import SectionKey

# Render order used when a résumé has no (or an empty) section order
DEFAULT_ORDER: List[SectionKey] = [
    SectionKey.PERSONAL,
    SectionKey.SUMMARY,
    SectionKey.EXPERIENCE,
    SectionKey.SKILLS,
    SectionKey.EDUCATION,
    SectionKey.CERTIFICATIONS,
    SectionKey.PROJECTS,
]

# Sections placed in the narrow column of two-column layouts
SIDEBAR_KEYS = frozenset({SectionKey.PERSONAL, SectionKey.SKILLS})

# Template used when a requested template id does not resolve
DEFAULT_TEMPLATE_ID = "modern"

PRESENT_TOKEN = "Present"

# Default section headings; themes may override them in the catalog
SECTION_TITLES: Dict[SectionKey, str] = {
    SectionKey.PERSONAL: "",
    SectionKey.SUMMARY: "Summary",
    SectionKey.EXPERIENCE: "Experience",
    SectionKey.EDUCATION: "Education",
    SectionKey.SKILLS: "Skills",
    SectionKey.PROJECTS: "Projects",
    SectionKey.CERTIFICATIONS: "Certifications",
    SectionKey.CUSTOM: "",
}

# Default typography and page geometry
DEFAULT_STYLE: Dict[str, Any] = {
    "accent_color": "#3B82F6",
    "font_family": "Inter, Helvetica, Arial, sans-serif",
    "font_size": 11.0,
    "line_height": 1.5,
    "margins": 0.5,
}

# A4 page box shared by both export strategies
PAGE_FORMAT = "A4"
PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
