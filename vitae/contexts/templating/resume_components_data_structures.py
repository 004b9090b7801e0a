"""
Resume Component Data Structures

Defines data classes for the rendering side of a résumé: template metadata,
layout kinds and style parameters. These structures are used by the Templating
context when composing documents and by the Rendering context when exporting.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from vitae.contexts.templating.defaults import DEFAULT_STYLE

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
# Font stacks: names, spaces, commas, hyphens and quotes only
FONT_FAMILY = re.compile(r"^[A-Za-z0-9 ,'\"-]+$")


class LayoutKind(str, Enum):
    """Structural arrangement of sections within a template."""

    SINGLE_COLUMN = "single-column"
    TWO_COLUMN = "two-column"


@dataclass(frozen=True)
class TemplateConfig:
    """
    Metadata for one registered template.

    Attributes:
        id: Template identifier used in requests (e.g., "modern")
        name: Display name for the template picker
        description: One-line description
        category: Picker category (e.g., "Professional")
        accent_color: Hex accent color, also the default style accent
        features: Feature tags shown in the picker
        suitable_for: Roles the template suits
        layout_kind: Single column or sidebar layout
        preview: Preview image path for the picker
        recommended: Whether the picker highlights this template
        section_titles: Heading overrides keyed by section key
    """

    id: str
    name: str
    description: str = ""
    category: str = ""
    accent_color: str = DEFAULT_STYLE["accent_color"]
    features: List[str] = field(default_factory=list)
    suitable_for: List[str] = field(default_factory=list)
    layout_kind: LayoutKind = LayoutKind.SINGLE_COLUMN
    preview: str = ""
    recommended: bool = False
    section_titles: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, template_id: str, data: Dict[str, Any]) -> "TemplateConfig":
        return cls(
            id=template_id,
            name=data["name"],
            description=data.get("description", ""),
            category=data.get("category", ""),
            accent_color=data.get("accent_color", DEFAULT_STYLE["accent_color"]),
            features=list(data.get("features") or []),
            suitable_for=list(data.get("suitable_for") or []),
            layout_kind=LayoutKind(data.get("layout_kind", LayoutKind.SINGLE_COLUMN.value)),
            preview=data.get("preview", ""),
            recommended=bool(data.get("recommended", False)),
            section_titles=dict(data.get("section_titles") or {}),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Catalog entry in the camelCase shape the template picker reads."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "accentColor": self.accent_color,
            "features": list(self.features),
            "suitableFor": list(self.suitable_for),
            "layoutKind": self.layout_kind.value,
            "preview": self.preview,
            "recommended": self.recommended,
        }


@dataclass(frozen=True)
class StyleParams:
    """
    Typography and page geometry applied to a composed document.

    Attributes:
        accent_color: Hex color for headings, rules and badges
        font_family: CSS font stack
        font_size: Base font size in points
        line_height: Unitless CSS line height
        margins: Page margin in inches, applied on all sides
    """

    accent_color: str = DEFAULT_STYLE["accent_color"]
    font_family: str = DEFAULT_STYLE["font_family"]
    font_size: float = DEFAULT_STYLE["font_size"]
    line_height: float = DEFAULT_STYLE["line_height"]
    margins: float = DEFAULT_STYLE["margins"]

    @classmethod
    def for_template(
        cls, config: TemplateConfig, overrides: Optional[Dict[str, Any]] = None
    ) -> "StyleParams":
        """
        Default style for a template, with editor design settings applied.

        Invalid override values are ignored so a bad setting degrades to the
        template default instead of failing the render.

        Args:
            config: Template whose accent color seeds the style
            overrides: Design settings (accentColor, fontFamily, fontSize,
                lineHeight, margins); snake_case keys are accepted too
        """
        style = cls(accent_color=config.accent_color)
        return style.with_overrides(overrides) if overrides else style

    def with_overrides(self, overrides: Dict[str, Any]) -> "StyleParams":
        def pick(camel: str, snake: str) -> Any:
            return overrides.get(camel, overrides.get(snake))

        changes: Dict[str, Any] = {}

        accent = pick("accentColor", "accent_color")
        if isinstance(accent, str) and HEX_COLOR.match(accent.strip()):
            changes["accent_color"] = accent.strip()

        font_family = pick("fontFamily", "font_family")
        if isinstance(font_family, str) and FONT_FAMILY.match(font_family.strip()):
            changes["font_family"] = font_family.strip()

        for camel, snake, low, high in (
            ("fontSize", "font_size", 6.0, 24.0),
            ("lineHeight", "line_height", 0.8, 3.0),
            ("margins", "margins", 0.0, 2.0),
        ):
            value = pick(camel, snake)
            try:
                number = float(value)
            except (TypeError, ValueError):
                continue
            if low <= number <= high:
                changes[snake] = number

        return replace(self, **changes)

    @property
    def margin_css(self) -> str:
        return f"{self.margins:g}in"
