"""
Templating Registries

Centralized registry for template metadata and the Jinja2 templates that render
them. Built once and read-only afterwards; only the template cache fills lazily.
"""

import os
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    select_autoescape,
)
from omegaconf import OmegaConf

from vitae.contexts.templating.composer import TemplateRenderer
from vitae.contexts.templating.defaults import DEFAULT_TEMPLATE_ID
from vitae.contexts.templating.logger import _log_warning
from vitae.contexts.templating.resume_components_data_structures import TemplateConfig
from vitae.utils.text_processing import safe_url
from vitae.utils.timestamp import format_date_range, format_month_year

load_dotenv()
TEMPLATING_CONTEXT_PATH = Path(__file__).resolve().parent
TEMPLATES_PATH = TEMPLATING_CONTEXT_PATH / "templates"
TEMPLATE_CATALOG_PATH = Path(
    os.getenv("VITAE_TEMPLATE_CATALOG_PATH", TEMPLATING_CONTEXT_PATH / "template_catalog.yaml")
)


def load_template_catalog(catalog_path: Path = None) -> Dict[str, TemplateConfig]:
    """
    Load template metadata from the catalog YAML.

    Args:
        catalog_path: Optional path to catalog (defaults to TEMPLATE_CATALOG_PATH)

    Returns:
        Dict mapping template id to TemplateConfig, in catalog order

    Raises:
        ValueError: If the catalog does not define the default template
    """
    if catalog_path is None:
        catalog_path = TEMPLATE_CATALOG_PATH

    raw = OmegaConf.to_container(OmegaConf.load(catalog_path), resolve=True)
    catalog = {
        template_id: TemplateConfig.from_dict(template_id, data)
        for template_id, data in raw.items()
    }

    if DEFAULT_TEMPLATE_ID not in catalog:
        raise ValueError(
            f"Template catalog {catalog_path} must define the default template "
            f"'{DEFAULT_TEMPLATE_ID}'"
        )
    return catalog


class TemplateRegistry:
    """
    Registry of visual templates and their Jinja2 sources.

    Layout:
    - templates/structure/: document shell, column layouts, base CSS
    - templates/sections/{section}.html.jinja: shared section markup
    - templates/themes/{template_id}/: theme.css.jinja plus optional
      {section}.html.jinja overrides for that template
    """

    def __init__(self, catalog_path: Path = None, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            catalog_path: Template catalog YAML (defaults to TEMPLATE_CATALOG_PATH)
            templates_path: Base path for Jinja2 templates (defaults to TEMPLATES_PATH)
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._configs: Mapping[str, TemplateConfig] = MappingProxyType(
            load_template_catalog(catalog_path)
        )
        self._renderers: Mapping[str, TemplateRenderer] = MappingProxyType(
            {template_id: TemplateRenderer(config, self) for template_id, config in self._configs.items()}
        )
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Escape HTML templates; CSS templates are emitted verbatim
            autoescape=select_autoescape(enabled_extensions=("html.jinja",), default=False),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["month_year"] = format_month_year
        self.env.filters["safe_url"] = safe_url
        self.env.globals["date_range"] = format_date_range

    # Template metadata

    def resolve(self, template_id: str) -> Optional[TemplateRenderer]:
        """
        Look up the render function for a template id.

        Pure lookup: unknown ids return None and callers decide the fallback.
        """
        return self._renderers.get(template_id)

    def resolve_or_default(self, template_id: Optional[str]) -> TemplateRenderer:
        """Render function for template_id, falling back to the default template."""
        renderer = self.resolve(template_id) if template_id else None
        if renderer is None:
            _log_warning(
                f"Unknown template id {template_id!r}, falling back to '{DEFAULT_TEMPLATE_ID}'"
            )
            renderer = self._renderers[DEFAULT_TEMPLATE_ID]
        return renderer

    def get_config(self, template_id: str) -> Optional[TemplateConfig]:
        return self._configs.get(template_id)

    def list_configs(self) -> List[TemplateConfig]:
        """All templates in catalog order."""
        return list(self._configs.values())

    def by_category(self, category: str) -> List[TemplateConfig]:
        return [config for config in self._configs.values() if config.category == category]

    def recommended(self) -> List[TemplateConfig]:
        return [config for config in self._configs.values() if config.recommended]

    @property
    def template_ids(self) -> List[str]:
        return list(self._configs)

    # Jinja2 templates

    def get_template(self, template_name: str) -> Template:
        """
        Get a Jinja2 template by path, loading and caching it if necessary.

        Args:
            template_name: Path relative to templates_path
                (e.g., 'structure/document.html.jinja')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_name in self._cache:
            return self._cache[template_name]

        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found: {self.templates_path / template_name}"
            ) from e

        self._cache[template_name] = template
        return template

    def get_section_template(self, template_id: str, section: str) -> Template:
        """
        Get the section template for a theme, preferring the theme's override.

        Args:
            template_id: Theme directory under templates/themes/
            section: Section key (e.g., 'experience')

        Returns:
            Jinja2 Template for the section
        """
        cache_key = f"{template_id}:{section}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        template = self.env.select_template(
            [
                f"themes/{template_id}/{section}.html.jinja",
                f"sections/{section}.html.jinja",
            ]
        )
        self._cache[cache_key] = template
        return template

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_name: str) -> bool:
        return template_name in self._cache


@lru_cache(maxsize=1)
def get_default_registry() -> TemplateRegistry:
    """Process-wide registry built from the packaged catalog and templates."""
    return TemplateRegistry()
