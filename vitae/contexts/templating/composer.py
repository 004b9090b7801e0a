"""
Template Composer

Assembles rendered sections into one document per template, in the résumé's
section order, honoring the template's layout (single column or sidebar).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, Tuple

from jinja2 import TemplateError
from markupsafe import Markup

from vitae.contexts.templating.defaults import DEFAULT_ORDER, SIDEBAR_KEYS
from vitae.contexts.templating.exceptions import MissingResumeDataError, TemplateRenderError
from vitae.contexts.templating.logger import _log_debug
from vitae.contexts.templating.resume_components_data_structures import (
    LayoutKind,
    StyleParams,
    TemplateConfig,
)
from vitae.contexts.templating.resume_data_structure import ResumeData, SectionKey
from vitae.contexts.templating.section_renderer import SectionFragment, SectionRenderer
from vitae.utils.text_processing import markup_text_length

if TYPE_CHECKING:
    from vitae.contexts.templating.registries import TemplateRegistry


@dataclass(frozen=True)
class DocumentNode:
    """
    Composed résumé, independent of the sink it is shown on.

    Attributes:
        template_id: Template the document was composed with
        layout_kind: Layout used for composition
        style: Style parameters applied
        main: Fragments of the main (or only) column, top to bottom
        sidebar: Fragments of the narrow column (two-column layouts only)
        body: Layout markup holding every fragment
        stylesheet: Inlined CSS for the template and style
    """

    template_id: str
    layout_kind: LayoutKind
    style: StyleParams
    main: Tuple[SectionFragment, ...]
    sidebar: Tuple[SectionFragment, ...]
    body: Markup
    stylesheet: Markup

    @property
    def fragments(self) -> List[SectionFragment]:
        """All fragments in reading order (sidebar first)."""
        return list(self.sidebar) + list(self.main)

    @property
    def section_keys(self) -> List[SectionKey]:
        return [fragment.key for fragment in self.fragments]

    @property
    def headings(self) -> List[str]:
        return [fragment.title for fragment in self.fragments if fragment.title]

    @property
    def text_length(self) -> int:
        """Visible text length of the body, used to spot blank documents."""
        return markup_text_length(str(self.body))

    @property
    def is_empty(self) -> bool:
        return not self.main and not self.sidebar


def effective_order(section_order: Optional[Iterable[str]]) -> List[SectionKey]:
    """
    Resolve the order sections are rendered in.

    An absent or empty order falls back to DEFAULT_ORDER. Keys outside the
    closed set are dropped, and repeated keys render once.
    """
    if not section_order:
        return list(DEFAULT_ORDER)

    order: List[SectionKey] = []
    for raw_key in section_order:
        key = SectionKey.parse(raw_key)
        if key is None:
            _log_debug(f"Ignoring unknown section key: {raw_key!r}")
            continue
        if key not in order:
            order.append(key)
    return order


def partition_columns(order: Sequence[SectionKey]) -> Tuple[List[SectionKey], List[SectionKey]]:
    """Split an order into (sidebar, main), preserving relative order in each."""
    sidebar = [key for key in order if key in SIDEBAR_KEYS]
    main = [key for key in order if key not in SIDEBAR_KEYS]
    return sidebar, main


def _render_column(
    renderer: SectionRenderer, resume: ResumeData, keys: Sequence[SectionKey]
) -> Tuple[SectionFragment, ...]:
    fragments = (renderer.render(key, resume) for key in keys)
    return tuple(fragment for fragment in fragments if fragment is not None)


def compose_document(
    resume: ResumeData,
    config: TemplateConfig,
    registry: "TemplateRegistry",
    style: Optional[StyleParams] = None,
) -> DocumentNode:
    """
    Compose a full document for one résumé and one template.

    Sections whose key is not in the résumé's section order are never
    rendered, even when they hold data. The editor hides a section by
    removing its key.

    Args:
        resume: Résumé to compose (read-only)
        config: Template to compose with
        registry: Registry providing Jinja2 templates
        style: Style parameters (defaults to the template's style)

    Returns:
        DocumentNode with per-column fragments, body markup and stylesheet

    Raises:
        MissingResumeDataError: If resume is None
        TemplateRenderError: If a Jinja2 template fails to render
    """
    if resume is None:
        raise MissingResumeDataError("Cannot compose a document without resume data")

    style = style or StyleParams.for_template(config)
    order = effective_order(resume.section_order)

    left_out = [key.value for key in SectionKey if key not in order and resume.has_content(key)]
    if left_out:
        _log_debug(f"Sections with content but not in section order (not rendered): {left_out}")

    renderer = SectionRenderer(registry, config, style)

    if config.layout_kind is LayoutKind.TWO_COLUMN:
        sidebar_keys, main_keys = partition_columns(order)
        # Columns are rendered independently; no cross-column reflow
        sidebar = _render_column(renderer, resume, sidebar_keys)
        main = _render_column(renderer, resume, main_keys)
        layout_template = "structure/two_column.html.jinja"
    else:
        sidebar = ()
        main = _render_column(renderer, resume, order)
        layout_template = "structure/single_column.html.jinja"

    body = _render_markup(
        registry,
        config,
        layout_template,
        template_id=config.id,
        main=main,
        sidebar=sidebar,
        style=style,
    )
    stylesheet = _render_markup(
        registry,
        config,
        "structure/base.css.jinja",
        style=style,
    ) + _render_markup(
        registry,
        config,
        f"themes/{config.id}/theme.css.jinja",
        style=style,
    )

    _log_debug(
        f"Composed '{config.id}' ({config.layout_kind.value}): "
        f"sidebar={[f.key.value for f in sidebar]} main={[f.key.value for f in main]}"
    )

    return DocumentNode(
        template_id=config.id,
        layout_kind=config.layout_kind,
        style=style,
        main=main,
        sidebar=sidebar,
        body=body,
        stylesheet=stylesheet,
    )


def _render_markup(
    registry: "TemplateRegistry", config: TemplateConfig, template_name: str, **context
) -> Markup:
    try:
        template = registry.get_template(template_name)
        return Markup(template.render(**context))
    except TemplateError as e:
        raise TemplateRenderError(
            "Failed to render document structure",
            template_id=config.id,
            template_name=template_name,
            original_error=e,
        ) from e


class TemplateRenderer:
    """
    Render function bound to one registered template.

    Calling it composes a DocumentNode: renderer(resume, style) -> DocumentNode.
    """

    def __init__(self, config: TemplateConfig, registry: "TemplateRegistry"):
        self.config = config
        self.registry = registry

    @property
    def template_id(self) -> str:
        return self.config.id

    def __call__(self, resume: ResumeData, style: Optional[StyleParams] = None) -> DocumentNode:
        return compose_document(resume, self.config, self.registry, style)

    def __repr__(self) -> str:
        return f"TemplateRenderer({self.config.id!r})"
