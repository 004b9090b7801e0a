"""Text processing utilities shared across contexts."""

import re
import unicodedata
from typing import Optional
from urllib.parse import urlsplit

import nh3
from markupsafe import Markup

DEFAULT_FILENAME_STEM = "resume"

# Formatting the editor's rich text fields may carry
RICH_TEXT_TAGS = {"b", "i", "u", "em", "strong", "br", "p", "ul", "ol", "li", "a"}
RICH_TEXT_ATTRIBUTES = {"a": {"href"}}
SAFE_URL_SCHEMES = {"http", "https", "mailto"}

# Browsers ignore these inside a URL scheme ("java\tscript:")
_URL_IGNORED_CHARS = re.compile(r"[\x00-\x20\x7f]+")


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Example:
        >>> truncate_display("short", 10)
        "short"
        >>> truncate_display("this is a very long string", 10)
        "this is..."
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def sanitize_filename(title: Optional[str], fallback: str = DEFAULT_FILENAME_STEM) -> str:
    """
    Turn a résumé title into a safe PDF file stem.

    Accents are folded to ASCII, anything outside [A-Za-z0-9._-] becomes an
    underscore, and runs of separators collapse. Titles with nothing usable
    left fall back to a generic stem.

    Example:
        >>> sanitize_filename("Jane Doé / Senior Engineer")
        "Jane_Doe_Senior_Engineer"
        >>> sanitize_filename("  ")
        "resume"
    """
    if not title:
        return fallback

    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    stem = re.sub(r"[^A-Za-z0-9._-]+", "_", folded)
    stem = re.sub(r"_+", "_", stem).strip("._-")

    # Keep filenames reasonable for Content-Disposition headers
    stem = stem[:80].rstrip("._-")
    return stem or fallback


def pdf_filename(title: Optional[str]) -> str:
    """Sanitized download filename with .pdf extension."""
    return f"{sanitize_filename(title)}.pdf"


def strip_active_content(html: str) -> str:
    """
    Remove executable content from editor-supplied rich text.

    Allowlist sanitizing: only RICH_TEXT_TAGS survive, links keep nothing but
    an href in SAFE_URL_SCHEMES (or a relative one), and script/style
    elements are dropped together with their content.

    Example:
        >>> strip_active_content('<b>ok</b><img/onerror=alert(1) src=x>')
        "<b>ok</b>"
    """
    return nh3.clean(
        html,
        tags=RICH_TEXT_TAGS,
        attributes=RICH_TEXT_ATTRIBUTES,
        url_schemes=SAFE_URL_SCHEMES,
    )


def safe_url(url: Optional[str]) -> str:
    """
    Return url when it is safe to use as a link target, else "".

    Scheme-less values ("github.com/me") are kept; explicit schemes must be
    http, https or mailto.

    Example:
        >>> safe_url("https://example.com")
        "https://example.com"
        >>> safe_url("javascript:alert(1)")
        ""
    """
    if not url:
        return ""
    url = url.strip()
    scheme = urlsplit(_URL_IGNORED_CHARS.sub("", url)).scheme.lower()
    if scheme and scheme not in SAFE_URL_SCHEMES:
        return ""
    return url


def trusted_markup(value: Optional[str]) -> Markup:
    """
    Admit pre-sanitized rich text as markup that templates will not escape again.

    This is the only place plain strings cross the escaping boundary.
    """
    if isinstance(value, Markup):
        return value
    return Markup(strip_active_content(value or ""))


def markup_text_length(html: str) -> int:
    """Length of the visible text in a markup fragment, whitespace collapsed."""
    text = re.sub(r"<[^>]+>", " ", html)
    text = Markup(text).unescape()
    return len(" ".join(text.split()))
