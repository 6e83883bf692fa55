r"""Inline text helpers shared by the classifier, renderer, and cleanup passes.

These functions rewrite lightweight emphasis markup into HTML, strip tags
from heading text, and derive the anchor ids used by headings and the table
of contents.

Example
-------
>>> from blogdoc.inline import format_rich_text, generate_id
>>> format_rich_text("Use **bold** and [links](https://example.com)")
'Use <strong>bold</strong> and <a href="https://example.com">links</a>'
>>> generate_id("What's New?")
'whats-new'
"""

from __future__ import annotations

import re

MAX_ID_LENGTH = 50
DEFAULT_ID = "section"

BOLD_STAR_PATTERN = re.compile(r"\*\*(.+?)\*\*")
BOLD_UNDERSCORE_PATTERN = re.compile(r"(?<![\w_])__(.+?)__(?![\w_])")
ITALIC_STAR_PATTERN = re.compile(r"(?<![\w*])\*([^*\s][^*]*?)\*(?![\w*])")
ITALIC_UNDERSCORE_PATTERN = re.compile(r"(?<![\w_])_([^_\s][^_]*?)_(?![\w_])")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")
TAG_PATTERN = re.compile(r"<[^>]*>")
STRONG_PATTERN = re.compile(r"<strong>(.*?)</strong>", re.IGNORECASE)


def format_rich_text(text: str) -> str:
    """Rewrite bold, italic, and link markup into inline HTML."""
    formatted = BOLD_STAR_PATTERN.sub(r"<strong>\1</strong>", text)
    formatted = BOLD_UNDERSCORE_PATTERN.sub(r"<strong>\1</strong>", formatted)
    formatted = ITALIC_STAR_PATTERN.sub(r"<em>\1</em>", formatted)
    formatted = ITALIC_UNDERSCORE_PATTERN.sub(r"<em>\1</em>", formatted)
    return LINK_PATTERN.sub(r'<a href="\2">\1</a>', formatted)


def normalize_bold(text: str) -> str:
    """Convert ``**x**`` to ``<strong>x</strong>`` and normalise tag case."""
    converted = BOLD_STAR_PATTERN.sub(r"<strong>\1</strong>", text)
    return STRONG_PATTERN.sub(r"<strong>\1</strong>", converted)


def strip_tags(text: str) -> str:
    """Return ``text`` with every HTML tag removed."""
    return TAG_PATTERN.sub("", text)


def generate_id(text: str) -> str:
    """Derive a deterministic anchor id from heading text.

    Parameters
    ----------
    text : str
        Heading text, optionally containing inline markup.

    Returns
    -------
    str
        Lower-case slug of at most ``MAX_ID_LENGTH`` characters built from
        ``[a-z0-9-]`` with no leading or trailing hyphen. Falls back to
        ``"section"`` when nothing usable remains.
    """
    plain = strip_tags(text).replace("*", "").lower()
    plain = re.sub(r"[^a-z0-9\s-]", "", plain)
    slug = re.sub(r"[\s-]+", "-", plain.strip())
    slug = slug[:MAX_ID_LENGTH].strip("-")
    return slug or DEFAULT_ID


def unique_id(base: str, used: set[str]) -> str:
    """Return ``base`` or a suffixed variant not yet present in ``used``."""
    candidate = base
    suffix = 2
    while candidate in used:
        tail = f"-{suffix}"
        candidate = f"{base[: MAX_ID_LENGTH - len(tail)].rstrip('-')}{tail}"
        suffix += 1
    used.add(candidate)
    return candidate


__all__ = [
    "DEFAULT_ID",
    "MAX_ID_LENGTH",
    "format_rich_text",
    "generate_id",
    "normalize_bold",
    "strip_tags",
    "unique_id",
]
