"""Post-processing passes over assembled HTML.

:func:`cleanup_html` removes duplicates and empty containers left by the
single-pass transducer; :func:`reconcile_toc` rebuilds the table of
contents from every h2-h4 heading in the finished document, assigning ids
where they are missing or repeated. Both passes are idempotent, and
:func:`finalize_html` chains them as cleanup, reconcile, cleanup.

Example
-------
>>> from blogdoc.cleanup import cleanup_html
>>> cleanup_html("<h1>Title</h1>\\n\\n<p></p>\\n<h2>Title</h2>")
'<h2>Title</h2>'
"""

from __future__ import annotations

import re
import typing as typ

from ._constants import FAQ_CLASS, TOC_CLASS
from .inline import generate_id, strip_tags, unique_id
from .models import Heading

if typ.TYPE_CHECKING:
    from .rendering import SectionRenderer

H1_OPEN_PATTERN = re.compile(r"<h1(\s[^>]*)?>", re.IGNORECASE)
H1_CLOSE_PATTERN = re.compile(r"</h1\s*>", re.IGNORECASE)
TOC_BLOCK_PATTERN = re.compile(rf'<div class="{TOC_CLASS}"[^>]*>.*?</div>', re.DOTALL)
FAQ_BLOCK_PATTERN = re.compile(rf'<div class="{FAQ_CLASS}"[^>]*>.*?</div>', re.DOTALL)
ANY_HEADING_PATTERN = re.compile(r"<h([1-6])(\s[^>]*)?>(.*?)</h\1>", re.DOTALL | re.IGNORECASE)
OUTLINE_HEADING_PATTERN = re.compile(r"<h([2-4])(\s[^>]*)?>(.*?)</h\1>", re.DOTALL)
ID_ATTR_PATTERN = re.compile(r'\sid="([^"]*)"')
EMPTY_CONTAINER_PATTERNS = (
    re.compile(r"<li(?:\s[^>]*)?>\s*</li>"),
    re.compile(r"<p(?:\s[^>]*)?>\s*</p>"),
    re.compile(r"<ul(?:\s[^>]*)?>\s*</ul>"),
    re.compile(r"<ol(?:\s[^>]*)?>\s*</ol>"),
)
TRAILING_SPACE_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)
BLANK_LINES_PATTERN = re.compile(r"\n\s*\n")
REPEATED_BREAK_PATTERN = re.compile(r"<br\s*/?>(?:\s*<br\s*/?>)+", re.IGNORECASE)
REPEATED_NBSP_PATTERN = re.compile(r"&nbsp;(?:\s*&nbsp;)+")

# CTA headings are decoration, not document structure.
EXCLUDED_HEADING_CLASS = "call_heading"


def demote_h1(html: str) -> str:
    """Rewrite every ``<h1>`` as ``<h2>``, keeping its attributes."""
    html = H1_OPEN_PATTERN.sub(lambda match: f"<h2{match.group(1) or ''}>", html)
    return H1_CLOSE_PATTERN.sub("</h2>", html)


def keep_first_block(html: str, pattern: re.Pattern[str]) -> str:
    """Remove every match of ``pattern`` after the first one."""
    matches = list(pattern.finditer(html))
    for match in reversed(matches[1:]):
        html = html[: match.start()] + html[match.end() :]
    return html


def dedupe_headings(html: str) -> str:
    """Drop headings whose level and text repeat an earlier heading."""
    seen: set[tuple[str, str]] = set()

    def _replace(match: re.Match[str]) -> str:
        key = (match.group(1), strip_tags(match.group(3)).strip())
        if key in seen:
            return ""
        seen.add(key)
        return match.group(0)

    return ANY_HEADING_PATTERN.sub(_replace, html)


def remove_empty_containers(html: str) -> str:
    """Strip empty list items, paragraphs, and lists until nothing changes."""
    previous = None
    while previous != html:
        previous = html
        for pattern in EMPTY_CONTAINER_PATTERNS:
            html = pattern.sub("", html)
    return html


def collapse_whitespace(html: str) -> str:
    """Trim trailing spaces, blank lines, and repeated breaks or spaces."""
    html = TRAILING_SPACE_PATTERN.sub("", html)
    html = BLANK_LINES_PATTERN.sub("\n", html)
    html = REPEATED_BREAK_PATTERN.sub("<br>", html)
    html = REPEATED_NBSP_PATTERN.sub("&nbsp;", html)
    return html.strip()


def cleanup_html(html: str) -> str:
    """Run every cleanup pass over ``html``.

    Parameters
    ----------
    html : str
        Assembled HTML fragments.

    Returns
    -------
    str
        HTML with h1 demoted, duplicate TOC/FAQ blocks and headings removed,
        empty containers stripped, and whitespace collapsed. Applying the
        function to its own output returns it unchanged.
    """
    html = demote_h1(html)
    html = keep_first_block(html, TOC_BLOCK_PATTERN)
    html = dedupe_headings(html)
    html = keep_first_block(html, FAQ_BLOCK_PATTERN)
    html = remove_empty_containers(html)
    return collapse_whitespace(html)


def _is_outline_heading(attrs: str) -> bool:
    return EXCLUDED_HEADING_CLASS not in attrs


def assign_heading_ids(html: str) -> tuple[str, list[Heading]]:
    """Give every h2-h4 heading a unique id and return the outline.

    Existing ids are kept unless an earlier heading already uses them.
    """
    used: set[str] = set()
    outline: list[Heading] = []

    def _replace(match: re.Match[str]) -> str:
        level, attrs, text = match.group(1), match.group(2) or "", match.group(3)
        if not _is_outline_heading(attrs):
            return match.group(0)
        existing = ID_ATTR_PATTERN.search(attrs)
        if existing and existing.group(1) and existing.group(1) not in used:
            heading_id = existing.group(1)
            used.add(heading_id)
        else:
            heading_id = unique_id(generate_id(text), used)
            if existing:
                attrs = ID_ATTR_PATTERN.sub(f' id="{heading_id}"', attrs, count=1)
            else:
                attrs = f' id="{heading_id}"{attrs}'
        outline.append(Heading(level=int(level), text=text.strip(), id=heading_id))
        return f"<h{level}{attrs}>{text}</h{level}>"

    return OUTLINE_HEADING_PATTERN.sub(_replace, html), outline


def reconcile_toc(html: str, renderer: SectionRenderer | None = None) -> str:
    """Rebuild the table of contents so it links every h2-h4 heading.

    Does nothing when the document has no table-of-contents block. A
    document whose only TOC block has no headings to link loses the block.
    """
    if not TOC_BLOCK_PATTERN.search(html):
        return html
    if renderer is None:
        from .rendering import SectionRenderer

        renderer = SectionRenderer()
    html, outline = assign_heading_ids(html)
    toc = renderer.render_toc(outline)
    return TOC_BLOCK_PATTERN.sub(lambda _match: toc, html, count=1)


def extract_outline(html: str) -> tuple[Heading, ...]:
    """Return the h2-h4 headings of ``html`` in document order."""
    outline: list[Heading] = []
    for match in OUTLINE_HEADING_PATTERN.finditer(html):
        attrs, text = match.group(2) or "", match.group(3).strip()
        if not _is_outline_heading(attrs):
            continue
        existing = ID_ATTR_PATTERN.search(attrs)
        heading_id = existing.group(1) if existing and existing.group(1) else generate_id(text)
        outline.append(Heading(level=int(match.group(1)), text=text, id=heading_id))
    return tuple(outline)


def finalize_html(html: str, renderer: SectionRenderer | None = None) -> str:
    """Clean ``html``, reconcile its table of contents, and clean again."""
    return cleanup_html(reconcile_toc(cleanup_html(html), renderer))


__all__ = [
    "assign_heading_ids",
    "cleanup_html",
    "collapse_whitespace",
    "dedupe_headings",
    "demote_h1",
    "extract_outline",
    "finalize_html",
    "keep_first_block",
    "reconcile_toc",
    "remove_empty_containers",
]
