"""Single-pass section state machine over classified lines.

The transducer walks the classified line stream once. While idle it emits
headings, plain lists, tables, and paragraphs directly; when a trigger line
or a start directive opens a special section it buffers content until an
end directive, the next section opener, or the end of input, then hands the
buffer to :class:`~blogdoc.rendering.SectionRenderer`. At most one section
is open at any time; opening a new one closes the current one first.

The table of contents is never rendered inside the loop. Closing a TOC
section only reserves a slot in the fragment list, and :meth:`SectionStateMachine.run`
fills that slot once from the finished outline; the entries buffered for a
TOC section are dropped.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import logging
import re

from .classifier import Classification, LineKind, ListKind, classify_lines
from .inline import format_rich_text, generate_id, unique_id
from .models import Heading, RenderedDocument
from .rendering import SectionRenderer
from .sections import SectionTag, TriggerMatcher

logger = logging.getLogger(__name__)

NUMBER_PREFIX_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)\.?\s")


class Opener(enum.Enum):
    """How a section was opened."""

    PHRASE = "phrase"
    DIRECTIVE = "directive"


@dc.dataclass(slots=True)
class OpenSection:
    """The section currently buffering lines.

    Attributes
    ----------
    tag : SectionTag | None
        Section kind; ``None`` for an unknown upper-case directive.
    name : str
        Directive name or trigger text that opened the section.
    opener : Opener
        Whether a trigger phrase or a bracket directive opened the section.
    lines : list[str]
        Normalised content lines in source order.
    items : list[Classification]
        The classified lines behind ``lines``.
    gap : bool
        ``True`` when a blank line followed the last buffered line.
    """

    tag: SectionTag | None
    name: str
    opener: Opener
    lines: list[str] = dc.field(default_factory=list)
    items: list[Classification] = dc.field(default_factory=list)
    gap: bool = False

    def add(self, item: Classification) -> None:
        self.lines.append(item.text)
        self.items.append(item)
        self.gap = False

    def mark_blank(self) -> None:
        if self.lines:
            self.gap = True

    def accepts(self, item: Classification) -> bool:
        """Return True when ``item`` is content of this section.

        A table of contents only takes list-marker lines it has not seen yet,
        so a bare ``<TOC>`` marker never swallows the body. Other
        directive-opened sections and unknown tags take every line. List-shaped
        phrase sections end at a heading with no list marker, and at a
        numbered heading that follows a blank line or restarts the numbering.
        """
        if self.tag is SectionTag.TOC:
            is_entry = item.kind is LineKind.LIST_ITEM or (item.is_heading and item.list_marker)
            if not is_entry or item.text in self.lines:
                return False
            return self.opener is Opener.DIRECTIVE or self._continues_entries(item)
        if self.opener is Opener.DIRECTIVE or self.tag is None:
            return True
        if not item.is_heading or self.tag.absorbs_headings:
            return True
        return item.list_marker and self._continues_entries(item)

    def _continues_entries(self, item: Classification) -> bool:
        if self.gap:
            return False
        number = number_prefix(item.raw)
        if number is None:
            return True
        for previous in reversed(self.items):
            last = number_prefix(previous.raw)
            if last is not None:
                return number > last
        return True


def number_prefix(raw: str) -> tuple[int, ...] | None:
    """Return the ``N.M`` numbering of ``raw`` as a tuple, if it has one.

    >>> number_prefix("2.1 Install The Tools")
    (2, 1)
    """
    match = NUMBER_PREFIX_PATTERN.match(raw)
    if not match:
        return None
    return tuple(int(part) for part in match.group(1).split("."))


def collect_table_rows(
    items: cabc.Sequence[Classification], start: int
) -> tuple[list[str], int]:
    """Collect consecutive table rows beginning at ``start``.

    Blank lines are skipped only when the next non-blank line is another
    table row. Returns the raw rows and the index of the first line not
    consumed.
    """
    rows: list[str] = []
    index = start
    while index < len(items):
        item = items[index]
        if item.kind is LineKind.TABLE_ROW:
            rows.append(item.raw)
            index += 1
            continue
        if item.kind is LineKind.BLANK:
            look = index
            while look < len(items) and items[look].kind is LineKind.BLANK:
                look += 1
            if look < len(items) and items[look].kind is LineKind.TABLE_ROW:
                index = look
                continue
        break
    return rows, index


class SectionStateMachine:
    """Route classified lines to direct output or the open section buffer.

    Parameters
    ----------
    renderer : SectionRenderer, optional
        Renderer used for sections and plain blocks.
    matcher : TriggerMatcher, optional
        Trigger-phrase matcher handed to the classifier.
    """

    def __init__(
        self,
        renderer: SectionRenderer | None = None,
        matcher: TriggerMatcher | None = None,
    ) -> None:
        self.renderer = renderer or SectionRenderer()
        self.matcher = matcher
        self.active: OpenSection | None = None
        self.fragments: list[str] = []
        self.outline: list[Heading] = []
        self.toc_slot: int | None = None
        self.closed_sections: list[SectionTag | None] = []
        self.sections_opened = 0
        self._list_kind: ListKind | None = None
        self._list_items: list[str] = []
        self._used_ids: set[str] = set()

    def run(self, lines: cabc.Iterable[str]) -> RenderedDocument:
        """Process every line and return the assembled document.

        The returned HTML has not been through cleanup; callers normally use
        :func:`blogdoc.cleanup.finalize_html` afterwards.
        """
        items = classify_lines(lines, self.matcher)
        index = 0
        while index < len(items):
            index = self.step(items, index)
        self.finish()
        return RenderedDocument(html=self.assemble(), outline=tuple(self.outline))

    def step(self, items: cabc.Sequence[Classification], index: int) -> int:
        """Consume the line at ``index`` and return the next index to process."""
        if self.active is None:
            return self._step_idle(items, index)
        return self._step_in_section(self.active, items, index)

    def finish(self) -> None:
        """Close the open list and any section left open at end of input."""
        if self.active is not None:
            logger.debug("Closing unterminated section %s at end of input", self.active.name)
            self._close_section()
        self._close_list()

    def assemble(self) -> str:
        """Join the fragments, rendering the table of contents into its slot."""
        fragments = list(self.fragments)
        if self.toc_slot is not None:
            fragments[self.toc_slot] = self.renderer.render(SectionTag.TOC, [], self.outline)
        return "\n".join(fragment for fragment in fragments if fragment)

    def _step_idle(self, items: cabc.Sequence[Classification], index: int) -> int:
        item = items[index]
        match item.kind:
            case LineKind.BLANK:
                self._close_list()
            case LineKind.END_TAG:
                self._close_list()
                logger.debug("Dropping end tag %s with no open section", item.text)
            case LineKind.START_TAG:
                self._close_list()
                self._open(item.section_tag, item.text, Opener.DIRECTIVE)
            case _ if item.trigger and item.section_tag is not None:
                self._close_list()
                if item.is_heading and not item.section_tag.hides_trigger_heading:
                    self._emit_heading(item)
                self._open(item.section_tag, item.text, Opener.PHRASE)
            case LineKind.HEADING:
                self._close_list()
                self._emit_heading(item)
            case LineKind.LIST_ITEM:
                if self._list_kind is not None and self._list_kind is not item.list_kind:
                    self._close_list()
                self._list_kind = item.list_kind
                self._list_items.append(item.text)
            case LineKind.TABLE_ROW:
                self._close_list()
                rows, next_index = collect_table_rows(items, index)
                if len(rows) == 1:
                    self._emit(self.renderer.render_paragraph(format_rich_text(rows[0])))
                else:
                    self._emit(self.renderer.render_table(rows))
                return next_index
            case LineKind.PROSE:
                self._close_list()
                self._emit(self.renderer.render_paragraph(item.text))
        return index + 1

    def _step_in_section(
        self, section: OpenSection, items: cabc.Sequence[Classification], index: int
    ) -> int:
        item = items[index]
        match item.kind:
            case LineKind.BLANK:
                section.mark_blank()
            case LineKind.END_TAG:
                self._close_section()
            case LineKind.START_TAG:
                self._close_section()
                self._open(item.section_tag, item.text, Opener.DIRECTIVE)
            # A contents entry naming a section is still an entry.
            case _ if section.tag is SectionTag.TOC and section.accepts(item):
                section.add(item)
            case _ if item.trigger and section.opener is Opener.PHRASE:
                self._close_section()
                return index
            case _ if not section.accepts(item):
                self._close_section()
                return index
            case _:
                section.add(item)
        return index + 1

    def _open(self, tag: SectionTag | None, name: str, opener: Opener) -> None:
        if self.active is not None:
            self._close_section()
        self.sections_opened += 1
        self.active = OpenSection(tag=tag, name=name, opener=opener)
        logger.debug("Opened %s section %s", opener.value, tag.value if tag else name)

    def _close_section(self) -> None:
        """Render the open section, or reserve the TOC slot for it."""
        section = self.active
        if section is None:
            return
        self.active = None
        self.closed_sections.append(section.tag)
        if section.tag is not SectionTag.TOC:
            self._emit(self.renderer.render(section.tag, section.lines))
            return
        # The contents list is rebuilt from the outline; buffered entries are dropped.
        logger.debug("Dropping %d buffered contents entries", len(section.lines))
        if self.toc_slot is None:
            self.toc_slot = len(self.fragments)
            self.fragments.append("")

    def _close_list(self) -> None:
        if self._list_kind is not None and self._list_items:
            self._emit(self.renderer.render_list(self._list_kind, self._list_items))
        self._list_kind = None
        self._list_items = []

    def _emit_heading(self, item: Classification) -> None:
        level = item.level or 2
        heading = Heading(
            level=level,
            text=item.text,
            id=unique_id(generate_id(item.text), self._used_ids),
        )
        self.outline.append(heading)
        self._emit(self.renderer.render_heading(heading))

    def _emit(self, fragment: str) -> None:
        if fragment:
            self.fragments.append(fragment)


def transduce(
    lines: cabc.Iterable[str],
    *,
    renderer: SectionRenderer | None = None,
    matcher: TriggerMatcher | None = None,
) -> RenderedDocument:
    """Run a fresh :class:`SectionStateMachine` over ``lines``."""
    return SectionStateMachine(renderer, matcher).run(lines)


__all__ = [
    "OpenSection",
    "Opener",
    "SectionStateMachine",
    "collect_table_rows",
    "number_prefix",
    "transduce",
]
