"""Summarise the structure of a draft without rendering it.

:func:`analyze_structure` classifies every line and groups the results into
headings, paragraphs, merged list blocks, table row groups, and the special
sections the draft opens. The statistics in :mod:`blogdoc.stats` are computed
from this summary.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from .classifier import LineKind, ListKind, classify_lines
from .models import ListBlock, TableBlock
from .rendering.tables import parse_table
from .sections import SectionTag, TriggerMatcher
from .transducer import collect_table_rows

LIST_MERGE_DISTANCE = 5


@dc.dataclass(frozen=True, slots=True)
class HeadingEntry:
    """A heading line and its source line index."""

    level: int
    text: str
    line: int


@dc.dataclass(frozen=True, slots=True)
class ParagraphEntry:
    """A prose line, tagged with the level-2 heading it falls under."""

    text: str
    line: int
    section: str | None = None


@dc.dataclass(frozen=True, slots=True)
class SectionMarker:
    """A line that opens a special section."""

    tag: SectionTag | None
    name: str
    line: int


@dc.dataclass(slots=True)
class DocumentStructure:
    """Structural summary of a draft.

    Attributes
    ----------
    headings : list[HeadingEntry]
        Heading lines in source order, trigger headings included.
    paragraphs : list[ParagraphEntry]
        Prose lines.
    lists : list[ListBlock]
        Plain list items merged into blocks.
    tables : list[TableBlock]
        Runs of table rows, parsed.
    sections : list[SectionMarker]
        Start directives and trigger lines.
    """

    headings: list[HeadingEntry] = dc.field(default_factory=list)
    paragraphs: list[ParagraphEntry] = dc.field(default_factory=list)
    lists: list[ListBlock] = dc.field(default_factory=list)
    tables: list[TableBlock] = dc.field(default_factory=list)
    sections: list[SectionMarker] = dc.field(default_factory=list)

    @property
    def has_table_of_contents(self) -> bool:
        return any(marker.tag is SectionTag.TOC for marker in self.sections)

    @property
    def has_key_takeaways(self) -> bool:
        return any(marker.tag is SectionTag.KEY_TAKEAWAYS for marker in self.sections)


def analyze_structure(
    lines: cabc.Iterable[str], matcher: TriggerMatcher | None = None
) -> DocumentStructure:
    """Classify ``lines`` and collect their structural summary.

    A list item joins the last list block when both have the same kind and
    the item is at most ``LIST_MERGE_DISTANCE`` lines after the block's last
    item; otherwise it starts a new block.
    """
    items = classify_lines(lines, matcher)
    structure = DocumentStructure()
    current_section: str | None = None
    index = 0
    while index < len(items):
        item = items[index]
        if item.kind is LineKind.TABLE_ROW:
            rows, index = collect_table_rows(items, index)
            table = parse_table(rows)
            if table is not None:
                structure.tables.append(table)
            continue
        if item.section_tag is not None or item.kind is LineKind.START_TAG:
            structure.sections.append(
                SectionMarker(tag=item.section_tag, name=item.text, line=index)
            )
        match item.kind:
            case LineKind.HEADING:
                level = item.level or 2
                structure.headings.append(HeadingEntry(level=level, text=item.text, line=index))
                if level == 2:
                    current_section = item.text
            case LineKind.LIST_ITEM if item.list_kind is not None:
                _add_list_item(structure.lists, item.list_kind, item.text, index)
            case LineKind.PROSE if not item.trigger:
                structure.paragraphs.append(
                    ParagraphEntry(text=item.text, line=index, section=current_section)
                )
            case _:
                pass
        index += 1
    return structure


def _add_list_item(blocks: list[ListBlock], kind: ListKind, text: str, line: int) -> None:
    last = blocks[-1] if blocks else None
    if last is not None and last.kind is kind and line - last.end_line <= LIST_MERGE_DISTANCE:
        last.items.append(text)
        last.end_line = line
        return
    blocks.append(ListBlock(kind=kind, items=[text], start_line=line, end_line=line))


__all__ = [
    "DocumentStructure",
    "HeadingEntry",
    "ParagraphEntry",
    "SectionMarker",
    "analyze_structure",
]
