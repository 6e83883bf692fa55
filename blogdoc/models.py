"""Shared dataclasses passed between the conversion stages."""

from __future__ import annotations

import dataclasses as dc

from .classifier import ListKind
from .inline import generate_id


@dc.dataclass(frozen=True, slots=True)
class Heading:
    """A heading in the document outline.

    Attributes
    ----------
    level : int
        Heading level in ``2..4``.
    text : str
        Heading text, possibly containing inline markup.
    id : str
        Anchor id used by the table of contents.
    """

    level: int
    text: str
    id: str

    @classmethod
    def from_text(cls, level: int, text: str) -> Heading:
        """Build a heading whose id is derived from ``text``."""
        return cls(level=level, text=text, id=generate_id(text))


@dc.dataclass(slots=True)
class ListBlock:
    """A run of plain list items of the same kind.

    Attributes
    ----------
    kind : ListKind
        Ordered or unordered.
    items : list[str]
        Item text in source order.
    start_line : int
        Index of the first item in the source.
    end_line : int
        Index of the last item in the source.
    """

    kind: ListKind
    items: list[str]
    start_line: int
    end_line: int


@dc.dataclass(slots=True)
class TableBlock:
    """Parsed table rows.

    Attributes
    ----------
    header : list[str]
        Cells of the first row.
    rows : list[list[str]]
        Data rows, right-padded to the header width.
    delimiter : str
        ``"pipe"``, ``"tab"``, ``"spaces"``, or ``"single"``.
    """

    header: list[str]
    rows: list[list[str]]
    delimiter: str

    @property
    def column_width(self) -> int:
        """Return the percentage width assigned to each header cell."""
        return 100 // len(self.header) if self.header else 100


@dc.dataclass(frozen=True, slots=True)
class RenderedDocument:
    """Final HTML and the outline derived from it.

    Attributes
    ----------
    html : str
        Cleaned HTML fragment string.
    outline : tuple[Heading, ...]
        Level 2-4 headings of ``html`` in document order.
    """

    html: str
    outline: tuple[Heading, ...] = ()


__all__ = ["Heading", "ListBlock", "RenderedDocument", "TableBlock"]
