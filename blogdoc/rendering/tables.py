"""Parse buffered table lines into :class:`~blogdoc.models.TableBlock` rows."""

from __future__ import annotations

import collections.abc as cabc
import re

from blogdoc.models import TableBlock

MULTI_SPACE_PATTERN = re.compile(r"\s{3,}")
SEPARATOR_CELL_PATTERN = re.compile(r"^:?-{3,}:?$")


def detect_delimiter(line: str) -> str:
    """Return the delimiter name used by ``line``: pipe, tab, spaces, or single."""
    if "|" in line:
        return "pipe"
    if "\t" in line:
        return "tab"
    if MULTI_SPACE_PATTERN.search(line.strip()):
        return "spaces"
    return "single"


def split_row(line: str, delimiter: str) -> list[str]:
    """Split ``line`` into cells using a fixed delimiter."""
    text = line.strip()
    match delimiter:
        case "pipe":
            text = text.removeprefix("|").removesuffix("|")
            return [cell.strip() for cell in text.split("|")]
        case "tab":
            return [cell.strip() for cell in text.split("\t")]
        case "spaces":
            return [cell.strip() for cell in MULTI_SPACE_PATTERN.split(text)]
        case _:
            return [text]


def is_separator_row(cells: list[str]) -> bool:
    """Return True for markdown alignment rows such as ``| --- | :-: |``."""
    filled = [cell for cell in cells if cell]
    return bool(filled) and all(SEPARATOR_CELL_PATTERN.match(cell) for cell in filled)


def parse_table(lines: cabc.Iterable[str]) -> TableBlock | None:
    """Parse table lines, treating the first non-empty line as the header.

    The delimiter is chosen once from the header line and applied to every
    row. Markdown separator rows are skipped and short rows are padded with
    empty cells to the header width. Returns ``None`` when no line carries
    content.
    """
    rows = [line.strip() for line in lines if line.strip()]
    if not rows:
        return None
    delimiter = detect_delimiter(rows[0])
    header = split_row(rows[0], delimiter)
    body: list[list[str]] = []
    for line in rows[1:]:
        cells = split_row(line, delimiter)
        if is_separator_row(cells):
            continue
        if len(cells) < len(header):
            cells.extend([""] * (len(header) - len(cells)))
        body.append(cells)
    return TableBlock(header=header, rows=body, delimiter=delimiter)


__all__ = ["detect_delimiter", "is_separator_row", "parse_table", "split_row"]
