r"""Classify single lines of a draft into structural categories.

Each trimmed line is run through an ordered chain of pure rules; the first
rule that accepts the line decides its :class:`LineKind`. Precedence is part
of the contract: a short all-caps label ending in ``:`` is an all-caps
heading (level by word count) rather than a colon label (level 3), and a
numbered line starting with a capital letter is a heading rather than an
ordered list item.

Example
-------
>>> from blogdoc.classifier import LineKind, classify
>>> result = classify("2.1. Installing The Tools")
>>> (result.kind, result.level, result.text)
(<LineKind.HEADING: 'heading'>, 3, 'Installing The Tools')
>>> classify("- **Fast** setup").text
'<strong>Fast</strong> setup'
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re

from .inline import format_rich_text, normalize_bold, strip_tags
from .sections import SectionTag, TriggerMatcher, parse_directive

MAX_HEADING_LENGTH = 150
MIN_LEVEL = 2
MAX_LEVEL = 4

NUMBERED_HEADING_PATTERN = re.compile(r"^(\d+(?:\.\d+)*)(\.?)\s+([A-Z].*)$")
NUMBER_PREFIX_PATTERN = re.compile(r"^\d+(?:\.\d+)*\.?\s+")
UNORDERED_ITEM_PATTERN = re.compile(r"^[-•*]\s+")
ORDERED_ITEM_PATTERN = re.compile(r"^\d+\.\s+")
ALL_CAPS_PATTERN = re.compile(r"^[A-Z\s:-]+$")
BOLD_SPAN_PATTERN = re.compile(r"\*\*.*?\*\*|<strong>.*?</strong>", re.IGNORECASE)
MULTI_SPACE_PATTERN = re.compile(r"\s{3,}")


class LineKind(enum.Enum):
    """Structural category assigned to a line."""

    BLANK = "blank"
    START_TAG = "start-tag"
    END_TAG = "end-tag"
    HEADING = "heading"
    LIST_ITEM = "list-item"
    TABLE_ROW = "table-row"
    PROSE = "prose"


class ListKind(enum.Enum):
    """Plain list flavour."""

    ORDERED = "ordered"
    UNORDERED = "unordered"


@dc.dataclass(frozen=True, slots=True)
class Classification:
    """Result of classifying one line.

    Attributes
    ----------
    kind : LineKind
        Category chosen by the rule chain.
    raw : str
        The trimmed source line.
    text : str
        Normalised payload: cleaned heading text, list item text without its
        marker, the raw row for table rows, or rich-text prose.
    level : int | None
        Heading level in ``2..4`` for headings.
    list_kind : ListKind | None
        Flavour of list items.
    section_tag : SectionTag | None
        Section opened by a start tag or a trigger line.
    trigger : bool
        ``True`` when the line is a trigger phrase rather than content.
    list_marker : bool
        ``True`` when the line starts with a list marker, including numbered
        headings.
    """

    kind: LineKind
    raw: str
    text: str = ""
    level: int | None = None
    list_kind: ListKind | None = None
    section_tag: SectionTag | None = None
    trigger: bool = False
    list_marker: bool = False

    @property
    def is_heading(self) -> bool:
        return self.kind is LineKind.HEADING


Rule = cabc.Callable[[str], Classification | None]


def clamp_level(level: int) -> int:
    """Clamp a candidate heading level into the emitted ``2..4`` range."""
    return max(MIN_LEVEL, min(MAX_LEVEL, level))


def level_for_word_count(words: int) -> int:
    """Map a phrase length to a heading level: short 2, medium 3, long 4."""
    if words <= 3:
        return 2
    if words <= 6:
        return 3
    return 4


def clean_heading_text(line: str) -> str:
    """Strip numbering, underline runs, and trailing colons from a heading."""
    text = NUMBER_PREFIX_PATTERN.sub("", line.strip())
    text = normalize_bold(text)
    text = re.sub(r"_{2,}", "", text)
    text = re.sub(r":$", "", text.strip())
    return text.strip()


def clean_list_item(line: str) -> str:
    """Remove the list marker and rewrite inline markup."""
    stripped = re.sub(r"^(?:[-•*]|\d+\.)\s+", "", line.strip())
    return format_rich_text(stripped.strip())


def split_table_fields(line: str) -> list[str]:
    """Return the non-empty fields of a candidate table row."""
    if "|" in line:
        parts = line.split("|")
    elif "\t" in line:
        parts = line.split("\t")
    else:
        parts = MULTI_SPACE_PATTERN.split(line)
    return [part.strip() for part in parts if part.strip()]


def is_table_row(line: str) -> bool:
    """Return True when ``line`` carries at least two delimited fields."""
    text = line.strip()
    if "|" in text:
        return len([p for p in text.split("|") if p.strip()]) >= 2
    if "\t" in text:
        return len([p for p in text.split("\t") if p.strip()]) >= 2
    if MULTI_SPACE_PATTERN.search(text):
        return len([p for p in MULTI_SPACE_PATTERN.split(text) if p.strip()]) >= 2
    return False


def _heading(line: str, level: int, *, list_marker: bool = False) -> Classification:
    return Classification(
        kind=LineKind.HEADING,
        raw=line,
        text=clean_heading_text(line),
        level=clamp_level(level),
        list_marker=list_marker,
    )


def _rule_numbered_heading(line: str) -> Classification | None:
    match = NUMBERED_HEADING_PATTERN.match(line)
    if not match:
        return None
    number, trailing_dot, _title = match.groups()
    depth = number.count(".") + 1
    if depth == 1 and not trailing_dot:
        return None
    return _heading(line, depth + 1, list_marker=True)


def _rule_unordered_item(line: str) -> Classification | None:
    if not UNORDERED_ITEM_PATTERN.match(line):
        return None
    return Classification(
        kind=LineKind.LIST_ITEM,
        raw=line,
        text=clean_list_item(line),
        list_kind=ListKind.UNORDERED,
        list_marker=True,
    )


def _rule_table_row(line: str) -> Classification | None:
    if not is_table_row(line):
        return None
    return Classification(kind=LineKind.TABLE_ROW, raw=line, text=line)


def _rule_question(line: str) -> Classification | None:
    if line.endswith("?") and 10 < len(line) < 80:
        return _heading(line, 3)
    return None


def _rule_all_caps(line: str) -> Classification | None:
    if len(line) <= 5 or not ALL_CAPS_PATTERN.match(line):
        return None
    words = line.split()
    if len(words) > 8:
        return None
    return _heading(line, level_for_word_count(len(words)))


def _rule_title_case(line: str) -> Classification | None:
    words = line.split()
    if not 2 <= len(words) <= 10:
        return None
    capitalised = [word for word in words if len(word) > 2 and word[0].isupper()]
    if len(capitalised) * 5 < len(words) * 3:
        return None
    return _heading(line, level_for_word_count(len(words)))


def _rule_colon_label(line: str) -> Classification | None:
    if line.endswith(":") and 5 < len(line) < 80 and line[0].isupper():
        return _heading(line, 3)
    return None


def _rule_bold(line: str) -> Classification | None:
    if not BOLD_SPAN_PATTERN.search(line) or not 5 < len(line) < 100:
        return None
    context = BOLD_SPAN_PATTERN.sub("", line).strip()
    if len(context) > 10:
        return None
    plain = re.sub(r"\*\*", "", strip_tags(line))
    return _heading(line, level_for_word_count(len(plain.split())))


def _rule_ordered_item(line: str) -> Classification | None:
    if not ORDERED_ITEM_PATTERN.match(line):
        return None
    return Classification(
        kind=LineKind.LIST_ITEM,
        raw=line,
        text=clean_list_item(line),
        list_kind=ListKind.ORDERED,
        list_marker=True,
    )


HEADING_RULES: tuple[Rule, ...] = (
    _rule_question,
    _rule_all_caps,
    _rule_title_case,
    _rule_colon_label,
    _rule_bold,
)

RULES: tuple[Rule, ...] = (
    _rule_numbered_heading,
    _rule_unordered_item,
    _rule_table_row,
    *HEADING_RULES,
    _rule_ordered_item,
)

LENGTH_GUARDED_RULES = frozenset((_rule_numbered_heading, *HEADING_RULES))


def _apply_rules(line: str) -> Classification:
    for rule in RULES:
        if rule in LENGTH_GUARDED_RULES and len(line) > MAX_HEADING_LENGTH:
            continue
        result = rule(line)
        if result is not None:
            return result
    return Classification(kind=LineKind.PROSE, raw=line, text=format_rich_text(line))


def classify(line: str, matcher: TriggerMatcher | None = None) -> Classification:
    """Classify a single line of a draft.

    Parameters
    ----------
    line : str
        Source line; surrounding whitespace is ignored.
    matcher : TriggerMatcher, optional
        Trigger-phrase matcher; defaults to the built-in dictionary.

    Returns
    -------
    Classification
        Category and payload. Never raises: lines no rule accepts are prose.
    """
    text = line.strip()
    if not text:
        return Classification(kind=LineKind.BLANK, raw="")

    directive = parse_directive(text)
    if directive is not None:
        if directive.closing:
            return Classification(kind=LineKind.END_TAG, raw=text, text=directive.name)
        return Classification(
            kind=LineKind.START_TAG,
            raw=text,
            text=directive.name,
            section_tag=directive.tag,
        )

    result = _apply_rules(text)
    matcher = matcher or _DEFAULT_MATCHER
    if result.is_heading:
        tag = matcher.match(result.text, allow_near=True)
    elif result.kind is LineKind.PROSE:
        tag = matcher.match(text, allow_near=False)
    else:
        tag = None
    if tag is None:
        return result
    return dc.replace(result, section_tag=tag, trigger=True)


def classify_lines(
    lines: cabc.Iterable[str], matcher: TriggerMatcher | None = None
) -> list[Classification]:
    """Classify every line of ``lines`` in order."""
    return [classify(line, matcher) for line in lines]


_DEFAULT_MATCHER = TriggerMatcher()


__all__ = [
    "HEADING_RULES",
    "RULES",
    "Classification",
    "LineKind",
    "ListKind",
    "clamp_level",
    "classify",
    "classify_lines",
    "clean_heading_text",
    "clean_list_item",
    "is_table_row",
    "level_for_word_count",
    "split_table_fields",
]
