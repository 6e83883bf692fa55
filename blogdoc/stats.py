"""Reading statistics and a rough SEO score for a draft."""

from __future__ import annotations

import dataclasses as dc
import enum
import math

from .structure import DocumentStructure, analyze_structure

WORDS_PER_MINUTE = 200
MAX_SEO_SCORE = 100


class Complexity(enum.Enum):
    """Coarse document complexity bucket."""

    SIMPLE = "Simple"
    MEDIUM = "Medium"
    COMPLEX = "Complex"


@dc.dataclass(frozen=True, slots=True)
class DocumentStats:
    """Statistics reported alongside a conversion.

    Attributes
    ----------
    word_count : int
        Whitespace-separated words in the source text.
    reading_time : int
        Minutes at ``WORDS_PER_MINUTE``, rounded up.
    complexity : Complexity
        Bucket derived from headings, lists, and tables.
    seo_score : int
        Score between 0 and ``MAX_SEO_SCORE``.
    """

    word_count: int
    reading_time: int
    complexity: Complexity
    seo_score: int


def count_words(text: str) -> int:
    return len(text.split())


def estimate_reading_time(text: str) -> int:
    """Return the reading time in whole minutes, rounding up."""
    return math.ceil(count_words(text) / WORDS_PER_MINUTE)


def assess_complexity(structure: DocumentStructure) -> Complexity:
    """Weigh headings and lists once and tables twice."""
    weight = len(structure.headings) + len(structure.lists) + 2 * len(structure.tables)
    if weight < 5:
        return Complexity.SIMPLE
    if weight < 15:
        return Complexity.MEDIUM
    return Complexity.COMPLEX


def seo_score(structure: DocumentStructure) -> int:
    """Score a draft on the structural signals the publishing checklist asks for."""
    score = 0
    if structure.headings:
        score += 20
    if any(heading.level == 2 for heading in structure.headings):
        score += 15
    if structure.lists:
        score += 10
    if structure.has_table_of_contents:
        score += 25
    if structure.has_key_takeaways:
        score += 15
    if len(structure.paragraphs) > 5:
        score += 15
    return min(score, MAX_SEO_SCORE)


def compute_stats(text: str, structure: DocumentStructure | None = None) -> DocumentStats:
    """Compute :class:`DocumentStats` for ``text``.

    Parameters
    ----------
    text : str
        Source draft.
    structure : DocumentStructure, optional
        Precomputed structure; analysed from ``text`` when omitted.
    """
    structure = structure or analyze_structure(text.splitlines())
    return DocumentStats(
        word_count=count_words(text),
        reading_time=estimate_reading_time(text),
        complexity=assess_complexity(structure),
        seo_score=seo_score(structure),
    )


__all__ = [
    "Complexity",
    "DocumentStats",
    "assess_complexity",
    "compute_stats",
    "count_words",
    "estimate_reading_time",
    "seo_score",
]
