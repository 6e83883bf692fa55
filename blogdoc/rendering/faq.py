"""Group buffered FAQ lines into question/answer entries."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc

from blogdoc.classifier import clean_heading_text
from blogdoc.inline import generate_id

QUESTION_WORDS = frozenset(
    {
        "how",
        "what",
        "when",
        "where",
        "why",
        "who",
        "which",
        "can",
        "will",
        "should",
        "is",
        "are",
        "do",
        "does",
    }
)
MIN_QUESTION_LENGTH = 10


@dc.dataclass(slots=True)
class FaqEntry:
    """A question followed by its answer paragraphs.

    ``question`` is ``None`` for answer lines that precede the first
    question; those render as plain paragraphs.
    """

    question: str | None
    id: str | None = None
    answers: list[str] = dc.field(default_factory=list)


def is_question(line: str) -> bool:
    """Return True when ``line`` reads as a question."""
    text = line.strip()
    if not text:
        return False
    if text.endswith("?"):
        return True
    first_word = text.split()[0].lower()
    return first_word in QUESTION_WORDS and len(text) > MIN_QUESTION_LENGTH


def group_faq(lines: cabc.Iterable[str]) -> list[FaqEntry]:
    """Split ``lines`` into question/answer entries in source order.

    Every question opens a new entry, including questions with no answer.
    Lines before the first question are collected into an entry without a
    question.
    """
    entries: list[FaqEntry] = []
    current: FaqEntry | None = None
    for line in lines:
        text = line.strip()
        if not text:
            continue
        if is_question(text):
            question = clean_heading_text(text)
            current = FaqEntry(question=question, id=generate_id(question))
            entries.append(current)
            continue
        if current is None:
            current = FaqEntry(question=None)
            entries.append(current)
        current.answers.append(text)
    return entries


__all__ = ["FaqEntry", "group_faq", "is_question"]
