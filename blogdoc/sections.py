r"""Section vocabulary: tags, trigger phrases, and bracket directives.

Writers mark special blocks in their drafts either with a plain trigger
phrase on its own line (``FAQ``, ``KEY TAKEAWAYS``) or with explicit bracket
directives (``<FAQ>`` ... ``<FAQ END>``). This module owns that vocabulary:
the closed :class:`SectionTag` enum, the phrase dictionary, directive
parsing, and the bounded near-match rule that keeps long sentences from
opening sections by accident.

Example
-------
>>> from blogdoc.sections import SectionTag, TriggerMatcher, parse_directive
>>> TriggerMatcher().match("Key Takeaways:", allow_near=False)
<SectionTag.KEY_TAKEAWAYS: 'key-takeaways'>
>>> parse_directive("<FAQ END>").closing
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import re
import typing as typ

from .inline import strip_tags

DEFAULT_TRIGGER_MARGIN = 5


class SectionTag(enum.Enum):
    """Recognised special-section kinds."""

    TOC = "toc"
    KEY_TAKEAWAYS = "key-takeaways"
    CTA = "cta"
    CTA1 = "cta1"
    CTA2 = "cta2"
    FAQ = "faq"
    STEPS = "steps"
    COMPARISON = "comparison"
    PROS_CONS = "pros-cons"
    BULLET_LIST = "bullet-list"
    TABLE = "table"
    IGNORE = "ignore"

    @property
    def absorbs_headings(self) -> bool:
        """Return True when heading-like lines are content of this section.

        Question/answer blocks, positional call-to-action blocks, tables, and
        ignored regions keep heading-shaped lines in their buffer; list-shaped
        sections opened by a trigger phrase end at the next heading instead.
        """
        return self not in _LIST_SHAPED

    @property
    def renders_when_empty(self) -> bool:
        """Return True when an empty buffer still produces a fragment."""
        return self in {
            SectionTag.TOC,
            SectionTag.CTA,
            SectionTag.CTA1,
            SectionTag.CTA2,
            SectionTag.FAQ,
        }

    @property
    def hides_trigger_heading(self) -> bool:
        """Return True when the trigger heading never reaches the body."""
        return self in {SectionTag.TOC, SectionTag.FAQ}


_LIST_SHAPED = frozenset(
    {
        SectionTag.TOC,
        SectionTag.KEY_TAKEAWAYS,
        SectionTag.STEPS,
        SectionTag.BULLET_LIST,
        SectionTag.PROS_CONS,
    }
)

TRIGGER_PHRASES: dict[str, SectionTag] = {
    "TABLE OF CONTENTS": SectionTag.TOC,
    "TOC": SectionTag.TOC,
    "CONTENTS": SectionTag.TOC,
    "INDEX": SectionTag.TOC,
    "KEY TAKEAWAYS": SectionTag.KEY_TAKEAWAYS,
    "KEY POINTS": SectionTag.KEY_TAKEAWAYS,
    "MAIN POINTS": SectionTag.KEY_TAKEAWAYS,
    "SUMMARY POINTS": SectionTag.KEY_TAKEAWAYS,
    "HIGHLIGHTS": SectionTag.KEY_TAKEAWAYS,
    "IMPORTANT POINTS": SectionTag.KEY_TAKEAWAYS,
    "CALL TO ACTION": SectionTag.CTA,
    "CTA": SectionTag.CTA,
    "CTA 1": SectionTag.CTA1,
    "CTA 2": SectionTag.CTA2,
    "GET STARTED": SectionTag.CTA,
    "CONTACT US": SectionTag.CTA,
    "READY TO START": SectionTag.CTA,
    "WANT TO BUILD": SectionTag.CTA,
    "NEED HELP": SectionTag.CTA,
    "GET IN TOUCH": SectionTag.CTA,
    "FAQ": SectionTag.FAQ,
    "FAQS": SectionTag.FAQ,
    "FREQUENTLY ASKED QUESTIONS": SectionTag.FAQ,
    "COMMON QUESTIONS": SectionTag.FAQ,
    "Q&A": SectionTag.FAQ,
    "QUESTIONS": SectionTag.FAQ,
    "STEPS": SectionTag.STEPS,
    "STEP BY STEP": SectionTag.STEPS,
    "PROCESS": SectionTag.STEPS,
    "HOW TO": SectionTag.STEPS,
    "TUTORIAL": SectionTag.STEPS,
    "GUIDE": SectionTag.STEPS,
    "COMPARISON": SectionTag.COMPARISON,
    "VS": SectionTag.COMPARISON,
    "PROS AND CONS": SectionTag.PROS_CONS,
    "ADVANTAGES AND DISADVANTAGES": SectionTag.PROS_CONS,
    "BENEFITS AND DRAWBACKS": SectionTag.PROS_CONS,
    "BENEFITS": SectionTag.BULLET_LIST,
    "FEATURES": SectionTag.BULLET_LIST,
    "ADVANTAGES": SectionTag.BULLET_LIST,
    "REQUIREMENTS": SectionTag.BULLET_LIST,
    "SPECIFICATIONS": SectionTag.BULLET_LIST,
    "TABLE": SectionTag.TABLE,
    "DATA TABLE": SectionTag.TABLE,
    "COMPARISON TABLE": SectionTag.TABLE,
}

BRACKET_TAGS: dict[str, SectionTag] = {
    "TABLE-OF-CONTENTS": SectionTag.TOC,
    "TOC": SectionTag.TOC,
    "KEY-TAKEAWAYS": SectionTag.KEY_TAKEAWAYS,
    "KEY-POINTS": SectionTag.KEY_TAKEAWAYS,
    "CALL-TO-ACTION": SectionTag.CTA,
    "CTA": SectionTag.CTA,
    "CTA-1": SectionTag.CTA1,
    "CTA-2": SectionTag.CTA2,
    "FAQ": SectionTag.FAQ,
    "STEPS": SectionTag.STEPS,
    "PROCESS": SectionTag.STEPS,
    "COMPARISON": SectionTag.COMPARISON,
    "PROS-AND-CONS": SectionTag.PROS_CONS,
    "BENEFITS": SectionTag.BULLET_LIST,
    "FEATURES": SectionTag.BULLET_LIST,
    "IGNORE": SectionTag.IGNORE,
    "TABLE": SectionTag.TABLE,
}

START_TAG_PATTERN = re.compile(r"^<\s*([A-Za-z][A-Za-z0-9 _&-]*?)\s*>$")
END_TAG_PATTERN = re.compile(r"^<\s*([A-Za-z0-9 _&-]*?)\s+END\s*>$", re.IGNORECASE)
LEGACY_TABLE_START = re.compile(r"^\[\s*TABLE\s+START\s*\]$", re.IGNORECASE)
LEGACY_TABLE_END = re.compile(r"^\[\s*TABLE\s+END\s*\]$|^</TABLE>$", re.IGNORECASE)


@dc.dataclass(frozen=True, slots=True)
class Directive:
    """A parsed bracket directive line.

    Attributes
    ----------
    closing : bool
        ``True`` for ``<NAME END>`` style lines.
    name : str
        Upper-cased directive name without brackets.
    tag : SectionTag | None
        Section the directive opens; ``None`` for end tags and for unknown
        names, which render as plain paragraphs.
    """

    closing: bool
    name: str
    tag: SectionTag | None = None


def parse_directive(line: str) -> Directive | None:
    """Return the directive expressed by ``line`` or ``None``.

    Known directive names match case-insensitively. Unknown names are only
    treated as directives when written in upper case so inline markup such
    as ``<br>`` stays ordinary text.
    """
    text = line.strip()
    if LEGACY_TABLE_END.match(text):
        return Directive(closing=True, name="TABLE")
    if LEGACY_TABLE_START.match(text):
        return Directive(closing=False, name="TABLE", tag=SectionTag.TABLE)
    end = END_TAG_PATTERN.match(text)
    if end:
        return Directive(closing=True, name=end.group(1).strip().upper())
    start = START_TAG_PATTERN.match(text)
    if not start:
        return None
    raw_name = start.group(1).strip()
    name = raw_name.upper()
    tag = BRACKET_TAGS.get(name)
    if tag is None and raw_name != name:
        return None
    return Directive(closing=False, name=name, tag=tag)


class TriggerMatcher:
    """Match line text against the trigger-phrase dictionary.

    Matching is exact first, then the ``:``/``.`` suffixed variant, then a
    bounded near match: the phrase must occur as whole words and the text
    may be at most ``margin`` characters longer than the phrase.
    """

    def __init__(
        self,
        extra_phrases: typ.Mapping[str, SectionTag] | None = None,
        *,
        margin: int = DEFAULT_TRIGGER_MARGIN,
    ) -> None:
        self.margin = margin
        self.phrases: dict[str, SectionTag] = dict(TRIGGER_PHRASES)
        for phrase, tag in (extra_phrases or {}).items():
            normalized = _normalize(phrase)
            if normalized:
                self.phrases[normalized] = tag
        # Longest phrases first so "CTA 1" wins over "CTA".
        self._by_length = sorted(self.phrases, key=len, reverse=True)

    def match(self, text: str, *, allow_near: bool = True) -> SectionTag | None:
        """Return the section tag triggered by ``text``, if any."""
        normalized = _normalize(text)
        if not normalized:
            return None
        exact = self.phrases.get(normalized)
        if exact is not None:
            return exact
        trimmed = normalized.rstrip(":.").rstrip()
        if trimmed != normalized and trimmed in self.phrases:
            return self.phrases[trimmed]
        if not allow_near:
            return None
        for phrase in self._by_length:
            if len(normalized) > len(phrase) + self.margin:
                continue
            if re.search(rf"(?<![A-Z0-9]){re.escape(phrase)}(?![A-Z0-9])", normalized):
                return self.phrases[phrase]
        return None


def _normalize(text: str) -> str:
    plain = strip_tags(text).replace("**", "")
    return re.sub(r"\s+", " ", plain).strip().upper()


_GUIDE_NOTES: dict[SectionTag, str] = {
    SectionTag.TOC: "Rebuilt from every h2-h4 heading in the document.",
    SectionTag.KEY_TAKEAWAYS: "One bullet per line.",
    SectionTag.CTA: "Lines: heading, description, button label, image URL.",
    SectionTag.CTA1: "Lines: heading, description, button label, image URL.",
    SectionTag.CTA2: "Lines: heading, description, button label.",
    SectionTag.FAQ: "Questions end with '?'; following lines are the answer.",
    SectionTag.STEPS: "One step per line, 'Title: description'.",
    SectionTag.COMPARISON: "Rows as 'Feature | Option 1 | Option 2'.",
    SectionTag.PROS_CONS: "First half of the lines are pros, the rest cons.",
    SectionTag.BULLET_LIST: "One bullet per line.",
    SectionTag.TABLE: "First row is the header; cells split on |, tabs, or 3+ spaces.",
    SectionTag.IGNORE: "Everything inside is dropped from the output.",
}


def build_section_guide() -> str:
    """Return a plain-text guide listing every trigger and directive."""
    lines = ["Section triggers", "================", ""]
    for tag in SectionTag:
        phrases = [phrase for phrase, value in TRIGGER_PHRASES.items() if value is tag]
        brackets = [f"<{name}>" for name, value in BRACKET_TAGS.items() if value is tag]
        if tag is SectionTag.TABLE:
            brackets.append("[TABLE START]")
        lines.append(tag.value)
        if phrases:
            lines.append(f"  phrases:    {', '.join(phrases)}")
        if brackets:
            lines.append(f"  directives: {', '.join(brackets)}")
        lines.append(f"  format:     {_GUIDE_NOTES[tag]}")
        lines.append("")
    lines.append("Close any directive with <NAME END>; unclosed sections end with the document.")
    return "\n".join(lines) + "\n"


__all__ = [
    "BRACKET_TAGS",
    "DEFAULT_TRIGGER_MARGIN",
    "TRIGGER_PHRASES",
    "Directive",
    "SectionTag",
    "TriggerMatcher",
    "build_section_guide",
    "parse_directive",
]
