"""Render closed sections and plain blocks into HTML fragments.

:class:`SectionRenderer` owns the Jinja environment for the fragment
templates in ``blogdoc/templates`` and maps a :class:`~blogdoc.sections.SectionTag`
plus its buffered lines to the markup expected by the blog style sheet.
Dispatch is an exhaustive ``match`` over the tag, so adding a tag without a
renderer is a type error.

Example
-------
>>> from blogdoc.rendering import SectionRenderer
>>> from blogdoc.sections import SectionTag
>>> renderer = SectionRenderer()
>>> print(renderer.render(SectionTag.BULLET_LIST, ["Fast", "Small"]))
<ul class="bullet-new-box">
    <li>Fast</li>
    <li>Small</li>
</ul>
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import math
import re
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from blogdoc.classifier import ListKind
from blogdoc.config.models import DEFAULT_CTA, CtaDefaults
from blogdoc.models import Heading
from blogdoc.rendering.faq import group_faq
from blogdoc.rendering.tables import is_separator_row, parse_table, split_row
from blogdoc.sections import SectionTag

LABEL_PATTERN = re.compile(r"^((?:<[^>]*>|[^:<])+):(.*)$", re.DOTALL)

_CTA_TEMPLATES: dict[SectionTag, str] = {
    SectionTag.CTA: "cta.jinja",
    SectionTag.CTA1: "cta1.jinja",
    SectionTag.CTA2: "cta2.jinja",
}


@dc.dataclass(frozen=True, slots=True)
class Step:
    """A numbered step with a short title and a description."""

    title: str
    description: str


def split_step(line: str, number: int) -> Step:
    """Split ``line`` on its first label colon into a :class:`Step`.

    Colons inside markup (``href="https://..."``) are not label separators.
    Lines without a label, or with an empty label, become ``Step N`` with
    the whole line as description; a label with no description becomes
    the description of ``Step N``.
    """
    text = line.strip()
    fallback = f"Step {number}"
    match = LABEL_PATTERN.match(text)
    if match is None:
        return Step(title=fallback, description=text)
    title, description = match.group(1).strip(), match.group(2).strip()
    if not title:
        return Step(title=fallback, description=text)
    if not description:
        return Step(title=fallback, description=title)
    return Step(title=title, description=description)


def split_pros_cons(lines: cabc.Sequence[str]) -> tuple[list[str], list[str]]:
    """Split ``lines`` at the ceiling midpoint into pros and cons."""
    midpoint = math.ceil(len(lines) / 2)
    return list(lines[:midpoint]), list(lines[midpoint:])


def comparison_rows(lines: cabc.Iterable[str]) -> list[list[str]]:
    """Return three-cell rows for ``|`` lines and single-cell rows otherwise."""
    rows: list[list[str]] = []
    for line in lines:
        text = line.strip()
        if not text:
            continue
        cells = split_row(text, "pipe") if "|" in text else [text]
        if is_separator_row(cells):
            continue
        rows.append(cells[:3] if len(cells) >= 3 else [text])
    return rows


class SectionRenderer:
    """Render section buffers and plain blocks through Jinja templates."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        cta_defaults: typ.Mapping[SectionTag, CtaDefaults] | None = None,
    ) -> None:
        """Initialise the template environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing the fragment templates; defaults to the
            package templates.
        cta_defaults : Mapping[SectionTag, CtaDefaults], optional
            Replacement copy for the call-to-action variants. Tags missing
            from the mapping keep the built-in defaults.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.cta_defaults: dict[SectionTag, CtaDefaults] = dict(DEFAULT_CTA)
        self.cta_defaults.update(cta_defaults or {})
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            # Fragments receive already-formatted inline markup.
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _render(self, template: str, **context: object) -> str:
        return self.env.get_template(template).render(**context)

    def render(
        self,
        tag: SectionTag | None,
        lines: cabc.Sequence[str],
        outline: cabc.Sequence[Heading | str] = (),
    ) -> str:
        """Render one closed section.

        Parameters
        ----------
        tag : SectionTag or None
            Section kind; ``None`` marks an unknown directive and renders the
            buffer as a single paragraph.
        lines : Sequence[str]
            Buffered content lines in source order.
        outline : Sequence[Heading | str], optional
            Headings used by the table of contents.

        Returns
        -------
        str
            HTML fragment, or ``""`` for ignored and empty sections.
        """
        content = [line.strip() for line in lines if line.strip()]
        if tag is not None and not content and not tag.renders_when_empty:
            return ""
        match tag:
            case None:
                return self.render_paragraph(" ".join(content))
            case SectionTag.TOC:
                return self.render_toc(outline)
            case SectionTag.KEY_TAKEAWAYS:
                return self._render("key_takeaways.jinja", items=content)
            case SectionTag.CTA | SectionTag.CTA1 | SectionTag.CTA2:
                return self.render_cta(tag, content)
            case SectionTag.FAQ:
                return self._render("faq.jinja", entries=group_faq(content))
            case SectionTag.STEPS:
                steps = [split_step(line, index) for index, line in enumerate(content, 1)]
                return self._render("steps.jinja", steps=steps)
            case SectionTag.COMPARISON:
                rows = comparison_rows(content)
                return self._render("comparison.jinja", rows=rows) if rows else ""
            case SectionTag.PROS_CONS:
                pros, cons = split_pros_cons(content)
                return self._render("pros_cons.jinja", pros=pros, cons=cons)
            case SectionTag.BULLET_LIST:
                return self.render_list(ListKind.UNORDERED, content)
            case SectionTag.TABLE:
                return self.render_table(content)
            case SectionTag.IGNORE:
                return ""
            case _:
                typ.assert_never(tag)

    def render_cta(self, tag: SectionTag, lines: cabc.Sequence[str]) -> str:
        """Fill a call-to-action template positionally, defaulting missing fields."""
        defaults = self.cta_defaults[tag]
        fields = list(lines[:4]) + [""] * (4 - min(len(lines), 4))
        cta = CtaDefaults(
            heading=fields[0] or defaults.heading,
            description=fields[1] or defaults.description,
            button_label=fields[2] or defaults.button_label,
            image_url=fields[3] or defaults.image_url,
        )
        return self._render(_CTA_TEMPLATES[tag], cta=cta)

    def render_toc(self, entries: cabc.Sequence[Heading | str]) -> str:
        """Render the table-of-contents block; empty input renders nothing."""
        headings = [
            entry if isinstance(entry, Heading) else Heading.from_text(2, entry)
            for entry in entries
        ]
        if not headings:
            return ""
        return self._render("toc.jinja", entries=headings)

    def render_table(self, lines: cabc.Sequence[str]) -> str:
        """Render buffered rows as a data table."""
        table = parse_table(lines)
        if table is None:
            return ""
        return self._render("table.jinja", table=table)

    def render_list(self, kind: ListKind, items: cabc.Sequence[str]) -> str:
        """Render a plain ordered or unordered list."""
        if not items:
            return ""
        if kind is ListKind.ORDERED:
            return self._render("list.jinja", element="ol", css_class="listing-bx", items=items)
        return self._render("list.jinja", element="ul", css_class="bullet-new-box", items=items)

    def render_heading(self, heading: Heading) -> str:
        """Render a heading with its anchor id."""
        return self._render("heading.jinja", heading=heading)

    def render_paragraph(self, text: str) -> str:
        """Wrap ``text`` in a paragraph; blank text renders nothing."""
        if not text.strip():
            return ""
        return self._render("paragraph.jinja", text=text.strip())


__all__ = ["SectionRenderer", "Step", "comparison_rows", "split_pros_cons", "split_step"]
