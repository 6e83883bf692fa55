r"""High-level orchestration for converting drafts into blog HTML.

:class:`DocumentConverter` ties the pipeline together: it optionally asks the
external generation service for HTML and otherwise (or when the service
fails) runs the deterministic classifier, transducer, and renderer. Either
way the HTML is finalised by the cleanup passes so the table of contents
always links every heading.

Example
-------
>>> from blogdoc.converter import convert_text
>>> result = convert_text("KEY TAKEAWAYS\n- Fast\n- Small")
>>> result.method
'fallback'
>>> 'class="kta-list"' in result.document.html
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import typing as typ

from .cleanup import extract_outline, finalize_html
from .config import ConverterConfig
from .models import RenderedDocument
from .rendering import SectionRenderer
from .sections import TriggerMatcher
from .stats import DocumentStats, compute_stats
from .structure import analyze_structure
from .summarizer import ChatCompletionSummarizer, SummarizerError
from .transducer import SectionStateMachine

logger = logging.getLogger(__name__)

FALLBACK_WARNING = "AI parsing failed, using rule-based fallback"

Method = typ.Literal["ai", "fallback"]


@dc.dataclass(frozen=True, slots=True)
class ConversionResult:
    """Outcome of converting one document.

    Attributes
    ----------
    document : RenderedDocument
        Final HTML and its outline.
    method : {"ai", "fallback"}
        ``"ai"`` when the generation service produced the HTML.
    stats : DocumentStats
        Statistics of the source text.
    warning : str | None
        Set when the service was tried and failed.
    model : str | None
        Service model used for ``"ai"`` conversions.
    total_tokens : int
        Tokens reported by the service.
    """

    document: RenderedDocument
    method: Method
    stats: DocumentStats
    warning: str | None = None
    model: str | None = None
    total_tokens: int = 0

    @property
    def html(self) -> str:
        return self.document.html


class DocumentConverter:
    """Convert plain-text drafts into blog HTML."""

    def __init__(
        self,
        config: ConverterConfig | None = None,
        *,
        summarizer: ChatCompletionSummarizer | None = None,
        renderer: SectionRenderer | None = None,
    ) -> None:
        """Initialise the converter.

        Parameters
        ----------
        config : ConverterConfig, optional
            Converter settings; defaults apply when omitted.
        summarizer : ChatCompletionSummarizer, optional
            Generation service client. When omitted one is built from
            ``config.summarizer`` if it is enabled and its API key is set.
        renderer : SectionRenderer, optional
            Fragment renderer; built from ``config.cta`` when omitted.
        """
        self.config = config or ConverterConfig()
        self.renderer = renderer or SectionRenderer(cta_defaults=self.config.cta)
        self.matcher = TriggerMatcher(
            self.config.extra_triggers, margin=self.config.trigger_margin
        )
        if summarizer is None:
            summarizer = ChatCompletionSummarizer.from_config(self.config.summarizer)
        self.summarizer = summarizer

    def convert(self, text: str) -> ConversionResult:
        """Convert ``text`` and never raise for any input text.

        The generation service is tried first when configured; any
        :class:`SummarizerError` is logged and the deterministic path is used
        with a warning on the result.
        """
        lines = text.splitlines()
        stats = compute_stats(text, analyze_structure(lines, self.matcher))
        warning: str | None = None
        if self.summarizer is not None:
            try:
                summary = self.summarizer.generate(text)
            except SummarizerError as exc:
                logger.warning("Generation service failed, using fallback: %s", exc)
                warning = FALLBACK_WARNING
            else:
                logger.info("Converted with generation service model %s", summary.model)
                return ConversionResult(
                    document=self.finalize(summary.html),
                    method="ai",
                    stats=stats,
                    model=summary.model,
                    total_tokens=summary.total_tokens,
                )
        logger.debug("Converting %d lines with the rule-based converter", len(lines))
        return ConversionResult(
            document=self.convert_rules(lines),
            method="fallback",
            stats=stats,
            warning=warning,
        )

    def convert_rules(self, lines: typ.Iterable[str]) -> RenderedDocument:
        """Run the classifier, transducer, and cleanup over ``lines``."""
        machine = SectionStateMachine(self.renderer, self.matcher)
        rendered = machine.run(lines)
        return self.finalize(rendered.html)

    def finalize(self, html: str) -> RenderedDocument:
        """Clean ``html`` and derive its outline."""
        final = finalize_html(html, self.renderer)
        return RenderedDocument(html=final, outline=extract_outline(final))


def convert_text(text: str, config: ConverterConfig | None = None) -> ConversionResult:
    """Convert ``text`` with a converter built from ``config``."""
    return DocumentConverter(config).convert(text)


__all__ = [
    "FALLBACK_WARNING",
    "ConversionResult",
    "DocumentConverter",
    "convert_text",
]
