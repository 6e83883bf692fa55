"""Typed dataclasses describing blogdoc converter configuration."""

from __future__ import annotations

import dataclasses as dc

from blogdoc.sections import DEFAULT_TRIGGER_MARGIN, SectionTag

DEFAULT_CTA_IMAGE = "https://www.spaceotechnologies.com/wp-content/uploads/2023/04/cta-img.png"
DEFAULT_SUMMARIZER_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"
DEFAULT_SUMMARIZER_MODEL = "llama-3.1-70b-versatile"


class ConverterConfigError(ValueError):
    """Raised when the converter configuration is invalid or incomplete."""


@dc.dataclass(frozen=True, slots=True)
class CtaDefaults:
    """Fallback copy for a call-to-action block.

    Each field is used when the corresponding positional line (heading,
    description, button label, image URL) is missing from the section.
    """

    heading: str
    description: str
    button_label: str
    image_url: str = DEFAULT_CTA_IMAGE


DEFAULT_CTA: dict[SectionTag, CtaDefaults] = {
    SectionTag.CTA: CtaDefaults(
        heading="Ready to Get Started?",
        description="Get in touch with our experienced team for a free consultation.",
        button_label="Schedule Free Consultation",
    ),
    SectionTag.CTA1: CtaDefaults(
        heading="Want To Create An Android Application?",
        description=(
            "Looking to Create An Android app? Get in touch with our experienced "
            "Android app developers for a free consultation."
        ),
        button_label="Schedule Free Consultation",
    ),
    SectionTag.CTA2: CtaDefaults(
        heading="Get a Free Mobile App Development Strategy Session",
        description=(
            "Discover the best approach to building a custom mobile app tailored "
            "to your business. Get expert insights with no obligation."
        ),
        button_label="Claim My Free Strategy Session",
        image_url="",
    ),
}


@dc.dataclass(slots=True)
class SummarizerConfig:
    """Settings for the external HTML-generation service."""

    enabled: bool = False
    endpoint: str = DEFAULT_SUMMARIZER_ENDPOINT
    model: str = DEFAULT_SUMMARIZER_MODEL
    api_key_env: str = "GROQ_API_KEY"
    timeout: float = 60.0
    temperature: float = 0.1
    max_tokens: int = 4000


@dc.dataclass(slots=True)
class ConverterConfig:
    """Top-level converter configuration.

    Attributes
    ----------
    trigger_margin : int
        Extra characters a heading may carry beyond a trigger phrase and
        still open the section.
    extra_triggers : dict[str, SectionTag]
        Additional trigger phrases mapped to section tags.
    cta : dict[SectionTag, CtaDefaults]
        Default copy for each call-to-action variant.
    summarizer : SummarizerConfig
        External service settings.
    """

    trigger_margin: int = DEFAULT_TRIGGER_MARGIN
    extra_triggers: dict[str, SectionTag] = dc.field(default_factory=dict)
    cta: dict[SectionTag, CtaDefaults] = dc.field(default_factory=lambda: dict(DEFAULT_CTA))
    summarizer: SummarizerConfig = dc.field(default_factory=SummarizerConfig)


__all__ = [
    "DEFAULT_CTA",
    "DEFAULT_CTA_IMAGE",
    "ConverterConfig",
    "ConverterConfigError",
    "CtaDefaults",
    "SummarizerConfig",
]
