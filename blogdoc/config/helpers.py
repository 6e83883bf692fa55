"""Utility helpers shared by the blogdoc configuration loader."""

from __future__ import annotations

import typing as typ

from blogdoc.sections import SectionTag

from .models import DEFAULT_CTA, ConverterConfigError, CtaDefaults, SummarizerConfig


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_tag(value: object, *, context: str) -> SectionTag:
    """Resolve a section tag from its value (``"bullet-list"``) or member name."""
    text = str(value).strip()
    for tag in SectionTag:
        if text.lower() == tag.value or text.upper().replace("-", "_") == tag.name:
            return tag
    msg = f"Unknown section tag '{text}' in {context}."
    raise ConverterConfigError(msg)


def _build_triggers(payload: object) -> dict[str, SectionTag]:
    """Build the extra trigger-phrase mapping."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        msg = "'triggers' must be a mapping of phrase to section tag."
        raise ConverterConfigError(msg)
    triggers: dict[str, SectionTag] = {}
    for phrase, tag in payload.items():
        text = _optional_str(phrase)
        if text is None:
            continue
        triggers[text] = _parse_tag(tag, context=f"trigger '{text}'")
    return triggers


def _build_cta_defaults(payload: object) -> dict[SectionTag, CtaDefaults]:
    """Merge configured call-to-action copy over the built-in defaults."""
    merged = dict(DEFAULT_CTA)
    if payload is None:
        return merged
    if not isinstance(payload, dict):
        msg = "'cta' must be a mapping keyed by cta, cta1, or cta2."
        raise ConverterConfigError(msg)
    for key, fields in payload.items():
        tag = _parse_tag(key, context="'cta'")
        if tag not in DEFAULT_CTA:
            msg = f"'cta' entry '{key}' is not a call-to-action tag."
            raise ConverterConfigError(msg)
        if not isinstance(fields, dict):
            msg = f"'cta.{key}' must be a mapping."
            raise ConverterConfigError(msg)
        base = merged[tag]
        merged[tag] = CtaDefaults(
            heading=_optional_str(fields.get("heading")) or base.heading,
            description=_optional_str(fields.get("description")) or base.description,
            button_label=_optional_str(fields.get("button_label")) or base.button_label,
            image_url=_optional_str(fields.get("image_url")) or base.image_url,
        )
    return merged


def _build_summarizer_config(payload: typ.Mapping[str, typ.Any] | None) -> SummarizerConfig:
    """Build a SummarizerConfig from the ``summarizer`` mapping."""
    base = SummarizerConfig()
    if not payload:
        return base
    try:
        timeout = float(payload.get("timeout", base.timeout))
        temperature = float(payload.get("temperature", base.temperature))
        max_tokens = int(payload.get("max_tokens", base.max_tokens))
    except (TypeError, ValueError) as exc:
        msg = f"Invalid summarizer setting: {exc}"
        raise ConverterConfigError(msg) from exc
    if timeout <= 0:
        msg = "'summarizer.timeout' must be positive."
        raise ConverterConfigError(msg)
    return SummarizerConfig(
        enabled=bool(payload.get("enabled", base.enabled)),
        endpoint=_optional_str(payload.get("endpoint")) or base.endpoint,
        model=_optional_str(payload.get("model")) or base.model,
        api_key_env=_optional_str(payload.get("api_key_env")) or base.api_key_env,
        timeout=timeout,
        temperature=temperature,
        max_tokens=max_tokens,
    )
