"""Load and validate blogdoc converter configuration YAML.

This subpackage parses an optional ``blogdoc.yaml`` file into strongly typed
dataclasses (:class:`ConverterConfig`, :class:`CtaDefaults`,
:class:`SummarizerConfig`). Every key is optional: extra trigger phrases are
merged over the built-in dictionary, call-to-action copy overrides the
documented defaults field by field, and the ``summarizer`` block switches on
the external HTML-generation service. The entry point is
:func:`load_converter_config`.

Examples
--------
>>> from pathlib import Path
>>> from blogdoc.config import load_converter_config
>>> config = load_converter_config(Path("blogdoc.yaml"))  # doctest: +SKIP
>>> config.summarizer.enabled  # doctest: +SKIP
False
"""

from .loader import load_converter_config
from .models import (
    DEFAULT_CTA,
    ConverterConfig,
    ConverterConfigError,
    CtaDefaults,
    SummarizerConfig,
)

__all__ = [
    "DEFAULT_CTA",
    "ConverterConfig",
    "ConverterConfigError",
    "CtaDefaults",
    "SummarizerConfig",
    "load_converter_config",
]
