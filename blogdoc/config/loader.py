"""Load converter configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_cta_defaults, _build_summarizer_config, _build_triggers
from .models import ConverterConfig, ConverterConfigError


def load_converter_config(path: Path | None = None) -> ConverterConfig:
    """Load the YAML configuration controlling section detection and output.

    Parameters
    ----------
    path : Path, optional
        Filesystem path to the YAML file. When omitted the built-in defaults
        are returned.

    Returns
    -------
    ConverterConfig
        Parsed configuration with defaults applied for every missing key.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConverterConfigError
        If a section is malformed, a section tag is unknown, or a numeric
        setting is out of range.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from blogdoc.config import load_converter_config
    >>> config = load_converter_config(Path("blogdoc.yaml"))  # doctest: +SKIP
    >>> config.trigger_margin  # doctest: +SKIP
    5
    """
    if path is None:
        return ConverterConfig()
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    base = ConverterConfig()
    margin = raw.get("trigger_margin", base.trigger_margin)
    if not isinstance(margin, int) or isinstance(margin, bool) or margin < 0:
        msg = "'trigger_margin' must be a non-negative integer."
        raise ConverterConfigError(msg)

    summarizer_raw = raw.get("summarizer")
    if summarizer_raw is not None and not isinstance(summarizer_raw, dict):
        msg = "'summarizer' must be a mapping."
        raise ConverterConfigError(msg)

    return ConverterConfig(
        trigger_margin=margin,
        extra_triggers=_build_triggers(raw.get("triggers")),
        cta=_build_cta_defaults(raw.get("cta")),
        summarizer=_build_summarizer_config(summarizer_raw),
    )


__all__ = ["load_converter_config"]
