"""Cyclopts CLI entrypoint for converting drafts into blog HTML.

The ``blogdoc`` console script reads a plain-text or markdown draft, runs it
through :class:`~blogdoc.converter.DocumentConverter`, and prints or writes
the resulting HTML. ``blogdoc stats`` reports reading statistics without
rendering, and ``blogdoc guide`` prints the section triggers writers can use.

Examples
--------
Convert a draft and write the HTML next to it:

>>> from blogdoc.cli import app
>>> app(["convert", "draft.txt", "--output", "draft.html"])  # doctest: +SKIP

Print statistics as JSON:

>>> app(["stats", "draft.md", "--json"])  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import json
import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import SUPPORTED_SUFFIXES
from .config import load_converter_config
from .converter import ConversionResult, DocumentConverter
from .sections import build_section_guide
from .stats import DocumentStats, compute_stats

logger = logging.getLogger(__name__)

app = App(name="blogdoc", config=cyclopts.config.Env("BLOGDOC_", command=False))  # type: ignore[unknown-argument]


class UnsupportedInputError(ValueError):
    """Raised when the CLI is given a file type it cannot read as text."""


def configure_logging(*, verbose: bool = False) -> None:
    """Send log records to stderr, at DEBUG when ``verbose`` is set."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def read_source(path: Path) -> str:
    """Read a draft from disk.

    Raises
    ------
    UnsupportedInputError
        If the file suffix is not a supported text format.
    FileNotFoundError
        If ``path`` does not exist.
    """
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        supported = ", ".join(sorted(SUPPORTED_SUFFIXES))
        msg = f"Unsupported input '{path.name}'; expected one of {supported}."
        raise UnsupportedInputError(msg)
    if not path.exists():
        msg = f"Input file '{path}' not found."
        raise FileNotFoundError(msg)
    return path.read_text(encoding="utf-8")


def _stats_payload(stats: DocumentStats) -> dict[str, typ.Any]:
    payload = dc.asdict(stats)
    payload["complexity"] = stats.complexity.value
    return payload


def _result_payload(result: ConversionResult) -> dict[str, typ.Any]:
    return {
        "html": result.html,
        "method": result.method,
        "warning": result.warning,
        "model": result.model,
        "total_tokens": result.total_tokens,
        "outline": [dc.asdict(heading) for heading in result.document.outline],
        "stats": _stats_payload(result.stats),
    }


@app.command(help="Convert a text or markdown draft into blog HTML.")
def convert(
    source: Path,
    *,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Write the HTML here instead of stdout", env_var="BLOGDOC_OUTPUT"),
    ] = None,
    config: typ.Annotated[
        Path | None, Parameter(help="Path to converter config", env_var="BLOGDOC_CONFIG")
    ] = None,
    json_output: typ.Annotated[
        bool, Parameter(name="--json", help="Print the full result as JSON")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Convert ``source`` and print or write the HTML.

    Parameters
    ----------
    source : Path
        Draft file (``.txt``, ``.text``, ``.md``, or ``.markdown``).
    output : Path or None, optional
        Destination for the HTML; printed to stdout when omitted.
    config : Path or None, optional
        YAML configuration file (overridable via ``BLOGDOC_CONFIG``).
    json_output : bool, optional
        Print HTML, method, outline, and statistics as one JSON object.
    verbose : bool, optional
        Log pipeline decisions to stderr.
    """
    configure_logging(verbose=verbose)
    text = read_source(source)
    converter = DocumentConverter(load_converter_config(config))
    result = converter.convert(text)
    if result.warning:
        logger.warning(result.warning)

    if json_output:
        print(json.dumps(_result_payload(result), indent=2))
        return
    if output is None:
        print(result.html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.html + "\n", encoding="utf-8")
    print(f"wrote {output} ({result.method})")


@app.command(help="Report word count, reading time, complexity, and SEO score.")
def stats(
    source: Path,
    *,
    json_output: typ.Annotated[
        bool, Parameter(name="--json", help="Print statistics as JSON")
    ] = False,
    verbose: typ.Annotated[bool, Parameter(help="Enable debug logging")] = False,
) -> None:
    """Print statistics for ``source`` without rendering it."""
    configure_logging(verbose=verbose)
    result = compute_stats(read_source(source))
    if json_output:
        print(json.dumps(_stats_payload(result), indent=2))
        return
    print(f"words: {result.word_count}")
    print(f"reading time: {result.reading_time} min")
    print(f"complexity: {result.complexity.value}")
    print(f"seo score: {result.seo_score}")


@app.command(help="Print the section triggers and directives a draft can use.")
def guide() -> None:
    """Print the section guide."""
    print(build_section_guide(), end="")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``blogdoc`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
