"""Convert loosely structured drafts into the blog's HTML dialect.

This package classifies each line of a plain-text or markdown draft, tracks
the special sections writers mark with trigger phrases or bracket
directives, renders each section through fixed templates, and cleans the
assembled HTML so the table of contents links every heading.

Exports
-------
- ``DocumentConverter`` and ``convert_text``: the conversion pipeline.
- ``ConversionResult``: HTML, outline, statistics, and the method used.
- ``app`` and ``main``: the ``blogdoc`` Cyclopts application.

Examples
--------
>>> from blogdoc import convert_text
>>> convert_text("1. Getting Started\\nInstall the tool.").html
'<h2 id="getting-started">Getting Started</h2>\\n<p>Install the tool.</p>'
"""

from __future__ import annotations

from .cli import app, main
from .converter import ConversionResult, DocumentConverter, convert_text

__all__ = ["ConversionResult", "DocumentConverter", "app", "convert_text", "main"]
