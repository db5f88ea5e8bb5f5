"""Markdown to HTML fragments.

    >>> render("# Hello, world!\\n\\nThis is a new line.")
    '<h1>Hello, world!</h1><p>This is a new line.</p>'
"""

from __future__ import annotations

from .config import RenderOptions, load_options
from .errors import ConfigError, InputEncodingError, NestingDepthError, NoteMarkError
from .markdown_parser import parse_markdown
from .renderer_html import render_document
from .toc import build_toc, render_toc, with_anchors

__all__ = [
    "ConfigError",
    "InputEncodingError",
    "NestingDepthError",
    "NoteMarkError",
    "RenderOptions",
    "build_toc",
    "load_options",
    "parse_markdown",
    "render",
    "render_document",
    "render_toc",
    "render_with_toc",
    "with_anchors",
]


def render(markdown_text: str | bytes, options: RenderOptions | None = None) -> str:
    """Return the HTML fragment for ``markdown_text``."""
    options = options or RenderOptions()
    return render_document(parse_markdown(markdown_text, options), options)


def render_with_toc(markdown_text: str | bytes, options: RenderOptions | None = None) -> tuple[str, str]:
    """Return ``(html, toc_html)``; headings listed in the TOC get ``id`` anchors."""
    options = options or RenderOptions()
    document = parse_markdown(markdown_text, options)
    entries = build_toc(document, max_level=options.toc_level)
    anchored = with_anchors(document, max_level=options.toc_level)
    return render_document(anchored, options), render_toc(entries)
