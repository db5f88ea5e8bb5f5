from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .markdown_parser import decode_source

HTML_SUFFIX = ".html"


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the CLI; library modules only emit debug records."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_output_path(input_path: Path, output: Optional[str], suffix: str = HTML_SUFFIX) -> Path:
    """Next to the input by default; an existing directory gets ``<stem><suffix>``."""
    if not output:
        return input_path.with_suffix(suffix)
    target = Path(output).expanduser()
    if target.is_dir():
        return target / f"{input_path.stem}{suffix}"
    return target


def read_markdown(path: Path) -> str:
    return decode_source(path.read_bytes())


def write_html(path: Path, html: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
