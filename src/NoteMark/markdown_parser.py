from __future__ import annotations

import logging

from .block_parser import BlockParser
from .config import DEFAULT_OPTIONS, RenderOptions
from .errors import InputEncodingError
from .model import Document

logger = logging.getLogger(__name__)


def decode_source(source: str | bytes) -> str:
    """Return ``source`` as text, decoding bytes as strict UTF-8."""
    if isinstance(source, str):
        return source
    try:
        return bytes(source).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InputEncodingError(f"Markdown input is not valid UTF-8: {exc}") from exc


def parse_markdown(text: str | bytes, options: RenderOptions | None = None) -> Document:
    options = options or DEFAULT_OPTIONS
    source = decode_source(text)
    document = BlockParser(options).parse(source)
    logger.debug("Parsed %d chars into %d top-level blocks", len(source), len(document.blocks))
    return document
