from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List


@dataclass
class Block:
    """Base class for block-level nodes."""


@dataclass
class Document:
    blocks: List[Block] = field(default_factory=list)
    metadata: dict[str, Any] | None = None


@dataclass
class Heading(Block):
    level: int
    inline: List["InlineElement"]
    anchor: str | None = None


@dataclass
class Paragraph(Block):
    inline: List["InlineElement"]


@dataclass
class HorizontalRule(Block):
    """Horizontal rule / thematic break."""


@dataclass
class ListItem:
    blocks: List[Block] = field(default_factory=list)


@dataclass
class ListBlock(Block):
    items: List[ListItem]
    ordered: bool
    start: int = 1
    loose: bool = False


@dataclass
class CodeBlock(Block):
    language: str | None
    code: str


@dataclass
class BlockQuote(Block):
    blocks: List[Block] = field(default_factory=list)


class Alignment(Enum):
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class TableBlock(Block):
    """Pipe table; every row has exactly ``len(alignments)`` cells."""

    alignments: List[Alignment]
    header: List[List["InlineElement"]]
    rows: List[List[List["InlineElement"]]] = field(default_factory=list)


@dataclass
class Container(Block):
    """Generic ``:::label`` fenced wrapper."""

    label: str
    blocks: List[Block] = field(default_factory=list)


@dataclass
class InlineElement:
    """Base class for inline nodes."""


@dataclass
class InlineText(InlineElement):
    text: str


@dataclass
class Emphasis(InlineElement):
    children: List[InlineElement]


@dataclass
class Strong(InlineElement):
    children: List[InlineElement]


@dataclass
class CodeSpan(InlineElement):
    code: str


@dataclass
class LineBreak(InlineElement):
    """Line boundary inside a multi-line leaf block."""


def plain_text(inline: List[InlineElement]) -> str:
    """Return the text content of an inline sequence without markup."""
    parts: list[str] = []
    for element in inline:
        if isinstance(element, InlineText):
            parts.append(element.text)
        elif isinstance(element, CodeSpan):
            parts.append(element.code)
        elif isinstance(element, (Emphasis, Strong)):
            parts.append(plain_text(element.children))
        elif isinstance(element, LineBreak):
            parts.append(" ")
    return "".join(parts)
