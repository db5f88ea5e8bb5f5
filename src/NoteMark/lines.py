"""Single-line classification.

Every function here is total: a line that matches no marker is a
:class:`TextLine`, never an error. The block parser decides what a
classification means in the context of the containers that are open.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional, Union

_HEADING_RE = re.compile(r"^(?P<level>#{1,6})(?:[ \t]+(?P<text>.*))?$")
_THEMATIC_RE = re.compile(r"^(?P<char>[-*_])(?:[ \t]*(?P=char)){2,}$")
_LIST_RE = re.compile(r"^(?P<marker>[-*+]|(?P<number>\d{1,9})(?P<delim>[.)]))(?P<space>[ \t]+|$)")
_FENCE_RE = re.compile(r"^(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
_CONTAINER_RE = re.compile(r"^:{3,}(?P<label>.*)$")
_DELIMITER_CELL_RE = re.compile(r"^:?-+:?$")


@dataclass
class Blank:
    pass


@dataclass
class HeadingLine:
    level: int
    text: str


@dataclass
class ThematicBreakLine:
    pass


@dataclass
class ListMarker:
    ordered: bool
    marker: str
    number: Optional[int]
    indent: int
    content_indent: int
    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()

    def same_list(self, other: "ListMarker") -> bool:
        """Bullet items share a list only with the same bullet character, ordered items with the same delimiter."""
        if self.ordered != other.ordered:
            return False
        if self.ordered:
            return self.marker[-1] == other.marker[-1]
        return self.marker == other.marker


@dataclass
class BlockquoteMarker:
    text: str


@dataclass
class FenceOpen:
    char: str
    length: int
    indent: int
    label: Optional[str] = None


@dataclass
class FenceLine:
    text: str


@dataclass
class FenceClose:
    pass


@dataclass
class ContainerFenceOpen:
    label: str


@dataclass
class ContainerFenceClose:
    pass


@dataclass
class TableRowCandidate:
    cells: List[str]
    text: str
    is_delimiter: bool = False


@dataclass
class TextLine:
    text: str


LineClass = Union[
    Blank,
    HeadingLine,
    ThematicBreakLine,
    ListMarker,
    BlockquoteMarker,
    FenceOpen,
    FenceLine,
    FenceClose,
    ContainerFenceOpen,
    ContainerFenceClose,
    TableRowCandidate,
    TextLine,
]


def expand_indent(line: str, tab_size: int) -> str:
    """Expand tabs in the leading whitespace only; content keeps its tabs."""
    body = line.lstrip(" \t")
    lead = line[: len(line) - len(body)]
    if "\t" not in lead:
        return line
    return lead.expandtabs(tab_size) + body


def raw_remainder(line: str, columns: int, tab_size: int) -> str:
    """Return what is left of the unexpanded ``line`` once ``columns`` columns
    of its :func:`expand_indent` form have been consumed.

    Tabs past that point stay tabs. A leading tab that straddles the cut
    leaves its remaining columns as spaces.
    """
    body = line.lstrip(" \t")
    lead_len = len(line) - len(body)
    col = 0
    for idx in range(lead_len):
        if col >= columns:
            return " " * (col - columns) + line[idx:]
        col = col + tab_size - col % tab_size if line[idx] == "\t" else col + 1
    if col >= columns:
        return " " * (col - columns) + body
    return body[columns - col:]


def indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def is_blank(line: str) -> bool:
    return not line.strip()


def strip_quote_marker(line: str) -> str | None:
    """Return the text after a leading ``>`` (and one optional space), or None."""
    body = line.lstrip(" ")
    if not body.startswith(">"):
        return None
    rest = body[1:]
    if rest.startswith(" "):
        rest = rest[1:]
    return rest


def match_list_marker(line: str) -> ListMarker | None:
    indent = indent_of(line)
    body = line[indent:]
    match = _LIST_RE.match(body)
    if match is None:
        return None
    marker = match.group("marker")
    spaces = match.group("space")
    rest = body[match.end():]
    number = int(match.group("number")) if match.group("number") else None
    if not rest.strip():
        # empty item: content starts one column past the marker
        return ListMarker(number is not None, marker, number, indent, indent + len(marker) + 1, "")
    width = len(spaces.expandtabs(4))
    if width >= 5:
        # the item starts with indented text; keep all but one column
        content_indent = indent + len(marker) + 1
        text = body[len(marker) + 1:]
    else:
        content_indent = indent + len(marker) + width
        text = rest
    return ListMarker(number is not None, marker, number, indent, content_indent, text)


def match_fence_open(line: str) -> FenceOpen | None:
    indent = indent_of(line)
    match = _FENCE_RE.match(line[indent:].rstrip())
    if match is None:
        return None
    fence = match.group("fence")
    info = match.group("info").strip()
    if fence[0] == "`" and "`" in info:
        return None
    label = info.split()[0] if info else None
    return FenceOpen(char=fence[0], length=len(fence), indent=indent, label=label)


def is_fence_close(line: str, fence: FenceOpen) -> bool:
    body = line.strip()
    if len(body) < fence.length:
        return False
    return body == fence.char * len(body)


def has_unescaped_pipe(text: str) -> bool:
    escaped = False
    for ch in text:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == "|":
            return True
    return False


def split_cells(text: str) -> List[str]:
    """Split a pipe-table row into trimmed cell texts.

    One leading and one trailing pipe are dropped; escaped pipes stay in the
    cell text (escape included) for the inline parser to resolve.
    """
    row = text.strip()
    if row.startswith("|"):
        row = row[1:]
    if row.endswith("|") and not row.endswith("\\|"):
        row = row[:-1]

    cells: list[str] = []
    buf: list[str] = []
    idx = 0
    while idx < len(row):
        ch = row[idx]
        if ch == "\\" and idx + 1 < len(row):
            buf.append(row[idx : idx + 2])
            idx += 2
            continue
        if ch == "|":
            cells.append("".join(buf).strip())
            buf = []
        else:
            buf.append(ch)
        idx += 1
    cells.append("".join(buf).strip())
    return cells


def is_delimiter_row(cells: List[str]) -> bool:
    return bool(cells) and all(_DELIMITER_CELL_RE.match(cell) for cell in cells)


def classify_line(line: str, open_fence: FenceOpen | None = None) -> LineClass:
    """Classify one line with its terminator already stripped.

    ``open_fence`` is the fence currently collecting literal lines, if any;
    inside it only the closing fence is recognised.
    """
    if open_fence is not None:
        if is_fence_close(line, open_fence):
            return FenceClose()
        return FenceLine(line)

    body = line.strip()
    if not body:
        return Blank()

    match = _HEADING_RE.match(body)
    if match is not None:
        return HeadingLine(level=len(match.group("level")), text=(match.group("text") or "").strip())

    fence = match_fence_open(line)
    if fence is not None:
        return fence

    match = _CONTAINER_RE.match(body)
    if match is not None:
        label = match.group("label").strip()
        if not label:
            return ContainerFenceClose()
        return ContainerFenceOpen(label=label)

    if _THEMATIC_RE.match(body):
        return ThematicBreakLine()

    quoted = strip_quote_marker(line)
    if quoted is not None:
        return BlockquoteMarker(text=quoted)

    marker = match_list_marker(line)
    if marker is not None:
        return marker

    if has_unescaped_pipe(body):
        cells = split_cells(body)
        return TableRowCandidate(cells=cells, text=body, is_delimiter=is_delimiter_row(cells))

    return TextLine(text=body)


def match_delimiter_row(line: str) -> TableRowCandidate | None:
    """Read ``line`` as a table delimiter row even if it also looks like a list item (``- | -``)."""
    body = line.strip()
    if not has_unescaped_pipe(body):
        return None
    cells = split_cells(body)
    if not is_delimiter_row(cells):
        return None
    return TableRowCandidate(cells=cells, text=body, is_delimiter=True)
