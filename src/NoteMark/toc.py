from __future__ import annotations

import html
import re
from dataclasses import dataclass, field, replace
from typing import Iterator, List

from .model import Document, Heading, plain_text
from .renderer_html import escape_text

_SPACE_RE = re.compile(r"\s+")


@dataclass
class TocEntry:
    level: int
    title: str
    anchor: str
    children: List["TocEntry"] = field(default_factory=list)


def _listed_headings(doc: Document, max_level: int) -> Iterator[tuple[int, Heading, str, str]]:
    """Yield ``(index, heading, title, anchor)`` for top-level headings up to ``max_level``."""
    seen: dict[str, int] = {}
    for index, block in enumerate(doc.blocks):
        if not isinstance(block, Heading) or block.level > max_level:
            continue
        title = plain_text(block.inline).strip()
        yield index, block, title, _unique_anchor(title, seen)


def build_toc(doc: Document, max_level: int = 3) -> list[TocEntry]:
    """Return the top-level headings up to ``max_level`` as a tree.

    A heading that skips levels nests under the closest shallower entry; one
    with no shallower entry before it starts a new root entry. ``doc`` is
    left as it is; :func:`with_anchors` gives the matching ``id`` values.
    """
    roots: list[TocEntry] = []
    path: list[TocEntry] = []
    for _, heading, title, anchor in _listed_headings(doc, max_level):
        entry = TocEntry(level=heading.level, title=title, anchor=anchor)
        while path and path[-1].level >= entry.level:
            path.pop()
        if path:
            path[-1].children.append(entry)
        else:
            roots.append(entry)
        path.append(entry)
    return roots


def with_anchors(doc: Document, max_level: int = 3) -> Document:
    """Return a copy of ``doc`` whose listed headings carry the same anchors as :func:`build_toc`."""
    blocks = list(doc.blocks)
    for index, heading, _, anchor in _listed_headings(doc, max_level):
        blocks[index] = replace(heading, anchor=anchor)
    return replace(doc, blocks=blocks)


def _unique_anchor(title: str, seen: dict[str, int]) -> str:
    base = _SPACE_RE.sub("-", title) or "section"
    count = seen.get(base, 0) + 1
    seen[base] = count
    return base if count == 1 else f"{base}-{count}"


def render_toc(entries: List[TocEntry]) -> str:
    if not entries:
        return ""
    parts = ["<ul>"]
    for entry in entries:
        href = "#" + entry.anchor
        parts.append(f'<li><a href="{html.escape(href, quote=True)}">{escape_text(entry.title)}</a>')
        parts.append(render_toc(entry.children))
        parts.append("</li>")
    parts.append("</ul>")
    return "".join(parts)
