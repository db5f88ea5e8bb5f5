from __future__ import annotations

import html
from dataclasses import dataclass, field
from typing import Iterable, List

from .config import DEFAULT_OPTIONS, RenderOptions
from .model import (
    Alignment,
    Block,
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Container,
    Document,
    Emphasis,
    Heading,
    HorizontalRule,
    InlineElement,
    InlineText,
    LineBreak,
    ListBlock,
    ListItem,
    Paragraph,
    Strong,
    TableBlock,
)


@dataclass
class RenderState:
    options: RenderOptions = DEFAULT_OPTIONS
    out: list[str] = field(default_factory=list)
    # paragraphs directly inside an item of a tight list lose their <p>
    tight: bool = False


def render_document(doc: Document, options: RenderOptions = DEFAULT_OPTIONS) -> str:
    """Render a parsed document as one HTML fragment."""
    separator = "\n" if options.pretty else ""
    parts: list[str] = []
    for block in doc.blocks:
        state = RenderState(options=options)
        _dispatch_block(block, state)
        parts.append("".join(state.out))
    return separator.join(parts)


def render_inline(inline: Iterable[InlineElement], options: RenderOptions = DEFAULT_OPTIONS) -> str:
    state = RenderState(options=options)
    _render_inline(inline, state)
    return "".join(state.out)


def escape_text(text: str) -> str:
    return html.escape(text, quote=False)


def _attr(name: str, value: str) -> str:
    return f' {name}="{html.escape(value, quote=True)}"'


def _dispatch_block(block: Block, state: RenderState) -> None:
    if isinstance(block, Heading):
        _render_heading(block, state)
    elif isinstance(block, Paragraph):
        _render_paragraph(block, state)
    elif isinstance(block, ListBlock):
        _render_list(block, state)
    elif isinstance(block, CodeBlock):
        _render_code_block(block, state)
    elif isinstance(block, BlockQuote):
        _render_container("blockquote", "", block.blocks, state)
    elif isinstance(block, TableBlock):
        _render_table(block, state)
    elif isinstance(block, Container):
        _render_container("div", _attr("class", block.label) if block.label else "", block.blocks, state)
    elif isinstance(block, HorizontalRule):
        state.out.append("<hr>")
    else:
        raise TypeError(f"Unknown block type: {type(block).__name__}")


def _render_heading(heading: Heading, state: RenderState) -> None:
    tag = f"h{heading.level}"
    attrs = _attr("id", heading.anchor) if heading.anchor else ""
    state.out.append(f"<{tag}{attrs}>")
    _render_inline(heading.inline, state)
    state.out.append(f"</{tag}>")


def _render_paragraph(paragraph: Paragraph, state: RenderState) -> None:
    if state.tight:
        _render_inline(paragraph.inline, state)
        return
    state.out.append("<p>")
    _render_inline(paragraph.inline, state)
    state.out.append("</p>")


def _render_list(block: ListBlock, state: RenderState) -> None:
    tag = "ol" if block.ordered else "ul"
    attrs = f' start="{block.start}"' if block.ordered and block.start != 1 else ""
    tight = state.options.tight_lists and not block.loose
    state.out.append(f"<{tag}{attrs}>")
    for item in block.items:
        _render_list_item(item, tight, state)
    state.out.append(f"</{tag}>")


def _render_list_item(item: ListItem, tight: bool, state: RenderState) -> None:
    outer = state.tight
    state.out.append("<li>")
    for child in item.blocks:
        state.tight = tight
        _dispatch_block(child, state)
    state.tight = outer
    state.out.append("</li>")


def _render_container(tag: str, attrs: str, blocks: List[Block], state: RenderState) -> None:
    outer = state.tight
    state.tight = False
    state.out.append(f"<{tag}{attrs}>")
    for child in blocks:
        _dispatch_block(child, state)
    state.out.append(f"</{tag}>")
    state.tight = outer


def _render_code_block(block: CodeBlock, state: RenderState) -> None:
    attrs = _attr("class", f"language-{block.language}") if block.language else ""
    state.out.append(f"<pre><code{attrs}>{escape_text(block.code)}</code></pre>")


def _render_table(table: TableBlock, state: RenderState) -> None:
    out = state.out
    out.append("<table><thead><tr>")
    for align, cell in zip(table.alignments, table.header):
        _render_cell("th", align, cell, state)
    out.append("</tr></thead><tbody>")
    for row in table.rows:
        out.append("<tr>")
        for align, cell in zip(table.alignments, row):
            _render_cell("td", align, cell, state)
        out.append("</tr>")
    out.append("</tbody></table>")


def _render_cell(tag: str, align: Alignment, cell: List[InlineElement], state: RenderState) -> None:
    attrs = "" if align is Alignment.NONE else f' style="text-align: {align.value}"'
    state.out.append(f"<{tag}{attrs}>")
    _render_inline(cell, state)
    state.out.append(f"</{tag}>")


def _render_inline(inline: Iterable[InlineElement], state: RenderState) -> None:
    out = state.out
    for element in inline:
        if isinstance(element, InlineText):
            out.append(escape_text(element.text))
        elif isinstance(element, Emphasis):
            out.append("<i>")
            _render_inline(element.children, state)
            out.append("</i>")
        elif isinstance(element, Strong):
            out.append("<strong>")
            _render_inline(element.children, state)
            out.append("</strong>")
        elif isinstance(element, CodeSpan):
            out.append(f"<code>{escape_text(element.code)}</code>")
        elif isinstance(element, LineBreak):
            out.append("<br>" if state.options.hard_breaks else "\n")
        else:
            raise TypeError(f"Unknown inline type: {type(element).__name__}")
