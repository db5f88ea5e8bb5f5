"""Line-by-line block structure recognition.

:class:`BlockParser` keeps an explicit stack of open container frames
(document, block quote, list, list item, ``:::`` container) and at most one
open leaf (paragraph, heading, fenced code or table). Each input line is matched
against the open frames from the outside in; frames that do not continue are
closed, and whatever is left of the line may open new containers and
finally a leaf. Nothing in here raises on malformed input.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .config import DEFAULT_OPTIONS, RenderOptions
from .errors import NestingDepthError
from .inline_parser import parse_inline
from .lines import (
    Blank,
    BlockquoteMarker,
    ContainerFenceClose,
    ContainerFenceOpen,
    FenceClose,
    FenceOpen,
    HeadingLine,
    LineClass,
    ListMarker,
    TableRowCandidate,
    TextLine,
    ThematicBreakLine,
    classify_line,
    expand_indent,
    indent_of,
    is_blank,
    match_delimiter_row,
    raw_remainder,
    strip_quote_marker,
)
from .model import (
    Block,
    BlockQuote,
    CodeBlock,
    Container,
    Document,
    Heading,
    HorizontalRule,
    InlineElement,
    ListBlock,
    ListItem,
    Paragraph,
)
from .tables import TableAssembler

logger = logging.getLogger(__name__)


class _Frame:
    def __init__(self, blocks: List[Block]) -> None:
        self.blocks = blocks
        self.blank_pending = False


class _DocumentFrame(_Frame):
    pass


class _QuoteFrame(_Frame):
    pass


class _ContainerFrame(_Frame):
    pass


class _ListFrame(_Frame):
    def __init__(self, node: ListBlock, marker: ListMarker) -> None:
        super().__init__([])
        self.node = node
        self.marker = marker


class _ItemFrame(_Frame):
    def __init__(self, item: ListItem, content_indent: int, list_frame: _ListFrame) -> None:
        super().__init__(item.blocks)
        self.content_indent = content_indent
        self.list_frame = list_frame


class _ParagraphLeaf:
    def __init__(self, first_line: str) -> None:
        self.lines = [first_line]


class _HeadingLeaf:
    """A heading keeps taking plain text lines until a blank line or another block."""

    def __init__(self, level: int, first_line: str) -> None:
        self.level = level
        self.lines = [first_line]


class _FenceLeaf:
    def __init__(self, fence: FenceOpen) -> None:
        self.fence = fence
        self.lines: list[str] = []


class _TableLeaf:
    def __init__(self, assembler: TableAssembler) -> None:
        self.assembler = assembler


def split_lines(text: str) -> List[str]:
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\r\n", "\n").split("\n")


class BlockParser:
    """Build a :class:`Document` from markdown text. One instance per document."""

    def __init__(self, options: RenderOptions = DEFAULT_OPTIONS) -> None:
        self.options = options
        self.document = Document()
        self.stack: list[_Frame] = [_DocumentFrame(self.document.blocks)]
        self.leaf: _ParagraphLeaf | _HeadingLeaf | _FenceLeaf | _TableLeaf | None = None
        self.line_number = 0
        self._blank_seen = False

    def parse(self, text: str) -> Document:
        for raw in split_lines(text):
            self.line_number += 1
            self._incorporate(raw)
        self._close_frames(1)
        return self.document

    # -- per line -------------------------------------------------------

    def _incorporate(self, raw: str) -> None:
        # markers are matched on the tab-expanded line; code keeps the raw one
        tab_size = self.options.tab_size
        line = expand_indent(raw, tab_size)
        self._blank_seen = False
        matched, rest, sibling = self._match_open_frames(line)
        all_matched = matched == len(self.stack)
        leaf = self.leaf

        if isinstance(leaf, _FenceLeaf) and all_matched:
            cls = classify_line(rest, open_fence=leaf.fence)
            if isinstance(cls, FenceClose):
                self._close_leaf()
            else:
                consumed = len(line) - len(rest) + min(leaf.fence.indent, indent_of(rest))
                leaf.lines.append(raw_remainder(raw, consumed, tab_size))
            self._settle_blank_state()
            return

        if not all_matched and not sibling and isinstance(leaf, _ParagraphLeaf):
            cls = classify_line(rest)
            if not isinstance(cls, Blank) and not self._interrupts_paragraph(cls):
                # lazy continuation: the paragraph keeps its containers open
                leaf.lines.append(rest.strip())
                self._settle_blank_state()
                return

        if not all_matched:
            self._close_frames(matched)
        self._open_blocks(rest)
        self._settle_blank_state()

    def _match_open_frames(self, line: str) -> tuple[int, str, bool]:
        """Match ``line`` against open frames, outermost first.

        Returns the number of frames that continue (the document always
        does), the unconsumed rest of the line, and whether the line is a new
        sibling item for the innermost continuing list.
        """
        stack = self.stack
        rest = line
        matched = 1
        while matched < len(stack):
            frame = stack[matched]
            if isinstance(frame, _QuoteFrame):
                stripped = strip_quote_marker(rest)
                if stripped is None:
                    break
                rest = stripped
                matched += 1
            elif isinstance(frame, _ListFrame):
                item = stack[matched + 1]
                if is_blank(rest):
                    rest = ""
                    matched += 2
                elif indent_of(rest) >= item.content_indent:
                    rest = rest[item.content_indent:]
                    matched += 2
                else:
                    cls = classify_line(rest)
                    if isinstance(cls, ListMarker) and frame.marker.same_list(cls):
                        return matched + 1, rest, True
                    break
            else:
                matched += 1
        return matched, rest, False

    def _open_blocks(self, rest: str) -> None:
        while True:
            cls = classify_line(rest)
            top = self.stack[-1]
            if isinstance(top, _ListFrame) and not (isinstance(cls, ListMarker) and top.marker.same_list(cls)):
                self._close_frames(len(self.stack) - 1)

            if isinstance(cls, Blank):
                self._handle_blank()
                return

            leaf = self.leaf
            if isinstance(leaf, _TableLeaf):
                if leaf.assembler.accepts(cls):
                    leaf.assembler.add_row(cls)
                    return
                self._close_leaf()
                leaf = None

            if isinstance(leaf, _ParagraphLeaf):
                if isinstance(cls, ListMarker):
                    delimiter = match_delimiter_row(rest)
                    if delimiter is not None and self._start_table(leaf, delimiter):
                        return
                if not self._interrupts_paragraph(cls):
                    if isinstance(cls, TableRowCandidate) and cls.is_delimiter and self._start_table(leaf, cls):
                        return
                    leaf.lines.append(rest.strip())
                    return

            if isinstance(leaf, _HeadingLeaf) and not self._interrupts_paragraph(cls):
                leaf.lines.append(rest.strip())
                return

            if isinstance(cls, HeadingLine):
                if cls.text:
                    self._start_leaf(_HeadingLeaf(cls.level, cls.text))
                else:
                    self._close_leaf()
                    self._add_block(Heading(level=cls.level, inline=[]))
                return
            if isinstance(cls, ThematicBreakLine):
                self._close_leaf()
                self._add_block(HorizontalRule())
                return
            if isinstance(cls, FenceOpen):
                self._start_leaf(_FenceLeaf(cls))
                return
            if isinstance(cls, ContainerFenceOpen):
                if self._has_room(1):
                    self._close_leaf()
                    node = Container(label=cls.label)
                    self._add_block(node)
                    self.stack.append(_ContainerFrame(node.blocks))
                else:
                    self._add_text(rest)
                return
            if isinstance(cls, ContainerFenceClose):
                index = self._nearest_container()
                if index is None:
                    self._add_text(rest)
                else:
                    self._close_frames(index)
                return
            if isinstance(cls, BlockquoteMarker):
                if not self._has_room(1):
                    self._add_text(rest)
                    return
                self._close_leaf()
                node = BlockQuote()
                self._add_block(node)
                self.stack.append(_QuoteFrame(node.blocks))
                rest = cls.text
                continue
            if isinstance(cls, ListMarker):
                if not self._open_item(cls):
                    self._add_text(rest)
                    return
                if cls.is_empty:
                    return
                rest = cls.text
                continue

            self._add_text(rest)
            return

    # -- containers -----------------------------------------------------

    def _open_item(self, marker: ListMarker) -> bool:
        top = self.stack[-1]
        if isinstance(top, _ListFrame):
            list_frame = top
            if list_frame.blank_pending:
                list_frame.node.loose = True
        else:
            if not self._has_room(2):
                return False
            self._close_leaf()
            node = ListBlock(items=[], ordered=marker.ordered, start=marker.number if marker.ordered else 1)
            self._add_block(node)
            list_frame = _ListFrame(node, marker)
            self.stack.append(list_frame)
        item = ListItem()
        list_frame.node.items.append(item)
        self.stack.append(_ItemFrame(item, marker.content_indent, list_frame))
        return True

    def _has_room(self, frames: int) -> bool:
        depth = len(self.stack) - 1 + frames
        if depth <= self.options.max_nesting:
            return True
        if self.options.strict_nesting:
            raise NestingDepthError(depth, self.options.max_nesting, self.line_number)
        logger.debug("Nesting limit %d reached at line %d; keeping marker as text", self.options.max_nesting, self.line_number)
        return False

    def _nearest_container(self) -> Optional[int]:
        for index in range(len(self.stack) - 1, 0, -1):
            if isinstance(self.stack[index], _ContainerFrame):
                return index
        return None

    def _close_frames(self, keep: int) -> None:
        """Close the open leaf and every frame above the first ``keep``."""
        self._close_leaf()
        del self.stack[keep:]

    def _handle_blank(self) -> None:
        if isinstance(self.leaf, (_ParagraphLeaf, _HeadingLeaf, _TableLeaf)):
            self._close_leaf()
        for frame in self.stack:
            if isinstance(frame, (_ListFrame, _ItemFrame)):
                frame.blank_pending = True
        self._blank_seen = True

    def _settle_blank_state(self) -> None:
        if self._blank_seen:
            return
        for frame in self.stack:
            frame.blank_pending = False

    def _note_content(self) -> None:
        top = self.stack[-1]
        # a blank line between two blocks of one item makes its list loose
        if isinstance(top, _ItemFrame) and top.blank_pending and top.blocks:
            top.list_frame.node.loose = True

    def _add_block(self, block: Block) -> None:
        self._note_content()
        self.stack[-1].blocks.append(block)

    # -- leaves ---------------------------------------------------------

    def _interrupts_paragraph(self, cls: LineClass) -> bool:
        if isinstance(cls, (TextLine, TableRowCandidate)):
            return False
        if isinstance(cls, ListMarker):
            return not cls.is_empty and (not cls.ordered or cls.number == 1)
        if isinstance(cls, ContainerFenceClose):
            return self._nearest_container() is not None
        return True

    def _start_table(self, paragraph: _ParagraphLeaf, delimiter: TableRowCandidate) -> bool:
        assembler = TableAssembler.start(paragraph.lines[-1], delimiter)
        if assembler is None:
            return False
        paragraph.lines.pop()
        if not paragraph.lines:
            self.leaf = None
        self._close_leaf()
        self.leaf = _TableLeaf(assembler)
        return True

    def _start_leaf(self, leaf: _ParagraphLeaf | _HeadingLeaf | _FenceLeaf) -> None:
        self._close_leaf()
        self._note_content()
        self.leaf = leaf

    def _add_text(self, rest: str) -> None:
        if isinstance(self.leaf, _ParagraphLeaf):
            self.leaf.lines.append(rest.strip())
        else:
            self._start_leaf(_ParagraphLeaf(rest.strip()))

    def _close_leaf(self) -> None:
        leaf = self.leaf
        if leaf is None:
            return
        self.leaf = None
        blocks = self.stack[-1].blocks
        if isinstance(leaf, _ParagraphLeaf):
            blocks.append(Paragraph(inline=self._inline("\n".join(leaf.lines))))
        elif isinstance(leaf, _HeadingLeaf):
            blocks.append(Heading(level=leaf.level, inline=self._inline("\n".join(leaf.lines))))
        elif isinstance(leaf, _FenceLeaf):
            blocks.append(CodeBlock(language=leaf.fence.label, code="\n".join(leaf.lines)))
        else:
            blocks.append(leaf.assembler.finish(self._inline))

    def _inline(self, text: str) -> List[InlineElement]:
        return parse_inline(text, max_depth=self.options.max_nesting)