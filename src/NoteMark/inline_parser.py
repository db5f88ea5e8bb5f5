"""Inline span parsing for the text of one leaf block.

Parsing runs in two passes. The first pass splits the text into tokens,
resolving backslash escapes and code spans so that nothing inside a code
span can act as an emphasis marker. The second pass pairs ``*`` runs into
emphasis and strong nodes. Anything that does not pair up stays literal.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import List

from markdown_it.common.utils import isMdAsciiPunct

from .model import CodeSpan, Emphasis, InlineElement, InlineText, LineBreak, Strong

DEFAULT_MAX_DEPTH = 64


@dataclass
class _Text:
    text: str


@dataclass
class _Delim:
    """A run of ``*`` characters that may open or close emphasis."""

    length: int
    can_open: bool
    can_close: bool


@dataclass
class _Atom:
    """An already-resolved inline node (code span or line break)."""

    node: InlineElement


def parse_inline(text: str, max_depth: int = DEFAULT_MAX_DEPTH) -> List[InlineElement]:
    tokens = _tokenize(text)
    closers: dict[int, list[int]] = {}
    for idx, tok in enumerate(tokens):
        if isinstance(tok, _Delim) and tok.can_close:
            closers.setdefault(tok.length, []).append(idx)
    return _resolve(tokens, closers, 0, len(tokens), max_depth)


def _tokenize(text: str) -> list:
    tokens: list = []
    buf: list[str] = []

    def flush() -> None:
        if buf:
            tokens.append(_Text("".join(buf)))
            buf.clear()

    idx = 0
    size = len(text)
    while idx < size:
        ch = text[idx]
        if ch == "\\" and idx + 1 < size and isMdAsciiPunct(ord(text[idx + 1])):
            buf.append(text[idx + 1])
            idx += 2
            continue

        if ch == "`":
            run = _run_length(text, idx, "`")
            end = _find_backtick_run(text, idx + run, run)
            if end == -1:
                buf.append("`" * run)
                idx += run
                continue
            flush()
            tokens.append(_Atom(CodeSpan(text[idx + run : end])))
            idx = end + run
            continue

        if ch == "*":
            run = _run_length(text, idx, "*")
            before = text[idx - 1] if idx > 0 else " "
            after = text[idx + run] if idx + run < size else " "
            flush()
            tokens.append(_Delim(run, can_open=not after.isspace(), can_close=not before.isspace()))
            idx += run
            continue

        if ch == "\n":
            flush()
            tokens.append(_Atom(LineBreak()))
            idx += 1
            continue

        buf.append(ch)
        idx += 1

    flush()
    return tokens


def _run_length(text: str, start: int, char: str) -> int:
    end = start
    while end < len(text) and text[end] == char:
        end += 1
    return end - start


def _find_backtick_run(text: str, start: int, length: int) -> int:
    """Index of the next backtick run of exactly ``length``, or -1."""
    idx = text.find("`", start)
    while idx != -1:
        run = _run_length(text, idx, "`")
        if run == length:
            return idx
        idx = text.find("`", idx + run)
    return -1


def _resolve(tokens: list, closers: dict[int, list[int]], start: int, end: int, depth: int) -> List[InlineElement]:
    out: List[InlineElement] = []
    idx = start
    while idx < end:
        tok = tokens[idx]
        if isinstance(tok, _Delim):
            closer = _find_closer(tok, closers, idx, end) if depth > 0 else -1
            if closer != -1:
                out.append(_wrap(tok.length, _resolve(tokens, closers, idx + 1, closer, depth - 1)))
                idx = closer + 1
                continue
            _append_text(out, "*" * tok.length)
        elif isinstance(tok, _Text):
            _append_text(out, tok.text)
        else:
            out.append(tok.node)
        idx += 1
    return out


def _find_closer(opener: _Delim, closers: dict[int, list[int]], opener_idx: int, end: int) -> int:
    if not opener.can_open or opener.length > 3:
        return -1
    positions = closers.get(opener.length, [])
    pos = bisect_right(positions, opener_idx)
    if pos < len(positions) and positions[pos] < end:
        return positions[pos]
    return -1


def _wrap(length: int, children: List[InlineElement]) -> InlineElement:
    if length == 1:
        return Emphasis(children)
    if length == 2:
        return Strong(children)
    return Emphasis([Strong(children)])


def _append_text(out: List[InlineElement], text: str) -> None:
    if out and isinstance(out[-1], InlineText):
        out[-1] = InlineText(out[-1].text + text)
    else:
        out.append(InlineText(text))
