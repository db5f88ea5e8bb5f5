from __future__ import annotations

import logging
from typing import Callable, List

from .lines import TableRowCandidate, has_unescaped_pipe, split_cells
from .model import Alignment, InlineElement, TableBlock

logger = logging.getLogger(__name__)


def parse_alignment(cell: str) -> Alignment:
    left = cell.startswith(":")
    right = cell.endswith(":") and len(cell) > 1
    if left and right:
        return Alignment.CENTER
    if left:
        return Alignment.LEFT
    if right:
        return Alignment.RIGHT
    return Alignment.NONE


class TableAssembler:
    """Collect the rows of one pipe table, header first.

    The assembler only exists once a header row has been confirmed by a
    delimiter row of the same width, so every row it holds has exactly
    ``width`` cells.
    """

    def __init__(self, header: List[str], alignments: List[Alignment]) -> None:
        self.header = header
        self.alignments = alignments
        self.rows: list[list[str]] = []

    @classmethod
    def start(cls, header_line: str, delimiter: TableRowCandidate) -> "TableAssembler | None":
        """Confirm ``header_line`` as a table header, or return None to keep it as text."""
        if not delimiter.is_delimiter or not has_unescaped_pipe(header_line):
            return None
        header = split_cells(header_line)
        if len(header) != len(delimiter.cells):
            logger.debug("Header has %d cells but delimiter row has %d; keeping as text", len(header), len(delimiter.cells))
            return None
        return cls(header, [parse_alignment(cell) for cell in delimiter.cells])

    @property
    def width(self) -> int:
        return len(self.alignments)

    def accepts(self, line: object) -> bool:
        return isinstance(line, TableRowCandidate) and len(line.cells) == self.width

    def add_row(self, row: TableRowCandidate) -> None:
        self.rows.append(list(row.cells))

    def finish(self, parse_cell: Callable[[str], List[InlineElement]]) -> TableBlock:
        return TableBlock(
            alignments=list(self.alignments),
            header=[parse_cell(cell) for cell in self.header],
            rows=[[parse_cell(cell) for cell in row] for row in self.rows],
        )
