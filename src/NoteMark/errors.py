from __future__ import annotations


class NoteMarkError(Exception):
    """Base class for the few failures NoteMark reports to callers."""


class InputEncodingError(NoteMarkError, ValueError):
    """Byte input that is not valid UTF-8."""


class NestingDepthError(NoteMarkError):
    """Container nesting went past ``max_nesting`` with strict nesting enabled."""

    def __init__(self, depth: int, limit: int, line_number: int) -> None:
        super().__init__(f"Nesting depth {depth} exceeds limit {limit} at line {line_number}.")
        self.depth = depth
        self.limit = limit
        self.line_number = line_number


class ConfigError(NoteMarkError, ValueError):
    """Invalid render configuration."""
