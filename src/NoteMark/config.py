from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from .errors import ConfigError


@dataclass(frozen=True)
class RenderOptions:
    """Explicit settings for one render call."""

    max_nesting: int = 64
    strict_nesting: bool = False
    tight_lists: bool = True
    hard_breaks: bool = True
    tab_size: int = 4
    toc_level: int = 3
    pretty: bool = False

    def __post_init__(self) -> None:
        if self.max_nesting < 1:
            raise ConfigError("max_nesting must be at least 1.")
        if self.tab_size < 1:
            raise ConfigError("tab_size must be at least 1.")
        if not 1 <= self.toc_level <= 6:
            raise ConfigError("toc_level must be between 1 and 6.")


DEFAULT_OPTIONS = RenderOptions()


def options_from_mapping(data: Mapping[str, Any] | None) -> RenderOptions:
    """Build RenderOptions from a plain mapping, validating keys and types."""
    if data is None:
        return DEFAULT_OPTIONS
    if not isinstance(data, Mapping):
        raise ConfigError("Configuration root must be a mapping of option names.")

    known = {f.name: f for f in fields(RenderOptions)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = str(key).replace("-", "_")
        if name not in known:
            raise ConfigError(f"Unknown option: {key}")
        expected = bool if isinstance(getattr(DEFAULT_OPTIONS, name), bool) else int
        # bool is an int subclass; reject it for numeric fields
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ConfigError(f"Option {key} must be an integer, got {value!r}.")
        if expected is bool and not isinstance(value, bool):
            raise ConfigError(f"Option {key} must be true or false, got {value!r}.")
        values[name] = value
    return RenderOptions(**values)


def load_options(path: str | Path) -> RenderOptions:
    """Read RenderOptions from a YAML file."""
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Cannot parse configuration {path}: {exc}") from exc
    return options_from_mapping(data)
