"""
Fallback settings used when a document gives no usable indentation signal.

Values come from explicit arguments first, then the environment:
  - INDENT_GUESSER_TAB_SIZE (positive integer)
  - INDENT_GUESSER_INSERT_SPACES (1/0, true/false, yes/no, on/off)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

TAB_SIZE_ENV = "INDENT_GUESSER_TAB_SIZE"
INSERT_SPACES_ENV = "INDENT_GUESSER_INSERT_SPACES"

DEFAULT_TAB_SIZE = 4
DEFAULT_INSERT_SPACES = True

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class IndentConfigError(ValueError):
    """Raised when a fallback setting is missing a sane value."""


@dataclass(frozen=True)
class GuessDefaults:
    tab_size: int = DEFAULT_TAB_SIZE
    insert_spaces: bool = DEFAULT_INSERT_SPACES

    def __post_init__(self) -> None:
        if isinstance(self.tab_size, bool) or not isinstance(self.tab_size, int) or self.tab_size < 1:
            raise IndentConfigError(f"tab size must be a positive integer, got {self.tab_size!r}")


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise IndentConfigError(f"{name} must be a boolean flag, got {raw!r}")


def _parse_tab_size(name: str, raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as exc:
        raise IndentConfigError(f"{name} must be an integer, got {raw!r}") from exc


def load_defaults(tab_size: Optional[int] = None, insert_spaces: Optional[bool] = None) -> GuessDefaults:
    """Resolve fallback settings from arguments, the environment, then built-ins."""
    if tab_size is None:
        raw = os.getenv(TAB_SIZE_ENV)
        tab_size = _parse_tab_size(TAB_SIZE_ENV, raw) if raw else DEFAULT_TAB_SIZE

    if insert_spaces is None:
        raw = os.getenv(INSERT_SPACES_ENV)
        insert_spaces = _parse_bool(INSERT_SPACES_ENV, raw) if raw else DEFAULT_INSERT_SPACES

    return GuessDefaults(tab_size=tab_size, insert_spaces=insert_spaces)
