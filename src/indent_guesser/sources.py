from __future__ import annotations

import re
from pathlib import Path
from typing import List, Protocol, Sequence, runtime_checkable

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


@runtime_checkable
class LineSource(Protocol):
    """Read-only view over a document's lines. Line numbers start at 1."""

    def line_count(self) -> int: ...

    def line_length(self, line_number: int) -> int: ...

    def line_content(self, line_number: int) -> str: ...


class StringLineSource:
    """Line source backed by an in-memory sequence of strings."""

    def __init__(self, lines: Sequence[str]) -> None:
        self._lines: List[str] = list(lines)

    @classmethod
    def from_text(cls, text: str) -> "StringLineSource":
        # A trailing newline leaves an empty last line, like an editor buffer.
        return cls(_LINE_BREAK_RE.split(text))

    def line_count(self) -> int:
        return len(self._lines)

    def line_length(self, line_number: int) -> int:
        return len(self._lines[line_number - 1])

    def line_content(self, line_number: int) -> str:
        return self._lines[line_number - 1]

    def line_char_code(self, line_number: int, offset: int) -> int:
        return ord(self._lines[line_number - 1][offset])


class FileLineSource(StringLineSource):
    """Line source for a text file, read once on open."""

    def __init__(self, path: Path, lines: Sequence[str]) -> None:
        super().__init__(lines)
        self.path = path

    @classmethod
    def open(cls, path: Path | str, encoding: str = "utf-8") -> "FileLineSource":
        path = Path(path)
        with path.open("r", encoding=encoding, errors="replace", newline="") as handle:
            text = handle.read()
        return cls(path, _LINE_BREAK_RE.split(text))
