from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from .sources import LineSource

logger = logging.getLogger(__name__)

MAX_LINES_SCANNED = 10_000
ALLOWED_TAB_SIZE_GUESSES = (2, 4, 6, 8)
MAX_ALLOWED_TAB_SIZE_GUESS = 8  # max(ALLOWED_TAB_SIZE_GUESSES)
LONG_LINE_THRESHOLD = 65536


@dataclass(frozen=True)
class IndentGuess:
    insert_spaces: bool
    tab_size: int


@dataclass(frozen=True)
class LineIndent:
    has_content: bool
    indentation: int
    spaces_count: int
    tabs_count: int
    prefix: str = ""


@dataclass
class GuessReport:
    guess: IndentGuess
    scanned_lines: int
    tabbed_lines: int
    spaced_lines: int
    spaces_diff_count: List[int] = field(default_factory=list)

    @property
    def style(self) -> str:
        return "spaces" if self.guess.insert_spaces else "tabs"

    def to_dict(self) -> dict:
        return {
            "insert_spaces": self.guess.insert_spaces,
            "tab_size": self.guess.tab_size,
            "tabbed_lines": self.tabbed_lines,
            "spaced_lines": self.spaced_lines,
            "scanned_lines": self.scanned_lines,
            "spaces_diff_count": list(self.spaces_diff_count),
        }


def spaces_diff(a: str, a_length: int, b: str, b_length: int) -> int:
    """Compute the diff in spaces between the indentation of two lines.

    Only the first ``a_length`` characters of ``a`` and ``b_length`` characters
    of ``b`` are considered. The diff can go both ways, e.g. ``"\\t"`` against
    ``"\\t    "`` counts one shared tab and four extra spaces.

    Returns 0 when either side mixes tabs and spaces past the common prefix,
    or when the spaces and tabs deltas are incommensurable.
    """
    i = 0
    while i < a_length and i < b_length and a[i] == b[i]:
        i += 1

    a_spaces = a_tabs = 0
    for ch in a[i:a_length]:
        if ch == " ":
            a_spaces += 1
        else:
            a_tabs += 1

    b_spaces = b_tabs = 0
    for ch in b[i:b_length]:
        if ch == " ":
            b_spaces += 1
        else:
            b_tabs += 1

    if a_spaces > 0 and a_tabs > 0:
        return 0
    if b_spaces > 0 and b_tabs > 0:
        return 0

    tabs_delta = abs(a_tabs - b_tabs)
    spaces_delta = abs(a_spaces - b_spaces)
    if tabs_delta == 0:
        return spaces_delta
    if spaces_delta % tabs_delta == 0:
        return spaces_delta // tabs_delta
    return 0


def _line_chars(source: LineSource, line_number: int, length: int) -> Iterable[str]:
    char_code = getattr(source, "line_char_code", None)
    if length > LONG_LINE_THRESHOLD and char_code is not None:
        # Read huge lines char by char instead of materializing them.
        return (chr(char_code(line_number, offset)) for offset in range(length))
    return source.line_content(line_number)


def classify_line(source: LineSource, line_number: int) -> LineIndent:
    """Measure the leading whitespace of one line."""
    length = source.line_length(line_number)
    chars = _line_chars(source, line_number, length)

    indent: List[str] = []
    spaces_count = 0
    tabs_count = 0
    for offset, ch in enumerate(chars):
        if ch == "\t":
            tabs_count += 1
        elif ch == " ":
            spaces_count += 1
        else:
            prefix = chars[:offset] if isinstance(chars, str) else "".join(indent)
            return LineIndent(True, offset, spaces_count, tabs_count, prefix)
        if not isinstance(chars, str):
            indent.append(ch)

    return LineIndent(False, length, spaces_count, tabs_count)


class IndentationGuesser:
    """Scan a line source once and vote on tabs vs spaces and the tab size.

    Each instance owns the state of a single scan, so separate guessers can run
    side by side over different documents.
    """

    def __init__(self, source: LineSource, default_tab_size: int, default_insert_spaces: bool) -> None:
        self.source = source
        self.default_tab_size = default_tab_size
        self.default_insert_spaces = default_insert_spaces

        self.lines_count = min(source.line_count(), MAX_LINES_SCANNED)
        self.tabbed_lines = 0  # lines with at least one tab in their indentation
        self.spaced_lines = 0  # lines with only spaces (2 or more) in their indentation
        self.spaces_diff_count = [0] * (MAX_ALLOWED_TAB_SIZE_GUESS + 1)
        self._previous_prefix = ""
        self._previous_indentation = 0
        self._report: GuessReport | None = None

    def _record_diff(self, text: str, indentation: int) -> None:
        score = spaces_diff(self._previous_prefix, self._previous_indentation, text, indentation)
        if score <= MAX_ALLOWED_TAB_SIZE_GUESS:
            self.spaces_diff_count[score] += 1

    def _scan(self) -> None:
        for line_number in range(1, self.lines_count + 1):
            line = classify_line(self.source, line_number)
            if not line.has_content:
                continue

            if line.tabs_count > 0:
                self.tabbed_lines += 1
            elif line.spaces_count > 1:
                self.spaced_lines += 1

            self._record_diff(line.prefix, line.indentation)
            self._previous_prefix = line.prefix
            self._previous_indentation = line.indentation

        # The end of the document counts as a dedent back to column 0.
        self._record_diff("", 0)

    def report(self) -> GuessReport:
        if self._report is not None:
            return self._report

        self._scan()

        insert_spaces = self.default_insert_spaces
        if self.tabbed_lines != self.spaced_lines:
            insert_spaces = self.tabbed_lines < self.spaced_lines

        tab_size = self.default_tab_size
        tab_size_score: float = 0 if insert_spaces else 0.1 * self.lines_count
        for possible_tab_size in ALLOWED_TAB_SIZE_GUESSES:
            possible_score = self.spaces_diff_count[possible_tab_size]
            if possible_score > tab_size_score:
                tab_size_score = possible_score
                tab_size = possible_tab_size

        logger.debug(
            "tabbed=%d spaced=%d spaces_diff_count=%s tab_size=%d score=%s",
            self.tabbed_lines,
            self.spaced_lines,
            self.spaces_diff_count,
            tab_size,
            tab_size_score,
        )

        self._report = GuessReport(
            guess=IndentGuess(insert_spaces=insert_spaces, tab_size=tab_size),
            scanned_lines=self.lines_count,
            tabbed_lines=self.tabbed_lines,
            spaced_lines=self.spaced_lines,
            spaces_diff_count=list(self.spaces_diff_count),
        )
        return self._report

    def guess(self) -> IndentGuess:
        return self.report().guess


def guess_indentation(source: LineSource, default_tab_size: int, default_insert_spaces: bool) -> IndentGuess:
    """Guess ``insert_spaces`` and ``tab_size`` for the lines of ``source``."""
    return IndentationGuesser(source, default_tab_size, default_insert_spaces).guess()
