import pytest

from indent_guesser.core import (
    MAX_LINES_SCANNED,
    IndentationGuesser,
    IndentGuess,
    classify_line,
    guess_indentation,
    spaces_diff,
)
from indent_guesser.sources import StringLineSource


def guess(lines, tab_size=4, insert_spaces=True):
    return guess_indentation(StringLineSource(lines), tab_size, insert_spaces)


def test_spaces_diff_counts_spaces_when_tabs_match():
    assert spaces_diff("", 0, "    x", 4) == 4
    assert spaces_diff("\t", 1, "\t    ", 5) == 4
    assert spaces_diff("  ", 2, "      ", 6) == 4


def test_spaces_diff_divides_spaces_by_tabs():
    assert spaces_diff("\t", 1, "    ", 4) == 4
    assert spaces_diff("\t\t", 2, "  ", 2) == 1
    assert spaces_diff("\t\t", 2, "   ", 3) == 0


def test_spaces_diff_mixed_remainder_is_unscorable():
    assert spaces_diff("\t  ", 3, "", 0) == 0
    assert spaces_diff("", 0, " \t ", 3) == 0
    # The shared prefix is not part of the remainder.
    assert spaces_diff("\t  ", 3, "\t", 1) == 2


def test_spaces_diff_is_symmetric():
    pairs = [("", "    "), ("\t", "\t  "), ("\t\t", "    "), ("  \t", "")]
    for a, b in pairs:
        assert spaces_diff(a, len(a), b, len(b)) == spaces_diff(b, len(b), a, len(a))


def test_spaces_diff_only_reads_indentation_prefix():
    assert spaces_diff("  foo", 2, "    bar", 4) == 2


def test_classify_line_counts_leading_whitespace():
    line = classify_line(StringLineSource(["  \tfoo  bar"]), 1)
    assert line.has_content
    assert line.indentation == 3
    assert line.spaces_count == 2
    assert line.tabs_count == 1
    assert line.prefix == "  \t"


def test_classify_line_whitespace_only():
    line = classify_line(StringLineSource(["  \t "]), 1)
    assert not line.has_content
    assert line.indentation == 4


class CharOnlySource(StringLineSource):
    def line_content(self, line_number):
        raise AssertionError("long lines should be read char by char")


def test_classify_long_line_uses_char_accessor():
    text = " " * 70_000 + "x"
    line = classify_line(CharOnlySource([text]), 1)
    assert line.has_content
    assert line.indentation == 70_000
    assert line.spaces_count == 70_000
    assert line.prefix == " " * 70_000


class ContentOnlySource(StringLineSource):
    def line_char_code(self, line_number, offset):
        raise AssertionError("short lines should be sliced from their content")


def test_classify_short_line_slices_content():
    line = classify_line(ContentOnlySource(["\t  \treturn"]), 1)
    assert line.indentation == 4
    assert line.prefix == "\t  \t"


def test_function_snippet_prefers_spaces_of_four():
    result = guess(["function f() {", "    return 1;", "}"], tab_size=4, insert_spaces=False)
    assert result == IndentGuess(insert_spaces=True, tab_size=4)


def test_report_histogram_for_function_snippet():
    source = StringLineSource(["function f() {", "    return 1;", "}"])
    report = IndentationGuesser(source, 4, False).report()
    assert report.spaces_diff_count == [2, 0, 0, 0, 2, 0, 0, 0, 0]
    assert report.spaced_lines == 1
    assert report.tabbed_lines == 0
    assert report.scanned_lines == 3


def test_report_dict_lists_scan_statistics():
    report = IndentationGuesser(StringLineSource(["a", "  b"]), 4, True).report()
    assert report.to_dict() == {
        "insert_spaces": True,
        "tab_size": 2,
        "tabbed_lines": 0,
        "spaced_lines": 1,
        "scanned_lines": 2,
        "spaces_diff_count": [1, 0, 2, 0, 0, 0, 0, 0, 0],
    }
    assert not hasattr(report, "tab_size_score")


@pytest.mark.parametrize("step", [2, 4, 6, 8])
def test_constant_space_step_is_tab_size(step):
    lines = [
        "def outer():",
        " " * step + "if ready:",
        " " * (2 * step) + "go()",
        "",
        " " * step + "return",
        "done()",
    ]
    assert guess(lines, tab_size=3, insert_spaces=False) == IndentGuess(True, step)


def test_tab_only_document_keeps_default_tab_size():
    lines = ["a {", "\tb {", "\t\tc", "\t}", "}"]
    assert guess(lines, tab_size=3, insert_spaces=True) == IndentGuess(False, 3)


def test_empty_document_returns_defaults():
    assert guess([], tab_size=8, insert_spaces=False) == IndentGuess(False, 8)
    assert guess(["", "   ", "\t"], tab_size=2, insert_spaces=True) == IndentGuess(True, 2)


def test_tie_falls_back_to_default_insert_spaces():
    lines = ["\tx", "    y"]
    assert guess(lines, tab_size=2, insert_spaces=False) == IndentGuess(False, 4)
    assert guess(lines, tab_size=2, insert_spaces=True) == IndentGuess(True, 4)


def test_single_space_lines_do_not_vote():
    assert guess([" a", " b"], tab_size=4, insert_spaces=False).insert_spaces is False


def test_large_diffs_are_ignored():
    report = IndentationGuesser(StringLineSource(["a", " " * 10 + "b"]), 4, True).report()
    assert sum(report.spaces_diff_count) == 1
    assert report.guess == IndentGuess(True, 4)


def test_tabs_need_dominant_candidate_to_override_default():
    short = ["\tx"] * 4 + ["\t  y"]
    assert guess(short, tab_size=4) == IndentGuess(False, 2)

    long = ["\tx"] * 20 + ["\t  y"]
    assert guess(long, tab_size=4) == IndentGuess(False, 4)


def test_ties_between_candidates_keep_smaller_size():
    lines = ["a", "  b", "a", "    b", "a"]
    # bucket 2 and bucket 4 both get two votes
    assert guess(lines, tab_size=8) == IndentGuess(True, 2)


def test_lines_past_cap_are_ignored():
    head = ["" if i % 2 == 0 else "\tx" for i in range(MAX_LINES_SCANNED)]
    tabbed_tail = ["\tx"] * 50
    spaced_tail = ["    x"] * 50
    with_tabs = guess(head + tabbed_tail, tab_size=4)
    with_spaces = guess(head + spaced_tail, tab_size=4)
    assert with_tabs == with_spaces == IndentGuess(False, 4)


def test_cap_holds_against_overwhelming_tail():
    lines = ["\tx"] * MAX_LINES_SCANNED + ["    x"] * (MAX_LINES_SCANNED + 5000)
    report = IndentationGuesser(StringLineSource(lines), 4, True).report()
    assert report.scanned_lines == MAX_LINES_SCANNED
    assert report.guess.insert_spaces is False


def test_guessers_do_not_share_state():
    spaced = IndentationGuesser(StringLineSource(["a", "  b", "a"]), 4, False)
    tabbed = IndentationGuesser(StringLineSource(["a", "\tb", "a"]), 4, True)
    assert spaced.guess() == IndentGuess(True, 2)
    assert tabbed.guess() == IndentGuess(False, 4)
    assert spaced.report() is spaced.report()
