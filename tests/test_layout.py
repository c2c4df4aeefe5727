"""Tests for column layout, run tables and positional diffs.

Covers:
- Column widths and padding
- Run tables with and without row labels
- Diff alignment for equal and unequal lengths
- Single-column marked listings
"""

from __future__ import annotations

import pytest

from checkreport.errors import MalformedInputError
from checkreport.layout import columns
from checkreport.layout.columns import Column, longest, pad, rule
from checkreport.layout.diff import DiffAligner, mark_lines
from checkreport.layout.table import TableFormatter


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------

def test_column_width_covers_header_and_every_value() -> None:
    column = Column("n", ["1", "12345", "22"])
    assert column.width == 6
    assert all(column.width >= len(v) for v in column.values)
    assert Column("Expected", ["1"]).width == 9


def test_column_gutter() -> None:
    assert Column("Actual output", ["x"], gutter=3).width == 16
    assert longest("ab", []) == 2


def test_pad_strips_and_fills() -> None:
    assert pad("  ab ", 5) == "ab   "
    assert len(pad("x", 7)) == 7


def test_pad_never_truncates() -> None:
    assert pad("abcdef", 3) == "abcdef"


def test_rule() -> None:
    assert rule(4) == "----"
    assert rule(3, "=") == "==="


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

def test_table_marks_pass_and_fail() -> None:
    lines = TableFormatter().format(
        ["n"],
        [["1"], ["2"]],
        ["1", "4"],
        ["1", "5"],
        [True, False],
    )

    assert lines == [
        "n Actual Expected",
        "-" * 24,
        "1 1      1        [pass]",
        "2 4      5        [fail]",
    ]


def test_table_with_row_labels() -> None:
    lines = TableFormatter().format(
        ["a", "b"],
        [["10", "x"], ["2", "yy"]],
        ["12", "4"],
        ["12", "4"],
        [True, True],
        row_labels=["sum", "f"],
    )

    assert lines[0] == "    a  b  Actual Expected"
    assert lines[1] == "-" * (4 + 3 + 3 + 7 + 9 + 6)
    assert lines[2] == "sum 10 x  12     12       [pass]"
    assert lines[3] == "f   2  yy 4      4        [pass]"


def test_table_rejects_ragged_input() -> None:
    with pytest.raises(MalformedInputError, match="actual"):
        TableFormatter().format(["n"], [["1"], ["2"]], ["1"], ["1", "2"], [True, True])

    with pytest.raises(MalformedInputError, match="args"):
        TableFormatter().format(["n"], [["1", "2"]], ["1"], ["1"], [True])


def test_table_without_rows() -> None:
    lines = TableFormatter().format(["n"], [], [], [], [])
    assert lines == ["n Actual Expected", "-" * 24]


# ---------------------------------------------------------------------------
# Diffs
# ---------------------------------------------------------------------------

def test_diff_markers_and_widths() -> None:
    aligner = DiffAligner()
    rows = aligner.align(["a", "bb"], ["a", "ccc"], matches={0}, mismatches={1})

    assert [row.marker for row in rows] == ["  ", "- "]
    assert [(row.actual, row.expected) for row in rows] == [("a", "a"), ("bb", "ccc")]
    col1, col2 = aligner.widths(["a", "bb"], ["a", "ccc"])
    assert (col1, col2) == (16, 15)
    assert col2 >= 3


def test_diff_format_lines() -> None:
    lines = DiffAligner().format(["a", "bb"], ["a", "ccc"], matches={0}, mismatches={1})

    assert lines == [
        "  Actual output   Expected output",
        "  " + "-" * 31,
        "  a" + " " * 15 + "a",
        "- bb" + " " * 14 + "ccc",
    ]


def test_diff_actual_longer_than_expected() -> None:
    aligner = DiffAligner()
    rows = aligner.align(["x", "y", "z"], ["x"])

    assert len(rows) == 3
    assert [row.expected for row in rows[1:]] == ["", ""]
    assert not rows[1].has_expected and rows[1].has_actual

    lines = aligner.format(["x", "y", "z"], ["x"], matches={0}, mismatches={1, 2})
    assert lines[2:] == ["  x" + " " * 15 + "x", "- y", "- z"]


def test_diff_expected_longer_than_actual() -> None:
    lines = DiffAligner().format(["x"], ["x", "y"], matches={0}, mismatches={1})

    assert len(lines) == 4
    assert lines[3] == " " * 18 + "y"


def test_diff_untested_lines_are_unmarked() -> None:
    rows = DiffAligner().align(["p", "q"], ["p", "q"])
    assert [row.marker for row in rows] == ["  ", "  "]


def test_diff_is_positional() -> None:
    # An inserted first line shifts every later comparison.
    actual = ["extra", "a", "b"]
    expected = ["a", "b"]
    rows = DiffAligner().align(actual, expected)

    assert [(r.actual, r.expected) for r in rows] == [("extra", "a"), ("a", "b"), ("b", "")]


def test_diff_row_count_matches_longer_side() -> None:
    aligner = DiffAligner()
    for actual, expected in ([[], []], [["a"], []], [[], ["a", "b"]], [["1", "2", "3"], ["1"]]):
        rows = aligner.align(actual, expected)
        assert len(rows) == max(len(actual), len(expected))
        for i in range(min(len(actual), len(expected))):
            assert rows[i].actual == actual[i]
            assert rows[i].expected == expected[i]


def test_from_outcomes() -> None:
    matches, mismatches = DiffAligner.from_outcomes([True, False, True])
    assert matches == {0, 2}
    assert mismatches == {1}


def test_mark_lines() -> None:
    assert mark_lines(["a", "b", "c"], matches={0}, mismatches={1}) == ["+ a", "- b", "  c"]


def test_from_outcomes_marks_lines_without_result_as_mismatches() -> None:
    matches, mismatches = DiffAligner.from_outcomes([True], rows=3)
    assert matches == {0}
    assert mismatches == {1, 2}

    lines = DiffAligner().format(["a", "extra", "more"], ["a"], matches, mismatches)
    assert lines[3:] == ["- extra", "- more"]


def test_table_widths_are_computed_once_per_render(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    real_longest = columns.longest

    def counting_longest(header, values):
        calls.append(header)
        return real_longest(header, values)

    monkeypatch.setattr(columns, "longest", counting_longest)

    rows = 200
    lines = TableFormatter().format(
        ["n"],
        [[str(i)] for i in range(rows)],
        [str(i) for i in range(rows)],
        [str(i) for i in range(rows)],
        [True] * rows,
    )

    assert len(lines) == rows + 2
    assert calls == ["n", "Actual", "Expected"]
