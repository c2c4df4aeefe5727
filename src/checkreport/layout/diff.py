"""Positional line alignment of actual against expected output.

Line ``i`` of the actual output is only ever compared with line ``i`` of the
expected output. There is no edit-distance search, so a single inserted or
dropped line shows every later line as a mismatch.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass

from .columns import longest, pad, rule

ACTUAL_CAPTION = "Actual output"
EXPECTED_CAPTION = "Expected output"
ACTUAL_GUTTER = 3

MATCH_MARK = "  "
MISMATCH_MARK = "- "
UNTESTED_MARK = "  "


@dataclass(frozen=True, slots=True)
class AlignedRow:
    index: int
    actual: str
    expected: str
    has_actual: bool
    has_expected: bool
    marker: str


class DiffAligner:
    """Two-column actual/expected listing with a match marker per line."""

    def align(
        self,
        actual: Sequence[str],
        expected: Sequence[str],
        matches: Collection[int] = (),
        mismatches: Collection[int] = (),
    ) -> list[AlignedRow]:
        rows: list[AlignedRow] = []
        for i in range(max(len(actual), len(expected))):
            has_actual = i < len(actual)
            has_expected = i < len(expected)
            rows.append(
                AlignedRow(
                    index=i,
                    actual=actual[i] if has_actual else "",
                    expected=expected[i] if has_expected else "",
                    has_actual=has_actual,
                    has_expected=has_expected,
                    marker=_marker(i, matches, mismatches),
                )
            )
        return rows

    def widths(self, actual: Sequence[str], expected: Sequence[str]) -> tuple[int, int]:
        """Width of the actual column (with gutter) and of the expected column."""
        return (
            longest(ACTUAL_CAPTION, actual) + ACTUAL_GUTTER,
            longest(EXPECTED_CAPTION, expected),
        )

    def format(
        self,
        actual: Sequence[str],
        expected: Sequence[str],
        matches: Collection[int] = (),
        mismatches: Collection[int] = (),
    ) -> list[str]:
        col1, col2 = self.widths(actual, expected)
        lines = [
            MATCH_MARK + pad(ACTUAL_CAPTION, col1) + EXPECTED_CAPTION,
            MATCH_MARK + rule(col1 + col2),
        ]
        for row in self.align(actual, expected, matches, mismatches):
            if row.has_actual and row.has_expected:
                lines.append(row.marker + pad(row.actual, col1) + row.expected)
            elif row.has_actual:
                lines.append(row.marker + row.actual)
            else:
                lines.append(" " * (col1 + len(UNTESTED_MARK)) + row.expected)
        return lines

    @staticmethod
    def from_outcomes(
        outcomes: Sequence[bool], rows: int = 0
    ) -> tuple[frozenset[int], frozenset[int]]:
        """Split per-line comparison results into match and mismatch index sets.

        Lines ``len(outcomes) .. rows - 1`` have no comparison result and count
        as mismatches.
        """
        matches = frozenset(i for i, ok in enumerate(outcomes) if ok)
        mismatches = frozenset(i for i, ok in enumerate(outcomes) if not ok)
        return matches, mismatches | frozenset(range(len(outcomes), rows))


def mark_lines(
    lines: Sequence[str],
    matches: Collection[int] = (),
    mismatches: Collection[int] = (),
) -> list[str]:
    """Single-column listing: ``+`` for matching lines, ``-`` for mismatches."""
    marked = []
    for i, line in enumerate(lines):
        if i in matches:
            marked.append("+ " + line)
        elif i in mismatches:
            marked.append("- " + line)
        else:
            marked.append("  " + line)
    return marked


def _marker(index: int, matches: Collection[int], mismatches: Collection[int]) -> str:
    if index in matches:
        return MATCH_MARK
    if index in mismatches:
        return MISMATCH_MARK
    return UNTESTED_MARK
