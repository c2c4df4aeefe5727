"""Render actual/expected run tables as aligned text."""

from __future__ import annotations

from collections.abc import Sequence

from checkreport.errors import MalformedInputError

from .columns import Column, pad, rule

PASS_MARK = "[pass]"
FAIL_MARK = "[fail]"


def outcome_mark(passed: bool) -> str:
    return PASS_MARK if passed else FAIL_MARK


class TableFormatter:
    """Lay out one row per call: optional label, arguments, actual, expected, outcome.

    Outcomes are computed by the caller; this class only aligns them.
    """

    def format(
        self,
        arg_names: Sequence[str],
        args: Sequence[Sequence[str]],
        actual: Sequence[str],
        expected: Sequence[str],
        outcomes: Sequence[bool],
        row_labels: Sequence[str] | None = None,
    ) -> list[str]:
        _check_shape(arg_names, args, actual, expected, outcomes, row_labels)

        label_width = 0
        if row_labels is not None:
            label_width = Column("", row_labels).width

        arg_columns = [
            Column(name, [row[j] for row in args])
            for j, name in enumerate(arg_names)
        ]
        actual_column = Column("Actual", actual)
        expected_column = Column("Expected", expected)

        header = pad("", label_width)
        header += "".join(column.cell(column.label) for column in arg_columns)
        header += actual_column.cell(actual_column.label)
        header += expected_column.label

        total = label_width + sum(column.width for column in arg_columns)
        total += actual_column.width + expected_column.width
        separator = rule(total) + rule(len(PASS_MARK))

        lines = [header, separator]
        for i, row in enumerate(args):
            line = pad(row_labels[i], label_width) if row_labels is not None else ""
            line += "".join(column.cell(value) for column, value in zip(arg_columns, row))
            line += actual_column.cell(actual[i])
            line += expected_column.cell(expected[i])
            line += outcome_mark(outcomes[i])
            lines.append(line)
        return lines


def _check_shape(
    arg_names: Sequence[str],
    args: Sequence[Sequence[str]],
    actual: Sequence[str],
    expected: Sequence[str],
    outcomes: Sequence[bool],
    row_labels: Sequence[str] | None,
) -> None:
    rows = len(args)
    for field, values in (("actual", actual), ("expected", expected), ("outcomes", outcomes)):
        if len(values) != rows:
            raise MalformedInputError(f"expected {rows} entries, got {len(values)}", field=field)
    if row_labels is not None and len(row_labels) != rows:
        raise MalformedInputError(f"expected {rows} entries, got {len(row_labels)}", field="row_labels")
    for i, row in enumerate(args):
        if len(row) != len(arg_names):
            raise MalformedInputError(
                f"row {i} has {len(row)} values for {len(arg_names)} argument names",
                field="args",
            )
