"""Fixed-width layout: columns, run tables, positional diffs."""

from .columns import Column, longest, pad, rule
from .diff import AlignedRow, DiffAligner, mark_lines
from .table import TableFormatter, outcome_mark

__all__ = [
    "AlignedRow",
    "Column",
    "DiffAligner",
    "TableFormatter",
    "longest",
    "mark_lines",
    "outcome_mark",
    "pad",
    "rule",
]
