"""Column widths and padding for fixed-width text tables."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Column:
    """One table column.

    The width is derived once from the header and every value the column
    will hold, so all values must be known before the first row is emitted.
    """

    label: str
    values: Sequence[str] = ()
    gutter: int = 1
    width: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", longest(self.label, self.values) + self.gutter)

    def cell(self, text: str) -> str:
        return pad(text, self.width)


def longest(header: str, values: Iterable[str]) -> int:
    """Length of the longest of ``header`` and ``values``."""
    result = len(header)
    for value in values:
        result = max(result, len(value))
    return result


def pad(text: str, width: int) -> str:
    """Strip ``text`` and fill it with spaces up to ``width``.

    Text that is already wider is returned as is; nothing is truncated.
    """
    text = text.strip()
    return text + " " * (width - len(text))


def rule(width: int, char: str = "-") -> str:
    return char * width
