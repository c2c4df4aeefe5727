"""Immutable block IR that a report document is made of."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Preamble:
    text: str


@dataclass(frozen=True, slots=True)
class SectionHeader:
    name: str
    title: str
    leading_blank: bool = False


@dataclass(frozen=True, slots=True)
class Caption:
    text: str


@dataclass(frozen=True, slots=True)
class PlainText:
    body: str
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class FileListing:
    """A file shown under its path, optionally with 1-based line numbers."""

    caption: str
    lines: tuple[str, ...] = ()
    numbered: bool = False


@dataclass(frozen=True, slots=True)
class MarkedLines:
    lines: tuple[str, ...] = ()
    matches: frozenset[int] = frozenset()
    mismatches: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class TableBlock:
    arg_names: tuple[str, ...]
    args: tuple[tuple[str, ...], ...]
    actual: tuple[str, ...]
    expected: tuple[str, ...]
    outcomes: tuple[bool, ...]
    row_labels: tuple[str, ...] | None = None


@dataclass(frozen=True, slots=True)
class DiffBlock:
    actual: tuple[str, ...]
    expected: tuple[str, ...]
    matches: frozenset[int] = frozenset()
    mismatches: frozenset[int] = frozenset()


@dataclass(frozen=True, slots=True)
class PassMarker:
    passed: bool


@dataclass(frozen=True, slots=True)
class ImageRef:
    """A stored image. The flat text format prints nothing for it."""

    name: str
    caption: str | None = None


@dataclass(frozen=True, slots=True)
class ErrorBlock:
    message: str
    caption: str = "Error"


@dataclass(frozen=True, slots=True)
class SystemErrorBlock:
    message: str


@dataclass(frozen=True, slots=True)
class Comment:
    key: str
    value: str


@dataclass(frozen=True, slots=True)
class FootnoteBlock:
    footnotes: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    score: str


Block = (
    Preamble
    | SectionHeader
    | Caption
    | PlainText
    | FileListing
    | MarkedLines
    | TableBlock
    | DiffBlock
    | PassMarker
    | ImageRef
    | ErrorBlock
    | SystemErrorBlock
    | Comment
    | FootnoteBlock
    | ScoreSummary
)


@dataclass(slots=True)
class Score:
    passed: int
    total: int

    def __str__(self) -> str:
        return f"{self.passed}/{self.total}"
