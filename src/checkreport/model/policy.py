"""Caller-controlled rendering decisions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

HIDDEN_FILE_SECTIONS = frozenset({"studentFiles", "providedFiles"})

SOURCE_SUFFIXES = (".java", ".py", ".c", ".cpp", ".cc", ".h", ".hpp", ".cs", ".js", ".ts", ".scala", ".kt", ".rs", ".go")


def numbered_suffixes(*suffixes: str) -> Callable[[str], bool]:
    """Build a ``needs_line_numbers`` predicate that matches file suffixes."""
    lowered = tuple(s.lower() for s in suffixes)

    def predicate(path: str) -> bool:
        return str(path).lower().endswith(lowered)

    return predicate


@dataclass(frozen=True, slots=True)
class RenderPolicy:
    """Which sections stay out of the human report and which files get line numbers.

    Sections named in ``hidden_sections`` carry raw file listings for other
    consumers; the text report still tracks them as the current section but
    prints neither their header nor their files.
    """

    hidden_sections: frozenset[str] = HIDDEN_FILE_SECTIONS
    needs_line_numbers: Callable[[str], bool] = field(default=numbered_suffixes(*SOURCE_SUFFIXES))

    def hides(self, section: str | None) -> bool:
        return section is not None and section in self.hidden_sections
