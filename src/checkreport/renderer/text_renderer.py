"""Render block IR into the flat text report format."""

from __future__ import annotations

import traceback
from collections.abc import Iterable

import structlog

from checkreport.layout.columns import rule
from checkreport.layout.diff import DiffAligner, mark_lines
from checkreport.layout.table import TableFormatter, outcome_mark
from checkreport.model.blocks import (
    Block,
    Caption,
    Comment,
    DiffBlock,
    ErrorBlock,
    FileListing,
    FootnoteBlock,
    ImageRef,
    MarkedLines,
    PassMarker,
    PlainText,
    Preamble,
    ScoreSummary,
    SectionHeader,
    SystemErrorBlock,
    TableBlock,
)

FOOTNOTE_RULE = "---"

logger = structlog.get_logger(__name__)


class TextRenderer:
    """Turn an ordered block sequence into report text."""

    def __init__(
        self,
        table_formatter: TableFormatter | None = None,
        diff_aligner: DiffAligner | None = None,
    ) -> None:
        self._tables = table_formatter or TableFormatter()
        self._diffs = diff_aligner or DiffAligner()

    def render(self, blocks: Iterable[Block]) -> str:
        parts: list[str] = []
        for block in blocks:
            if isinstance(block, Comment) and parts and not parts[-1].endswith("\n"):
                parts.append("\n")
            try:
                text = self.render_block(block)
            except Exception as exc:
                logger.warning("render.block_failed", block=type(block).__name__, error=str(exc))
                text = "System Error:\n" + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            if text:
                parts.append(text)
        return "".join(parts)

    def render_block(self, block: Block) -> str:
        if isinstance(block, Preamble):
            return block.text + "\n\n"

        if isinstance(block, SectionHeader):
            lead = "\n" if block.leading_blank else ""
            return f"{lead}{block.title}\n{rule(len(block.title), '=')}\n\n"

        if isinstance(block, Caption):
            return _caption(block.text)

        if isinstance(block, PlainText):
            if not block.body:
                return ""
            return _caption(block.caption) + _lines([block.body])

        if isinstance(block, FileListing):
            return _caption(block.caption) + self._render_listing(block)

        if isinstance(block, MarkedLines):
            return _lines(mark_lines(block.lines, block.matches, block.mismatches))

        if isinstance(block, TableBlock):
            return _lines(
                self._tables.format(
                    block.arg_names,
                    block.args,
                    block.actual,
                    block.expected,
                    block.outcomes,
                    row_labels=block.row_labels,
                )
            )

        if isinstance(block, DiffBlock):
            return _lines(self._diffs.format(block.actual, block.expected, block.matches, block.mismatches))

        if isinstance(block, PassMarker):
            return _lines([outcome_mark(block.passed)])

        if isinstance(block, ErrorBlock):
            body = _lines([block.message]) if block.message else ""
            return _caption(block.caption) + body

        if isinstance(block, SystemErrorBlock):
            body = _lines([block.message]) if block.message else ""
            return "System Error:\n" + body

        if isinstance(block, Comment):
            return f"# {block.key}: {block.value}\n"

        if isinstance(block, FootnoteBlock):
            if not block.footnotes:
                return ""
            return f"\n{FOOTNOTE_RULE}\n" + _lines(block.footnotes)

        if isinstance(block, ScoreSummary):
            return f"\nScore\n{block.score}\n"

        # ImageRef: images are written next to the report, not into it.
        if isinstance(block, ImageRef):
            return ""

        raise TypeError(f"Unsupported block type: {type(block).__name__}")

    def _render_listing(self, block: FileListing) -> str:
        if not block.numbered:
            return _lines(block.lines)
        return "".join(f"{number:4d} {line}\n" for number, line in enumerate(block.lines, start=1))


def _caption(text: str | None) -> str:
    if text is None or not text.strip():
        return ""
    return f"{text}:\n\n"


def _lines(lines: Iterable[str]) -> str:
    return "".join(f"{line}\n" for line in lines)
