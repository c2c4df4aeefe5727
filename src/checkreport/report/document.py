"""Append-only report document.

Callers push content in display order. Every ``append_*`` call stores
immutable blocks; text is produced only by :meth:`ReportDocument.serialize`.
A failure while composing one block turns into a visible error block so the
rest of the report still renders. Only :meth:`ReportDocument.save` lets an
I/O failure escape.
"""

from __future__ import annotations

import traceback
from collections.abc import Collection, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog
from PIL import Image

from checkreport.errors import MalformedInputError, MissingArtifactError, SerializationError
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
from checkreport.model.policy import RenderPolicy
from checkreport.renderer.text_renderer import TextRenderer

from .sink import ArtifactSink, load_image

logger = structlog.get_logger(__name__)


class ReportDocument:
    """One report session. Not safe to share between producers."""

    def __init__(
        self,
        *,
        policy: RenderPolicy | None = None,
        sink: ArtifactSink | None = None,
        stamp: str | None = None,
        renderer: TextRenderer | None = None,
    ) -> None:
        self.policy = policy or RenderPolicy()
        self.sink = sink
        self._renderer = renderer or TextRenderer()
        self._blocks: list[Block] = []
        self._footnotes: list[str] = []
        self._sections = 0
        self.current_section: str | None = None
        if stamp:
            self._blocks.append(Preamble(stamp))

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(self._blocks)

    @property
    def pending_footnotes(self) -> tuple[str, ...]:
        return tuple(self._footnotes)

    # ------------------------------------------------------------------
    # Sections and text
    # ------------------------------------------------------------------

    def begin_section(self, name: str, title: str) -> ReportDocument:
        self.current_section = name
        if self.policy.hides(name):
            return self
        self._blocks.append(SectionHeader(name=name, title=title, leading_blank=self._sections > 0))
        self._sections += 1
        return self

    def append_text(self, body: str | None, caption: str | None = None) -> ReportDocument:
        if not body:
            return self
        self._blocks.append(PlainText(body=body, caption=caption))
        return self

    def append_args(self, args: str) -> ReportDocument:
        return self.append_text(f"Command line arguments: {args}")

    def append_input(self, text: str | None) -> ReportDocument:
        return self.append_text(text, caption="Input")

    def append_run(self, caption: str) -> ReportDocument:
        self._blocks.append(Caption(caption))
        return self

    def append_comment(self, key: str, value: str) -> ReportDocument:
        self._blocks.append(Comment(key=key, value=value))
        return self

    # ------------------------------------------------------------------
    # Files and images
    # ------------------------------------------------------------------

    def append_file(self, path: str, contents: str | None) -> ReportDocument:
        """Show ``contents`` under ``path`` unless the current section is hidden."""
        if self.policy.hides(self.current_section):
            return self
        with self._composing("file", path=path):
            numbered = self.policy.needs_line_numbers(str(path))
            if numbered:
                lines = tuple((contents or "").splitlines())
            else:
                lines = tuple(contents.split("\n")) if contents else ()
            self._blocks.append(FileListing(caption=str(path), lines=lines, numbered=numbered))
        return self

    def append_source_file(self, directory: Path, path: Path | str) -> ReportDocument:
        """Read ``directory / path`` through the sink and show it under ``path``."""
        if self.policy.hides(self.current_section):
            return self
        with self._composing("source_file", path=str(path)):
            try:
                lines = self._read_lines(Path(directory) / path, str(path))
            except MissingArtifactError as exc:
                logger.info("report.file_missing", path=str(path))
                self._blocks.append(Caption(str(path)))
                self._blocks.append(ErrorBlock(exc.reason))
                return self
            except (OSError, UnicodeDecodeError) as exc:
                self._blocks.append(Caption(str(path)))
                self._blocks.append(SystemErrorBlock(_format_exception(exc)))
                return self
            numbered = self.policy.needs_line_numbers(str(path))
            self._blocks.append(FileListing(caption=str(path), lines=tuple(lines), numbered=numbered))
        return self

    def append_image(self, image: Image.Image, caption: str | None = None) -> ReportDocument:
        with self._composing("image"):
            try:
                name = self._require_sink("No image").store_image(image)
            except MissingArtifactError as exc:
                logger.warning("report.image_failed", error=exc.message)
                return self.append_error(exc.reason)
            except (OSError, ValueError) as exc:
                logger.warning("report.image_failed", error=str(exc))
                return self.append_error("No image")
            self._blocks.append(ImageRef(name=name, caption=caption))
        return self

    def append_image_file(self, path: Path, caption: str | None = None) -> ReportDocument:
        try:
            image = load_image(path)
        except OSError as exc:
            logger.warning("report.image_failed", path=str(path), error=str(exc))
            return self.append_error("No image")
        return self.append_image(image, caption=caption)

    # ------------------------------------------------------------------
    # Comparison results
    # ------------------------------------------------------------------

    def append_table(
        self,
        arg_names: Sequence[str],
        args: Sequence[Sequence[str]],
        actual: Sequence[str],
        expected: Sequence[str],
        outcomes: Sequence[bool],
        row_labels: Sequence[str] | None = None,
    ) -> ReportDocument:
        with self._composing("table"):
            block = TableBlock(
                arg_names=tuple(arg_names),
                args=tuple(tuple(row) for row in args),
                actual=tuple(actual),
                expected=tuple(expected),
                outcomes=tuple(bool(o) for o in outcomes),
                row_labels=tuple(row_labels) if row_labels is not None else None,
            )
            # Lay the table out once so shape errors surface at the call site.
            self._renderer.render_block(block)
            self._blocks.append(block)
        return self

    def append_diff(
        self,
        actual: Sequence[str],
        expected: Sequence[str],
        matches: Collection[int] = (),
        mismatches: Collection[int] = (),
    ) -> ReportDocument:
        with self._composing("diff"):
            block = DiffBlock(
                actual=tuple(actual),
                expected=tuple(expected),
                matches=frozenset(matches),
                mismatches=frozenset(mismatches),
            )
            self._renderer.render_block(block)
            self._blocks.append(block)
        return self

    def append_marked_lines(
        self,
        lines: Sequence[str],
        matches: Collection[int] = (),
        mismatches: Collection[int] = (),
    ) -> ReportDocument:
        with self._composing("marked_lines"):
            block = MarkedLines(lines=tuple(lines), matches=frozenset(matches), mismatches=frozenset(mismatches))
            self._renderer.render_block(block)
            self._blocks.append(block)
        return self

    def append_pass(self, passed: bool) -> ReportDocument:
        self._blocks.append(PassMarker(bool(passed)))
        return self

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def append_error(self, message: str, caption: str = "Error") -> ReportDocument:
        self._blocks.append(ErrorBlock(message=message, caption=caption))
        return self

    def append_system_error(self, error: str | BaseException) -> ReportDocument:
        if isinstance(error, BaseException):
            error = _format_exception(error)
        self._blocks.append(SystemErrorBlock(error))
        return self

    # ------------------------------------------------------------------
    # Footnotes, score, output
    # ------------------------------------------------------------------

    def add_footnote(self, text: str) -> ReportDocument:
        self._footnotes.append(text)
        return self

    def finalize(self, score: Any) -> ReportDocument:
        """Flush pending footnotes, then append the score. Nothing should follow."""
        if self._footnotes:
            self._blocks.append(FootnoteBlock(tuple(self._footnotes)))
            self._footnotes.clear()
        self._blocks.append(ScoreSummary(str(score)))
        return self

    def serialize(self) -> str:
        return self._renderer.render(self._blocks)

    def save(self, name: str) -> Path:
        """Write ``<name>.txt`` through the sink."""
        target = f"{name}.txt"
        if self.sink is None:
            raise SerializationError(target, "no artifact sink configured")
        try:
            path = self.sink.write_document(target, self.serialize())
        except OSError as exc:
            raise SerializationError(target, str(exc)) from exc
        logger.info("report.saved", path=str(path), blocks=len(self._blocks))
        return path

    def _require_sink(self, reason: str) -> ArtifactSink:
        if self.sink is None:
            raise MissingArtifactError("artifact sink", reason)
        return self.sink

    def _read_lines(self, source: Path, label: str) -> list[str]:
        lines = self._require_sink("No artifact sink").read_file(source)
        if lines is None:
            raise MissingArtifactError(label)
        return lines

    @contextmanager
    def _composing(self, kind: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except MalformedInputError:
            raise
        except Exception as exc:
            logger.warning("report.block_failed", kind=kind, error=str(exc), **context)
            self._blocks.append(SystemErrorBlock(_format_exception(exc)))


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip("\n")
