"""Build a report from a JSON job description.

A job is an object with a ``blocks`` list and an optional ``score``::

    {
      "blocks": [
        {"type": "section", "name": "run", "title": "Testing Main"},
        {"type": "diff", "actual": ["4"], "expected": ["5"], "mismatches": [0]}
      ],
      "score": {"passed": 0, "total": 1}
    }

Relative file paths are resolved against the job file's directory.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from checkreport.errors import MalformedInputError
from checkreport.layout.diff import DiffAligner
from checkreport.model.blocks import Score
from checkreport.model.policy import RenderPolicy
from checkreport.report.document import ReportDocument
from checkreport.report.sink import ArtifactSink

logger = structlog.get_logger(__name__)


def load_job(path: Path) -> dict[str, Any]:
    path = Path(path)
    try:
        job = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise MalformedInputError(f"invalid JSON ({exc.msg} at line {exc.lineno})", field=path.name) from exc
    if not isinstance(job, dict) or not isinstance(job.get("blocks", []), list):
        raise MalformedInputError("expected an object with a 'blocks' list", field=path.name)
    job.setdefault("base_dir", str(path.parent))
    return job


def build_document(
    job: dict[str, Any],
    *,
    sink: ArtifactSink | None = None,
    policy: RenderPolicy | None = None,
    stamp: str | None = None,
) -> ReportDocument:
    doc = ReportDocument(policy=policy, sink=sink, stamp=stamp)
    base_dir = Path(job.get("base_dir", "."))

    for position, entry in enumerate(job.get("blocks", [])):
        kind = entry.get("type") if isinstance(entry, dict) else None
        handler = _HANDLERS.get(kind)
        if handler is None:
            raise MalformedInputError(f"unknown block type {kind!r}", field=f"blocks[{position}]")
        try:
            handler(doc, entry, base_dir)
        except KeyError as exc:
            raise MalformedInputError(f"missing key {exc.args[0]!r}", field=f"blocks[{position}]") from exc
        except TypeError as exc:
            raise MalformedInputError(f"invalid value ({exc})", field=f"blocks[{position}]") from exc

    logger.debug("job.replayed", blocks=len(job.get("blocks", [])))

    if "score" in job:
        doc.finalize(_score(job["score"]))
    return doc


def _score(value: Any) -> Any:
    if not isinstance(value, dict):
        return value
    try:
        return Score(passed=int(value["passed"]), total=int(value["total"]))
    except KeyError as exc:
        raise MalformedInputError(f"missing key {exc.args[0]!r}", field="score") from exc
    except (ValueError, TypeError) as exc:
        raise MalformedInputError(f"invalid value ({exc})", field="score") from exc


def _diff(doc: ReportDocument, entry: dict[str, Any], base_dir: Path) -> None:
    matches = entry.get("matches", ())
    mismatches = entry.get("mismatches", ())
    if "outcomes" in entry:
        rows = max(len(entry["actual"]), len(entry["expected"]))
        matches, mismatches = DiffAligner.from_outcomes(entry["outcomes"], rows)
    doc.append_diff(entry["actual"], entry["expected"], matches, mismatches)


def _table(doc: ReportDocument, entry: dict[str, Any], base_dir: Path) -> None:
    doc.append_table(
        entry["arg_names"],
        entry["args"],
        entry["actual"],
        entry["expected"],
        entry["outcomes"],
        row_labels=entry.get("row_labels"),
    )


_HANDLERS: dict[str | None, Callable[[ReportDocument, dict[str, Any], Path], Any]] = {
    "section": lambda doc, e, _: doc.begin_section(e["name"], e["title"]),
    "text": lambda doc, e, _: doc.append_text(e.get("body"), caption=e.get("caption")),
    "args": lambda doc, e, _: doc.append_args(e["args"]),
    "input": lambda doc, e, _: doc.append_input(e.get("body")),
    "run": lambda doc, e, _: doc.append_run(e["caption"]),
    "file": lambda doc, e, _: doc.append_file(e["path"], e.get("contents")),
    "source_file": lambda doc, e, base: doc.append_source_file(base / e.get("dir", "."), e["path"]),
    "image_file": lambda doc, e, base: doc.append_image_file(base / e["path"], caption=e.get("caption")),
    "table": _table,
    "diff": _diff,
    "marked": lambda doc, e, _: doc.append_marked_lines(e["lines"], e.get("matches", ()), e.get("mismatches", ())),
    "pass": lambda doc, e, _: doc.append_pass(e["passed"]),
    "error": lambda doc, e, _: doc.append_error(e["message"], caption=e.get("caption", "Error")),
    "system_error": lambda doc, e, _: doc.append_system_error(e["message"]),
    "comment": lambda doc, e, _: doc.append_comment(e["key"], str(e["value"])),
    "footnote": lambda doc, e, _: doc.add_footnote(e["text"]),
}
