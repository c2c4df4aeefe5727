"""checkreport CLI entrypoint."""

from __future__ import annotations

from pathlib import Path

import click

from checkreport.errors import ReportError
from checkreport.job import build_document, load_job
from checkreport.logging import setup_logging
from checkreport.model.policy import HIDDEN_FILE_SECTIONS, SOURCE_SUFFIXES, RenderPolicy, numbered_suffixes
from checkreport.report.sink import DirectorySink
from checkreport.report.stamp import version_stamp


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("job_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), required=True, help="Directory for the report and its images")
@click.option("--name", default="report", show_default=True, help="Report file name without .txt")
@click.option("--hide-section", "hidden", multiple=True, help="Section name whose header and files are left out (repeatable)")
@click.option("--number-suffix", "suffixes", multiple=True, help="File suffix that gets line numbers (repeatable)")
@click.option("--stamp/--no-stamp", default=True, show_default=True, help="Print the version and start time line")
@click.option("--verbose", "-v", is_flag=True, help="Log debug events to stderr")
def main(
    job_path: Path,
    output_dir: Path,
    name: str,
    hidden: tuple[str, ...],
    suffixes: tuple[str, ...],
    stamp: bool,
    verbose: bool,
) -> None:
    """Render a grading job description into a plain-text report."""
    setup_logging(verbose)

    policy = RenderPolicy(
        hidden_sections=frozenset(hidden) if hidden else HIDDEN_FILE_SECTIONS,
        needs_line_numbers=numbered_suffixes(*(suffixes or SOURCE_SUFFIXES)),
    )

    try:
        job = load_job(job_path)
        doc = build_document(
            job,
            sink=DirectorySink(output_dir),
            policy=policy,
            stamp=version_stamp() if stamp else None,
        )
        target = doc.save(name)
    except ReportError as exc:
        raise click.ClickException(exc.message) from exc

    click.echo(f"Rendered: {target}")


if __name__ == "__main__":  # pragma: no cover
    main()
