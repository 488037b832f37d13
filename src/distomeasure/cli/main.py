from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from .._version import __version__
from ..config import get_settings
from ..formatting import format_length
from ..models import new_job
from ..parsers.measurement import classify_measurement
from ..parsers.units import Unit
from ..storage import export_job
from ..utils.logging import (
    EXPORT_COMPLETED,
    SUMMARY_START,
    configure_json_logger,
    flush_handlers,
    generate_trace_id,
    log_commit,
    log_event,
    log_summaries,
)
from ..workflow import WindowNotFoundError, commit_field, normalize_job
from .common import echo_json, read_record, write_record
from .config import app as config_app
from .draft import app as draft_app

__all__ = ["app", "run"]


app = typer.Typer(help="Window measurement parsing and job record utilities", add_completion=False)


@app.callback(invoke_without_command=True)
def version_callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show distomeasure version and exit", is_eager=True),
) -> None:
    """Handle global options before any sub-command executes."""

    if version:
        typer.echo(f"distomeasure {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    settings = get_settings()
    ctx.obj = configure_json_logger(settings.log_path, level=settings.log_level)


app.add_typer(draft_app, name="draft")
app.add_typer(config_app, name="config")


@app.command("parse")
def parse_command(
    value: str = typer.Argument(..., help="Raw text as typed or sent by the laser meter"),
    units: Unit = typer.Option(Unit.INCHES, "--units", "-u", case_sensitive=False, help="Active job unit"),
) -> None:
    """Interpret a measurement token; exits with status 1 when it is unparseable."""

    parsed = classify_measurement(value, units)
    result = parsed.value if parsed is not None else None
    echo_json(
        {
            "raw": value,
            "units": units.value,
            "form": parsed.form.value if parsed is not None else None,
            "value": result,
            "display": format_length(result) if result is not None else None,
        }
    )
    if result is None:
        raise typer.Exit(code=1)


@app.command("format")
def format_command(value: float = typer.Argument(..., help="Length to render")) -> None:
    """Render a length the way normalised fields display it."""

    typer.echo(format_length(value))


@app.command("new")
def new_command(
    output: Path = typer.Option(..., "--output", "-o", dir_okay=False, help="Job record JSON to create"),
    job_number: str = typer.Option("", "--job-number", help="Job / work order number"),
    client: str = typer.Option("", "--client"),
    measured_by: str = typer.Option("", "--measured-by"),
    units: Unit = typer.Option(Unit.INCHES, "--units", "-u", case_sensitive=False, help="Active job unit"),
) -> None:
    """Create a job record with one empty window."""

    record = new_job(job_number=job_number, client=client, measured_by=measured_by, units=units)
    write_record(record, output)
    echo_json({"output": str(output), "window_id": record.windows[0].id})


@app.command("commit")
def commit_command(
    ctx: typer.Context,
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job record JSON, updated in place"),
    window_id: str = typer.Argument(..., help="Window identifier"),
    path: str = typer.Argument(..., help="Dotted field path, e.g. width.top"),
    raw: str = typer.Argument(..., help="Raw field text"),
) -> None:
    """Commit one field value and print the refreshed highlights."""

    record = read_record(job_file)
    try:
        result = commit_field(record, window_id, path, raw)
    except WindowNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    except KeyError:
        typer.echo(f"Unknown field path '{path}'", err=True)
        raise typer.Exit(code=1)
    except ValidationError as exc:
        typer.echo(f"Invalid value for '{path}'\n{exc}", err=True)
        raise typer.Exit(code=1)
    write_record(record, job_file)
    log_commit(ctx.obj, result)
    echo_json(
        {
            "path": result.path,
            "text": result.text,
            "normalized": result.normalized,
            "summary": result.summary.as_dict(),
        }
    )


@app.command("summary")
def summary_command(
    ctx: typer.Context,
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job record JSON"),
    write: bool = typer.Option(False, "--write", help="Store the normalised display strings back into the file"),
) -> None:
    """Normalise every measurement of a job and print min width/height per window."""

    trace_id = generate_trace_id()
    record = read_record(job_file)
    log_event(ctx.obj, SUMMARY_START, trace_id=trace_id, input=str(job_file))
    summaries = normalize_job(record)
    if write:
        write_record(record, job_file)
    log_summaries(ctx.obj, summaries, trace_id=trace_id, written=write)
    flush_handlers(ctx.obj)
    echo_json([summary.as_dict() for summary in summaries])


@app.command("export")
def export_command(
    ctx: typer.Context,
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job record JSON"),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", file_okay=False, help="Destination directory (defaults to the configured export_dir)"
    ),
) -> None:
    """Normalise a job and write it as <job_number>.json."""

    record = read_record(job_file)
    normalize_job(record)
    target = export_job(record, output_dir or get_settings().export_dir)
    log_event(ctx.obj, EXPORT_COMPLETED, output=str(target), windows=len(record.windows))
    flush_handlers(ctx.obj)
    echo_json({"output": str(target), "windows": len(record.windows)})


def run() -> None:
    """Entry point compatible with ``python -m distomeasure.cli.main`` and console scripts."""

    from typer.main import get_command

    cli = get_command(app)
    cli()


if __name__ == "__main__":  # pragma: no cover
    run()
