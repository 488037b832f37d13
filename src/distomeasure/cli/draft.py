"""Draft management commands (save, load and clear by job number)."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ..config import get_settings
from ..storage import DraftStore
from .common import echo_json, read_record

__all__ = ["app"]

app = typer.Typer(help="Manage in-progress drafts keyed by job number.", add_completion=False)

_DRAFTS_DIR_OPTION = typer.Option(
    None,
    "--drafts-dir",
    file_okay=False,
    help="Directory holding the drafts (defaults to the configured drafts_dir).",
)


def _store(drafts_dir: Optional[Path]) -> DraftStore:
    return DraftStore(drafts_dir or get_settings().drafts_dir)


@app.command("save")
def save_draft(
    job_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Job record JSON to store as draft."),
    drafts_dir: Optional[Path] = _DRAFTS_DIR_OPTION,
) -> None:
    """Store a job record as the draft of its job number."""

    record = read_record(job_file)
    target = _store(drafts_dir).save(record)
    echo_json({"job_number": record.job.job_number, "draft": str(target)})


@app.command("load")
def load_draft(
    job_number: str = typer.Argument(..., help="Job number of the draft."),
    drafts_dir: Optional[Path] = _DRAFTS_DIR_OPTION,
) -> None:
    """Print the stored draft of a job number."""

    record = _store(drafts_dir).load(job_number)
    if record is None:
        typer.echo(f"No draft for job '{job_number}'", err=True)
        raise typer.Exit(code=1)
    echo_json(record.to_payload())


@app.command("clear")
def clear_draft(
    job_number: str = typer.Argument(..., help="Job number of the draft."),
    drafts_dir: Optional[Path] = _DRAFTS_DIR_OPTION,
) -> None:
    """Delete the stored draft of a job number."""

    removed = _store(drafts_dir).clear(job_number)
    echo_json({"job_number": job_number, "removed": removed})
