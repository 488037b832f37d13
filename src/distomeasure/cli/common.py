"""Helpers shared by the CLI commands."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from ..models import JobRecord

__all__ = ["echo_json", "read_record", "write_record"]


def echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


def read_record(path: Path) -> JobRecord:
    """Load a job record from ``path`` or exit with status 1."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return JobRecord.model_validate(payload)
    except json.JSONDecodeError as exc:
        typer.echo(f"{path}: invalid JSON ({exc})", err=True)
    except ValidationError as exc:
        typer.echo(f"{path}: invalid job record\n{exc}", err=True)
    raise typer.Exit(code=1)


def write_record(record: JobRecord, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record.to_payload(), indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
