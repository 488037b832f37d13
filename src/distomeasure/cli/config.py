"""Utility commands to inspect the resolved distomeasure settings."""
from __future__ import annotations

from pathlib import Path
from typing import Dict

import typer

from ..config import Settings, get_settings
from .common import echo_json

__all__ = ["app"]

app = typer.Typer(help="Inspect configuration and storage locations.", add_completion=False)


def _inventory(settings: Settings) -> Dict[str, Dict[str, str | bool]]:
    inventory: Dict[str, Dict[str, str | bool]] = {}
    for key in ("home", "drafts_dir", "export_dir", "log_path"):
        value = getattr(settings, key)
        if value is None:
            continue
        path = Path(value)
        if path.is_dir():
            kind = "directory"
        elif path.is_file():
            kind = "file"
        else:
            kind = "missing"
        inventory[key] = {"path": str(path), "exists": path.exists(), "kind": kind}
    return inventory


@app.command("paths")
def show_paths(
    config_file: Path = typer.Option(
        None,
        "--config-file",
        exists=True,
        dir_okay=False,
        readable=True,
        help="TOML/YAML configuration to use instead of the environment.",
    ),
    refresh: bool = typer.Option(False, "--refresh", help="Ignore the cached settings and resolve them again."),
) -> None:
    """Print the resolved settings as JSON."""

    try:
        settings = get_settings(refresh=refresh, config_file=config_file)
    except (ValueError, RuntimeError) as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=1)
    echo_json(
        {
            "config_source": str(config_file) if config_file else "environment",
            "settings": settings.as_dict(),
            "paths": _inventory(settings),
        }
    )
