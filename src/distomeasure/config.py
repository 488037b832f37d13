"""Centralized configuration for distomeasure.

This module exposes :func:`get_settings` returning where drafts, exports and
structured logs live. Values can be customized via environment variables or
by pointing ``DISTOMEASURE_CONFIG_FILE`` to a TOML/YAML document with a
``[paths]`` and an optional ``[logging]`` section.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - safety for Python <3.11
    tomllib = None  # type: ignore[assignment]

try:  # Optional dependency
    import yaml  # type: ignore[import-not-found]
except ImportError:  # pragma: no cover - PyYAML is optional at runtime
    yaml = None  # type: ignore[assignment]

__all__ = ["Settings", "get_settings", "reset_settings"]

_DEFAULT_HOME = Path("~/.distomeasure")
_CONFIG_CACHE: Optional["Settings"] = None
_CONFIG_SOURCE: Optional[Path] = None


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    home: Path
    drafts_dir: Path
    export_dir: Path
    log_path: Optional[Path]
    log_level: int

    def as_dict(self) -> Dict[str, Any]:
        """Expose the settings as plain values (useful for logging)."""

        return {
            "home": str(self.home),
            "drafts_dir": str(self.drafts_dir),
            "export_dir": str(self.export_dir),
            "log_path": str(self.log_path) if self.log_path else None,
            "log_level": logging.getLevelName(self.log_level),
        }


def _normalize_path(value: Optional[str | Path], *, base: Optional[Path]) -> Optional[Path]:
    if value is None or value == "":
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute() and base is not None:
        candidate = base / candidate
    return candidate.resolve()


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        if tomllib is None:  # pragma: no cover - Python <3.11 fallback
            raise RuntimeError("TOML configuration requires Python 3.11 or tomllib")
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        if yaml is None:
            raise RuntimeError("YAML configuration requires the 'PyYAML' package")
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _coalesce_mapping(source: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not isinstance(source, Mapping):
        return {}
    return source


def _parse_level(value: Any) -> int:
    if value is None or value == "":
        return logging.INFO
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level


def _build_settings(config_file: Optional[Path]) -> Settings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_file = _normalize_path(config_file, base=Path.cwd())
        if config_file is not None:
            config_data = _load_config_file(config_file)
            config_dir = config_file.parent

    paths_section = _coalesce_mapping(config_data.get("paths"))
    logging_section = _coalesce_mapping(config_data.get("logging"))

    env = os.environ
    base = config_dir or Path.cwd()

    home = _normalize_path(
        env.get("DISTOMEASURE_HOME") or paths_section.get("home"),
        base=base,
    ) or _DEFAULT_HOME.expanduser().resolve()

    drafts_dir = _normalize_path(
        env.get("DISTOMEASURE_DRAFTS_DIR") or paths_section.get("drafts"),
        base=base,
    ) or (home / "drafts").resolve()

    export_dir = _normalize_path(
        env.get("DISTOMEASURE_EXPORT_DIR") or paths_section.get("exports"),
        base=base,
    ) or (home / "exports").resolve()

    log_path = _normalize_path(
        env.get("DISTOMEASURE_LOG_PATH") or logging_section.get("path"),
        base=base,
    )

    log_level = _parse_level(env.get("DISTOMEASURE_LOG_LEVEL") or logging_section.get("level"))

    return Settings(
        home=home,
        drafts_dir=drafts_dir,
        export_dir=export_dir,
        log_path=log_path,
        log_level=log_level,
    )


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> Settings:
    """Return the cached :class:`Settings`.

    Parameters
    ----------
    refresh:
        When ``True`` the cached configuration is discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    explicit_path = Path(config_file).expanduser() if config_file is not None else None

    if explicit_path is not None:
        return _build_settings(explicit_path)

    env_path = os.getenv("DISTOMEASURE_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None
