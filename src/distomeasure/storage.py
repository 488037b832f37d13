"""Draft persistence per job number and JSON export of finished jobs."""
from __future__ import annotations

import json
import logging
import re
from urllib.parse import quote
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .models import JobRecord

__all__ = ["DraftStore", "UNSAVED_KEY", "export_filename", "export_job"]

LOGGER = logging.getLogger(__name__)

UNSAVED_KEY = "__unsaved__"
_UNSAFE_CHARS = re.compile(r"[^a-z0-9_-]", re.IGNORECASE)


def export_filename(job_number: Optional[str]) -> str:
    """Return the export file name for ``job_number`` (``measure.json`` if blank)."""

    stem = (job_number or "").strip() or "measure"
    return f"{_UNSAFE_CHARS.sub('_', stem)}.json"


def _dump(record: JobRecord) -> str:
    return json.dumps(record.to_payload(), indent=2, ensure_ascii=False) + "\n"


def export_job(record: JobRecord, directory: Path) -> Path:
    """Write ``record`` as pretty-printed JSON inside ``directory``."""

    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / export_filename(record.job.job_number)
    target.write_text(_dump(record), encoding="utf-8")
    LOGGER.info("Exported job %r to %s", record.job.job_number, target)
    return target


class DraftStore:
    """Directory of in-progress job records keyed by job number."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def path_for(self, job_number: Optional[str]) -> Path:
        key = (job_number or "").strip() or UNSAVED_KEY
        # Percent-encoding keeps distinct job numbers in distinct files.
        return self.root / f"measureDraft_{quote(key, safe='')}.json"

    def save(self, record: JobRecord) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        target = self.path_for(record.job.job_number)
        target.write_text(_dump(record), encoding="utf-8")
        LOGGER.debug("Saved draft %s", target)
        return target

    def load(self, job_number: Optional[str]) -> Optional[JobRecord]:
        """Return the stored draft, or ``None`` if it is missing or unreadable."""

        if not (job_number or "").strip():
            return None
        source = self.path_for(job_number)
        if not source.is_file():
            return None
        try:
            payload = json.loads(source.read_text(encoding="utf-8"))
            return JobRecord.model_validate(payload)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
            LOGGER.warning("Ignoring unreadable draft %s: %s", source, exc)
            return None

    def clear(self, job_number: Optional[str]) -> bool:
        target = self.path_for(job_number)
        existed = target.exists()
        target.unlink(missing_ok=True)
        return existed
