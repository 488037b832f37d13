"""Pydantic models for the job record persisted and exported by the form."""
from __future__ import annotations

import re
import datetime
from typing import Any, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .parsers.units import Unit

__all__ = [
    "HeightSamples",
    "JobInfo",
    "JobRecord",
    "SPLIT_SLOTS",
    "WidthSamples",
    "WindowRecord",
    "WindowType",
    "add_window",
    "find_window",
    "generate_window_id",
    "new_job",
    "new_window",
    "remove_window",
    "set_window_field",
]

SPLIT_SLOTS = 3

WindowType = Literal["", "roller", "silhouette", "cell", "shutter", "drapery"]

_NUMERIC_LABEL = re.compile(r"^\d+$")


def generate_window_id() -> str:
    """Return a short random identifier for a new window."""

    return uuid4().hex[:8]


class WidthSamples(BaseModel):
    """Display strings for the top, middle and bottom width samples."""

    top: str = ""
    mid: str = ""
    bottom: str = ""

    model_config = ConfigDict(validate_assignment=True)


class HeightSamples(BaseModel):
    """Display strings for the left, center and right height samples."""

    left: str = ""
    center: str = ""
    right: str = ""

    model_config = ConfigDict(validate_assignment=True)


class WindowRecord(BaseModel):
    """One measured opening. Descriptive fields pass through untouched."""

    id: str = Field(default_factory=generate_window_id)
    room: str = ""
    label: str = ""
    window_type: WindowType = Field(default="", alias="type")
    width: WidthSamples = Field(default_factory=WidthSamples)
    height: HeightSamples = Field(default_factory=HeightSamples)
    depth: str = ""
    control: str = ""
    split_count: int = Field(default=0, ge=0, le=SPLIT_SLOTS, alias="splitCount")
    splits: List[str] = Field(default_factory=lambda: [""] * SPLIT_SLOTS)
    notes: str = ""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="allow")

    @field_validator("split_count", mode="before")
    @classmethod
    def _blank_split_count(cls, value: Any) -> Any:
        if value in (None, ""):
            return 0
        return value

    @field_validator("splits")
    @classmethod
    def _pad_splits(cls, value: List[str]) -> List[str]:
        if len(value) > SPLIT_SLOTS:
            raise ValueError(f"At most {SPLIT_SLOTS} split locations are supported")
        return list(value) + [""] * (SPLIT_SLOTS - len(value))


class JobInfo(BaseModel):
    """Job-level header; ``units`` is the active unit for every window."""

    job_number: str = ""
    client: str = ""
    date: str = Field(default_factory=lambda: datetime.date.today().isoformat())
    measured_by: str = ""
    units: Unit = Unit.INCHES
    job_notes: str = ""

    model_config = ConfigDict(validate_assignment=True, extra="allow")

    @field_validator("job_number", mode="before")
    @classmethod
    def _strip_job_number(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value


class JobRecord(BaseModel):
    """Complete record: the job header plus its windows."""

    job: JobInfo = Field(default_factory=JobInfo)
    windows: List[WindowRecord] = Field(default_factory=list)

    model_config = ConfigDict(extra="allow")

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-ready payload using the wire field names."""

        return self.model_dump(mode="json", by_alias=True)


def new_window(record: JobRecord) -> WindowRecord:
    """Create an empty window labelled with the next 1-based position."""

    return WindowRecord(label=str(len(record.windows) + 1))


def new_job(**job_fields: Any) -> JobRecord:
    """Create a job record holding one empty window."""

    record = JobRecord(job=JobInfo(**job_fields))
    add_window(record)
    return record


def add_window(record: JobRecord) -> WindowRecord:
    window = new_window(record)
    record.windows.append(window)
    return window


def find_window(record: JobRecord, window_id: str) -> Optional[WindowRecord]:
    for window in record.windows:
        if window.id == window_id:
            return window
    return None


def remove_window(record: JobRecord, window_id: str) -> bool:
    """Drop ``window_id`` and renumber windows whose label is purely numeric."""

    before = len(record.windows)
    record.windows = [window for window in record.windows if window.id != window_id]
    for index, window in enumerate(record.windows, start=1):
        if _NUMERIC_LABEL.match(window.label or ""):
            window.label = str(index)
    return len(record.windows) != before


def _attribute_name(model: BaseModel, key: str) -> str:
    for name, field in type(model).model_fields.items():
        if key in (name, field.alias):
            return name
    raise KeyError(key)


def set_window_field(window: WindowRecord, path: str, value: Any) -> None:
    """Assign ``value`` at a dotted wire path such as ``width.top`` or ``splits.1``.

    Unknown paths raise :class:`KeyError`; values rejected by the model raise
    :class:`pydantic.ValidationError`.
    """

    parts = path.split(".")
    target: Any = window
    try:
        for part in parts[:-1]:
            if isinstance(target, list):
                target = target[int(part)]
            else:
                target = getattr(target, _attribute_name(target, part))
        leaf = parts[-1]
        if isinstance(target, list):
            index = int(leaf)
            if not 0 <= index < len(target):
                raise IndexError(index)
        else:
            name = _attribute_name(target, leaf)
    except (IndexError, ValueError, AttributeError, KeyError):
        raise KeyError(path) from None

    if isinstance(target, list):
        target[index] = str(value)
    else:
        setattr(target, name, value)
