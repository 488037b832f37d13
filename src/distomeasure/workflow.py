"""Field-commit workflow: normalise a typed value and refresh highlights.

The form layer calls :func:`commit_field` whenever a field loses focus. The
raw text is stored first; measurement fields that parse under the job's
active unit are then rewritten with their canonical display string. The
governing minimum width and height are recomputed from the six samples of
the window after every commit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Optional, Tuple

from .formatting import format_length, format_with_unit
from .models import JobRecord, WindowRecord, find_window, set_window_field
from .parsers.measurement import parse_measurement
from .parsers.units import Unit
from .selection import HEIGHT_SLOTS, WIDTH_SLOTS, select_minimum

__all__ = [
    "CommitResult",
    "HighlightSummary",
    "MEASURE_FIELDS",
    "PLACEHOLDER",
    "SlotMinimum",
    "WindowNotFoundError",
    "commit_field",
    "normalize_job",
    "summarize_window",
]

LOGGER = logging.getLogger(__name__)

PLACEHOLDER = "—"

MEASURE_FIELDS: FrozenSet[str] = frozenset(
    [f"width.{slot}" for slot in WIDTH_SLOTS]
    + [f"height.{slot}" for slot in HEIGHT_SLOTS]
    + ["depth", "control"]
)


class WindowNotFoundError(LookupError):
    """Raised when a commit targets a window id missing from the record."""

    def __init__(self, window_id: str) -> None:
        super().__init__(f"Window '{window_id}' not found")
        self.window_id = window_id


@dataclass(frozen=True)
class SlotMinimum:
    """Winning sample: dotted slot path and its value in the active unit."""

    path: str
    value: float


@dataclass(frozen=True)
class HighlightSummary:
    window_id: str
    unit: Unit
    min_width: Optional[SlotMinimum] = None
    min_height: Optional[SlotMinimum] = None

    @property
    def min_width_label(self) -> str:
        return _label("Min width", self.min_width, self.unit)

    @property
    def min_height_label(self) -> str:
        return _label("Min height", self.min_height, self.unit)

    @property
    def highlighted_paths(self) -> Tuple[str, ...]:
        return tuple(item.path for item in (self.min_width, self.min_height) if item is not None)

    def as_dict(self) -> dict[str, Any]:
        return {
            "window_id": self.window_id,
            "units": self.unit.value,
            "min_width": _minimum_payload(self.min_width),
            "min_height": _minimum_payload(self.min_height),
            "min_width_label": self.min_width_label,
            "min_height_label": self.min_height_label,
            "highlighted_paths": list(self.highlighted_paths),
        }


@dataclass(frozen=True)
class CommitResult:
    """What a commit stored and the refreshed summary of its window."""

    window_id: str
    path: str
    text: str
    value: Optional[float]
    summary: HighlightSummary
    normalized: bool = field(default=False)


def _label(title: str, minimum: Optional[SlotMinimum], unit: Unit) -> str:
    if minimum is None:
        return f"{title}: {PLACEHOLDER}"
    return f"{title}: {format_with_unit(minimum.value, unit)}"


def _minimum_payload(minimum: Optional[SlotMinimum]) -> Optional[dict[str, Any]]:
    if minimum is None:
        return None
    return {"path": minimum.path, "value": minimum.value, "display": format_length(minimum.value)}


def _axis_minimum(axis: str, samples: Any, slots: Tuple[str, ...], unit: Unit) -> Optional[SlotMinimum]:
    parsed = [(f"{axis}.{slot}", parse_measurement(getattr(samples, slot), unit)) for slot in slots]
    winner = select_minimum(parsed)
    if winner is None:
        return None
    return SlotMinimum(path=winner[0], value=winner[1])


def summarize_window(window: WindowRecord, unit: Unit | str) -> HighlightSummary:
    """Recompute the governing minimum width and height of ``window``."""

    active = Unit(unit)
    return HighlightSummary(
        window_id=window.id,
        unit=active,
        min_width=_axis_minimum("width", window.width, WIDTH_SLOTS, active),
        min_height=_axis_minimum("height", window.height, HEIGHT_SLOTS, active),
    )


def commit_field(record: JobRecord, window_id: str, path: str, raw: Any) -> CommitResult:
    """Store ``raw`` at ``path`` of a window and normalise it when it parses."""

    window = find_window(record, window_id)
    if window is None:
        raise WindowNotFoundError(window_id)

    unit = record.job.units
    text = "" if raw is None else str(raw)
    set_window_field(window, path, text)
    value: Optional[float] = None
    normalized = False
    if path in MEASURE_FIELDS:
        value = parse_measurement(text, unit)
        if value is not None:
            text = format_length(value)
            set_window_field(window, path, text)
            normalized = True
        else:
            LOGGER.debug("Left %s of window %s as typed: %r", path, window_id, raw)

    return CommitResult(
        window_id=window_id,
        path=path,
        text=text,
        value=value,
        summary=summarize_window(window, unit),
        normalized=normalized,
    )


def normalize_job(record: JobRecord) -> List[HighlightSummary]:
    """Re-commit every measurement field of every window in ``record``."""

    summaries: List[HighlightSummary] = []
    for window in record.windows:
        for path in sorted(MEASURE_FIELDS):
            axis, _, slot = path.partition(".")
            current = getattr(getattr(window, axis), slot) if slot else getattr(window, axis)
            if current:
                commit_field(record, window.id, path, current)
        summaries.append(summarize_window(window, record.job.units))
    return summaries
