"""Canonicalise the length units a job can be measured in."""
from __future__ import annotations

from enum import Enum
from typing import Optional

__all__ = [
    "MM_PER_INCH",
    "Unit",
    "convert_inches",
    "convert_millimeters",
    "normalize_unit",
]

MM_PER_INCH = 25.4


class Unit(str, Enum):
    """Active unit of a job; governs parse output and display formatting."""

    INCHES = "in"
    MILLIMETERS = "mm"

    def __str__(self) -> str:
        return self.value


_CANONICAL_UNITS = {
    Unit.INCHES: {
        "in",
        "in.",
        "inch",
        "inches",
        '"',
        "″",
    },
    Unit.MILLIMETERS: {
        "mm",
        "millimeter",
        "millimeters",
        "millimetre",
        "millimetres",
        "㎜",
    },
}


def normalize_unit(token: Optional[str | Unit]) -> Optional[Unit]:
    """Return the :class:`Unit` matching ``token`` if recognised."""

    if token is None:
        return None
    if isinstance(token, Unit):
        return token
    cleaned = str(token).strip().lower()
    for canonical, aliases in _CANONICAL_UNITS.items():
        if cleaned in aliases:
            return canonical
    return None


def convert_inches(value: float, unit: Unit) -> float:
    """Express a length given in inches in ``unit``."""

    return value * MM_PER_INCH if unit is Unit.MILLIMETERS else value


def convert_millimeters(value: float, unit: Unit) -> float:
    """Express a length given in millimetres in ``unit``."""

    return value if unit is Unit.MILLIMETERS else value / MM_PER_INCH
