"""Deterministic parser for distances typed by hand or by a laser meter.

The accepted forms are tried in a fixed order and the first form that claims
the input decides the result::

    feet-inches      5' 3 1/4"   5'3.25"   5'
    millimetres      1234mm      1234 MM
    metres           1.234m
    fraction         1/4
    mixed number     3 1/4
    decimal          52.125      52,125

Symbol and suffix forms are checked before the generic numeric forms so that
``5'3.25"`` is never read as a plain number. Unsuffixed numbers are taken to
be in the job's active unit already and are returned unconverted.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from .numbers import (
    normalize_decimal_commas,
    parse_decimal_prefix,
    parse_fraction,
    parse_mixed_number,
)
from .units import Unit, convert_inches, convert_millimeters, normalize_unit

__all__ = [
    "MeasurementForm",
    "ParsedMeasurement",
    "classify_measurement",
    "parse_measurement",
]

LOGGER = logging.getLogger(__name__)

_FEET = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?)\s*'", re.ASCII)
_INCHES_RESIDUE = re.compile(r"'\s*([^\"]*)\"?", re.ASCII)
_MILLIMETERS = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?)\s*mm\b", re.IGNORECASE | re.ASCII)
_METERS = re.compile(r"(-?[0-9]+(?:\.[0-9]+)?)\s*m\b", re.IGNORECASE | re.ASCII)
_NON_NUMERIC = re.compile(r"[^0-9.\-/ ]", re.ASCII)
_BARE_FRACTION = re.compile(r"^-?[0-9]+\s*/\s*[0-9]+$", re.ASCII)
_MIXED = re.compile(r"^(-?[0-9]+)\s+([0-9]+\s*/\s*[0-9]+)$", re.ASCII)


class MeasurementForm(str, Enum):
    """Input shape that claimed a measurement token."""

    FEET_INCHES = "feet_inches"
    MILLIMETERS = "millimeters"
    METERS = "meters"
    FRACTION = "fraction"
    MIXED_NUMBER = "mixed_number"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class ParsedMeasurement:
    """Outcome of the form that claimed ``raw``.

    ``value`` is expressed in ``unit`` and is ``None`` when the claiming form
    rejected the token (e.g. a fraction over zero).
    """

    value: Optional[float]
    form: MeasurementForm
    raw: str
    unit: Unit


_Claim = Optional[Tuple[MeasurementForm, Optional[float]]]
_FormAttempt = Callable[[str, Unit], _Claim]


def _inches_from_residue(residue: str) -> float:
    tokens = residue.split()
    if not tokens:
        return 0.0
    if len(tokens) == 1:
        return parse_mixed_number(tokens[0])
    if len(tokens) == 2:
        return parse_mixed_number(tokens[0]) + parse_mixed_number(tokens[1])
    # Longer residues keep only the leading decimal of the first token.
    return parse_decimal_prefix(tokens[0]) or 0.0


def _feet_inches(text: str, unit: Unit) -> _Claim:
    if "'" not in text and '"' not in text:
        return None
    feet_match = _FEET.search(text)
    feet = float(feet_match.group(1)) if feet_match else 0.0
    residue_match = _INCHES_RESIDUE.search(text)
    inches = _inches_from_residue(residue_match.group(1).strip()) if residue_match else 0.0
    return MeasurementForm.FEET_INCHES, convert_inches(feet * 12 + inches, unit)


def _millimeters(text: str, unit: Unit) -> _Claim:
    match = _MILLIMETERS.search(text)
    if match is None:
        return None
    return MeasurementForm.MILLIMETERS, convert_millimeters(float(match.group(1)), unit)


def _meters(text: str, unit: Unit) -> _Claim:
    match = _METERS.search(text)
    if match is None:
        return None
    return MeasurementForm.METERS, convert_millimeters(float(match.group(1)) * 1000, unit)


def _plain_numeric(text: str, unit: Unit) -> _Claim:
    cleaned = _NON_NUMERIC.sub("", text).strip()
    if not cleaned:
        return None
    if _BARE_FRACTION.match(cleaned):
        return MeasurementForm.FRACTION, parse_fraction(cleaned)
    mixed = _MIXED.match(cleaned)
    if mixed:
        fraction = parse_fraction(mixed.group(2))
        if fraction is None:
            return MeasurementForm.MIXED_NUMBER, None
        return MeasurementForm.MIXED_NUMBER, float(mixed.group(1)) + fraction
    value = parse_decimal_prefix(cleaned)
    if value is None:
        return None
    return MeasurementForm.DECIMAL, value


_FORMS: Tuple[_FormAttempt, ...] = (
    _feet_inches,
    _millimeters,
    _meters,
    _plain_numeric,
)


def classify_measurement(raw: Optional[str], unit: Unit | str) -> Optional[ParsedMeasurement]:
    """Return the form claiming ``raw`` and its value, or ``None`` if no form does."""

    active = normalize_unit(unit)
    if active is None:
        raise ValueError(f"Unsupported unit: {unit!r}")
    if raw is None:
        return None
    stripped = str(raw).strip()
    if not stripped:
        return None

    text = normalize_decimal_commas(stripped)
    for attempt in _FORMS:
        claim = attempt(text, active)
        if claim is None:
            continue
        form, value = claim
        if value is not None and not math.isfinite(value):
            value = None
        return ParsedMeasurement(value=value, form=form, raw=str(raw), unit=active)

    LOGGER.debug("No measurement form matched %r", raw)
    return None


def parse_measurement(raw: Optional[str], unit: Unit | str) -> Optional[float]:
    """Parse ``raw`` into a length expressed in ``unit``.

    Never raises on malformed text: anything that cannot be interpreted gives
    ``None`` so that partially typed input can be left as-is.
    """

    parsed = classify_measurement(raw, unit)
    if parsed is None:
        return None
    return parsed.value
