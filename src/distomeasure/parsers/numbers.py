"""Utilities to parse the numeric atoms typed into measurement fields."""
from __future__ import annotations

import math
import re
from typing import Optional

__all__ = [
    "normalize_decimal_commas",
    "parse_decimal_prefix",
    "parse_fraction",
    "parse_mixed_number",
]

_DECIMAL_PREFIX = re.compile(r"^\s*([+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)", re.ASCII)
_PLAIN_DECIMAL = re.compile(r"^-?[0-9]+(?:\.[0-9]+)?$", re.ASCII)
_FRACTION = re.compile(r"^(-?[0-9]+)\s*/\s*([0-9]+)$", re.ASCII)
_MIXED = re.compile(r"^(-?[0-9]+)\s+([0-9]+)\s*/\s*([0-9]+)$", re.ASCII)


def normalize_decimal_commas(raw: str) -> str:
    """Treat every comma as a decimal point (``52,125`` -> ``52.125``)."""

    return raw.replace(",", ".")


def parse_decimal_prefix(text: str) -> Optional[float]:
    """Parse the leading signed decimal of ``text``, ignoring what follows.

    ``"12.5abc"`` gives ``12.5`` and ``"1e1x"`` gives ``10.0``; text without a
    leading number gives ``None``.
    """

    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    if not math.isfinite(value):
        return None
    return value


def _ratio(numerator: str, denominator: str) -> Optional[float]:
    den = float(denominator)
    if den == 0:
        return None
    return float(numerator) / den


def parse_fraction(text: str) -> Optional[float]:
    """Parse a bare ``a/b`` fraction; a zero denominator gives ``None``."""

    match = _FRACTION.match(text.strip())
    if match is None:
        return None
    return _ratio(match.group(1), match.group(2))


def parse_mixed_number(token: str) -> float:
    """Parse a mixed-number atom: ``3.25``, ``1/4`` or ``3 1/4``.

    A fraction with a zero denominator contributes ``0`` to the atom instead
    of failing, so ``"3 1/0"`` is ``3`` and ``"1/0"`` is ``0``. Tokens in no
    recognised shape fall back to their leading decimal, then to ``0``.
    """

    text = str(token).strip()
    if not text:
        return 0.0
    if _PLAIN_DECIMAL.match(text):
        return float(text)
    match = _FRACTION.match(text)
    if match:
        return _ratio(match.group(1), match.group(2)) or 0.0
    match = _MIXED.match(text)
    if match:
        whole = float(match.group(1))
        return whole + (_ratio(match.group(2), match.group(3)) or 0.0)
    return parse_decimal_prefix(text) or 0.0
