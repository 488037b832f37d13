"""Render parsed lengths back into canonical display strings."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from .parsers.units import Unit

__all__ = ["format_length", "format_with_unit"]

_THOUSANDTH = Decimal("0.001")
# Enough digits to quantize any finite float without InvalidOperation.
_PRECISION = 400


def format_length(value: float) -> str:
    """Round ``value`` to three decimals and drop trailing zeros.

    Halves round away from zero on the decimal form of the float, so
    ``5.1205`` becomes ``"5.121"`` and ``5.0`` becomes ``"5"``.
    """

    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite length {value!r}")
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        rounded = Decimal(repr(float(value))).quantize(_THOUSANDTH, rounding=ROUND_HALF_UP)
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def format_with_unit(value: float, unit: Unit | str) -> str:
    """Return ``value`` formatted and followed by its unit suffix."""

    return f"{format_length(value)} {Unit(unit).value}"
