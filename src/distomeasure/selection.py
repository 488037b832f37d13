"""Governing-minimum selection across repeated samples of one opening."""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

__all__ = ["HEIGHT_SLOTS", "WIDTH_SLOTS", "select_minimum"]

WIDTH_SLOTS: Tuple[str, ...] = ("top", "mid", "bottom")
HEIGHT_SLOTS: Tuple[str, ...] = ("left", "center", "right")


def select_minimum(samples: Iterable[Tuple[str, Optional[float]]]) -> Optional[Tuple[str, float]]:
    """Return the ``(name, value)`` pair holding the smallest parsed value.

    Slots without a value are skipped; when none is left the result is
    ``None``. Equal values keep the earliest slot, so ``top`` beats ``mid``
    on a tie.
    """

    best: Optional[Tuple[str, float]] = None
    for name, value in samples:
        if value is None:
            continue
        if best is None or value < best[1]:
            best = (name, value)
    return best
