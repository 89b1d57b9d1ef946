"""Rendering helpers for magnitudes and quantities."""

from __future__ import annotations

import math
from typing import Optional


def format_magnitude(value: float, precision: Optional[int] = None) -> str:
    """Render a magnitude as ASCII decimal text.

    With no precision this is the shortest string that round-trips to the
    same double (``repr``); otherwise ``precision`` significant digits.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot render non-finite magnitude {value!r}")
    value = float(value)
    if value == 0.0:
        value = 0.0  # drop the sign of -0.0
    if precision is None:
        return repr(value)
    if precision < 1:
        raise ValueError(f"Precision must be at least 1, got {precision}")
    return format(value, f".{precision}g")


def format_quantity(value: float, unit: str, precision: Optional[int] = None) -> str:
    """``"<value> <unit>"`` with the unit text appended verbatim."""
    return f"{format_magnitude(value, precision)} {unit}"
