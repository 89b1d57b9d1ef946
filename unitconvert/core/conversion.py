"""Conversion between compatible units through the coherent base unit.

Every unit stores only its relation to the base unit of its dimension, so a
conversion between any two compatible units is::

    base   = magnitude * source.scale_to_base + source.offset_to_base
    result = (base - target.offset_to_base) / target.scale_to_base
"""

from __future__ import annotations

import math
from typing import Optional

from unitconvert.core.dimension import equals
from unitconvert.core.errors import ConversionError
from unitconvert.core.parser.resolver import parse_operand, parse_quantity, parse_unit
from unitconvert.core.quantity import Quantity
from unitconvert.core.registry import UnitRegistry
from unitconvert.utils.units import format_quantity


def convert(quantity: Quantity, target_unit: str, registry: UnitRegistry) -> float:
    """Magnitude of ``quantity`` expressed in ``target_unit``."""
    target = parse_unit(target_unit, registry)
    value = quantity.to(target).magnitude
    if not math.isfinite(value):
        raise ConversionError(
            f"Converting {quantity} to '{target.symbol}' is out of floating-point range"
        )
    return value


def have_same_dimensions(a: str, b: str, registry: UnitRegistry) -> bool:
    """Whether two unit symbols (or quantity strings) share a dimension.

    Unknown units raise ``UnknownUnitError``; they are not a mismatch.
    """
    qa = parse_operand(a, registry)
    qb = parse_operand(b, registry)
    return equals(qa.unit.dimension, qb.unit.dimension)


def convert_to_string(
    text: str,
    target_unit: str,
    registry: UnitRegistry,
    precision: Optional[int] = None,
) -> str:
    """Render ``"<value> <target>"``.

    The target text is kept as the caller wrote it, minus surrounding
    whitespace, so ``" ft "`` renders as ``"6.56 ft"`` with a single space.
    """
    quantity = parse_quantity(text, registry)
    value = convert(quantity, target_unit, registry)
    return format_quantity(value, target_unit.strip(), precision)
