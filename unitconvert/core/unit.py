"""Unit definitions and the arithmetic used to build derived units."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from unitconvert.core.dimension import Dimension, DIMENSIONLESS
from unitconvert.core.errors import OffsetUnitError

_OPERATORS = set("*/^ ")


def _group(symbol: str) -> str:
    return f"({symbol})" if _OPERATORS & set(symbol) else symbol


@dataclass(frozen=True)
class Unit:
    """A unit's relation to the coherent base unit of its dimension.

    A magnitude ``x`` in this unit equals ``x * scale_to_base + offset_to_base``
    in the base unit. Only affine units (degC, degF) carry an offset.
    """
    symbol: str
    dimension: Dimension
    scale_to_base: float = 1.0
    offset_to_base: float = 0.0

    @classmethod
    def number(cls, value: float) -> Unit:
        """A dimensionless pure-number unit, e.g. the ``100`` in ``100 yd``."""
        return cls(symbol=repr(float(value)), dimension=DIMENSIONLESS, scale_to_base=float(value))

    @property
    def is_offset(self) -> bool:
        return self.offset_to_base != 0.0

    @property
    def is_pure_number(self) -> bool:
        return self.dimension.is_dimensionless and not self.is_offset

    @property
    def is_valid(self) -> bool:
        return (
            math.isfinite(self.scale_to_base)
            and self.scale_to_base != 0.0
            and math.isfinite(self.offset_to_base)
        )

    def renamed(self, symbol: str) -> Unit:
        return replace(self, symbol=symbol)

    def scaled(self, factor: float, symbol: str | None = None) -> Unit:
        """Same zero point, unit size multiplied by ``factor``."""
        return Unit(
            symbol=symbol or self.symbol,
            dimension=self.dimension,
            scale_to_base=self.scale_to_base * factor,
            offset_to_base=self.offset_to_base,
        )

    def shifted(self, offset: float) -> Unit:
        """Unit whose readings are this unit's readings plus ``offset``.

        ``degC = K - 273.15`` is ``K.shifted(-273.15)``.
        """
        return Unit(
            symbol=self.symbol,
            dimension=self.dimension,
            scale_to_base=self.scale_to_base,
            offset_to_base=self.offset_to_base - offset * self.scale_to_base,
        )

    def to_base(self, magnitude: float) -> float:
        return magnitude * self.scale_to_base + self.offset_to_base

    def from_base(self, magnitude: float) -> float:
        return (magnitude - self.offset_to_base) / self.scale_to_base

    def __mul__(self, other: Unit) -> Unit:
        symbol = f"{self.symbol}*{other.symbol}"
        if self.is_offset or other.is_offset:
            if other.is_pure_number:
                return self.scaled(other.scale_to_base, symbol)
            if self.is_pure_number:
                return other.scaled(self.scale_to_base, symbol)
            offending = self.symbol if self.is_offset else other.symbol
            raise OffsetUnitError(offending, "multiply")
        return Unit(
            symbol=symbol,
            dimension=self.dimension * other.dimension,
            scale_to_base=self.scale_to_base * other.scale_to_base,
        )

    def __truediv__(self, other: Unit) -> Unit:
        symbol = f"{self.symbol}/{_group(other.symbol)}"
        if self.is_offset or other.is_offset:
            if other.is_pure_number:
                return self.scaled(1.0 / other.scale_to_base, symbol)
            offending = self.symbol if self.is_offset else other.symbol
            raise OffsetUnitError(offending, "divide")
        return Unit(
            symbol=symbol,
            dimension=self.dimension / other.dimension,
            scale_to_base=self.scale_to_base / other.scale_to_base,
        )

    def __pow__(self, power: int) -> Unit:
        if power == 1:
            return self
        if self.is_offset:
            raise OffsetUnitError(self.symbol, "exponentiate")
        return Unit(
            symbol=f"{_group(self.symbol)}^{power}",
            dimension=self.dimension ** power,
            scale_to_base=self.scale_to_base ** power,
        )

    def __str__(self) -> str:
        return self.symbol
