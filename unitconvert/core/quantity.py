"""A magnitude paired with a unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from unitconvert.core.dimension import equals
from unitconvert.core.errors import DimensionMismatchError, OffsetUnitError
from unitconvert.core.unit import Unit

if TYPE_CHECKING:
    from unitconvert.core.registry import UnitRegistry


@dataclass(frozen=True)
class Quantity:
    magnitude: float
    unit: Unit

    def to(self, target: Unit) -> Quantity:
        """Convert through the coherent base unit of the shared dimension."""
        if not equals(self.unit.dimension, target.dimension):
            raise DimensionMismatchError(
                self.unit.symbol,
                target.symbol,
                str(self.unit.dimension),
                str(target.dimension),
            )
        return Quantity(target.from_base(self.unit.to_base(self.magnitude)), target)

    def to_base_units(self, registry: UnitRegistry) -> Quantity:
        dim = self.unit.dimension
        base = Unit(symbol=registry.base_expression(dim), dimension=dim)
        return self.to(base)

    # ── Arithmetic (result is in the left operand's unit) ──

    def __add__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.magnitude + self._aligned(other, "add"), self.unit)

    def __sub__(self, other: Quantity) -> Quantity:
        if not isinstance(other, Quantity):
            return NotImplemented
        return Quantity(self.magnitude - self._aligned(other, "subtract"), self.unit)

    def _aligned(self, other: Quantity, operation: str) -> float:
        converted = other.to(self.unit)
        for unit in (self.unit, other.unit):
            if unit.is_offset:
                raise OffsetUnitError(unit.symbol, operation)
        return converted.magnitude

    def __str__(self) -> str:
        return f"{self.magnitude!r} {self.unit.symbol}"
