"""Dimension vectors: exponents over a fixed set of base dimensions."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum


class BaseDimension(Enum):
    LENGTH = "L"
    MASS = "M"
    TIME = "T"
    CURRENT = "I"
    TEMPERATURE = "THETA"
    AMOUNT = "N"
    LUMINOUS_INTENSITY = "J"
    ANGLE = "ANGLE"  # extension slot

    @property
    def symbol(self) -> str:
        return self.value


class Composition(Enum):
    ADD = "add"            # unit multiplication
    SUBTRACT = "subtract"  # unit division


@dataclass(frozen=True)
class Dimension:
    """Exponents of each base dimension.

    velocity = length^1 * time^-1 -> Dimension(length=1, time=-1)
    """
    length: int = 0
    mass: int = 0
    time: int = 0
    current: int = 0
    temperature: int = 0
    amount: int = 0
    luminous_intensity: int = 0
    angle: int = 0

    @classmethod
    def of(cls, base: BaseDimension) -> Dimension:
        return cls(**{base.name.lower(): 1})

    @classmethod
    def from_tuple(cls, exponents: tuple[int, ...]) -> Dimension:
        return cls(*exponents)

    def as_tuple(self) -> tuple[int, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def __mul__(self, other: Dimension) -> Dimension:
        return compose(self, other, Composition.ADD)

    def __truediv__(self, other: Dimension) -> Dimension:
        return compose(self, other, Composition.SUBTRACT)

    def __pow__(self, power: int) -> Dimension:
        return Dimension.from_tuple(tuple(e * power for e in self.as_tuple()))

    @property
    def is_dimensionless(self) -> bool:
        return not any(self.as_tuple())

    @property
    def is_base(self) -> bool:
        """True for exactly one base dimension raised to the first power."""
        exps = self.as_tuple()
        return sorted(exps) == [0] * (len(exps) - 1) + [1]

    def __str__(self) -> str:
        if self.is_dimensionless:
            return "[1]"
        parts = []
        for base, exp in zip(BaseDimension, self.as_tuple()):
            if exp == 1:
                parts.append(base.symbol)
            elif exp:
                parts.append(f"{base.symbol}^{exp}")
        return "[" + " ".join(parts) + "]"


DIMENSIONLESS = Dimension()

# Symbols accepted inside a bracketed dimension expression, e.g. [M L^2 T^-2]
DIMENSION_SYMBOLS: dict[str, Dimension] = {b.symbol: Dimension.of(b) for b in BaseDimension}


def compose(a: Dimension, b: Dimension, op: Composition) -> Dimension:
    """Combine two dimension vectors component-wise."""
    if op is Composition.ADD:
        return Dimension.from_tuple(tuple(x + y for x, y in zip(a.as_tuple(), b.as_tuple())))
    return Dimension.from_tuple(tuple(x - y for x, y in zip(a.as_tuple(), b.as_tuple())))


def equals(a: Dimension, b: Dimension) -> bool:
    return a.as_tuple() == b.as_tuple()
