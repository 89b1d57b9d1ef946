"""AST node definitions for quantities, unit expressions and definitions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from unitconvert.core.dimension import Dimension


@dataclass
class NumberNode:
    value: float
    col: int = 0


@dataclass
class UnitRef:
    symbol: str
    col: int = 0


@dataclass
class BinaryOp:
    op: str  # "*" or "/"
    left: "UnitExpr"
    right: "UnitExpr"
    col: int = 0


@dataclass
class PowerNode:
    base: "UnitExpr"
    exponent: int
    col: int = 0


@dataclass
class OffsetNode:
    """``term + offset``: readings of the result are readings of ``term`` plus ``offset``."""
    term: "UnitExpr"
    offset: float
    col: int = 0


UnitExpr = Union[NumberNode, UnitRef, BinaryOp, PowerNode, OffsetNode]


@dataclass
class DimensionRef:
    """A bracketed dimension expression such as ``[M L^2 T^-2]``."""
    dimension: Dimension
    col: int = 0


@dataclass
class QuantityNode:
    magnitude: float
    unit: UnitExpr
    unit_text: str


@dataclass
class DefinitionNode:
    symbol: str
    rhs: Union[UnitExpr, DimensionRef]
    lhs_scale: float = 1.0
    rhs_text: str = ""

    @property
    def is_base_unit(self) -> bool:
        return isinstance(self.rhs, DimensionRef)
