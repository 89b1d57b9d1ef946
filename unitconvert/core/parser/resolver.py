"""Evaluate parsed ASTs against a unit registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from unitconvert.core.dimension import Dimension
from unitconvert.core.errors import InvalidDefinitionError, MalformedExpressionError
from unitconvert.core.parser.ast_nodes import (
    NumberNode,
    UnitRef,
    BinaryOp,
    PowerNode,
    OffsetNode,
    UnitExpr,
    DefinitionNode,
)
from unitconvert.core.parser.parser import (
    parse_quantity_ast,
    parse_operand_ast,
    parse_unit_ast,
    parse_definition_ast,
)
from unitconvert.core.quantity import Quantity
from unitconvert.core.unit import Unit

if TYPE_CHECKING:
    from unitconvert.core.registry import UnitRegistry


@dataclass
class ParsedDefinition:
    """``symbol = magnitude base_unit [+ offset]`` or ``symbol = [dimension]``."""
    symbol: str
    magnitude: float
    base_unit: Optional[Unit]
    offset: float = 0.0
    dimension: Optional[Dimension] = None
    text: str = ""

    @property
    def is_base_unit(self) -> bool:
        return self.base_unit is None

    def to_unit(self) -> Unit:
        if self.base_unit is None:
            return Unit(symbol=self.symbol, dimension=self.dimension)
        unit = self.base_unit.scaled(self.magnitude)
        if self.offset:
            unit = unit.shifted(self.offset)
        return unit.renamed(self.symbol)


def evaluate(node: UnitExpr, registry: UnitRegistry, source: str = "") -> Unit:
    """Build the unit an expression describes, resolving names in ``registry``."""
    if isinstance(node, NumberNode):
        return Unit.number(node.value)
    if isinstance(node, UnitRef):
        return registry.lookup(node.symbol)
    if isinstance(node, BinaryOp):
        left = evaluate(node.left, registry, source)
        right = evaluate(node.right, registry, source)
        if node.op == "*":
            return left * right
        if right.scale_to_base == 0.0:
            raise MalformedExpressionError("Division by zero", source, node.col)
        return left / right
    if isinstance(node, PowerNode):
        base = evaluate(node.base, registry, source)
        try:
            return base ** node.exponent
        except ZeroDivisionError as e:
            raise MalformedExpressionError("Division by zero", source, node.col) from e
        except OverflowError as e:
            raise MalformedExpressionError(
                f"Scale of '{base.symbol}^{node.exponent}' is out of range", source, node.col
            ) from e
    if isinstance(node, OffsetNode):
        return evaluate(node.term, registry, source).shifted(node.offset)
    raise TypeError(f"Unexpected node {node!r}")


def _checked(unit: Unit, source: str) -> Unit:
    """Reject expression units whose scale collapsed to zero or overflowed."""
    if not unit.is_valid:
        raise MalformedExpressionError(
            f"Unit '{unit.symbol}' has an unusable scale ({unit.scale_to_base!r})", source
        )
    return unit


def _pop_leading_number(node: UnitExpr) -> tuple[Optional[float], Optional[UnitExpr]]:
    """Split ``100 yd`` into ``(100, yd)``; the number must lead a product chain."""
    if isinstance(node, NumberNode):
        return node.value, None
    if isinstance(node, BinaryOp) and node.op == "*":
        value, rest = _pop_leading_number(node.left)
        if value is not None:
            if rest is None:
                return value, node.right
            return value, BinaryOp("*", rest, node.right, node.col)
    return None, node


def _split_offset(node: UnitExpr) -> tuple[UnitExpr, float]:
    offset = 0.0
    while isinstance(node, OffsetNode):
        offset += node.offset
        node = node.term
    return node, offset


def resolve_definition(node: DefinitionNode, registry: UnitRegistry, source: str = "") -> ParsedDefinition:
    if node.lhs_scale == 0.0:
        raise InvalidDefinitionError(f"Left-hand scale of '{node.symbol}' must be nonzero", node.symbol)

    if node.is_base_unit:
        if node.lhs_scale != 1.0:
            raise InvalidDefinitionError(
                f"Base unit '{node.symbol}' cannot carry a scale", node.symbol
            )
        return ParsedDefinition(
            symbol=node.symbol,
            magnitude=1.0,
            base_unit=None,
            dimension=node.rhs.dimension,
            text=source,
        )

    term, offset = _split_offset(node.rhs)
    value, rest = _pop_leading_number(term)
    magnitude = (1.0 if value is None else value) / node.lhs_scale
    base_unit = Unit.number(1.0).renamed("1") if rest is None else evaluate(rest, registry, source)
    return ParsedDefinition(
        symbol=node.symbol,
        magnitude=magnitude,
        base_unit=base_unit,
        offset=offset,
        text=source,
    )


# ── Public parse functions ──

def parse_quantity(text: str, registry: UnitRegistry) -> Quantity:
    """Parse ``"<number> <unit>"`` into a Quantity."""
    node = parse_quantity_ast(text)
    unit = _checked(evaluate(node.unit, registry, text), text)
    return Quantity(node.magnitude, unit.renamed(node.unit_text))


def parse_operand(text: str, registry: UnitRegistry) -> Quantity:
    """Parse a quantity string or a bare unit (magnitude 1)."""
    node = parse_operand_ast(text)
    unit = _checked(evaluate(node.unit, registry, text), text)
    return Quantity(node.magnitude, unit.renamed(node.unit_text))


def parse_unit(text: str, registry: UnitRegistry) -> Unit:
    """Resolve a unit symbol or unit expression such as ``m/s^2``."""
    symbol = text.strip()
    if symbol in registry:
        return registry.resolve(symbol)
    unit = _checked(evaluate(parse_unit_ast(text), registry, text), text)
    return unit.renamed(symbol)


def parse_definition(text: str, registry: UnitRegistry) -> ParsedDefinition:
    """Parse ``"<symbol> = <number> <existing-unit>"`` and resolve its right-hand side."""
    return resolve_definition(parse_definition_ast(text), registry, text)
