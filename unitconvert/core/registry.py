"""The unit registry: symbol -> Unit table shared by every operation.

Usage:
    reg = UnitRegistry.with_builtin_units()
    reg.add_definition("football_field = 100 yd")
    reg.resolve("football_field").scale_to_base   # 91.44

All reads and writes go through one re-entrant lock, so a lookup racing a
registration sees the registry either before or after the new unit, never a
half-inserted entry.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional, Union

from unitconvert.core.catalog import BUILTIN_DEFINITIONS
from unitconvert.core.dimension import BaseDimension, Dimension
from unitconvert.core.errors import (
    DuplicateUnitError,
    InvalidDefinitionError,
    UnitConvertError,
    UnknownUnitError,
)
from unitconvert.core.parser.resolver import ParsedDefinition, parse_definition
from unitconvert.core.unit import Unit

logger = logging.getLogger(__name__)


# ── Constants ────────────────────────────────────────────────────────────────

SI_PREFIXES: dict[str, int] = {
    "Y": 24, "yotta": 24,
    "Z": 21, "zetta": 21,
    "E": 18, "exa": 18,
    "P": 15, "peta": 15,
    "T": 12, "tera": 12,
    "G": 9, "giga": 9,
    "M": 6, "mega": 6,
    "k": 3, "kilo": 3,
    "h": 2, "hecto": 2,
    "da": 1, "deca": 1,
    "d": -1, "deci": -1,
    "c": -2, "centi": -2,
    "m": -3, "milli": -3,
    "u": -6, "micro": -6,
    "n": -9, "nano": -9,
    "p": -12, "pico": -12,
    "f": -15, "femto": -15,
    "a": -18, "atto": -18,
    "z": -21, "zepto": -21,
    "y": -24, "yocto": -24,
}

# "da" must be tried before "d", "deca" before "da"
_PREFIXES_LONGEST_FIRST = sorted(SI_PREFIXES, key=len, reverse=True)


class UnitRegistry:
    """Symbol -> Unit table plus the canonical (base) unit of each dimension."""

    def __init__(self, try_si_prefixes: bool = True) -> None:
        self._units: dict[str, Unit] = {}
        self._canonical: dict[Dimension, str] = {}
        self._lock = threading.RLock()
        self._initialized = False
        self.try_si_prefixes = try_si_prefixes

    @classmethod
    def with_builtin_units(cls, try_si_prefixes: bool = True) -> UnitRegistry:
        return cls(try_si_prefixes=try_si_prefixes).initialize()

    def initialize(self) -> UnitRegistry:
        """Load the built-in catalog. Calling it again is a no-op."""
        with self._lock:
            if not self._initialized:
                self.load_definitions(BUILTIN_DEFINITIONS.splitlines(), source="built-in catalog")
                self._initialized = True
        return self

    # ── Queries ──

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._units

    def __len__(self) -> int:
        with self._lock:
            return len(self._units)

    def symbols(self) -> list[str]:
        with self._lock:
            return sorted(self._units)

    def resolve(self, symbol: str) -> Unit:
        """Exact-match lookup."""
        with self._lock:
            unit = self._units.get(symbol)
        if unit is None:
            raise UnknownUnitError(symbol)
        return unit

    def lookup(self, symbol: str) -> Unit:
        """Exact match first, then an SI-prefixed version of a registered unit."""
        with self._lock:
            unit = self._units.get(symbol)
            if unit is not None:
                return unit
            if self.try_si_prefixes:
                for prefix in _PREFIXES_LONGEST_FIRST:
                    if symbol.startswith(prefix) and len(symbol) > len(prefix):
                        base = self._units.get(symbol[len(prefix):])
                        if base is not None:
                            return base.scaled(10.0 ** SI_PREFIXES[prefix], symbol)
        raise UnknownUnitError(symbol)

    def canonical_unit(self, dimension: Dimension) -> Optional[str]:
        with self._lock:
            return self._canonical.get(dimension)

    def base_expression(self, dimension: Dimension) -> str:
        """Symbol of the coherent unit for ``dimension``, e.g. ``kg*m^2/s^2``."""
        with self._lock:
            if dimension in self._canonical:
                return self._canonical[dimension]
            if dimension.is_dimensionless:
                return "1"
            num, den = [], []
            for base, exp in zip(BaseDimension, dimension.as_tuple()):
                if not exp:
                    continue
                sym = self._canonical.get(Dimension.of(base), f"[{base.symbol}]")
                part = sym if abs(exp) == 1 else f"{sym}^{abs(exp)}"
                (num if exp > 0 else den).append(part)
        expr = "*".join(num) or "1"
        if den:
            expr += "/" + "/".join(den)
        return expr

    # ── Registration ──

    def register(self, unit: Unit) -> Unit:
        """Insert a new unit. Fails on a duplicate symbol or an invalid scale/offset."""
        with self._lock:
            self._insert(unit)
        logger.debug("Registered unit %s (scale=%r, offset=%r, dim=%s)",
                     unit.symbol, unit.scale_to_base, unit.offset_to_base, unit.dimension)
        return unit

    def add_base_unit(self, symbol: str, dimension: Dimension) -> Unit:
        """Declare ``symbol`` as the canonical unit of ``dimension``."""
        unit = Unit(symbol=symbol, dimension=dimension)
        with self._lock:
            existing = self._canonical.get(dimension)
            if existing is not None:
                raise InvalidDefinitionError(
                    f"Dimension {dimension} already has base unit '{existing}'", symbol
                )
            self._insert(unit)
            self._canonical[dimension] = symbol
        logger.debug("Registered base unit %s for %s", symbol, dimension)
        return unit

    def define(self, symbol: str, factor: float, base_symbol: str) -> Unit:
        """Register ``symbol = factor base_symbol``."""
        with self._lock:
            try:
                base = self.lookup(base_symbol)
            except UnknownUnitError as e:
                raise InvalidDefinitionError(
                    f"Unit '{symbol}' refers to unknown unit '{base_symbol}'", symbol
                ) from e
            return self.register(base.scaled(factor).renamed(symbol))

    def add_definition(self, text: str) -> Unit:
        """Parse and register a definition such as ``football_field = 100 yd``."""
        with self._lock:
            parsed = parse_definition(text, self)
            return self._apply(parsed)

    def load_definitions(self, lines: Iterable[str], source: str = "<definitions>") -> list[Unit]:
        """Register one definition per line. Either every line is applied or none is."""
        added: list[Unit] = []
        with self._lock:
            try:
                for line_num, line in enumerate(lines, 1):
                    stripped = line.split("#", 1)[0].strip()
                    if not stripped:
                        continue
                    try:
                        added.append(self.add_definition(stripped))
                    except UnitConvertError as e:
                        raise InvalidDefinitionError(f"{source}: {e}", line=line_num) from e
            except BaseException:
                self._rollback(added)
                raise
        logger.info("Loaded %d unit definitions from %s", len(added), source)
        return added

    def load_file(self, path: Union[str, Path]) -> list[Unit]:
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            return self.load_definitions(f.readlines(), source=str(path))

    # ── Internals ──

    def _apply(self, parsed: ParsedDefinition) -> Unit:
        if parsed.is_base_unit:
            return self.add_base_unit(parsed.symbol, parsed.dimension)
        return self.register(parsed.to_unit())

    def _insert(self, unit: Unit) -> None:
        if not unit.symbol or unit.symbol != unit.symbol.strip():
            raise InvalidDefinitionError(f"Invalid unit symbol '{unit.symbol}'", unit.symbol)
        if not unit.is_valid:
            raise InvalidDefinitionError(
                f"Unit '{unit.symbol}' must have a finite nonzero scale and a finite offset "
                f"(scale={unit.scale_to_base!r}, offset={unit.offset_to_base!r})",
                unit.symbol,
            )
        if unit.symbol in self._units:
            raise DuplicateUnitError(unit.symbol)
        self._units[unit.symbol] = unit

    def _rollback(self, added: list[Unit]) -> None:
        for unit in added:
            self._units.pop(unit.symbol, None)
            if self._canonical.get(unit.dimension) == unit.symbol:
                del self._canonical[unit.dimension]
        if added:
            logger.debug("Rolled back %d unit definitions", len(added))

    def __repr__(self) -> str:
        return f"UnitRegistry({len(self)} units)"
