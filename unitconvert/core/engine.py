"""UnitEngine: one registry plus the four operations exposed to hosts.

Usage:
    engine = UnitEngine.create()
    engine.unit_convert_string("2 m", "ft")          # '6.561679790026247 ft'
    engine.get_magnitude_in_unit("2 m", "cm")        # 200.0
    engine.have_same_dimensions("2 m", "s")          # False
    engine.add_unit_definition("football_field = 100 yd")

Each engine owns its registry, so independent engines never see each other's
definitions.
"""

from __future__ import annotations

import logging
from typing import Optional

from unitconvert.config import Settings, settings as default_settings
from unitconvert.core import conversion
from unitconvert.core.errors import ParseError
from unitconvert.core.parser.resolver import parse_quantity
from unitconvert.core.registry import UnitRegistry
from unitconvert.core.unit import Unit

logger = logging.getLogger(__name__)


class UnitEngine:
    def __init__(self, registry: UnitRegistry, output_precision: Optional[int] = None,
                 max_input_length: int = 1_000) -> None:
        self.registry = registry
        self.output_precision = output_precision
        self.max_input_length = max_input_length

    @classmethod
    def create(cls, config: Optional[Settings] = None) -> UnitEngine:
        """Build an engine from settings: built-in catalog plus an optional definitions file."""
        config = config or default_settings
        registry = UnitRegistry(try_si_prefixes=config.try_si_prefixes)
        if config.load_builtin_units:
            registry.initialize()
        if config.definitions_file:
            registry.load_file(config.definitions_file)
        logger.info("Unit engine ready with %d units", len(registry))
        return cls(
            registry,
            output_precision=config.output_precision,
            max_input_length=config.max_input_length,
        )

    # ── Host operations ──

    def unit_convert_string(self, text: str, target_unit: str) -> str:
        """UnitConvertString: ``"2 m", "ft"`` -> ``"6.561679790026247 ft"``."""
        self._check_length(text, target_unit)
        return conversion.convert_to_string(text, target_unit, self.registry, self.output_precision)

    def get_magnitude_in_unit(self, text: str, target_unit: str) -> float:
        """GetMagnitudeInUnit: ``"2 m", "cm"`` -> ``200.0``."""
        self._check_length(text, target_unit)
        quantity = parse_quantity(text, self.registry)
        return conversion.convert(quantity, target_unit, self.registry)

    def have_same_dimensions(self, a: str, b: str) -> bool:
        """HaveSameDimensions: unit symbols or quantity strings."""
        self._check_length(a, b)
        return conversion.have_same_dimensions(a, b, self.registry)

    def add_unit_definition(self, definition: str) -> bool:
        """AddUnitDefinition: ``"football_field = 100 yd"``. Raises on failure."""
        self.define_unit(definition)
        return True

    # ── Extras ──

    def define_unit(self, definition: str) -> Unit:
        """Like add_unit_definition, but returns the registered unit."""
        self._check_length(definition)
        unit = self.registry.add_definition(definition)
        logger.info("Added unit definition %r", definition)
        logger.debug("%s -> scale=%r offset=%r dim=%s",
                     unit.symbol, unit.scale_to_base, unit.offset_to_base, unit.dimension)
        return unit

    def describe_unit(self, symbol: str) -> dict:
        unit: Unit = self.registry.resolve(symbol)
        return {
            "symbol": unit.symbol,
            "scale_to_base": unit.scale_to_base,
            "offset_to_base": unit.offset_to_base,
            "dimension": str(unit.dimension),
            "base_unit": self.registry.base_expression(unit.dimension),
        }

    def _check_length(self, *texts: str) -> None:
        for text in texts:
            if len(text) > self.max_input_length:
                raise ParseError(
                    f"Input exceeds {self.max_input_length} characters", text[:40] + "..."
                )
