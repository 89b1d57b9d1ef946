"""Exception hierarchy for the unit engine."""

from __future__ import annotations


class UnitConvertError(Exception):
    """Base class for every error raised by the engine."""


# ── Parsing ───────────────────────────────────────────────────────────────────

class ParseError(UnitConvertError):
    """Raised when input text does not match the expected grammar."""

    def __init__(self, message: str, text: str = "", col: int = -1) -> None:
        self.message = message
        self.text = text
        self.col = col
        if col >= 0:
            super().__init__(f"{message} (col {col} of '{text}')")
        else:
            super().__init__(f"{message}: '{text}'")


class MalformedQuantityError(ParseError):
    """A quantity string is missing its number or its unit."""


class MalformedDefinitionError(ParseError):
    """A definition string is missing '=' or one of its sides."""


class MalformedExpressionError(ParseError):
    """A unit or dimension expression could not be parsed or evaluated."""


# ── Registry ──────────────────────────────────────────────────────────────────

class UnknownUnitError(UnitConvertError, LookupError):
    """Raised when a unit symbol is not in the registry."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Unit '{symbol}' does not exist in the registry.")

    def __str__(self) -> str:
        # LookupError would otherwise repr() the argument
        return self.args[0]


class RegistryError(UnitConvertError):
    """Base class for registration failures."""


class DuplicateUnitError(RegistryError):
    """Raised when a symbol is registered twice."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"Unit '{symbol}' already exists in the registry.")


class InvalidDefinitionError(RegistryError):
    """Raised when a unit definition is numerically or referentially invalid."""

    def __init__(self, message: str, symbol: str = "", line: int = 0) -> None:
        self.message = message
        self.symbol = symbol
        self.line = line
        prefix = f"Line {line}: " if line else ""
        super().__init__(f"{prefix}{message}")


# ── Conversion ────────────────────────────────────────────────────────────────

class ConversionError(UnitConvertError):
    """Base class for failures while converting between units."""


class DimensionMismatchError(ConversionError):
    """Raised when converting between units of different dimensions."""

    def __init__(self, source: str, target: str, source_dim: str = "", target_dim: str = "") -> None:
        self.source = source
        self.target = target
        detail = f" ({source_dim} vs {target_dim})" if source_dim or target_dim else ""
        super().__init__(
            f"Cannot convert from '{source}' to '{target}': incompatible dimensions{detail}"
        )


class OffsetUnitError(ConversionError):
    """Raised when an offset (affine) unit is combined with another unit."""

    def __init__(self, symbol: str, operation: str) -> None:
        self.symbol = symbol
        super().__init__(
            f"Cannot {operation} offset unit '{symbol}'. Use a delta unit instead."
        )
