"""Shared engine instance and error translation for the API routers."""

from __future__ import annotations

from fastapi import HTTPException

from unitconvert.config import settings
from unitconvert.core.engine import UnitEngine
from unitconvert.core.errors import (
    DuplicateUnitError,
    ParseError,
    UnitConvertError,
    UnknownUnitError,
)

# One engine per process; tests swap it through app.dependency_overrides.
_engine = UnitEngine.create(settings)


def get_engine() -> UnitEngine:
    return _engine


def http_error(e: UnitConvertError, status_code: int = 422) -> HTTPException:
    """Translate an engine error into an HTTPException with a structured detail."""
    detail: dict = {"message": str(e), "kind": type(e).__name__}
    if isinstance(e, (UnknownUnitError, DuplicateUnitError)):
        detail["symbol"] = e.symbol
    if isinstance(e, ParseError):
        detail["text"] = e.text
        detail["col"] = e.col
    if isinstance(e, DuplicateUnitError):
        status_code = 409
    return HTTPException(status_code=status_code, detail=[detail])
