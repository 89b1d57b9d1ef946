"""Conversion endpoints: convert a quantity string, compare dimensions."""

from fastapi import APIRouter, Depends

from unitconvert.api.deps import get_engine, http_error
from unitconvert.core.engine import UnitEngine
from unitconvert.core.errors import UnitConvertError
from unitconvert.models.schemas import (
    CompareRequest,
    CompareResponse,
    ConvertRequest,
    ConvertResponse,
)
from unitconvert.utils.units import format_quantity

router = APIRouter(tags=["convert"])


@router.post("/convert", response_model=ConvertResponse)
async def convert_quantity(req: ConvertRequest, engine: UnitEngine = Depends(get_engine)):
    """Convert a quantity string to a target unit. Returns the magnitude and rendered text."""
    try:
        magnitude = engine.get_magnitude_in_unit(req.quantity, req.target_unit)
    except UnitConvertError as e:
        raise http_error(e) from e

    unit = req.target_unit.strip()
    text = format_quantity(magnitude, unit, engine.output_precision)
    return ConvertResponse(magnitude=magnitude, unit=unit, text=text)


@router.post("/dimensions/compare", response_model=CompareResponse)
async def compare_dimensions(req: CompareRequest, engine: UnitEngine = Depends(get_engine)):
    """Check whether two units or quantities share a physical dimension."""
    try:
        same = engine.have_same_dimensions(req.a, req.b)
    except UnitConvertError as e:
        raise http_error(e) from e
    return CompareResponse(same_dimensions=same)
