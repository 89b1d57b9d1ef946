"""Registry endpoints: list and inspect units, register new ones."""

from fastapi import APIRouter, Depends

from unitconvert.api.deps import get_engine, http_error
from unitconvert.core.engine import UnitEngine
from unitconvert.core.errors import UnitConvertError, UnknownUnitError
from unitconvert.models.schemas import DefinitionRequest, UnitInfo, UnitListResponse

router = APIRouter(tags=["units"])


@router.get("/units", response_model=UnitListResponse)
async def list_units(engine: UnitEngine = Depends(get_engine)):
    symbols = engine.registry.symbols()
    return UnitListResponse(count=len(symbols), units=symbols)


@router.get("/units/{symbol}", response_model=UnitInfo)
async def get_unit(symbol: str, engine: UnitEngine = Depends(get_engine)):
    try:
        return UnitInfo(**engine.describe_unit(symbol))
    except UnknownUnitError as e:
        raise http_error(e, status_code=404) from e


@router.post("/units", response_model=UnitInfo, status_code=201)
async def add_unit(req: DefinitionRequest, engine: UnitEngine = Depends(get_engine)):
    """Register a unit from a definition string such as ``football_field = 100 yd``."""
    try:
        unit = engine.define_unit(req.definition)
    except UnitConvertError as e:
        raise http_error(e) from e
    return UnitInfo(**engine.describe_unit(unit.symbol))
