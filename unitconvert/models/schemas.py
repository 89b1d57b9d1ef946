"""Pydantic schemas for API request/response validation."""

from __future__ import annotations

from pydantic import BaseModel, field_validator


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("Value cannot be empty")
    return v


class ConvertRequest(BaseModel):
    quantity: str       # "2 m"
    target_unit: str    # "ft"

    @field_validator("quantity", "target_unit")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_blank(v)


class ConvertResponse(BaseModel):
    magnitude: float
    unit: str
    text: str  # "6.561679790026247 ft"


class CompareRequest(BaseModel):
    a: str  # unit symbol or quantity string
    b: str

    @field_validator("a", "b")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_blank(v)


class CompareResponse(BaseModel):
    same_dimensions: bool


class DefinitionRequest(BaseModel):
    definition: str  # "football_field = 100 yd"

    @field_validator("definition")
    @classmethod
    def not_empty(cls, v: str) -> str:
        return _not_blank(v)


class UnitInfo(BaseModel):
    symbol: str
    scale_to_base: float
    offset_to_base: float
    dimension: str
    base_unit: str


class UnitListResponse(BaseModel):
    count: int
    units: list[str]
