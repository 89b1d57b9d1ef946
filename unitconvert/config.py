from __future__ import annotations

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "UnitConvert"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    load_builtin_units: bool = True
    definitions_file: Optional[str] = None  # extra "name = value unit" lines
    try_si_prefixes: bool = True
    output_precision: Optional[int] = None  # None = shortest round-trip repr
    max_input_length: int = 1_000  # characters
    log_level: str = "INFO"

    class Config:
        env_prefix = "UNITCONVERT_"

    @field_validator("output_precision")
    @classmethod
    def precision_positive(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 1:
            raise ValueError("output_precision must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def known_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{v}'")
        return level


settings = Settings()
