"""
Pydantic schemas for API request/response validation.

These schemas define the contract between the API and clients. Wire field
names are camelCase (leafImage, soilResult, pestRisk); Python attributes are
snake_case with aliases.
"""

import math
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CamelModel(BaseModel):
    """Base schema accepting either alias or attribute names."""
    model_config = ConfigDict(populate_by_name=True)


# === Leaf classification ===

class LeafRequest(CamelModel):
    """
    Request schema for leaf disease classification.

    Attributes:
        leaf_image: Data URL ("data:image/jpeg;base64,<data>") or bare base64
    """
    leaf_image: Optional[str] = Field(
        default=None,
        alias="leafImage",
        description="Base64-encoded leaf image, usually as a data URL"
    )


class LeafResponse(CamelModel):
    """Leaf classification result. `confidence` is omitted when no model is loaded."""
    leaf_status: str = Field(..., alias="leafStatus")
    confidence: Optional[str] = Field(
        default=None,
        description="Score of the chosen label, formatted to two decimals"
    )


# === Soil analysis ===

class SoilRequest(CamelModel):
    """
    Soil reading. Values are not range-checked.

    Anything that is not a number (missing, null, "abc") is kept as None and
    fails every rule comparison, so it falls through to later rules.
    """
    ph: Optional[float] = None
    moisture: Optional[float] = None

    @field_validator("ph", "moisture", mode="before")
    @classmethod
    def coerce_reading(cls, v: Any) -> Optional[float]:
        if v is None:
            return None
        if isinstance(v, str) and not v.strip():
            return None
        try:
            value = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(value) else value


class SoilResponse(CamelModel):
    soil_result: str = Field(..., alias="soilResult")


# === Pest risk ===

class PestRiskRequest(CamelModel):
    """
    Coordinates to assess. Both are required; zero is a valid value.

    An empty string counts as not provided.
    """
    lat: Optional[float] = None
    lon: Optional[float] = None

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PestRiskResponse(CamelModel):
    temperature: float = Field(..., description="Air temperature in °C")
    humidity: float = Field(..., description="Relative humidity in %")
    pest_risk: str = Field(..., alias="pestRisk")


# === Errors ===

class ErrorResponse(BaseModel):
    """Uniform error body."""
    error: str
