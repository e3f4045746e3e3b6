"""Standardized error record kept in the store's error slot."""

from pydantic import BaseModel, ConfigDict, Field


class CatalogError(BaseModel):
    """Most recent failure reported by a catalog operation."""

    model_config = ConfigDict(frozen=True)

    detail: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
