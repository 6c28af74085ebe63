"""
Configuration Models

Pydantic models for the CORS filter configuration payload.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CORSFilterConfig(BaseModel):
    """CORS filter settings as submitted by an administrator."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = Field(..., description="Whether the CORS filter is active")
    allowed_origins: str | None = Field(
        default=None,
        alias="allowedOrigins",
        description="Comma-separated allowed origins, '*' allows any origin",
    )
    allowed_methods: str | None = Field(
        default=None,
        alias="allowedMethods",
        description="Value sent in Access-Control-Allow-Methods",
    )
