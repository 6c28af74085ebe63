"""
Health Check Models

Pydantic models for the health endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Overall health status")
    version: str = Field(..., description="Service version")
    timestamp: str = Field(..., description="Check timestamp in ISO format")
    cors_enabled: bool = Field(..., description="Whether the CORS filter is active")
