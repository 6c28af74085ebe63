"""
CORS Filter Configuration Endpoints

Read and replace the CORS policy at runtime. Only mounted when
CORS_FILTER_CONFIG_API_ENABLED is set.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from corsfilter.config import ConfigurationProvider, PolicyConfiguration
from corsfilter.exceptions import ConfigurationError
from corsfilter.models.config import CORSFilterConfig

router = APIRouter(prefix="/cors-filter")


def get_provider(request: Request) -> ConfigurationProvider:
    """Configuration provider registered by setup_cors."""
    return request.app.state.cors_config


def _to_model(snapshot: PolicyConfiguration) -> CORSFilterConfig:
    return CORSFilterConfig(
        enabled=snapshot.enabled,
        allowed_origins=snapshot.allowed_origins,
        allowed_methods=snapshot.allowed_methods,
    )


@router.get("/config", response_model=CORSFilterConfig, summary="Current CORS policy")
async def read_config(
    provider: Annotated[ConfigurationProvider, Depends(get_provider)],
) -> CORSFilterConfig:
    return _to_model(provider.current())


@router.post("/config", response_model=CORSFilterConfig, summary="Replace the CORS policy")
async def update_config(
    payload: Annotated[dict[str, Any], Body()],
    provider: Annotated[ConfigurationProvider, Depends(get_provider)],
) -> CORSFilterConfig:
    """
    Apply new CORS settings; they take effect on the next request.

    The body uses the form keys enabled, allowedOrigins and allowedMethods.
    """
    try:
        snapshot = provider.configure(payload)
    except ConfigurationError as exc:
        raise HTTPException(
            status_code=422,
            detail=str(exc),
        ) from exc

    return _to_model(snapshot)
