"""
CORS Middleware

Allow-list based CORS filter: reflects permitted origins back to the client
and answers preflight requests without calling the application.
"""

from __future__ import annotations

from collections.abc import Callable

import structlog
from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from corsfilter.config import ConfigurationProvider, PolicyConfiguration, settings
from corsfilter.monitoring.metrics import (
    ALLOWED,
    DENIED,
    NO_ORIGIN,
    PREFLIGHT,
    record_decision,
)
from corsfilter.policy import OriginPolicyEvaluator

logger = structlog.get_logger()

PREFLIGHT_REQUEST = "OPTIONS"


class CORSFilterMiddleware(BaseHTTPMiddleware):
    """
    Apply the CORS allow-list to every HTTP request.

    Non-HTTP scopes (websocket, lifespan) never reach dispatch; they are
    forwarded by BaseHTTPMiddleware untouched.
    """

    def __init__(self, app: ASGIApp, evaluator: OriginPolicyEvaluator) -> None:
        super().__init__(app)
        self.evaluator = evaluator

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Handle CORS access controls."""
        # One snapshot per request, even if the policy changes mid-flight
        policy = self.evaluator.snapshot()
        if not self.evaluator.is_enabled(policy):
            return await call_next(request)

        access_controls = self._access_control_headers(request, policy)

        # Preflight requests end here with an empty 200
        if request.method == PREFLIGHT_REQUEST:
            record_decision(PREFLIGHT)
            logger.debug("CORS preflight answered", path=request.url.path)
            response = Response(status_code=200)
        else:
            response = await call_next(request)

        for name, value in access_controls:
            response.headers.append(name, value)

        return response

    def _access_control_headers(
        self, request: Request, policy: PolicyConfiguration
    ) -> list[tuple[str, str]]:
        """Build the CORS headers for the request origin, empty if not allowed."""
        origin = request.headers.get("Origin")
        if origin is None:
            record_decision(NO_ORIGIN)
            return []

        origin = origin.strip()
        if not self.evaluator.is_allowed(origin, policy):
            record_decision(DENIED)
            logger.debug("CORS origin rejected", origin=origin, method=request.method)
            return []

        record_decision(ALLOWED)
        headers = []
        methods = self.evaluator.get_allowed_methods(policy)
        # Unset methods produce no header rather than an empty value
        if methods is not None:
            headers.append(("Access-Control-Allow-Methods", methods))
        headers.append(("Access-Control-Allow-Credentials", "true"))
        headers.append(("Access-Control-Allow-Origin", origin))
        return headers


def setup_cors(
    app: FastAPI, provider: ConfigurationProvider | None = None
) -> ConfigurationProvider:
    """
    Register the CORS filter on an application.

    Builds a provider from the environment settings when none is given. The
    provider is stored on ``app.state.cors_config`` and returned so the host
    can change the policy at runtime.
    """
    provider = provider or ConfigurationProvider(settings)
    app.state.cors_config = provider
    app.add_middleware(CORSFilterMiddleware, evaluator=OriginPolicyEvaluator(provider))
    return provider
