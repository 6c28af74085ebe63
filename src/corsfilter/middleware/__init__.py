"""Request pipeline stages for the CORS filter service."""

from __future__ import annotations

from .cors import CORSFilterMiddleware, setup_cors
from .logging import logging_middleware

__all__ = [
    "CORSFilterMiddleware",
    "logging_middleware",
    "setup_cors",
]
