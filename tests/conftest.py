"""Root-level pytest configuration for all tests."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest

# Settings are read at import time; keep the module-level app free of metrics
# and independent from any developer .env values
os.environ["CORS_FILTER_ENABLE_METRICS"] = "false"
os.environ.pop("CORS_FILTER_ENABLED", None)
os.environ.pop("CORS_FILTER_ALLOWED_ORIGINS", None)
os.environ.pop("CORS_FILTER_ALLOWED_METHODS", None)

from corsfilter.config import ConfigurationProvider, CORSFilterSettings  # noqa: E402


@pytest.fixture
def test_settings() -> CORSFilterSettings:
    """Settings with defaults only, no .env file."""
    return CORSFilterSettings(_env_file=None, ENABLE_METRICS=False)


@pytest.fixture
def make_provider(test_settings: CORSFilterSettings) -> Callable[..., ConfigurationProvider]:
    """Factory for providers preloaded with a policy."""

    def _make(
        enabled: bool = True,
        allowed_origins: str | None = None,
        allowed_methods: str | None = "GET, OPTIONS",
    ) -> ConfigurationProvider:
        provider = ConfigurationProvider(test_settings)
        provider.update(
            enabled=enabled,
            allowed_origins=allowed_origins,
            allowed_methods=allowed_methods,
        )
        return provider

    return _make
