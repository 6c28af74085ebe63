"""
CORS Filter Configuration

Environment-based settings plus the configuration provider the filter reads
on every request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from corsfilter.exceptions import ConfigurationError
from corsfilter.models.config import CORSFilterConfig

logger = structlog.get_logger()

# An allow-list entry matching any origin
WILDCARD_ORIGIN = "*"


class CORSFilterSettings(BaseSettings):
    """CORS filter configuration loaded from environment variables."""

    # Application
    SERVICE_NAME: str = Field(default="CORS Filter", description="Service name")
    SERVICE_VERSION: str = Field(default="0.1.0", description="Service version")
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8080, description="Server port")

    # CORS Policy
    ENABLED: bool = Field(default=False, description="Enable the CORS filter")
    ALLOWED_ORIGINS: str | None = Field(
        default=None,
        description="Comma-separated allowed origins, '*' allows any origin"
    )
    ALLOWED_METHODS: str | None = Field(
        default=None,
        description="Value sent in Access-Control-Allow-Methods"
    )
    CONFIG_API_ENABLED: bool = Field(
        default=False,
        description="Expose the runtime configuration endpoints"
    )

    # Monitoring
    ENABLE_METRICS: bool = Field(default=True, description="Enable Prometheus metrics")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_file": ".env",
        "env_prefix": "CORS_FILTER_",
        "case_sensitive": True,
        "extra": "ignore",
    }


def parse_allowed_origins(raw: str | None) -> tuple[str, ...]:
    """
    Split a raw allow-list into its entries.

    Entries are kept exactly as the comma split yields them; only the raw
    value as a whole is checked for blankness.
    """
    if raw is None or not raw.strip():
        return ()
    return tuple(raw.split(","))


@dataclass(frozen=True)
class PolicyConfiguration:
    """Immutable snapshot of the CORS policy."""

    enabled: bool = False
    allowed_origins: str | None = None
    allowed_methods: str | None = None
    allowed_origin_set: tuple[str, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "allowed_origin_set", parse_allowed_origins(self.allowed_origins)
        )


class ConfigurationProvider:
    """
    Owns the current CORS policy snapshot.

    Every write builds a new PolicyConfiguration (with its parsed allow-list)
    and swaps it in with a single assignment, so concurrent readers always see
    one consistent snapshot.
    """

    def __init__(self, settings: CORSFilterSettings | None = None) -> None:
        self._settings = settings or CORSFilterSettings()
        self._current = self._from_settings()

    def _from_settings(self) -> PolicyConfiguration:
        return PolicyConfiguration(
            enabled=self._settings.ENABLED,
            allowed_origins=self._settings.ALLOWED_ORIGINS,
            allowed_methods=self._settings.ALLOWED_METHODS,
        )

    def current(self) -> PolicyConfiguration:
        """Return the active policy snapshot."""
        return self._current

    def update(
        self,
        *,
        enabled: bool,
        allowed_origins: str | None = None,
        allowed_methods: str | None = None,
    ) -> PolicyConfiguration:
        """Replace the active policy."""
        snapshot = PolicyConfiguration(
            enabled=enabled,
            allowed_origins=allowed_origins,
            allowed_methods=allowed_methods,
        )
        self._current = snapshot

        logger.info(
            "CORS filter configuration updated",
            enabled=snapshot.enabled,
            allowed_origins=snapshot.allowed_origins,
            allowed_methods=snapshot.allowed_methods,
        )
        return snapshot

    def configure(self, payload: Mapping[str, Any]) -> PolicyConfiguration:
        """
        Apply a configuration payload.

        Accepts the form keys ``enabled``, ``allowedOrigins`` and
        ``allowedMethods`` (snake_case names work too).

        Raises:
            ConfigurationError: If the payload does not validate
        """
        try:
            config = CORSFilterConfig.model_validate(dict(payload))
        except ValidationError as exc:
            logger.warning(
                "Rejected CORS filter configuration",
                error_count=exc.error_count(),
            )
            raise ConfigurationError(
                "Invalid CORS filter configuration",
                errors=exc.errors(include_url=False),
            ) from exc

        return self.update(
            enabled=config.enabled,
            allowed_origins=config.allowed_origins,
            allowed_methods=config.allowed_methods,
        )

    def reset(self) -> PolicyConfiguration:
        """Restore the policy derived from environment settings."""
        self._current = self._from_settings()
        return self._current


# Global settings instance
settings = CORSFilterSettings()
