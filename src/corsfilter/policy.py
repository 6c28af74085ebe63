"""
Origin Policy Evaluator

Decides whether a request origin may receive CORS headers.
"""

from __future__ import annotations

from corsfilter.config import WILDCARD_ORIGIN, ConfigurationProvider, PolicyConfiguration


class OriginPolicyEvaluator:
    """
    Answer allow-list questions against the provider's current snapshot.

    Origins are compared by exact, case-sensitive string equality. No scheme,
    host or trailing-slash normalization is applied. Every method accepts an
    explicit snapshot so one request can be evaluated against a single policy.
    """

    def __init__(self, provider: ConfigurationProvider) -> None:
        self._provider = provider

    def snapshot(self) -> PolicyConfiguration:
        """Policy in effect right now."""
        return self._provider.current()

    @property
    def allowed_origins(self) -> tuple[str, ...]:
        """Parsed allow-list of the current snapshot."""
        return self.snapshot().allowed_origin_set

    def is_allowed(self, origin: str, policy: PolicyConfiguration | None = None) -> bool:
        """
        Check if the origin is allowed.

        The caller trims the header value; allow-list entries are not trimmed.
        """
        origins = (policy or self.snapshot()).allowed_origin_set

        # "*" lets any origin through, wherever it sits in the list
        if WILDCARD_ORIGIN in origins:
            return True

        return origin in origins

    def get_allowed_methods(self, policy: PolicyConfiguration | None = None) -> str | None:
        """Configured Access-Control-Allow-Methods value, verbatim."""
        return (policy or self.snapshot()).allowed_methods

    def is_enabled(self, policy: PolicyConfiguration | None = None) -> bool:
        return (policy or self.snapshot()).enabled
