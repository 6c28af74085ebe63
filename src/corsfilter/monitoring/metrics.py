"""
Prometheus Metrics Collection

Counters for the outcome of every CORS decision the filter makes.
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter

_REGISTRY = REGISTRY
_metrics_cache: dict[str, Any] = {}

# Decision outcomes
ALLOWED = "allowed"
DENIED = "denied"
NO_ORIGIN = "no_origin"
PREFLIGHT = "preflight"


def _get_or_create_counter(
    name: str, documentation: str, labelnames: list[str] | None = None
) -> Counter:
    """Get existing Counter metric or create new one, handling duplicates."""
    if name in _metrics_cache:
        return _metrics_cache[name]

    try:
        metric = Counter(name, documentation, labelnames or [], registry=_REGISTRY)
        _metrics_cache[name] = metric
        return metric
    except ValueError:
        # Registered by an earlier import of this module
        for collector in _REGISTRY._collector_to_names.keys():
            if getattr(collector, "_name", None) == name:
                _metrics_cache[name] = collector
                return collector
        raise


CORS_DECISIONS = _get_or_create_counter(
    "cors_filter_decisions",
    "CORS filter decisions by outcome",
    ["outcome"],
)


def record_decision(outcome: str) -> None:
    """Count one CORS decision."""
    CORS_DECISIONS.labels(outcome=outcome).inc()


def get_metrics_registry() -> CollectorRegistry:
    """Get the Prometheus registry holding the CORS filter metrics."""
    return _REGISTRY
