"""
CORS Filter Monitoring

Prometheus metrics for CORS decisions.
"""

from __future__ import annotations

from .metrics import CORS_DECISIONS, get_metrics_registry, record_decision

__all__ = [
    "CORS_DECISIONS",
    "get_metrics_registry",
    "record_decision",
]
