"""
Observability Package - Structured Logging, Metrics, Tracing.

    - ObservabilityManager: structlog logging with correlation IDs,
      usable as both AuditLogger and MetricsCollector
"""

from variant_ranker.observability.observability_manager import (
    ObservabilityManager,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "ObservabilityManager",
    "get_correlation_id",
    "set_correlation_id",
]
