"""
Audit Logger Protocol.

Defines the abstract interface for audit logging. The audit logger
tracks every filtering decision of an analysis run for debugging and
reproducibility.

The audit logger is responsible for:
    - Logging step start/end events
    - Logging individual variant and gene filter decisions
    - Logging anomalies and warnings
    - Maintaining correlation across an analysis run

Design Notes:
    - Correlation ID propagation for tracing
    - No side effects on filtering logic
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from variant_ranker.domain.entities import Gene, VariantEvaluation


@runtime_checkable
class AuditLogger(Protocol):
    """Abstract interface for audit logging."""

    def set_correlation_id(self, correlation_id: str) -> None:
        ...

    def log_step_start(
        self,
        step_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log the start of an analysis step.

        Args:
            step_name: Name of the step
            input_count: Number of variants or genes entering the step
            metadata: Optional additional context
        """
        ...

    def log_step_end(
        self,
        step_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        ...

    def log_variant_filtered(
        self, variant: VariantEvaluation, step_name: str, reason: str
    ) -> None:
        ...

    def log_gene_filtered(self, gene: Gene, step_name: str, reason: str) -> None:
        ...

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an anomaly or warning.

        Args:
            message: Description of the anomaly
            severity: INFO, WARNING, or CRITICAL
            context: Optional additional context
        """
        ...
