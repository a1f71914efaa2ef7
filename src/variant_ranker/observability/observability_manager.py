"""
Observability Manager - Structured Logging, Metrics and Tracing.

Provides:
    - Structured JSON or console logging via structlog
    - Correlation ID propagation through structlog contextvars
    - In-memory metrics and event recording
    - Run-level context (vcf path, analysis mode) on every event
    - Per-step summary of the executor step metrics

Design Notes:
    - Thread-safe correlation ID storage
    - Drop-in AuditLogger and MetricsCollector for the PipelineExecutor
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


class ObservabilityManager:
    """
    Unified observability: structured logging, metrics and tracing.

    Every event is rendered by structlog and kept in memory, tagged with
    the correlation id of the analysis run.
    """

    def __init__(
        self,
        service_name: str = "variant_ranker",
        use_json: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """
        Initialize observability manager.

        Args:
            service_name: Service name for log entries
            use_json: JSON output instead of the console renderer
            log_level: Logging level
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self._metrics: Dict[str, List[Dict[str, Any]]] = {}
        self._events: List[Dict[str, Any]] = []
        self._run_context: Dict[str, Any] = {}
        self._lock = threading.Lock()

        self._configure_structlog()
        self._logger = structlog.get_logger(service_name)

    def _configure_structlog(self) -> None:
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]
        if self.use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(self.log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=True,
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set correlation ID for the current context.

        Args:
            correlation_id: Unique ID of the analysis run
        """
        set_correlation_id(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)
        with self._lock:
            self._run_context = {}

    def bind_run_context(self, **fields: Any) -> None:
        """Attach run-level fields (vcf path, analysis mode) to every later event."""
        structlog.contextvars.bind_contextvars(**fields)
        with self._lock:
            self._run_context.update(fields)

    def generate_correlation_id(self) -> str:
        correlation_id = str(uuid.uuid4())
        self.set_correlation_id(correlation_id)
        return correlation_id

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g. "step_start", "variant_filtered")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        with self._lock:
            run_context = dict(self._run_context)
        event_data = {
            "event_type": event_type,
            "correlation_id": get_correlation_id(),
            **run_context,
            **(data or {}),
        }
        with self._lock:
            self._events.append({**event_data, "timestamp": datetime.now().isoformat()})

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        log_method(event_type, **event_data)

    def record_metric(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
        metric_type: str = "gauge",
    ) -> None:
        metric_entry = {
            "timestamp": datetime.now().isoformat(),
            "value": value,
            "tags": tags or {},
            "type": metric_type,
            "correlation_id": get_correlation_id(),
        }
        with self._lock:
            self._metrics.setdefault(name, []).append(metric_entry)

    def get_trace_context(self) -> Dict[str, Any]:
        return {
            "correlation_id": get_correlation_id(),
            "service_name": self.service_name,
            "timestamp": datetime.now().isoformat(),
        }

    def get_metrics(self) -> Dict[str, List[Dict[str, Any]]]:
        """All recorded metric entries, by name."""
        with self._lock:
            return {name: list(entries) for name, entries in self._metrics.items()}

    def get_events(self) -> List[Dict[str, Any]]:
        with self._lock:
            return list(self._events)

    def step_summary(self) -> Dict[str, Dict[str, float]]:
        """
        Per-step totals from the executor's step metrics.

        Returns:
            Dict of step name -> {"runs", "duration_seconds", "items_filtered"}
        """
        summary: Dict[str, Dict[str, float]] = {}
        metrics = self.get_metrics()
        for entry in metrics.get("step_duration_seconds", []):
            step = summary.setdefault(
                entry["tags"].get("step", "unknown"),
                {"runs": 0, "duration_seconds": 0.0, "items_filtered": 0.0},
            )
            step["runs"] += 1
            step["duration_seconds"] += entry["value"]
        for entry in metrics.get("items_filtered_total", []):
            name = entry["tags"].get("step", "unknown")
            if name in summary:
                summary[name]["items_filtered"] += entry["value"]
        return summary

    def clear(self) -> None:
        with self._lock:
            self._metrics.clear()
            self._events.clear()

    # =========================================================================
    # AuditLogger Protocol Compatibility
    # =========================================================================

    def log_step_start(
        self,
        step_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.log_event(
            "step_start",
            {"step_name": step_name, "input_count": input_count, **(metadata or {})},
        )

    def log_step_end(
        self,
        step_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.log_event(
            "step_end",
            {
                "step_name": step_name,
                "output_count": output_count,
                "duration_seconds": duration_seconds,
                **(metadata or {}),
            },
        )
        self.record_metric(
            "step_duration_seconds",
            duration_seconds,
            tags={"step": step_name},
            metric_type="histogram",
        )

    def log_variant_filtered(self, variant: Any, step_name: str, reason: str) -> None:
        self.log_event(
            "variant_filtered",
            {
                "variant": getattr(variant, "key", str(variant)),
                "gene_symbol": getattr(variant, "gene_symbol", ""),
                "step_name": step_name,
                "reason": reason,
            },
            level="debug",
        )

    def log_gene_filtered(self, gene: Any, step_name: str, reason: str) -> None:
        self.log_event(
            "gene_filtered",
            {
                "gene_symbol": getattr(gene, "symbol", str(gene)),
                "step_name": step_name,
                "reason": reason,
            },
            level="debug",
        )

    def log_anomaly(
        self,
        message: str,
        severity: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        level = "warning" if severity.upper() == "WARNING" else "error"
        self.log_event(
            "anomaly",
            {"message": message, "severity": severity, **(context or {})},
            level=level,
        )

    # =========================================================================
    # MetricsCollector Protocol Compatibility
    # =========================================================================

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.record_metric(name, duration_seconds, tags, metric_type="histogram")

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.record_metric(name, float(value), tags, metric_type="counter")

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        self.record_metric(name, value, tags, metric_type="gauge")
