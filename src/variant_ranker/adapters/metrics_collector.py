"""
In-Memory Metrics Collector.

Stores timings, counts and gauges of analysis runs in memory and
summarises them per metric name.
"""

from __future__ import annotations

from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional


class InMemoryMetricsCollector:
    """Simple in-memory metrics collector."""

    def __init__(self) -> None:
        self._metrics: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = Lock()

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            self._record(name, "timing", duration_seconds, tags)

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            self._record(name, "count", value, tags)

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        with self._lock:
            self._record(name, "gauge", value, tags)

    def get_metrics(self) -> Dict[str, Any]:
        """
        Summary per metric name.

        Returns:
            {name: {"type", "count", "total", "last"}}
        """
        with self._lock:
            summary = {}
            for name, entries in self._metrics.items():
                if not entries:
                    continue
                values = [e["value"] for e in entries]
                summary[name] = {
                    "type": entries[-1]["type"],
                    "count": len(values),
                    "total": sum(values),
                    "last": values[-1],
                }
            return summary

    def get_entries(self, name: str) -> List[Dict[str, Any]]:
        """Raw entries of one metric, with tags and timestamps."""
        with self._lock:
            return list(self._metrics.get(name, []))

    def clear(self) -> None:
        with self._lock:
            self._metrics.clear()

    def _record(
        self,
        name: str,
        metric_type: str,
        value: Any,
        tags: Optional[Dict[str, str]],
    ) -> None:
        self._metrics.setdefault(name, []).append(
            {
                "type": metric_type,
                "value": value,
                "tags": tags or {},
                "timestamp": datetime.now().isoformat(),
            }
        )
