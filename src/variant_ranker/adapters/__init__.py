"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Sample data:
    - MockSampleDataFactory: Fake cohort for development/testing

Annotations and knowledge:
    - InMemoryAnnotationProvider: Dictionary-backed annotations
    - InMemoryDiseaseSource / InMemoryPhenotypeScoreSource

Loggers:
    - ConsoleAuditLogger: Simple console output

Metrics:
    - InMemoryMetricsCollector: Simple in-memory collection

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No business logic in adapters
"""

from variant_ranker.adapters.annotation_provider import InMemoryAnnotationProvider
from variant_ranker.adapters.console_logger import ConsoleAuditLogger
from variant_ranker.adapters.knowledge_sources import (
    InMemoryDiseaseSource,
    InMemoryPhenotypeScoreSource,
)
from variant_ranker.adapters.metrics_collector import InMemoryMetricsCollector
from variant_ranker.adapters.mock_sample_data import MockSampleDataFactory

__all__ = [
    "ConsoleAuditLogger",
    "InMemoryAnnotationProvider",
    "InMemoryDiseaseSource",
    "InMemoryMetricsCollector",
    "InMemoryPhenotypeScoreSource",
    "MockSampleDataFactory",
]
