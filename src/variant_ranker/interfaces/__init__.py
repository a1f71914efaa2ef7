"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for the
pluggable step units and for every external collaborator. High-level modules
depend on these abstractions, not on concrete implementations.

Protocols:
    - VariantFilter / GeneFilter / Prioritiser: Step units
    - SampleDataFactory: Loads samples, variants and known genes
    - AnnotationProvider: On-demand frequency and pathogenicity lookups
    - DiseaseSource / PhenotypeScoreSource: Prioritiser reference data
    - AuditLogger: Logging abstraction for audit trail
    - MetricsCollector: Performance metrics abstraction
"""

from variant_ranker.interfaces.annotation_provider import AnnotationProvider
from variant_ranker.interfaces.audit_logger import AuditLogger
from variant_ranker.interfaces.knowledge_sources import DiseaseSource, PhenotypeScoreSource
from variant_ranker.interfaces.metrics_collector import MetricsCollector
from variant_ranker.interfaces.sample_data import SampleDataError, SampleDataFactory
from variant_ranker.interfaces.step_units import GeneFilter, Prioritiser, VariantFilter

__all__ = [
    "AnnotationProvider",
    "AuditLogger",
    "DiseaseSource",
    "GeneFilter",
    "MetricsCollector",
    "PhenotypeScoreSource",
    "Prioritiser",
    "SampleDataError",
    "SampleDataFactory",
    "VariantFilter",
]
