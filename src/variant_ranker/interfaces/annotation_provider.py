"""
Annotation Provider Protocol.

Defines the interface the sparse filter runner uses to fetch variant
annotations on demand.

Design Notes:
    - Synchronous calls; batching or caching is the provider's business
    - Empty data is a valid answer ("no evidence"), not an error
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from variant_ranker.domain.entities import VariantEvaluation
    from variant_ranker.domain.value_objects import FrequencyData, PathogenicityData


@runtime_checkable
class AnnotationProvider(Protocol):
    """Abstract interface for frequency and pathogenicity lookups."""

    def fetch_frequency(self, variant: VariantEvaluation) -> FrequencyData:
        ...

    def fetch_pathogenicity(self, variant: VariantEvaluation) -> PathogenicityData:
        ...
