"""
In-Memory Annotation Provider.

Serves frequency and pathogenicity data from dictionaries keyed by
variant key. Unknown variants get empty data ("no evidence").
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from variant_ranker.domain.entities import VariantEvaluation
from variant_ranker.domain.value_objects import FrequencyData, PathogenicityData

logger = logging.getLogger(__name__)


class InMemoryAnnotationProvider:
    """Dictionary-backed AnnotationProvider that counts its lookups."""

    def __init__(
        self,
        frequencies: Optional[Dict[str, FrequencyData]] = None,
        pathogenicity: Optional[Dict[str, PathogenicityData]] = None,
    ) -> None:
        self._frequencies = dict(frequencies or {})
        self._pathogenicity = dict(pathogenicity or {})
        self.frequency_calls = 0
        self.pathogenicity_calls = 0

    @classmethod
    def from_variants(cls, variants: Iterable[VariantEvaluation]) -> InMemoryAnnotationProvider:
        """Provider serving the annotations already attached to variants."""
        frequencies: Dict[str, FrequencyData] = {}
        pathogenicity: Dict[str, PathogenicityData] = {}
        for variant in variants:
            if variant.frequency_data is not None:
                frequencies[variant.key] = variant.frequency_data
            if variant.pathogenicity_data is not None:
                pathogenicity[variant.key] = variant.pathogenicity_data
        return cls(frequencies, pathogenicity)

    def fetch_frequency(self, variant: VariantEvaluation) -> FrequencyData:
        self.frequency_calls += 1
        return self._frequencies.get(variant.key, FrequencyData.empty())

    def fetch_pathogenicity(self, variant: VariantEvaluation) -> PathogenicityData:
        self.pathogenicity_calls += 1
        return self._pathogenicity.get(variant.key, PathogenicityData.empty())
