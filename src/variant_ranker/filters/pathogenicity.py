"""
Pathogenicity Filter Implementation.

Scores variants by predicted pathogenicity and keeps the ones whose effect
class is predicted to damage the protein. The score is the highest
predictor score, falling back to a per-effect default when no predictor
scored the variant.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet

from variant_ranker.config.models import PathogenicityFilterConfig
from variant_ranker.domain.entities import VariantEffect, VariantEvaluation
from variant_ranker.domain.value_objects import (
    FilterResult,
    FilterType,
    PathogenicityData,
)

logger = logging.getLogger(__name__)

DEFAULT_EFFECT_SCORES: Dict[VariantEffect, float] = {
    VariantEffect.STOP_GAINED: 0.95,
    VariantEffect.FRAMESHIFT_VARIANT: 0.95,
    VariantEffect.START_LOST: 0.95,
    VariantEffect.SPLICE_DONOR_VARIANT: 0.90,
    VariantEffect.SPLICE_ACCEPTOR_VARIANT: 0.90,
    VariantEffect.INFRAME_INSERTION: 0.85,
    VariantEffect.INFRAME_DELETION: 0.85,
    VariantEffect.SPLICE_REGION_VARIANT: 0.80,
    VariantEffect.STOP_LOST: 0.70,
    VariantEffect.MISSENSE_VARIANT: 0.60,
    VariantEffect.SYNONYMOUS_VARIANT: 0.10,
    VariantEffect.FIVE_PRIME_UTR_VARIANT: 0.10,
    VariantEffect.THREE_PRIME_UTR_VARIANT: 0.10,
}

PREDICTED_PATHOGENIC_EFFECTS: FrozenSet[VariantEffect] = frozenset(
    {
        VariantEffect.STOP_GAINED,
        VariantEffect.FRAMESHIFT_VARIANT,
        VariantEffect.START_LOST,
        VariantEffect.STOP_LOST,
        VariantEffect.SPLICE_DONOR_VARIANT,
        VariantEffect.SPLICE_ACCEPTOR_VARIANT,
        VariantEffect.SPLICE_REGION_VARIANT,
        VariantEffect.INFRAME_INSERTION,
        VariantEffect.INFRAME_DELETION,
        VariantEffect.MISSENSE_VARIANT,
    }
)


def default_effect_score(effect: VariantEffect) -> float:
    return DEFAULT_EFFECT_SCORES.get(effect, 0.0)


class PathogenicityFilter:
    """Filter variants by predicted pathogenicity."""

    def __init__(self, config: PathogenicityFilterConfig) -> None:
        """
        Initialize with configuration.

        Args:
            config: Pathogenicity filter configuration. With
                keep_non_pathogenic the variants are scored but never failed.
        """
        self.config = config

    @property
    def name(self) -> str:
        return "pathogenicity_filter"

    @property
    def filter_type(self) -> FilterType:
        return FilterType.PATHOGENICITY_FILTER

    def run_filter(self, variant: VariantEvaluation) -> FilterResult:
        data = variant.pathogenicity_data
        if data is None:
            logger.warning(
                f"No pathogenicity data for {variant.key}, failing {self.filter_type.value}"
            )
            return FilterResult.fail(
                self.filter_type, reason="missing pathogenicity data"
            )

        score = self._calculate_score(variant.variant_effect, data)
        if self.config.keep_non_pathogenic:
            return FilterResult.pass_(self.filter_type, score=score)
        if variant.variant_effect in PREDICTED_PATHOGENIC_EFFECTS:
            return FilterResult.pass_(self.filter_type, score=score)
        return FilterResult.fail(
            self.filter_type,
            score=score,
            reason=f"{variant.variant_effect.value} not predicted pathogenic",
        )

    def _calculate_score(self, effect: VariantEffect, data: PathogenicityData) -> float:
        predicted = data.most_pathogenic_score
        if predicted is not None:
            return predicted
        return default_effect_score(effect)

    def __repr__(self) -> str:
        return f"PathogenicityFilter(keep_non_pathogenic={self.config.keep_non_pathogenic})"
