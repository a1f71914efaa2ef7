"""
Frequency Filter Implementation.

Filters variants on their population allele frequency:
    - Any population frequency above the threshold fails
    - Optionally, any variant known to a frequency database fails
    - Variants without frequency data fail (conservative default)

The filter score rewards rarity: 1.0 for unseen variants, 0.0 above 2 %.
"""

from __future__ import annotations

import logging

from variant_ranker.config.models import FrequencyFilterConfig
from variant_ranker.domain.entities import VariantEvaluation
from variant_ranker.domain.value_objects import FilterResult, FilterType

logger = logging.getLogger(__name__)


class FrequencyFilter:
    """Filter variants by population frequency."""

    def __init__(self, config: FrequencyFilterConfig) -> None:
        """
        Initialize with configuration.

        Args:
            config: Frequency filter configuration
        """
        self.config = config

    @property
    def name(self) -> str:
        return "frequency_filter"

    @property
    def filter_type(self) -> FilterType:
        return FilterType.FREQUENCY_FILTER

    def run_filter(self, variant: VariantEvaluation) -> FilterResult:
        data = variant.frequency_data
        if data is None:
            logger.warning(
                f"No frequency data for {variant.key}, failing {self.filter_type.value}"
            )
            return FilterResult.fail(self.filter_type, reason="missing frequency data")

        score = data.score
        if self.config.remove_known_variants and data.is_represented_in_database:
            return FilterResult.fail(
                self.filter_type, score=score, reason="variant is in a frequency database"
            )
        if data.max_freq > self.config.max_frequency_pct:
            return FilterResult.fail(
                self.filter_type,
                score=score,
                reason=f"max_freq={data.max_freq:.3f}% > max={self.config.max_frequency_pct}%",
            )
        return FilterResult.pass_(self.filter_type, score=score)

    def __repr__(self) -> str:
        return (
            f"FrequencyFilter(max_frequency_pct={self.config.max_frequency_pct}, "
            f"remove_known_variants={self.config.remove_known_variants})"
        )
