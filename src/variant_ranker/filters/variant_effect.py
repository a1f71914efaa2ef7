"""
Variant Effect Filter Implementation.

Removes variants whose predicted effect lies outside the coding target,
e.g. intronic, intergenic or synonymous changes. Needs no annotation
beyond the effect itself, so it is the cheapest filter to run first.
"""

from __future__ import annotations

from variant_ranker.config.models import VariantEffectFilterConfig
from variant_ranker.domain.entities import VariantEvaluation
from variant_ranker.domain.value_objects import FilterResult, FilterType


class VariantEffectFilter:
    """Filter variants by predicted effect."""

    def __init__(self, config: VariantEffectFilterConfig) -> None:
        self.config = config
        self._off_target = frozenset(config.off_target_effects)

    @property
    def name(self) -> str:
        return "variant_effect_filter"

    @property
    def filter_type(self) -> FilterType:
        return FilterType.VARIANT_EFFECT_FILTER

    def run_filter(self, variant: VariantEvaluation) -> FilterResult:
        if variant.variant_effect in self._off_target:
            return FilterResult.fail(
                self.filter_type,
                reason=f"effect={variant.variant_effect.value} is off target",
            )
        return FilterResult.pass_(self.filter_type)
