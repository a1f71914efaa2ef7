"""
Filters Package - Variant and Gene Filter Implementations.

Variant filters:
    - VariantEffectFilter: Removes off-target effects
    - FrequencyFilter: Removes common variants
    - PathogenicityFilter: Scores and keeps predicted damaging variants

Gene filters:
    - InheritanceFilter: Keeps genes compatible with a mode of inheritance
    - PriorityScoreFilter: Gate on a prioritiser's score

Each filter exposes filter_type and run_filter(); results are recorded by
the filter runners, never by the filters themselves.
"""

from variant_ranker.filters.frequency import FrequencyFilter
from variant_ranker.filters.inheritance import InheritanceFilter
from variant_ranker.filters.pathogenicity import PathogenicityFilter
from variant_ranker.filters.priority_score import PriorityScoreFilter
from variant_ranker.filters.variant_effect import VariantEffectFilter

__all__ = [
    "FrequencyFilter",
    "InheritanceFilter",
    "PathogenicityFilter",
    "PriorityScoreFilter",
    "VariantEffectFilter",
]
