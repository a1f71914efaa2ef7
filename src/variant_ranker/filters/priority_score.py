"""
Priority Score Filter Implementation.

A gate on a prioritiser's output: genes without a result of the
configured priority type, or with a score below the minimum, fail.
The step ordering validator places this gate directly after its
prioritiser and drops it when that prioritiser is not part of the run.
"""

from __future__ import annotations

from variant_ranker.config.models import PriorityScoreFilterConfig
from variant_ranker.domain.entities import Gene
from variant_ranker.domain.value_objects import FilterResult, FilterType, PriorityType


class PriorityScoreFilter:
    """Filter genes by the score of one prioritiser."""

    def __init__(self, config: PriorityScoreFilterConfig) -> None:
        self.config = config

    @property
    def name(self) -> str:
        return "priority_score_filter"

    @property
    def filter_type(self) -> FilterType:
        return FilterType.PRIORITY_SCORE_FILTER

    @property
    def priority_type(self) -> PriorityType:
        return self.config.priority_type

    def run_filter(self, gene: Gene) -> FilterResult:
        result = gene.priority_results.get(self.priority_type)
        if result is None:
            return FilterResult.fail(
                self.filter_type, reason=f"no {self.priority_type.value} result"
            )
        if result.score < self.config.min_priority_score:
            return FilterResult.fail(
                self.filter_type,
                score=result.score,
                reason=f"score={result.score:.3f} < min={self.config.min_priority_score}",
            )
        return FilterResult.pass_(self.filter_type, score=result.score)

    def __repr__(self) -> str:
        return (
            f"PriorityScoreFilter({self.priority_type.value}, "
            f"min={self.config.min_priority_score})"
        )
