"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe characteristics of
variants and genes but have no conceptual identity: annotation data,
filter outcomes and prioritiser outcomes.

FilterResultMap is the one mutable container here. It accumulates the
FilterResults recorded for a single variant or gene during one run.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Iterator, List, Optional

from pydantic import BaseModel, Field


class FilterType(str, Enum):
    """Kinds of filter a step can apply."""

    VARIANT_EFFECT_FILTER = "VARIANT_EFFECT_FILTER"
    FREQUENCY_FILTER = "FREQUENCY_FILTER"
    PATHOGENICITY_FILTER = "PATHOGENICITY_FILTER"
    INHERITANCE_FILTER = "INHERITANCE_FILTER"
    PRIORITY_SCORE_FILTER = "PRIORITY_SCORE_FILTER"


class PriorityType(str, Enum):
    """Sources of gene priority scores."""

    OMIM_PRIORITY = "OMIM_PRIORITY"
    HIPHIVE_PRIORITY = "HIPHIVE_PRIORITY"
    PHIVE_PRIORITY = "PHIVE_PRIORITY"
    PHENIX_PRIORITY = "PHENIX_PRIORITY"
    EXOMEWALKER_PRIORITY = "EXOMEWALKER_PRIORITY"


class FilterResultStatus(str, Enum):
    """Outcome of a single filter."""

    PASS = "PASS"
    FAIL = "FAIL"


class DuplicateFilterResultError(Exception):
    """Raised when a filter type is recorded twice for the same item."""

    def __init__(self, item_id: str, filter_type: FilterType) -> None:
        message = f"{filter_type.value} already recorded for {item_id}"
        super().__init__(message)
        self.item_id = item_id
        self.filter_type = filter_type
        self.message = message


class FrequencyData(BaseModel):
    """Population allele frequencies of a variant, in percent."""

    rs_id: Optional[str] = Field(default=None, description="dbSNP identifier")
    frequencies: Dict[str, float] = Field(
        default_factory=dict, description="Population source -> frequency (%)"
    )

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> FrequencyData:
        """Frequency data for a variant never seen in any population."""
        return cls()

    @property
    def max_freq(self) -> float:
        """Highest frequency across all sources, 0.0 when there are none."""
        return max(self.frequencies.values(), default=0.0)

    @property
    def is_represented_in_database(self) -> bool:
        return self.rs_id is not None or bool(self.frequencies)

    @property
    def score(self) -> float:
        """
        Rarity score in [0, 1].

        1.0 for unseen variants, 0.0 above 2 %, a steep exponential
        decay in between.
        """
        max_freq = self.max_freq
        if max_freq <= 0:
            return 1.0
        if max_freq > 2:
            return 0.0
        return max(0.0, 1.0 - 0.13533 * math.exp(max_freq))


class PathogenicityData(BaseModel):
    """Predicted pathogenicity scores of a variant."""

    scores: Dict[str, float] = Field(
        default_factory=dict, description="Predictor -> score in [0, 1]"
    )

    model_config = {"frozen": True}

    @classmethod
    def empty(cls) -> PathogenicityData:
        return cls()

    @property
    def has_predicted_score(self) -> bool:
        return bool(self.scores)

    @property
    def most_pathogenic_score(self) -> Optional[float]:
        """Highest predicted score, None if no predictor scored the variant."""
        if not self.scores:
            return None
        return max(self.scores.values())


class FilterResult(BaseModel):
    """Result of applying a single filter to a variant or gene."""

    filter_type: FilterType
    status: FilterResultStatus
    score: float = Field(default=1.0, ge=0, le=1)
    reason: str = Field(default="", description="Human-readable fail reason")

    model_config = {"frozen": True}

    @classmethod
    def pass_(cls, filter_type: FilterType, score: float = 1.0) -> FilterResult:
        return cls(filter_type=filter_type, status=FilterResultStatus.PASS, score=score)

    @classmethod
    def fail(
        cls, filter_type: FilterType, score: float = 0.0, reason: str = ""
    ) -> FilterResult:
        return cls(
            filter_type=filter_type,
            status=FilterResultStatus.FAIL,
            score=score,
            reason=reason,
        )

    @property
    def passed(self) -> bool:
        return self.status is FilterResultStatus.PASS


class FilterResultMap:
    """
    Insertion-ordered FilterResults recorded for one variant or gene.

    The aggregate status is the AND of every recorded status. An empty
    map counts as passing (the item is unfiltered).
    """

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        self._results: Dict[FilterType, FilterResult] = {}

    def record(self, result: FilterResult) -> None:
        """
        Record a filter result.

        Raises:
            DuplicateFilterResultError: If this filter type is already recorded
        """
        if result.filter_type in self._results:
            raise DuplicateFilterResultError(self.item_id, result.filter_type)
        self._results[result.filter_type] = result

    def get(self, filter_type: FilterType) -> Optional[FilterResult]:
        return self._results.get(filter_type)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self._results.values())

    @property
    def is_unfiltered(self) -> bool:
        return not self._results

    def passed_filter(self, filter_type: FilterType) -> bool:
        result = self._results.get(filter_type)
        return result is not None and result.passed

    @property
    def filter_types(self) -> List[FilterType]:
        return list(self._results)

    @property
    def failed_filter_types(self) -> List[FilterType]:
        return [ft for ft, r in self._results.items() if not r.passed]

    def passing_score_product(self) -> float:
        """Product of the scores of every passing result (1.0 when none)."""
        product = 1.0
        for result in self._results.values():
            if result.passed:
                product *= result.score
        return product

    def as_dict(self) -> Dict[FilterType, FilterResult]:
        return dict(self._results)

    def __contains__(self, filter_type: object) -> bool:
        return filter_type in self._results

    def __iter__(self) -> Iterator[FilterResult]:
        return iter(self._results.values())

    def __len__(self) -> int:
        return len(self._results)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FilterResultMap):
            return NotImplemented
        return list(self._results.items()) == list(other._results.items())

    def __repr__(self) -> str:
        statuses = ", ".join(f"{ft.value}={r.status.value}" for ft, r in self._results.items())
        return f"FilterResultMap({self.item_id}: {statuses})"


class PriorityResult(BaseModel):
    """Score a prioritiser assigned to a gene."""

    priority_type: PriorityType
    gene_symbol: str
    score: float = Field(..., ge=0, le=1)
    description: str = ""

    model_config = {"frozen": True}
