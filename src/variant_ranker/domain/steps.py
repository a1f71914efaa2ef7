"""
Analysis Steps.

An AnalysisStep wraps one pluggable unit (variant filter, gene filter or
prioritiser) together with a StepKind tag. The tag is what the step
ordering validator and the executor dispatch on.

Design Notes:
    - StepKind is a closed set; dispatch sites handle every member and
      treat anything else as a programming error
    - Predicates used for ordering are derived from the unit's
      filter_type / priority_type, never stored separately
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional

from variant_ranker.domain.value_objects import FilterType, PriorityType


class StepKind(str, Enum):
    """Closed set of step kinds."""

    VARIANT_FILTER = "VARIANT_FILTER"
    GENE_FILTER = "GENE_FILTER"
    PRIORITISER = "PRIORITISER"


class StepFunction(str, Enum):
    """What a step needs to have been loaded before it can run."""

    VARIANT_FILTER = "VARIANT_FILTER"
    GENE_ONLY_DEPENDENT = "GENE_ONLY_DEPENDENT"
    INHERITANCE_MODE_DEPENDENT = "INHERITANCE_MODE_DEPENDENT"
    VARIANT_DEPENDENT = "VARIANT_DEPENDENT"


@dataclass(frozen=True)
class AnalysisStep:
    """A tagged step unit."""

    kind: StepKind
    unit: Any

    @classmethod
    def variant_filter(cls, unit: Any) -> AnalysisStep:
        return cls(StepKind.VARIANT_FILTER, unit)

    @classmethod
    def gene_filter(cls, unit: Any) -> AnalysisStep:
        return cls(StepKind.GENE_FILTER, unit)

    @classmethod
    def prioritiser(cls, unit: Any) -> AnalysisStep:
        return cls(StepKind.PRIORITISER, unit)

    @property
    def name(self) -> str:
        return getattr(self.unit, "name", type(self.unit).__name__)

    @property
    def filter_type(self) -> Optional[FilterType]:
        if self.kind in (StepKind.VARIANT_FILTER, StepKind.GENE_FILTER):
            return self.unit.filter_type
        return None

    @property
    def priority_type(self) -> Optional[PriorityType]:
        """
        Priority type of a prioritiser, or the type a priority-score
        gate filter reads. None for every other step.
        """
        if self.kind is StepKind.PRIORITISER:
            return self.unit.priority_type
        if self.is_priority_score_filter:
            return self.unit.priority_type
        return None

    @property
    def is_variant_filter(self) -> bool:
        return self.kind is StepKind.VARIANT_FILTER

    @property
    def is_prioritiser(self) -> bool:
        return self.kind is StepKind.PRIORITISER

    @property
    def is_priority_score_filter(self) -> bool:
        return (
            self.kind is StepKind.GENE_FILTER
            and self.unit.filter_type is FilterType.PRIORITY_SCORE_FILTER
        )

    @property
    def is_inheritance_filter(self) -> bool:
        return (
            self.kind is StepKind.GENE_FILTER
            and self.unit.filter_type is FilterType.INHERITANCE_FILTER
        )

    @property
    def is_omim_prioritiser(self) -> bool:
        return (
            self.kind is StepKind.PRIORITISER
            and self.unit.priority_type is PriorityType.OMIM_PRIORITY
        )

    @property
    def is_inheritance_dependent(self) -> bool:
        return self.is_inheritance_filter or self.is_omim_prioritiser

    @property
    def only_requires_genes(self) -> bool:
        return self.is_prioritiser or self.is_priority_score_filter

    @property
    def function(self) -> StepFunction:
        if self.is_variant_filter:
            return StepFunction.VARIANT_FILTER
        if self.is_inheritance_dependent:
            return StepFunction.INHERITANCE_MODE_DEPENDENT
        if self.only_requires_genes:
            return StepFunction.GENE_ONLY_DEPENDENT
        return StepFunction.VARIANT_DEPENDENT

    def __str__(self) -> str:
        kind = getattr(self.kind, "value", self.kind)
        return f"{kind}({self.name})"


def group_steps_by_function(steps: List[AnalysisStep]) -> List[List[AnalysisStep]]:
    """
    Split steps into runs of consecutive steps sharing a StepFunction.

    Example:
        [freq, path, prioritiser, gate, inheritance] ->
        [[freq, path], [prioritiser, gate], [inheritance]]
    """
    groups: List[List[AnalysisStep]] = []
    for step in steps:
        if groups and groups[-1][0].function is step.function:
            groups[-1].append(step)
        else:
            groups.append([step])
    return groups
