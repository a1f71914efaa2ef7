"""
Step Ordering Validator.

Checks a user-supplied list of analysis steps against the ordering rules
the executor relies on and corrects violations, logging a warning for
every correction. It never rejects a step list.

Passes (order matters, later passes assume the earlier ones ran):
    1. Move inheritance-dependent steps (inheritance filter, OMIM
       prioritiser) to directly after the last variant filter
    2. Drop priority score filters whose prioritiser is not in the run
    3. Move priority score filters to directly after their prioritiser
    4. Stable sort with the step comparator

Design Notes:
    - Pure: the input list is never mutated
    - Idempotent: validating a validated list changes nothing
    - The comparator is only a partial order; list.sort is stable, so
      equal-ranked steps keep the user's relative order
"""

from __future__ import annotations

import logging
from functools import cmp_to_key
from typing import Dict, List, Sequence, Set

from variant_ranker.domain.steps import AnalysisStep
from variant_ranker.domain.value_objects import PriorityType

logger = logging.getLogger(__name__)

BEFORE = -1
EQUAL = 0
AFTER = 1


def compare_steps(first: AnalysisStep, second: AnalysisStep) -> int:
    """
    Pairwise ordering rule between two steps.

    Returns:
        BEFORE if first must run before second, AFTER if after,
        EQUAL if either order is acceptable
    """
    if first.is_variant_filter and second.is_variant_filter:
        return EQUAL
    if first.is_prioritiser and second.is_prioritiser:
        return EQUAL

    # inheritance-dependent steps run after every variant filter
    if first.is_variant_filter and second.is_inheritance_dependent:
        return BEFORE
    if first.is_inheritance_dependent and second.is_variant_filter:
        return AFTER

    if first.is_inheritance_filter and second.is_omim_prioritiser:
        return BEFORE
    if first.is_omim_prioritiser and second.is_inheritance_filter:
        return AFTER

    # a gate runs after the prioritiser it reads
    if first.is_prioritiser and second.is_priority_score_filter:
        return BEFORE if first.priority_type is second.priority_type else EQUAL
    if first.is_priority_score_filter and second.is_prioritiser:
        return AFTER if first.priority_type is second.priority_type else EQUAL

    return EQUAL


class StepOrderingValidator:
    """Corrects the order of analysis steps."""

    def validate(self, steps: Sequence[AnalysisStep]) -> List[AnalysisStep]:
        """
        Return a corrected copy of the step list.

        Args:
            steps: Steps in user order

        Returns:
            New list satisfying the ordering rules
        """
        ordered = list(steps)
        if not ordered:
            return ordered

        ordered = self._move_inheritance_dependent_steps(ordered)
        ordered = self._remove_orphan_priority_score_filters(ordered)
        ordered = self._move_priority_score_filters_to_prioritisers(ordered)
        ordered.sort(key=cmp_to_key(compare_steps))
        return ordered

    def _move_inheritance_dependent_steps(
        self, steps: List[AnalysisStep]
    ) -> List[AnalysisStep]:
        if not any(s.is_variant_filter for s in steps):
            logger.info(
                "CAUTION: analysis contains no variant filtering steps. "
                "Results will likely be poor."
            )
            return steps
        if not any(s.is_inheritance_dependent for s in steps):
            return steps

        original_filter_pos = _last_index(steps, "is_inheritance_filter")
        original_omim_pos = _last_index(steps, "is_omim_prioritiser")

        dependent = [s for s in steps if s.is_inheritance_dependent]
        dependent.sort(key=cmp_to_key(compare_steps))
        remaining = [s for s in steps if not s.is_inheritance_dependent]
        insert_at = _last_index(remaining, "is_variant_filter") + 1
        moved = remaining[:insert_at] + dependent + remaining[insert_at:]

        if _last_index(moved, "is_inheritance_filter") != original_filter_pos:
            logger.warning(
                "Moved inheritance filter to run after all variant filters. "
                "Analysis steps have been changed."
            )
        if _last_index(moved, "is_omim_prioritiser") != original_omim_pos:
            logger.warning(
                "Moved OMIM prioritiser to run after all variant and inheritance "
                "filters. Analysis steps have been changed."
            )
        return moved

    def _remove_orphan_priority_score_filters(
        self, steps: List[AnalysisStep]
    ) -> List[AnalysisStep]:
        prioritiser_types: Set[PriorityType] = {
            s.priority_type for s in steps if s.is_prioritiser
        }
        kept: List[AnalysisStep] = []
        for step in steps:
            if step.is_priority_score_filter and step.priority_type not in prioritiser_types:
                logger.warning(
                    f"Removing {step} as no {step.priority_type.value} prioritiser "
                    f"is present. Analysis steps have been changed."
                )
                continue
            kept.append(step)
        return kept

    def _move_priority_score_filters_to_prioritisers(
        self, steps: List[AnalysisStep]
    ) -> List[AnalysisStep]:
        gates: Dict[PriorityType, List[AnalysisStep]] = {}
        for step in steps:
            if step.is_priority_score_filter:
                gates.setdefault(step.priority_type, []).append(step)
        if not gates:
            return steps

        moved: List[AnalysisStep] = []
        for step in steps:
            if step.is_priority_score_filter:
                continue
            moved.append(step)
            if step.is_prioritiser:
                # first matching prioritiser takes every gate of its type
                moved.extend(gates.pop(step.priority_type, []))
        return moved


def validate_steps(steps: Sequence[AnalysisStep]) -> List[AnalysisStep]:
    """Convenience function: validate with a fresh StepOrderingValidator."""
    return StepOrderingValidator().validate(steps)


def _last_index(steps: List[AnalysisStep], predicate: str) -> int:
    last = -1
    for i, step in enumerate(steps):
        if getattr(step, predicate):
            last = i
    return last
