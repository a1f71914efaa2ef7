"""
Filter Runners - Apply Filters to Variants and Genes.

Two variant runner strategies share one contract:
    run(filters, variants, context) -> retained variants
    apply(filter, variant, context) -> FilterResult

EagerVariantFilterRunner:
    Annotations are already on every variant. Every filter is applied to
    every variant regardless of earlier failures, so each variant ends
    with a complete FilterResultMap.

SparseVariantFilterRunner:
    Annotations are fetched on demand from the AnnotationProvider, once
    per (variant, annotation kind), and cached in the context arena.
    A variant stops at its first failing filter; variants that already
    failed an earlier step are not filtered again. Accepts a single-pass
    iterator (the streamed VCF). Not safe to run concurrently over the
    same stream.

GeneFilterRunner:
    Applies gene filters to genes that currently pass, stopping a gene's
    filters at its first failure.

Design Notes:
    - Retention of failed variants is one RetentionPolicy parameter
    - Results are recorded in the AnalysisContext, never on the entities
    - For variants passing every filter both strategies record identical
      result maps
    - A key repeated within one batch is filtered once
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable, List, Sequence, Set

from variant_ranker.config.models import RetentionPolicy
from variant_ranker.domain.entities import Gene, VariantEvaluation
from variant_ranker.domain.value_objects import FilterResult, FilterType
from variant_ranker.interfaces.annotation_provider import AnnotationProvider
from variant_ranker.interfaces.step_units import GeneFilter, VariantFilter
from variant_ranker.pipeline.analysis_context import AnalysisContext

logger = logging.getLogger(__name__)

__all__ = [
    "EagerVariantFilterRunner",
    "GeneFilterRunner",
    "RetentionPolicy",
    "SparseVariantFilterRunner",
]


class _VariantFilterRunner:
    """Retention and per-filter tallies shared by the variant runners."""

    def __init__(self, retention: RetentionPolicy) -> None:
        self.retention = retention
        self.applied_counts: Counter = Counter()
        self.failed_counts: Counter = Counter()

    def _tally(self, result: FilterResult) -> None:
        self.applied_counts[result.filter_type] += 1
        if not result.passed:
            self.failed_counts[result.filter_type] += 1


class EagerVariantFilterRunner(_VariantFilterRunner):
    """Applies every filter to every variant; annotations must be present."""

    def __init__(self, retention: RetentionPolicy = RetentionPolicy.RETAIN_ALL) -> None:
        super().__init__(retention)

    def run(
        self,
        filters: Sequence[VariantFilter],
        variants: Iterable[VariantEvaluation],
        context: AnalysisContext,
    ) -> List[VariantEvaluation]:
        """
        Filter a batch of variants.

        Args:
            filters: Variant filters, applied in order
            variants: Variants to filter; unknown ones are added to the context
            context: Run context receiving the results

        Returns:
            Variants retained under the runner's RetentionPolicy
        """
        retained: List[VariantEvaluation] = []
        seen: Set[str] = set()
        for variant in variants:
            if variant.key in seen:
                continue
            seen.add(variant.key)
            if not context.contains_variant(variant.key):
                context.add_variant(variant)
            for variant_filter in filters:
                self.apply(variant_filter, variant, context)
            _retain(variant.key, self.retention, context, retained)
        return retained

    def apply(
        self,
        variant_filter: VariantFilter,
        variant: VariantEvaluation,
        context: AnalysisContext,
    ) -> FilterResult:
        result = variant_filter.run_filter(variant)
        context.record_variant_result(variant.key, result)
        self._tally(result)
        return result


class SparseVariantFilterRunner(_VariantFilterRunner):
    """Fetches annotations on demand and stops at the first failure."""

    def __init__(
        self,
        annotation_provider: AnnotationProvider,
        retention: RetentionPolicy = RetentionPolicy.DISCARD_FAILED,
    ) -> None:
        """
        Initialize runner.

        Args:
            annotation_provider: Source of frequency and pathogenicity data
            retention: What happens to variants that fail
        """
        super().__init__(retention)
        self.annotation_provider = annotation_provider
        self.frequency_fetches = 0
        self.pathogenicity_fetches = 0

    def run(
        self,
        filters: Sequence[VariantFilter],
        variants: Iterable[VariantEvaluation],
        context: AnalysisContext,
    ) -> List[VariantEvaluation]:
        retained: List[VariantEvaluation] = []
        seen: Set[str] = set()
        for variant in variants:
            key = variant.key
            if key in seen:
                continue
            seen.add(key)
            if not context.contains_variant(key):
                context.add_variant(variant)
            if context.variant_passed(key):
                for variant_filter in filters:
                    current = context.get_variant(key)
                    result = self.apply(variant_filter, current, context)
                    if not result.passed:
                        break
            _retain(key, self.retention, context, retained)
        return retained

    def apply(
        self,
        variant_filter: VariantFilter,
        variant: VariantEvaluation,
        context: AnalysisContext,
    ) -> FilterResult:
        annotated = self._annotate_for(variant_filter.filter_type, variant, context)
        result = variant_filter.run_filter(annotated)
        context.record_variant_result(annotated.key, result)
        self._tally(result)
        return result

    def _annotate_for(
        self,
        filter_type: FilterType,
        variant: VariantEvaluation,
        context: AnalysisContext,
    ) -> VariantEvaluation:
        """Fetch the annotation a filter needs if the variant lacks it."""
        if filter_type is FilterType.FREQUENCY_FILTER and variant.frequency_data is None:
            self.frequency_fetches += 1
            variant = variant.with_frequency_data(
                self.annotation_provider.fetch_frequency(variant)
            )
            context.replace_variant(variant)
        elif (
            filter_type is FilterType.PATHOGENICITY_FILTER
            and variant.pathogenicity_data is None
        ):
            self.pathogenicity_fetches += 1
            variant = variant.with_pathogenicity_data(
                self.annotation_provider.fetch_pathogenicity(variant)
            )
            context.replace_variant(variant)
        return variant


class GeneFilterRunner:
    """Applies gene filters to currently passing genes."""

    def run(
        self,
        filters: Sequence[GeneFilter],
        genes: Iterable[Gene],
        context: AnalysisContext,
    ) -> List[Gene]:
        """
        Filter genes.

        Returns:
            Genes still passing after the filters
        """
        passed: List[Gene] = []
        for gene in genes:
            if not context.gene_passed(gene):
                continue
            for gene_filter in filters:
                result = self.apply(gene_filter, gene, context)
                if not result.passed:
                    break
            else:
                passed.append(gene)
        return passed

    def apply(
        self, gene_filter: GeneFilter, gene: Gene, context: AnalysisContext
    ) -> FilterResult:
        result = gene_filter.run_filter(gene)
        context.record_gene_result(gene.symbol, result)
        return result


def _retain(
    key: str,
    retention: RetentionPolicy,
    context: AnalysisContext,
    retained: List[VariantEvaluation],
) -> None:
    if context.variant_passed(key):
        retained.append(context.get_variant(key))
    elif retention is RetentionPolicy.RETAIN_ALL:
        retained.append(context.get_variant(key))
    else:
        context.remove_variant(key)
