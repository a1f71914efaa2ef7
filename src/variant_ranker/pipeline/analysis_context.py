"""
Analysis Context - Per-Run Result Accumulator.

The AnalysisContext owns everything an analysis run accumulates: the
variant arena, the genes, and the FilterResultMaps of every variant and
gene. Steps read and write through it instead of mutating shared entities.

Design Notes:
    - Variants are stored by key (arena + handle); genes hold keys only
    - Annotated copies replace the arena slot under the same key
    - Pass/fail of variants and genes is derived from the result maps
    - Sealed once the executor is done; any further write raises
    - Provides a warning when the variant count exceeds a threshold
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from variant_ranker.domain.entities import Gene, Sample, VariantEvaluation
from variant_ranker.domain.value_objects import FilterResult, FilterResultMap
from variant_ranker.interfaces.sample_data import SampleDataError

logger = logging.getLogger(__name__)

DEFAULT_SIZE_WARNING_VARIANTS = 5_000_000


class SealedContextError(Exception):
    """Raised when a finished run's context is modified."""


class AnalysisContext:
    """
    In-memory accumulator for one analysis run.

    A variant with no recorded results counts as passing (unfiltered).
    A gene passes when none of its gene filters failed and either it
    never had variants or at least one of its variants passes.
    """

    def __init__(
        self,
        variants: Iterable[VariantEvaluation] = (),
        genes: Iterable[Gene] = (),
        *,
        size_warning_variants: int = DEFAULT_SIZE_WARNING_VARIANTS,
    ) -> None:
        """
        Initialize context.

        Args:
            variants: Initial variants (eager mode), assigned to their genes
            genes: Initial genes (eager mode) or the known-gene index (sparse)
            size_warning_variants: Variant count above which a warning is logged
        """
        self._variants: Dict[str, VariantEvaluation] = {}
        self._variant_results: Dict[str, FilterResultMap] = {}
        self._genes: Dict[str, Gene] = {}
        self._gene_results: Dict[str, FilterResultMap] = {}
        self._discarded_by_gene: Dict[str, int] = {}
        self._size_warning_variants = size_warning_variants
        self._size_warned = False
        self._sealed = False

        for gene in genes:
            self.add_gene(gene)
        for variant in variants:
            self.add_variant(variant)

    @classmethod
    def from_sample(
        cls,
        sample: Sample,
        *,
        size_warning_variants: int = DEFAULT_SIZE_WARNING_VARIANTS,
    ) -> AnalysisContext:
        """
        Build the context of an eagerly loaded sample.

        Raises:
            SampleDataError: If a gene references a variant the sample lacks
        """
        context = cls(genes=sample.genes, size_warning_variants=size_warning_variants)
        for variant in sample.variants:
            # first record of a repeated key wins, as when streaming
            if not context.contains_variant(variant.key):
                context.add_variant(variant)
        context.check_references()
        return context

    # -------------------------------------------------------------------------
    # Variants
    # -------------------------------------------------------------------------

    def add_variant(self, variant: VariantEvaluation) -> None:
        """Store a variant and attach its key to its gene, if the gene is known."""
        self._check_not_sealed()
        key = variant.key
        self._variants[key] = variant
        gene = self._genes.get(variant.gene_symbol)
        if gene is not None:
            gene.add_variant_key(key)
        self._check_size_warning()

    def replace_variant(self, variant: VariantEvaluation) -> None:
        """Swap the arena slot for an (annotated) copy with the same key."""
        self._check_not_sealed()
        if variant.key not in self._variants:
            raise KeyError(f"Unknown variant {variant.key}")
        self._variants[variant.key] = variant

    def remove_variant(self, key: str) -> None:
        """Drop a variant, its results and its gene reference."""
        self._check_not_sealed()
        variant = self._variants.pop(key, None)
        if variant is None:
            return
        self._variant_results.pop(key, None)
        gene = self._genes.get(variant.gene_symbol)
        if gene is not None:
            gene.remove_variant_key(key)
            self._discarded_by_gene[gene.symbol] = (
                self._discarded_by_gene.get(gene.symbol, 0) + 1
            )

    def get_variant(self, key: str) -> Optional[VariantEvaluation]:
        return self._variants.get(key)

    def contains_variant(self, key: str) -> bool:
        return key in self._variants

    @property
    def variants(self) -> List[VariantEvaluation]:
        return list(self._variants.values())

    def variants_of(self, gene: Gene) -> List[VariantEvaluation]:
        return [self._variants[k] for k in gene.variant_keys if k in self._variants]

    # -------------------------------------------------------------------------
    # Genes
    # -------------------------------------------------------------------------

    def add_gene(self, gene: Gene) -> None:
        self._check_not_sealed()
        self._genes[gene.symbol] = gene

    def get_gene(self, symbol: str) -> Optional[Gene]:
        return self._genes.get(symbol)

    @property
    def genes(self) -> List[Gene]:
        return list(self._genes.values())

    def check_references(self) -> None:
        """
        Verify every variant key held by a gene is in the arena.

        Raises:
            SampleDataError: On the first dangling reference
        """
        for gene in self._genes.values():
            for key in gene.variant_keys:
                if key not in self._variants:
                    raise SampleDataError(
                        f"Gene {gene.symbol} references unknown variant {key}"
                    )

    # -------------------------------------------------------------------------
    # Filter results
    # -------------------------------------------------------------------------

    def record_variant_result(self, key: str, result: FilterResult) -> None:
        """
        Record a variant filter result.

        Raises:
            SealedContextError: If the run is finished
            DuplicateFilterResultError: If this filter type is already recorded
        """
        self._check_not_sealed()
        results = self._variant_results.get(key)
        if results is None:
            results = self._variant_results[key] = FilterResultMap(key)
        results.record(result)

    def record_gene_result(self, symbol: str, result: FilterResult) -> None:
        self._check_not_sealed()
        results = self._gene_results.get(symbol)
        if results is None:
            results = self._gene_results[symbol] = FilterResultMap(symbol)
        results.record(result)

    def variant_results(self, key: str) -> FilterResultMap:
        """Results of a variant; an empty map if nothing was recorded."""
        return self._variant_results.get(key) or FilterResultMap(key)

    def gene_results(self, symbol: str) -> FilterResultMap:
        return self._gene_results.get(symbol) or FilterResultMap(symbol)

    def variant_passed(self, key: str) -> bool:
        results = self._variant_results.get(key)
        return results is None or results.passed

    def passed_variants(self, gene: Gene) -> List[VariantEvaluation]:
        return [v for v in self.variants_of(gene) if self.variant_passed(v.key)]

    def gene_passed(self, gene: Gene) -> bool:
        gene_results = self._gene_results.get(gene.symbol)
        if gene_results is not None and not gene_results.passed:
            return False
        if not gene.variant_keys:
            return gene.symbol not in self._discarded_by_gene
        return any(self.variant_passed(k) for k in gene.variant_keys)

    @property
    def passed_genes(self) -> List[Gene]:
        return [g for g in self._genes.values() if self.gene_passed(g)]

    @property
    def passed_variant_count(self) -> int:
        return sum(1 for k in self._variants if self.variant_passed(k))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def seal(self) -> None:
        self._sealed = True

    @property
    def is_sealed(self) -> bool:
        return self._sealed

    def _check_not_sealed(self) -> None:
        if self._sealed:
            raise SealedContextError("Analysis is finished; the context is read-only")

    def _check_size_warning(self) -> None:
        if not self._size_warned and len(self._variants) > self._size_warning_variants:
            self._size_warned = True
            logger.warning(
                f"AnalysisContext holds more than {self._size_warning_variants} variants. "
                f"Consider analysis_mode=PASS_ONLY."
            )

    def __len__(self) -> int:
        """Number of variants in the arena."""
        return len(self._variants)

    def __repr__(self) -> str:
        return (
            f"AnalysisContext(variants={len(self._variants)}, "
            f"genes={len(self._genes)}, sealed={self._sealed})"
        )
