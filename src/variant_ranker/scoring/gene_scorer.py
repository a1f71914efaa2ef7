"""
Gene Scorers - Combine Filter and Priority Evidence Into a Ranking.

RawScoreGeneScorer:
    filter_score   = product of the passing variant-filter scores of the
                     gene's best passing variant (0.0 if none passes)
    priority_score = best priority result score (1.0 if no prioritiser ran)
    combined_score = filter_score * priority_score

RankBasedGeneScorer:
    Genes are ranked by filter_score and by priority_score (descending,
    ties broken by symbol); combined_score = 1 - mean of the normalised
    ranks, so the top gene on both rankings scores 1.0. Equal rank means
    are separated by filter rank, (rank_f - 1) / (2 * n * n), so scores
    strictly decrease down the ranking.

Both scorers set combined_score to the incompatible-score floor for
genes incompatible with the requested mode of inheritance.

Returned order: passing genes first, then compatible before
incompatible, then combined_score descending, then symbol.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Protocol, Tuple

from variant_ranker.config.models import ScoringMode
from variant_ranker.domain.entities import Gene, ModeOfInheritance

if TYPE_CHECKING:
    from variant_ranker.pipeline.analysis_context import AnalysisContext

logger = logging.getLogger(__name__)


class GeneScorer(Protocol):
    """Common interface of the scoring strategies."""

    def score_genes(
        self,
        genes: Iterable[Gene],
        mode: ModeOfInheritance,
        context: AnalysisContext,
    ) -> List[Gene]:
        ...


def best_variant_score(gene: Gene, context: AnalysisContext) -> float:
    """Best passing-score product over the gene's passing variants."""
    scores = [
        context.variant_results(v.key).passing_score_product()
        for v in context.passed_variants(gene)
    ]
    return max(scores, default=0.0)


def best_priority_score(gene: Gene) -> float:
    if not gene.priority_results:
        return 1.0
    return max(r.score for r in gene.priority_results.values())


class RawScoreGeneScorer:
    """Multiplies filter and priority evidence."""

    def __init__(self, incompatible_score_floor: float = 0.0) -> None:
        self.incompatible_score_floor = incompatible_score_floor

    def score_genes(
        self,
        genes: Iterable[Gene],
        mode: ModeOfInheritance,
        context: AnalysisContext,
    ) -> List[Gene]:
        """
        Score and sort genes.

        Args:
            genes: Genes to score; scores are written in place
            mode: Requested mode of inheritance (ANY disables the floor)
            context: Run context with the filter results

        Returns:
            New list of the genes in ranking order
        """
        genes = list(genes)
        for gene in genes:
            gene.filter_score = best_variant_score(gene, context)
            gene.priority_score = best_priority_score(gene)
            if gene.is_compatible_with(mode):
                gene.combined_score = gene.filter_score * gene.priority_score
            else:
                gene.combined_score = self.incompatible_score_floor
        return sort_genes(genes, mode, context)


class RankBasedGeneScorer:
    """Averages a gene's normalised rank on filter and priority evidence."""

    def __init__(self, incompatible_score_floor: float = 0.0) -> None:
        self.incompatible_score_floor = incompatible_score_floor

    def score_genes(
        self,
        genes: Iterable[Gene],
        mode: ModeOfInheritance,
        context: AnalysisContext,
    ) -> List[Gene]:
        genes = list(genes)
        if not genes:
            return []
        for gene in genes:
            gene.filter_score = best_variant_score(gene, context)
            gene.priority_score = best_priority_score(gene)

        n = len(genes)
        filter_ranks = _ranks(genes, lambda g: g.filter_score)
        priority_ranks = _ranks(genes, lambda g: g.priority_score)
        for gene in genes:
            if not gene.is_compatible_with(mode):
                gene.combined_score = self.incompatible_score_floor
                continue
            filter_rank = filter_ranks[gene.symbol]
            normalised = (
                (filter_rank - 1) / n + (priority_ranks[gene.symbol] - 1) / n
            ) / 2
            # stays below the 1 / (2n) step between distinct rank means
            tie_break = (filter_rank - 1) / (2 * n * n)
            gene.combined_score = 1.0 - normalised - tie_break
        return sort_genes(genes, mode, context)


def _ranks(genes: List[Gene], score_of) -> Dict[str, int]:
    """1-based rank of each gene, highest score first, ties by symbol."""
    ordered = sorted(genes, key=lambda g: (-score_of(g), g.symbol))
    return {gene.symbol: i for i, gene in enumerate(ordered, start=1)}


def sort_genes(
    genes: List[Gene], mode: ModeOfInheritance, context: AnalysisContext
) -> List[Gene]:
    def sort_key(gene: Gene) -> Tuple[bool, bool, float, str]:
        return (
            not context.gene_passed(gene),
            not gene.is_compatible_with(mode),
            -gene.combined_score,
            gene.symbol,
        )

    return sorted(genes, key=sort_key)


def create_gene_scorer(
    scoring_mode: ScoringMode = ScoringMode.RAW_SCORE,
    incompatible_score_floor: float = 0.0,
) -> GeneScorer:
    """Factory for the configured scoring strategy."""
    if scoring_mode is ScoringMode.RANK_BASED:
        return RankBasedGeneScorer(incompatible_score_floor)
    return RawScoreGeneScorer(incompatible_score_floor)
