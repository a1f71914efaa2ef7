"""
Unit Tests for the Gene Scorers.

Test Aspects Covered:
    ✅ Business Logic: Raw score product, rank-based combination
    ✅ Edge Cases: No prioritiser results, no passing variants, empty input
    ✅ Ordering: Passing and compatible genes first, ties broken by symbol
    ✅ Configuration: Incompatible-score floor, factory selection
"""

from __future__ import annotations

from typing import Optional

import pytest

from variant_ranker.config.models import ScoringMode
from variant_ranker.domain.entities import Gene, ModeOfInheritance
from variant_ranker.domain.value_objects import (
    FilterResult,
    FilterType,
    PriorityResult,
    PriorityType,
)
from variant_ranker.pipeline.analysis_context import AnalysisContext
from variant_ranker.scoring import RankBasedGeneScorer, RawScoreGeneScorer, create_gene_scorer
from variant_ranker.scoring.gene_scorer import best_priority_score

from tests.fixtures import gene_with, make_variant

ANY = ModeOfInheritance.ANY
AD = ModeOfInheritance.AUTOSOMAL_DOMINANT


def scored_gene(
    context: AnalysisContext,
    symbol: str,
    filter_score: float,
    priority_score: Optional[float] = None,
    position: int = 1,
) -> Gene:
    """Gene with one passing variant of the given filter score."""
    variant = make_variant(position=position, gene=symbol)
    gene = gene_with(symbol, [])
    context.add_gene(gene)
    context.add_variant(variant)
    context.record_variant_result(
        variant.key, FilterResult.pass_(FilterType.FREQUENCY_FILTER, filter_score)
    )
    if priority_score is not None:
        gene.add_priority_result(
            PriorityResult(
                priority_type=PriorityType.HIPHIVE_PRIORITY,
                gene_symbol=symbol,
                score=priority_score,
            )
        )
    return gene


@pytest.fixture
def context() -> AnalysisContext:
    return AnalysisContext()


class TestRawScoreGeneScorer:
    """Tests for the raw score product."""

    def test_best_passing_variant_times_priority(self, context) -> None:
        """
        SCENARIO: Variant scoring 0.9 fails another filter; the passing
                  variant scores 0.5; phenotype score 0.8
        EXPECTED: filter_score=0.5, combined_score=0.4
        """
        # Arrange
        strong = make_variant(position=1, gene="GENE1")
        weak = make_variant(position=2, gene="GENE1")
        gene = gene_with("GENE1", [])
        context.add_gene(gene)
        context.add_variant(strong)
        context.add_variant(weak)
        context.record_variant_result(
            strong.key, FilterResult.pass_(FilterType.FREQUENCY_FILTER, 0.9)
        )
        context.record_variant_result(
            strong.key, FilterResult.fail(FilterType.PATHOGENICITY_FILTER)
        )
        context.record_variant_result(
            weak.key, FilterResult.pass_(FilterType.FREQUENCY_FILTER, 0.5)
        )
        gene.add_priority_result(
            PriorityResult(
                priority_type=PriorityType.HIPHIVE_PRIORITY, gene_symbol="GENE1", score=0.8
            )
        )

        # Act
        RawScoreGeneScorer().score_genes([gene], ANY, context)

        # Assert
        assert gene.filter_score == pytest.approx(0.5)
        assert gene.priority_score == pytest.approx(0.8)
        assert gene.combined_score == pytest.approx(0.4)

    def test_filter_score_is_product_of_passing_results(self, context) -> None:
        # Arrange
        variant = make_variant()
        gene = gene_with("GENE1", [])
        context.add_gene(gene)
        context.add_variant(variant)
        context.record_variant_result(variant.key, FilterResult.pass_(FilterType.FREQUENCY_FILTER, 0.5))
        context.record_variant_result(
            variant.key, FilterResult.pass_(FilterType.PATHOGENICITY_FILTER, 0.6)
        )

        # Act
        RawScoreGeneScorer().score_genes([gene], ANY, context)

        # Assert
        assert gene.filter_score == pytest.approx(0.3)

    def test_no_prioritiser_results_means_priority_one(self, context) -> None:
        # Arrange
        gene = scored_gene(context, "GENE1", 0.7)

        # Act
        RawScoreGeneScorer().score_genes([gene], ANY, context)

        # Assert
        assert best_priority_score(gene) == 1.0
        assert gene.combined_score == pytest.approx(0.7)

    def test_gene_without_passing_variants_scores_zero(self, context) -> None:
        # Arrange
        gene = Gene(symbol="EMPTY")
        context.add_gene(gene)

        # Act
        RawScoreGeneScorer().score_genes([gene], ANY, context)

        # Assert
        assert gene.filter_score == 0.0
        assert gene.combined_score == 0.0

    def test_incompatible_gene_gets_floor(self, context) -> None:
        """
        SCENARIO: Requested AD, gene only compatible with AR
        EXPECTED: combined_score set to the floor, ranked after compatible genes
        """
        # Arrange
        compatible = scored_gene(context, "LOW", 0.2, position=1)
        compatible.inheritance_modes = {AD}
        incompatible = scored_gene(context, "HIGH", 0.9, position=2)
        incompatible.inheritance_modes = {ModeOfInheritance.AUTOSOMAL_RECESSIVE}

        # Act
        ranked = RawScoreGeneScorer(incompatible_score_floor=0.1).score_genes(
            [incompatible, compatible], AD, context
        )

        # Assert
        assert incompatible.combined_score == pytest.approx(0.1)
        assert ranked == [compatible, incompatible]


class TestRankBasedGeneScorer:
    """Tests for rank-based combination."""

    def test_rank_combination(self, context) -> None:
        """
        SCENARIO: A ranks (1, 1); B ranks (2, 3); C ranks (3, 2)
        EXPECTED: A=1.0, then B above C on the better filter rank
        """
        # Arrange
        a = scored_gene(context, "A", 0.9, 0.9, position=1)
        b = scored_gene(context, "B", 0.8, 0.5, position=2)
        c = scored_gene(context, "C", 0.7, 0.7, position=3)

        # Act
        ranked = RankBasedGeneScorer().score_genes([c, b, a], ANY, context)

        # Assert
        assert a.combined_score == pytest.approx(1.0)
        assert a.combined_score > b.combined_score > c.combined_score
        assert b.combined_score == pytest.approx(0.5 - 1 / 18)
        assert c.combined_score == pytest.approx(0.5 - 2 / 18)
        assert ranked == [a, b, c]

    def test_equal_rank_means_ordered_by_filter_rank(self, context) -> None:
        """
        SCENARIO: Symbol order disagrees with filter rank for a tied pair
        EXPECTED: The better filter rank still scores strictly higher
        """
        # Arrange
        top = scored_gene(context, "M", 0.9, 0.9, position=1)
        filter_second = scored_gene(context, "Z", 0.8, 0.5, position=2)
        priority_second = scored_gene(context, "A", 0.7, 0.7, position=3)

        # Act
        ranked = RankBasedGeneScorer().score_genes(
            [priority_second, filter_second, top], ANY, context
        )

        # Assert
        assert filter_second.combined_score > priority_second.combined_score
        assert ranked == [top, filter_second, priority_second]

    def test_scores_strictly_decrease_without_score_ties(self, context) -> None:
        # Arrange
        genes = [
            scored_gene(context, f"G{i}", 0.1 * i, 0.05 * ((i * 3) % 7 + 1), position=i)
            for i in range(1, 8)
        ]

        # Act
        ranked = RankBasedGeneScorer().score_genes(genes, ANY, context)

        # Assert
        scores = [g.combined_score for g in ranked]
        assert all(a > b for a, b in zip(scores, scores[1:]))

    def test_scores_non_increasing_in_output(self, context) -> None:
        # Arrange
        genes = [
            scored_gene(context, f"G{i}", 0.1 * i, 0.05 * (i % 4), position=i)
            for i in range(1, 8)
        ]

        # Act
        ranked = RankBasedGeneScorer().score_genes(genes, ANY, context)

        # Assert
        scores = [g.combined_score for g in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_empty_input(self, context) -> None:
        assert RankBasedGeneScorer().score_genes([], ANY, context) == []

    def test_incompatible_gene_gets_floor(self, context) -> None:
        # Arrange
        gene = scored_gene(context, "GENE1", 0.9, 0.9)

        # Act
        RankBasedGeneScorer(incompatible_score_floor=0.25).score_genes([gene], AD, context)

        # Assert
        assert gene.combined_score == pytest.approx(0.25)


class TestOrdering:
    """Tests for the output order shared by both scorers."""

    def test_failed_gene_ranked_last(self, context) -> None:
        # Arrange
        failed = scored_gene(context, "FAILED", 1.0, position=1)
        context.record_gene_result("FAILED", FilterResult.fail(FilterType.INHERITANCE_FILTER))
        passed = scored_gene(context, "PASSED", 0.1, position=2)

        # Act
        ranked = RawScoreGeneScorer().score_genes([failed, passed], ANY, context)

        # Assert
        assert ranked == [passed, failed]

    def test_ties_broken_by_symbol(self, context) -> None:
        # Arrange
        zeta = scored_gene(context, "ZETA", 0.5, position=1)
        alpha = scored_gene(context, "ALPHA", 0.5, position=2)

        # Act
        ranked = RawScoreGeneScorer().score_genes([zeta, alpha], ANY, context)

        # Assert
        assert ranked == [alpha, zeta]


class TestCreateGeneScorer:
    """Tests for the factory."""

    def test_default_is_raw_score(self) -> None:
        assert isinstance(create_gene_scorer(), RawScoreGeneScorer)

    def test_rank_based(self) -> None:
        scorer = create_gene_scorer(ScoringMode.RANK_BASED, 0.2)
        assert isinstance(scorer, RankBasedGeneScorer)
        assert scorer.incompatible_score_floor == 0.2
