"""
Test Fixtures - Shared Test Data and Step Stubs.

This package contains reusable test helpers:
    - sample_config.yaml: Sample configuration for testing
    - make_variant: Variant builder with sensible defaults
    - Stub step units recording what they were asked to do

Usage:
    from tests.fixtures import make_variant, StubVariantFilter
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from variant_ranker.domain.entities import Gene, Genotype, VariantEffect, VariantEvaluation
from variant_ranker.domain.value_objects import (
    FilterResult,
    FilterType,
    FrequencyData,
    PathogenicityData,
    PriorityResult,
    PriorityType,
)


def make_variant(
    position: int = 1,
    gene: str = "GENE1",
    chromosome: str = "1",
    genotypes: Optional[Dict[str, Genotype]] = None,
    effect: VariantEffect = VariantEffect.MISSENSE_VARIANT,
    frequency: Optional[FrequencyData] = None,
    pathogenicity: Optional[PathogenicityData] = None,
    ref: str = "A",
    alt: str = "T",
) -> VariantEvaluation:
    """Build a variant; proband is HET unless genotypes are given."""
    return VariantEvaluation(
        chromosome=chromosome,
        position=position,
        ref=ref,
        alt=alt,
        gene_symbol=gene,
        variant_effect=effect,
        genotypes=genotypes if genotypes is not None else {"proband": Genotype.HET},
        frequency_data=frequency,
        pathogenicity_data=pathogenicity,
    )


def annotated(
    variant: VariantEvaluation, max_freq: float = 0.0, path_score: float = 0.9
) -> VariantEvaluation:
    """Copy of a variant with one frequency and one pathogenicity score."""
    frequency = FrequencyData(frequencies={"GNOMAD": max_freq}) if max_freq else FrequencyData()
    return variant.with_frequency_data(frequency).with_pathogenicity_data(
        PathogenicityData(scores={"REVEL": path_score})
    )


def gene_with(symbol: str, variants: Iterable[VariantEvaluation]) -> Gene:
    gene = Gene(symbol=symbol)
    for variant in variants:
        gene.add_variant_key(variant.key)
    return gene


class StubVariantFilter:
    """Variant filter failing a fixed set of variant keys."""

    def __init__(
        self,
        filter_type: FilterType,
        fail_keys: Iterable[str] = (),
        score: float = 1.0,
        name: Optional[str] = None,
    ) -> None:
        self._filter_type = filter_type
        self.fail_keys = set(fail_keys)
        self.score = score
        self.name = name or f"stub_{filter_type.value.lower()}"
        self.seen: List[VariantEvaluation] = []

    @property
    def filter_type(self) -> FilterType:
        return self._filter_type

    def run_filter(self, variant: VariantEvaluation) -> FilterResult:
        self.seen.append(variant)
        if variant.key in self.fail_keys:
            return FilterResult.fail(self._filter_type, reason="stub failure")
        return FilterResult.pass_(self._filter_type, self.score)


class StubPrioritiser:
    """Prioritiser writing fixed scores (0.0 for unknown genes)."""

    def __init__(
        self,
        priority_type: PriorityType = PriorityType.HIPHIVE_PRIORITY,
        scores: Optional[Dict[str, float]] = None,
    ) -> None:
        self._priority_type = priority_type
        self.scores = scores or {}
        self.name = f"stub_{priority_type.value.lower()}"
        self.calls = 0

    @property
    def priority_type(self) -> PriorityType:
        return self._priority_type

    def prioritise_genes(self, genes: List[Gene]) -> None:
        self.calls += 1
        for gene in genes:
            gene.add_priority_result(
                PriorityResult(
                    priority_type=self._priority_type,
                    gene_symbol=gene.symbol,
                    score=self.scores.get(gene.symbol, 0.0),
                )
            )
