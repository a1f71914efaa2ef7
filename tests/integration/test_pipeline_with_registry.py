"""
Integration Test: Pipeline with StepRegistry.

Tests:
    - Steps wired from a YAML configuration
    - Step order corrected before execution
    - PASS_ONLY and FULL runs of the same configured analysis
    - Structured observability as audit logger and metrics collector
"""

from __future__ import annotations

import logging
from typing import List

import pytest

from variant_ranker.adapters import InMemoryAnnotationProvider, MockSampleDataFactory
from variant_ranker.config import load_config
from variant_ranker.config.models import AnalysisConfig, AnalysisMode
from variant_ranker.domain.entities import Genotype, ModeOfInheritance, VariantEvaluation
from variant_ranker.domain.value_objects import FilterType, PriorityType
from variant_ranker.observability import ObservabilityManager
from variant_ranker.pipeline import PipelineExecutor
from variant_ranker.registry import create_step_registry

from tests.fixtures import annotated, make_variant


@pytest.fixture
def config(sample_config_path) -> AnalysisConfig:
    return load_config(sample_config_path)


@pytest.fixture
def variants() -> List[VariantEvaluation]:
    """Rare FGFR2 variant, rare CFTR variant, common BRCA1 variant."""
    return [
        annotated(
            make_variant(position=100, gene="FGFR2", genotypes={"proband": Genotype.HET}),
            0.0,
            0.8,
        ),
        annotated(make_variant(position=200, gene="CFTR"), 0.1, 0.9),
        annotated(make_variant(position=300, gene="BRCA1"), 2.0, 0.7),
    ]


@pytest.fixture
def observability() -> ObservabilityManager:
    return ObservabilityManager()


def run(config, variants, disease_source, phenotype_scores, observability):
    registry = create_step_registry(
        config, disease_source=disease_source, phenotype_scores=phenotype_scores
    )
    executor = PipelineExecutor(
        sample_factory=MockSampleDataFactory(variants),
        annotation_provider=InMemoryAnnotationProvider.from_variants(variants),
        config=config,
        audit_logger=observability,
        metrics_collector=observability,
    )
    return executor.run_analysis(registry.get_enabled_steps(), "sample.vcf")


class TestConfiguredAnalysis:
    """Configured analysis end to end."""

    def test_registry_follows_config(self, config, disease_source, phenotype_scores) -> None:
        # Act
        registry = create_step_registry(
            config, disease_source=disease_source, phenotype_scores=phenotype_scores
        )
        steps = registry.get_enabled_steps()

        # Assert
        assert [s.name for s in steps] == config.steps
        assert steps[0].unit.config.max_frequency_pct == 0.5
        assert steps[4].unit.mode_of_inheritance is ModeOfInheritance.AUTOSOMAL_DOMINANT
        assert set(registry.get_versions().values()) == {"1.0.0"}

    def test_pass_only_run(
        self, config, variants, disease_source, phenotype_scores, observability, caplog
    ) -> None:
        """
        SCENARIO: Configured PASS_ONLY run with OMIM and phenotype gate
        EXPECTED: BRCA1 too common, CFTR below the phenotype gate,
                  FGFR2 alone with combined score 0.8
        """
        # Act
        with caplog.at_level(logging.WARNING):
            results = run(config, variants, disease_source, phenotype_scores, observability)

        # Assert
        assert [g.symbol for g in results.genes] == ["FGFR2"]
        fgfr2 = results.top_gene
        assert fgfr2.combined_score == pytest.approx(0.8)
        assert fgfr2.priority_results[PriorityType.OMIM_PRIORITY].score == 1.0
        assert ModeOfInheritance.AUTOSOMAL_DOMINANT in fgfr2.inheritance_modes
        assert any("Moved inheritance filter" in r.message for r in caplog.records)

    def test_steps_run_in_corrected_order(
        self, config, variants, disease_source, phenotype_scores, observability
    ) -> None:
        # Act
        results = run(config, variants, disease_source, phenotype_scores, observability)

        # Assert
        assert [s.step_name for s in results.audit_trail] == [
            "frequency_filter",
            "pathogenicity_filter",
            "inheritance_filter",
            "omim_prioritiser",
            "phenotype_prioritiser",
            "priority_score_filter",
        ]

    def test_full_run_agrees(
        self, config, variants, disease_source, phenotype_scores, observability
    ) -> None:
        """
        SCENARIO: Same configuration in FULL mode
        EXPECTED: Same top gene and score; failed genes keep their results
        """
        # Arrange
        full_config = config.model_copy(
            update={
                "analysis": config.analysis.model_copy(
                    update={"analysis_mode": AnalysisMode.FULL}
                )
            }
        )

        # Act
        results = run(full_config, variants, disease_source, phenotype_scores, observability)

        # Assert
        assert results.top_gene.symbol == "FGFR2"
        assert results.top_gene.combined_score == pytest.approx(0.8)
        assert [g.symbol for g in results.passed_genes] == ["FGFR2"]
        assert results.context.gene_results("CFTR").failed_filter_types == [
            FilterType.PRIORITY_SCORE_FILTER
        ]
        brca1 = results.context.get_gene("BRCA1")
        assert not results.context.gene_passed(brca1)
        assert len(results.genes) == 3

    def test_observability_records_run(
        self, config, variants, disease_source, phenotype_scores, observability
    ) -> None:
        # Act
        results = run(config, variants, disease_source, phenotype_scores, observability)

        # Assert
        events = observability.get_events()
        starts = [e for e in events if e["event_type"] == "step_start"]
        assert starts
        assert all(e["correlation_id"] == results.metadata["correlation_id"] for e in starts)
        metrics = observability.get_metrics()
        assert "analysis_total_seconds" in metrics
        assert metrics["variants_streamed_total"][-1]["value"] == 3.0
        summary = observability.step_summary()
        assert summary["priority_score_filter"]["items_filtered"] == 1.0
        assert summary["inheritance_filter"]["items_filtered"] == 0.0
