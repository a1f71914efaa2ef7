"""
Unit Tests for the In-Memory Adapters.

Test Aspects Covered:
    ✅ MockSampleDataFactory: Eager and sparse loading, streaming, errors
    ✅ InMemoryAnnotationProvider: Lookups, empty data, call counts
    ✅ InMemoryMetricsCollector: Summaries per metric
    ✅ ConsoleAuditLogger: Output format and verbosity
"""

from __future__ import annotations

import pytest

from variant_ranker.adapters import (
    ConsoleAuditLogger,
    InMemoryAnnotationProvider,
    InMemoryMetricsCollector,
    MockSampleDataFactory,
)
from variant_ranker.domain.value_objects import FrequencyData, PathogenicityData
from variant_ranker.interfaces import (
    AnnotationProvider,
    AuditLogger,
    MetricsCollector,
    SampleDataError,
    SampleDataFactory,
)

from tests.fixtures import annotated, make_variant


@pytest.fixture
def variants():
    return [
        annotated(make_variant(position=1, gene="FGFR2")),
        annotated(make_variant(position=2, gene="FGFR2")),
        annotated(make_variant(position=3, gene="CFTR")),
    ]


class TestMockSampleDataFactory:
    """Tests for MockSampleDataFactory."""

    def test_create_builds_genes_from_variants(self, variants) -> None:
        # Arrange
        factory = MockSampleDataFactory(variants, extra_genes=["BRCA1"])

        # Act
        sample = factory.create("sample.vcf")

        # Assert
        assert [g.symbol for g in sample.genes] == ["FGFR2", "CFTR", "BRCA1"]
        assert sample.genes[0].variant_keys == [variants[0].key, variants[1].key]
        assert sample.variants == variants
        assert sample.sample_names == ["proband"]

    def test_pedigree_only_with_ped_path(self, variants, trio_pedigree) -> None:
        # Arrange
        factory = MockSampleDataFactory(variants, pedigree=trio_pedigree)

        # Act & Assert
        assert factory.create("sample.vcf").pedigree.is_empty
        assert factory.create("sample.vcf", "family.ped").pedigree == trio_pedigree

    def test_sparse_loading(self, variants) -> None:
        # Arrange
        factory = MockSampleDataFactory(variants)

        # Act
        sample = factory.create_without_variants_or_genes("sample.vcf")
        known = factory.create_known_genes()

        # Assert
        assert sample.variants == []
        assert sample.genes == []
        assert [g.symbol for g in known] == ["FGFR2", "CFTR"]
        assert all(not g.variant_keys for g in known)

    def test_stream_strips_annotations(self, variants) -> None:
        # Arrange
        factory = MockSampleDataFactory(variants)

        # Act
        streamed = list(factory.stream_variants("sample.vcf"))

        # Assert
        assert [v.key for v in streamed] == [v.key for v in variants]
        assert all(v.frequency_data is None for v in streamed)
        assert factory.stream_count == 1

    def test_stream_keeps_annotations_when_asked(self, variants) -> None:
        factory = MockSampleDataFactory(variants, strip_annotations_on_stream=False)
        assert all(v.frequency_data is not None for v in factory.stream_variants("s.vcf"))

    def test_unreadable_path_raises(self, variants) -> None:
        # Arrange
        factory = MockSampleDataFactory(variants, missing_paths=["missing.vcf"])

        # Act & Assert
        with pytest.raises(SampleDataError) as exc_info:
            factory.create("missing.vcf")
        assert exc_info.value.path == "missing.vcf"
        with pytest.raises(SampleDataError):
            factory.create("")

    def test_random_cohort_is_deterministic(self) -> None:
        # Act
        first = MockSampleDataFactory.with_random_variants(seed=7, n_genes=4)
        second = MockSampleDataFactory.with_random_variants(seed=7, n_genes=4)

        # Assert
        assert len(first.variants) == 12
        assert first.variants == second.variants
        assert all(v.pathogenicity_data is not None for v in first.variants)

    def test_satisfies_protocol(self, variants) -> None:
        assert isinstance(MockSampleDataFactory(variants), SampleDataFactory)


class TestInMemoryAnnotationProvider:
    """Tests for InMemoryAnnotationProvider."""

    def test_serves_annotations_of_variants(self, variants) -> None:
        # Arrange
        provider = InMemoryAnnotationProvider.from_variants(variants)

        # Act
        pathogenicity = provider.fetch_pathogenicity(variants[0].without_annotations())

        # Assert
        assert pathogenicity == variants[0].pathogenicity_data
        assert provider.pathogenicity_calls == 1
        assert provider.frequency_calls == 0

    def test_unknown_variant_gets_empty_data(self) -> None:
        # Arrange
        provider = InMemoryAnnotationProvider()
        variant = make_variant()

        # Act & Assert
        assert provider.fetch_frequency(variant) == FrequencyData.empty()
        assert provider.fetch_pathogenicity(variant) == PathogenicityData.empty()

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryAnnotationProvider(), AnnotationProvider)


class TestInMemoryMetricsCollector:
    """Tests for InMemoryMetricsCollector."""

    def test_summary_per_metric(self) -> None:
        # Arrange
        collector = InMemoryMetricsCollector()

        # Act
        collector.record_timing("step_seconds", 0.5, tags={"step": "a"})
        collector.record_timing("step_seconds", 1.5, tags={"step": "b"})
        collector.record_count("variants_streamed_total", 10)

        # Assert
        metrics = collector.get_metrics()
        assert metrics["step_seconds"] == {
            "type": "timing",
            "count": 2,
            "total": 2.0,
            "last": 1.5,
        }
        assert metrics["variants_streamed_total"]["total"] == 10
        assert collector.get_entries("step_seconds")[0]["tags"] == {"step": "a"}

    def test_clear(self) -> None:
        collector = InMemoryMetricsCollector()
        collector.record_gauge("g", 1.0)
        collector.clear()
        assert collector.get_metrics() == {}

    def test_satisfies_protocol(self) -> None:
        assert isinstance(InMemoryMetricsCollector(), MetricsCollector)


class TestConsoleAuditLogger:
    """Tests for ConsoleAuditLogger."""

    def test_line_format(self, capsys) -> None:
        # Arrange
        audit_logger = ConsoleAuditLogger()
        audit_logger.set_correlation_id("abcdef0123456789")

        # Act
        audit_logger.log_step_end("frequency_filter", 5, 0.1234)

        # Assert
        out = capsys.readouterr().out
        assert "[abcdef01]" in out
        assert "[INFO ]" in out
        assert "Completed frequency_filter: 5 items passed (0.123s)" in out

    def test_quiet_mode_skips_item_events(self, capsys) -> None:
        # Arrange
        audit_logger = ConsoleAuditLogger(verbose=False)

        # Act
        audit_logger.log_step_start("frequency_filter", 10)
        audit_logger.log_variant_filtered(make_variant(), "frequency_filter", "common")

        # Assert
        assert capsys.readouterr().out == ""

    def test_verbose_mode_logs_filtered_items(self, capsys) -> None:
        # Arrange
        audit_logger = ConsoleAuditLogger(verbose=True)
        variant = make_variant()

        # Act
        audit_logger.log_variant_filtered(variant, "frequency_filter", "common")

        # Assert
        out = capsys.readouterr().out
        assert "[--------]" in out
        assert f"{variant.key} filtered by frequency_filter: common" in out

    def test_anomaly_always_printed(self, capsys) -> None:
        ConsoleAuditLogger(verbose=False).log_anomaly("odd pedigree", "WARNING")
        assert "ANOMALY: odd pedigree" in capsys.readouterr().out

    def test_satisfies_protocol(self) -> None:
        assert isinstance(ConsoleAuditLogger(), AuditLogger)
