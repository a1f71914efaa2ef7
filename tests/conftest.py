"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from variant_ranker.adapters.console_logger import ConsoleAuditLogger
from variant_ranker.adapters.knowledge_sources import (
    InMemoryDiseaseSource,
    InMemoryPhenotypeScoreSource,
)
from variant_ranker.adapters.metrics_collector import InMemoryMetricsCollector
from variant_ranker.config.models import (
    AnalysisConfig,
    FrequencyFilterConfig,
    PathogenicityFilterConfig,
    PriorityScoreFilterConfig,
    VariantEffectFilterConfig,
)
from variant_ranker.domain.entities import (
    AffectedStatus,
    Disease,
    Individual,
    ModeOfInheritance,
    Pedigree,
    Sex,
)
from variant_ranker.domain.steps import AnalysisStep
from variant_ranker.domain.value_objects import PriorityType
from variant_ranker.filters import (
    FrequencyFilter,
    InheritanceFilter,
    PathogenicityFilter,
    PriorityScoreFilter,
    VariantEffectFilter,
)
from variant_ranker.prioritisers import OmimPrioritiser

from tests.fixtures import StubPrioritiser


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return Path(__file__).parent / "fixtures" / "sample_config.yaml"


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    return InMemoryMetricsCollector()


@pytest.fixture
def default_config() -> AnalysisConfig:
    return AnalysisConfig()


@pytest.fixture
def trio_pedigree() -> Pedigree:
    """Unaffected parents and their affected son."""
    return Pedigree.of(
        Individual(family_id="FAM1", id="father", sex=Sex.MALE, status=AffectedStatus.UNAFFECTED),
        Individual(family_id="FAM1", id="mother", sex=Sex.FEMALE, status=AffectedStatus.UNAFFECTED),
        Individual(
            family_id="FAM1",
            id="proband",
            father_id="father",
            mother_id="mother",
            sex=Sex.MALE,
            status=AffectedStatus.AFFECTED,
        ),
    )


@pytest.fixture
def disease_source() -> InMemoryDiseaseSource:
    return InMemoryDiseaseSource(
        {
            "FGFR2": [
                Disease(
                    disease_id="OMIM:101600",
                    disease_name="Pfeiffer syndrome",
                    inheritance_modes=[ModeOfInheritance.AUTOSOMAL_DOMINANT],
                )
            ],
            "CFTR": [
                Disease(
                    disease_id="OMIM:219700",
                    disease_name="Cystic fibrosis",
                    inheritance_modes=[ModeOfInheritance.AUTOSOMAL_RECESSIVE],
                )
            ],
        }
    )


@pytest.fixture
def phenotype_scores() -> InMemoryPhenotypeScoreSource:
    return InMemoryPhenotypeScoreSource(
        {PriorityType.HIPHIVE_PRIORITY: {"FGFR2": 0.9, "CFTR": 0.4}}
    )


# -----------------------------------------------------------------------------
# Analysis steps
# -----------------------------------------------------------------------------


@pytest.fixture
def effect_step() -> AnalysisStep:
    return AnalysisStep.variant_filter(VariantEffectFilter(VariantEffectFilterConfig()))


@pytest.fixture
def frequency_step() -> AnalysisStep:
    return AnalysisStep.variant_filter(FrequencyFilter(FrequencyFilterConfig()))


@pytest.fixture
def pathogenicity_step() -> AnalysisStep:
    return AnalysisStep.variant_filter(PathogenicityFilter(PathogenicityFilterConfig()))


@pytest.fixture
def inheritance_step() -> AnalysisStep:
    return AnalysisStep.gene_filter(InheritanceFilter(ModeOfInheritance.AUTOSOMAL_DOMINANT))


@pytest.fixture
def omim_step(disease_source: InMemoryDiseaseSource) -> AnalysisStep:
    return AnalysisStep.prioritiser(OmimPrioritiser(disease_source))


@pytest.fixture
def hiphive_step() -> AnalysisStep:
    return AnalysisStep.prioritiser(StubPrioritiser(PriorityType.HIPHIVE_PRIORITY))


@pytest.fixture
def hiphive_gate_step() -> AnalysisStep:
    return AnalysisStep.gene_filter(
        PriorityScoreFilter(
            PriorityScoreFilterConfig(
                priority_type=PriorityType.HIPHIVE_PRIORITY, min_priority_score=0.5
            )
        )
    )
