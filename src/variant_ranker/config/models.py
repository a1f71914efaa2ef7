"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from variant_ranker.domain.entities import ModeOfInheritance, VariantEffect
from variant_ranker.domain.value_objects import PriorityType


class AnalysisMode(str, Enum):
    """How variants are loaded and filtered."""

    FULL = "FULL"  # eager: whole sample in memory, annotations present
    PASS_ONLY = "PASS_ONLY"  # sparse: streamed, annotated on demand


class ScoringMode(str, Enum):
    RAW_SCORE = "RAW_SCORE"
    RANK_BASED = "RANK_BASED"


class RetentionPolicy(str, Enum):
    """What a filter runner does with variants that fail."""

    RETAIN_ALL = "RETAIN_ALL"
    DISCARD_FAILED = "DISCARD_FAILED"


PHENOTYPE_PRIORITY_TYPES = (
    PriorityType.HIPHIVE_PRIORITY,
    PriorityType.PHIVE_PRIORITY,
    PriorityType.PHENIX_PRIORITY,
    PriorityType.EXOMEWALKER_PRIORITY,
)

DEFAULT_STEPS = [
    "variant_effect_filter",
    "frequency_filter",
    "pathogenicity_filter",
    "inheritance_filter",
    "omim_prioritiser",
]


class AnalysisSettings(BaseModel):
    """Run-wide analysis settings."""

    analysis_mode: AnalysisMode = AnalysisMode.FULL
    retention_policy: Optional[RetentionPolicy] = Field(
        default=None,
        description="Defaults to RETAIN_ALL for FULL and DISCARD_FAILED for PASS_ONLY",
    )
    mode_of_inheritance: ModeOfInheritance = ModeOfInheritance.ANY
    scoring_mode: ScoringMode = ScoringMode.RAW_SCORE
    incompatible_score_floor: float = Field(default=0.0, ge=0, le=1)
    top_genes_to_log: int = Field(default=5, ge=0)
    proband: Optional[str] = Field(default=None, description="Proband sample name")
    size_warning_variants: int = Field(default=5_000_000, ge=1)

    @property
    def effective_retention_policy(self) -> RetentionPolicy:
        if self.retention_policy is not None:
            return self.retention_policy
        if self.analysis_mode is AnalysisMode.PASS_ONLY:
            return RetentionPolicy.DISCARD_FAILED
        return RetentionPolicy.RETAIN_ALL


class VariantEffectFilterConfig(BaseModel):
    """Configuration for the variant effect filter."""

    off_target_effects: List[VariantEffect] = Field(
        default_factory=lambda: [
            VariantEffect.SYNONYMOUS_VARIANT,
            VariantEffect.INTRON_VARIANT,
            VariantEffect.UPSTREAM_GENE_VARIANT,
            VariantEffect.DOWNSTREAM_GENE_VARIANT,
            VariantEffect.INTERGENIC_VARIANT,
        ]
    )


class FrequencyFilterConfig(BaseModel):
    """Configuration for the frequency filter."""

    max_frequency_pct: float = Field(default=1.0, ge=0, le=100)
    remove_known_variants: bool = False


class PathogenicityFilterConfig(BaseModel):
    """Configuration for the pathogenicity filter."""

    keep_non_pathogenic: bool = False


class InheritanceFilterConfig(BaseModel):
    """Configuration for the inheritance (segregation) filter."""

    mode_of_inheritance: Optional[ModeOfInheritance] = Field(
        default=None, description="Defaults to analysis.mode_of_inheritance"
    )


class PriorityScoreFilterConfig(BaseModel):
    """Configuration for the priority score gate."""

    priority_type: PriorityType = PriorityType.HIPHIVE_PRIORITY
    min_priority_score: float = Field(default=0.0, ge=0, le=1)


class PhenotypePrioritiserConfig(BaseModel):
    """Configuration for the phenotype score prioritiser."""

    priority_type: PriorityType = PriorityType.HIPHIVE_PRIORITY

    @field_validator("priority_type")
    @classmethod
    def _must_be_phenotype_type(cls, value: PriorityType) -> PriorityType:
        if value not in PHENOTYPE_PRIORITY_TYPES:
            raise ValueError(f"{value.value} is not a phenotype priority type")
        return value


class AnalysisConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    variant_effect_filter: VariantEffectFilterConfig = Field(
        default_factory=VariantEffectFilterConfig,
    )
    frequency_filter: FrequencyFilterConfig = Field(
        default_factory=FrequencyFilterConfig,
    )
    pathogenicity_filter: PathogenicityFilterConfig = Field(
        default_factory=PathogenicityFilterConfig,
    )
    inheritance_filter: InheritanceFilterConfig = Field(
        default_factory=InheritanceFilterConfig,
    )
    priority_score_filter: PriorityScoreFilterConfig = Field(
        default_factory=PriorityScoreFilterConfig,
    )
    phenotype_prioritiser: PhenotypePrioritiserConfig = Field(
        default_factory=PhenotypePrioritiserConfig,
    )
    steps: List[str] = Field(
        default_factory=lambda: list(DEFAULT_STEPS),
        description="Names of enabled steps, in user order",
    )

    @property
    def inheritance_filter_mode(self) -> ModeOfInheritance:
        return (
            self.inheritance_filter.mode_of_inheritance
            or self.analysis.mode_of_inheritance
        )
