"""
Domain Layer - Core Entities, Value Objects and Steps.

Entities:
    - VariantEvaluation: A called variant with genotypes and annotations
    - Gene: A gene with variant keys, priority results and scores
    - Pedigree / Individual: Family structure used for segregation analysis
    - Sample: Everything loaded for one analysis run
    - AnalysisResults: Complete result of a run

Value Objects:
    - FilterResult / FilterResultMap: Filter outcomes per variant or gene
    - FrequencyData / PathogenicityData: Variant annotations
    - PriorityResult: Prioritiser score for a gene

Steps:
    - AnalysisStep: Tagged step unit (variant filter, gene filter, prioritiser)
    - StepKind / StepFunction: Dispatch and grouping tags

Design Principles:
    - Immutable where possible (frozen Pydantic models)
    - No infrastructure dependencies
"""

from variant_ranker.domain.entities import (
    AffectedStatus,
    AnalysisResults,
    Disease,
    Gene,
    Genotype,
    Individual,
    ModeOfInheritance,
    Pedigree,
    Sample,
    Sex,
    StepResult,
    VariantEffect,
    VariantEvaluation,
)
from variant_ranker.domain.steps import (
    AnalysisStep,
    StepFunction,
    StepKind,
    group_steps_by_function,
)
from variant_ranker.domain.value_objects import (
    DuplicateFilterResultError,
    FilterResult,
    FilterResultMap,
    FilterResultStatus,
    FilterType,
    FrequencyData,
    PathogenicityData,
    PriorityResult,
    PriorityType,
)

__all__ = [
    "AffectedStatus",
    "AnalysisResults",
    "AnalysisStep",
    "Disease",
    "DuplicateFilterResultError",
    "FilterResult",
    "FilterResultMap",
    "FilterResultStatus",
    "FilterType",
    "FrequencyData",
    "Gene",
    "Genotype",
    "Individual",
    "ModeOfInheritance",
    "PathogenicityData",
    "Pedigree",
    "PriorityResult",
    "PriorityType",
    "Sample",
    "Sex",
    "StepFunction",
    "StepKind",
    "StepResult",
    "VariantEffect",
    "VariantEvaluation",
    "group_steps_by_function",
]
