"""
Pipeline Package - Analysis Orchestration.

This package contains the core pipeline logic:
    - StepOrderingValidator: Corrects the order of analysis steps
    - Filter runners: Eager and sparse variant filtering, gene filtering
    - AnalysisContext: Per-run variant arena and filter results
    - PipelineExecutor: Main orchestrator
"""

from variant_ranker.pipeline.analysis_context import AnalysisContext, SealedContextError
from variant_ranker.pipeline.executor import (
    ExecutorState,
    PipelineExecutor,
    UnrecognisedStepError,
)
from variant_ranker.pipeline.filter_runner import (
    EagerVariantFilterRunner,
    GeneFilterRunner,
    RetentionPolicy,
    SparseVariantFilterRunner,
)
from variant_ranker.pipeline.step_checker import StepOrderingValidator, validate_steps

__all__ = [
    "AnalysisContext",
    "EagerVariantFilterRunner",
    "ExecutorState",
    "GeneFilterRunner",
    "PipelineExecutor",
    "RetentionPolicy",
    "SealedContextError",
    "SparseVariantFilterRunner",
    "StepOrderingValidator",
    "UnrecognisedStepError",
    "validate_steps",
]
