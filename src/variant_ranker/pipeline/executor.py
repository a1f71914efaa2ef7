"""
Pipeline Executor - Main Orchestrator.

The PipelineExecutor runs a validated list of analysis steps over one
sample and ranks the genes.

States:
    AWAITING_SAMPLE -> COMPUTING_INHERITANCE (optional)
                    -> RUNNING_STEPS -> SCORING -> DONE

Analysis modes:
    FULL: the whole sample is loaded with annotations; every variant
          filter is applied to every variant (EagerVariantFilterRunner)
    PASS_ONLY: variants are streamed once through the first group of
          variant filters (SparseVariantFilterRunner), annotations are
          fetched on demand and failed variants are discarded

Design Notes:
    - Inheritance modes are computed once, right before the first
      inheritance-dependent step (or before scoring if the configured
      mode needs them and no such step ran)
    - A single sample without a pedigree file is segregated against the
      empty pedigree and is compatible with every mode
    - Dispatch over StepKind handles every member; anything else raises
      UnrecognisedStepError
    - The run's AnalysisContext is sealed once the run is done
    - No retries; loader and step errors propagate to the caller
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from variant_ranker import __version__
from variant_ranker.config.models import AnalysisConfig, AnalysisMode, RetentionPolicy
from variant_ranker.domain.entities import (
    AnalysisResults,
    Gene,
    ModeOfInheritance,
    Pedigree,
    Sample,
    StepResult,
    VariantEvaluation,
)
from variant_ranker.domain.steps import (
    AnalysisStep,
    StepFunction,
    StepKind,
    group_steps_by_function,
)
from variant_ranker.inheritance.analyser import InheritanceModeAnalyser
from variant_ranker.interfaces.annotation_provider import AnnotationProvider
from variant_ranker.interfaces.audit_logger import AuditLogger
from variant_ranker.interfaces.metrics_collector import MetricsCollector
from variant_ranker.interfaces.sample_data import SampleDataFactory
from variant_ranker.pipeline.analysis_context import AnalysisContext
from variant_ranker.pipeline.filter_runner import (
    EagerVariantFilterRunner,
    GeneFilterRunner,
    SparseVariantFilterRunner,
)
from variant_ranker.pipeline.step_checker import StepOrderingValidator
from variant_ranker.scoring.gene_scorer import GeneScorer, create_gene_scorer
from variant_ranker.validation.pedigree_validator import PedigreeSampleValidator

logger = logging.getLogger(__name__)

PROGRESS_LOG_INTERVAL = 100_000


class ExecutorState(str, Enum):
    """Lifecycle of one analysis run."""

    AWAITING_SAMPLE = "AWAITING_SAMPLE"
    COMPUTING_INHERITANCE = "COMPUTING_INHERITANCE"
    RUNNING_STEPS = "RUNNING_STEPS"
    SCORING = "SCORING"
    DONE = "DONE"


class UnrecognisedStepError(Exception):
    """Raised when a step's kind is not a known StepKind."""

    def __init__(self, step: AnalysisStep) -> None:
        super().__init__(f"Unrecognised analysis step: {step}")
        self.step = step


class PipelineExecutor:
    """Runs analysis steps over a sample and scores the genes."""

    def __init__(
        self,
        sample_factory: SampleDataFactory,
        annotation_provider: AnnotationProvider,
        config: AnalysisConfig,
        audit_logger: AuditLogger,
        metrics_collector: MetricsCollector,
        gene_scorer: Optional[GeneScorer] = None,
        inheritance_analyser: Optional[InheritanceModeAnalyser] = None,
        pedigree_validator: Optional[PedigreeSampleValidator] = None,
        step_validator: Optional[StepOrderingValidator] = None,
    ) -> None:
        """
        Initialize executor with all dependencies.

        Args:
            sample_factory: Loads the sample, streams variants, lists known genes
            annotation_provider: On-demand annotations (PASS_ONLY mode)
            config: Analysis configuration
            audit_logger: For audit trail
            metrics_collector: For performance metrics
            gene_scorer: Defaults to the scorer of config.analysis.scoring_mode
            inheritance_analyser: Segregation analysis (optional)
            pedigree_validator: Pedigree vs sample check (optional)
            step_validator: Step ordering corrections (optional)
        """
        self.sample_factory = sample_factory
        self.annotation_provider = annotation_provider
        self.config = config
        self.audit_logger = audit_logger
        self.metrics_collector = metrics_collector
        settings = config.analysis
        self.gene_scorer = gene_scorer or create_gene_scorer(
            settings.scoring_mode, settings.incompatible_score_floor
        )
        self.inheritance_analyser = inheritance_analyser or InheritanceModeAnalyser()
        self.pedigree_validator = pedigree_validator or PedigreeSampleValidator()
        self.step_validator = step_validator or StepOrderingValidator()

        self._state = ExecutorState.AWAITING_SAMPLE
        self._inheritance_computed = False
        self._analysis_pedigree = Pedigree.empty()

    @property
    def state(self) -> ExecutorState:
        return self._state

    @property
    def inheritance_computed(self) -> bool:
        return self._inheritance_computed

    def run_analysis(
        self,
        steps: Sequence[AnalysisStep],
        vcf_path: str,
        ped_path: Optional[str] = None,
    ) -> AnalysisResults:
        """
        Execute the analysis.

        Args:
            steps: Analysis steps in user order; the order is corrected first
            vcf_path: VCF of the sample
            ped_path: Optional pedigree file

        Returns:
            AnalysisResults with ranked genes, filter results and audit trail

        Raises:
            SampleDataError: If the sample cannot be loaded
            PedigreeValidationError: If the pedigree does not fit the samples
            UnrecognisedStepError: If a step has an unknown kind
            DuplicateFilterResultError: If a filter type runs twice on an item
        """
        start_time = time.perf_counter()
        correlation_id = str(uuid.uuid4())
        self.audit_logger.set_correlation_id(correlation_id)
        self._state = ExecutorState.AWAITING_SAMPLE
        self._inheritance_computed = False

        settings = self.config.analysis
        validated_steps = self.step_validator.validate(steps)
        retention = settings.effective_retention_policy
        logger.info(
            f"Starting {settings.analysis_mode.value} analysis of {vcf_path} "
            f"with {len(validated_steps)} steps ({retention.value})"
        )

        if settings.analysis_mode is AnalysisMode.PASS_ONLY:
            sample, context, audit_trail = self._run_sparse(
                validated_steps, vcf_path, ped_path, retention
            )
        else:
            sample, context, audit_trail = self._run_eager(
                validated_steps, vcf_path, ped_path, retention
            )

        ranked = self._score(sample, context)
        context.seal()
        self._state = ExecutorState.DONE

        total_duration = time.perf_counter() - start_time
        self.metrics_collector.record_timing(
            "analysis_total_seconds",
            total_duration,
            {"analysis_mode": settings.analysis_mode.value},
        )
        logger.info(
            f"Analysis finished in {total_duration:.2f}s: "
            f"{len(context.passed_genes)} of {len(ranked)} genes passed"
        )

        return AnalysisResults(
            sample=sample,
            genes=ranked,
            context=context,
            audit_trail=audit_trail,
            metrics=self.metrics_collector.get_metrics(),
            metadata=self._build_metadata(correlation_id, total_duration),
        )

    # -------------------------------------------------------------------------
    # FULL (eager)
    # -------------------------------------------------------------------------

    def _run_eager(
        self,
        steps: List[AnalysisStep],
        vcf_path: str,
        ped_path: Optional[str],
        retention: RetentionPolicy,
    ) -> Tuple[Sample, AnalysisContext, List[StepResult]]:
        load_start = time.perf_counter()
        sample = self.sample_factory.create(vcf_path, ped_path)
        pedigree = self._validate_pedigree(sample)
        context = AnalysisContext.from_sample(
            sample, size_warning_variants=self.config.analysis.size_warning_variants
        )
        self._record_load(load_start, context)

        self._state = ExecutorState.RUNNING_STEPS
        runner = EagerVariantFilterRunner(retention)
        audit_trail = [
            self._execute_step(step, context, pedigree, runner) for step in steps
        ]

        sample.genes = context.genes
        sample.variants = context.variants
        return sample, context, audit_trail

    # -------------------------------------------------------------------------
    # PASS_ONLY (sparse)
    # -------------------------------------------------------------------------

    def _run_sparse(
        self,
        steps: List[AnalysisStep],
        vcf_path: str,
        ped_path: Optional[str],
        retention: RetentionPolicy,
    ) -> Tuple[Sample, AnalysisContext, List[StepResult]]:
        load_start = time.perf_counter()
        sample = self.sample_factory.create_without_variants_or_genes(vcf_path, ped_path)
        pedigree = self._validate_pedigree(sample)
        context = AnalysisContext(
            genes=self.sample_factory.create_known_genes(),
            size_warning_variants=self.config.analysis.size_warning_variants,
        )
        self._record_load(load_start, context)

        self._state = ExecutorState.RUNNING_STEPS
        runner = SparseVariantFilterRunner(self.annotation_provider, retention)
        audit_trail: List[StepResult] = []
        variants_loaded = False

        for group in group_steps_by_function(steps):
            function = group[0].function
            if function is StepFunction.VARIANT_FILTER and not variants_loaded:
                audit_trail.extend(
                    self._stream_variant_filters(group, context, vcf_path, runner)
                )
                variants_loaded = True
                continue
            if function is not StepFunction.GENE_ONLY_DEPENDENT and not variants_loaded:
                self._load_variants_unfiltered(context, vcf_path, retention)
                variants_loaded = True
            for step in group:
                audit_trail.append(self._execute_step(step, context, pedigree, runner))

        if not variants_loaded:
            self._load_variants_unfiltered(context, vcf_path, retention)

        if retention is RetentionPolicy.DISCARD_FAILED:
            genes = [g for g in context.passed_genes if g.has_variants]
        else:
            genes = [g for g in context.genes if g.has_variants]
        sample.genes = genes
        sample.variants = [v for g in genes for v in context.variants_of(g)]
        return sample, context, audit_trail

    def _stream_variant_filters(
        self,
        group: List[AnalysisStep],
        context: AnalysisContext,
        vcf_path: str,
        runner: SparseVariantFilterRunner,
    ) -> List[StepResult]:
        """Single pass of the variant stream through a group of variant filters."""
        filters = [step.unit for step in group]
        names = ", ".join(step.name for step in group)
        stream_start = time.perf_counter()
        self.audit_logger.log_step_start(names, 0, {"streamed": True})
        applied_before = dict(runner.applied_counts)
        failed_before = dict(runner.failed_counts)

        streamed = 0
        skipped = 0
        duplicates = 0
        for variant in self.sample_factory.stream_variants(vcf_path):
            streamed += 1
            if streamed % PROGRESS_LOG_INTERVAL == 0:
                logger.info(
                    f"Streamed {streamed} variants, "
                    f"{context.passed_variant_count} passing so far"
                )
            if context.contains_variant(variant.key):
                logger.debug(f"Skipping repeated record {variant.key}")
                duplicates += 1
                continue
            if not self._accepts_streamed_variant(variant, context, runner.retention):
                skipped += 1
                continue
            runner.run(filters, [variant], context)

        duration = time.perf_counter() - stream_start
        logger.info(
            f"Streamed {streamed} variants ({skipped} skipped, "
            f"{duplicates} repeated), {context.passed_variant_count} passed {names}"
        )
        self.metrics_collector.record_count("variants_streamed_total", streamed)
        self.metrics_collector.record_count("variants_skipped_total", skipped)
        self.metrics_collector.record_count("variants_duplicate_total", duplicates)

        results: List[StepResult] = []
        for step in group:
            filter_type = step.filter_type
            applied = runner.applied_counts[filter_type] - applied_before.get(filter_type, 0)
            failed = runner.failed_counts[filter_type] - failed_before.get(filter_type, 0)
            self._record_step_metrics(step, duration, failed)
            results.append(
                StepResult(
                    step_name=step.name,
                    step_kind=step.kind.value,
                    input_count=applied,
                    output_count=applied - failed,
                    duration_seconds=duration,
                )
            )
        self.audit_logger.log_step_end(
            names, context.passed_variant_count, duration, {"streamed": streamed}
        )
        return results

    def _load_variants_unfiltered(
        self, context: AnalysisContext, vcf_path: str, retention: RetentionPolicy
    ) -> None:
        loaded = 0
        for variant in self.sample_factory.stream_variants(vcf_path):
            if context.contains_variant(variant.key):
                continue
            if self._accepts_streamed_variant(variant, context, retention):
                context.add_variant(variant)
                loaded += 1
        logger.info(f"Loaded {loaded} variants without variant filtering")
        self.metrics_collector.record_count("variants_loaded_total", loaded)

    @staticmethod
    def _accepts_streamed_variant(
        variant: VariantEvaluation,
        context: AnalysisContext,
        retention: RetentionPolicy,
    ) -> bool:
        gene = context.get_gene(variant.gene_symbol)
        if gene is None:
            return False
        if retention is RetentionPolicy.DISCARD_FAILED and not context.gene_passed(gene):
            return False
        return True

    # -------------------------------------------------------------------------
    # Steps
    # -------------------------------------------------------------------------

    def _execute_step(
        self,
        step: AnalysisStep,
        context: AnalysisContext,
        pedigree: Pedigree,
        variant_runner: Any,
    ) -> StepResult:
        """Execute a single analysis step."""
        if step.is_inheritance_dependent and not self._inheritance_computed:
            self._compute_inheritance(context, pedigree)

        step_start = time.perf_counter()
        if step.kind is StepKind.VARIANT_FILTER:
            before = {v.key: v for v in context.variants if context.variant_passed(v.key)}
            self.audit_logger.log_step_start(step.name, len(before))
            variant_runner.run([step.unit], context.variants, context)
            after = {v.key for v in context.variants if context.variant_passed(v.key)}
            failed = sorted(set(before) - after)
            for key in failed:
                self.audit_logger.log_variant_filtered(
                    before[key], step.name, f"failed {step.filter_type.value}"
                )
            input_count, output_count = len(before), len(after)
        elif step.kind is StepKind.GENE_FILTER:
            passing = context.passed_genes
            self.audit_logger.log_step_start(step.name, len(passing))
            kept = GeneFilterRunner().run([step.unit], passing, context)
            kept_symbols = {g.symbol for g in kept}
            failed = [g.symbol for g in passing if g.symbol not in kept_symbols]
            for gene in passing:
                if gene.symbol not in kept_symbols:
                    reason = context.gene_results(gene.symbol).get(step.filter_type)
                    self.audit_logger.log_gene_filtered(
                        gene, step.name, reason.reason if reason else "failed"
                    )
            input_count, output_count = len(passing), len(kept)
        elif step.kind is StepKind.PRIORITISER:
            passing = context.passed_genes
            self.audit_logger.log_step_start(step.name, len(passing))
            step.unit.prioritise_genes(passing)
            failed = []
            input_count = output_count = len(passing)
        else:
            raise UnrecognisedStepError(step)

        duration = time.perf_counter() - step_start
        self.audit_logger.log_step_end(step.name, output_count, duration)
        self._record_step_metrics(step, duration, len(failed))

        return StepResult(
            step_name=step.name,
            step_kind=step.kind.value,
            input_count=input_count,
            output_count=output_count,
            duration_seconds=duration,
            failed_items=failed,
        )

    def _compute_inheritance(self, context: AnalysisContext, pedigree: Pedigree) -> None:
        previous = self._state
        self._state = ExecutorState.COMPUTING_INHERITANCE
        inheritance_start = time.perf_counter()
        analysed = self.inheritance_analyser.analyse_genes(context.genes, pedigree, context)
        self._inheritance_computed = True
        self.metrics_collector.record_timing(
            "inheritance_seconds", time.perf_counter() - inheritance_start
        )
        logger.info(f"Computed inheritance modes for {analysed} passing genes")
        self._state = previous

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def _score(self, sample: Sample, context: AnalysisContext) -> List[Gene]:
        settings = self.config.analysis
        mode = settings.mode_of_inheritance
        if mode is not ModeOfInheritance.ANY and not self._inheritance_computed:
            self._compute_inheritance(context, self._analysis_pedigree)

        self._state = ExecutorState.SCORING
        scoring_start = time.perf_counter()
        ranked = self.gene_scorer.score_genes(sample.genes, mode, context)
        self.metrics_collector.record_timing(
            "scoring_seconds", time.perf_counter() - scoring_start
        )
        self.metrics_collector.record_count("genes_scored_total", len(ranked))

        for position, gene in enumerate(ranked[: settings.top_genes_to_log], start=1):
            logger.info(
                f"#{position} {gene.symbol}: combined={gene.combined_score:.4f} "
                f"filter={gene.filter_score:.4f} priority={gene.priority_score:.4f}"
            )
        return ranked

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _validate_pedigree(self, sample: Sample) -> Pedigree:
        """
        Validate the sample pedigree and pick the one used for segregation.

        Without a pedigree file a single sample is recorded as an affected
        proband, but segregation still sees the empty pedigree so every
        mode of inheritance stays compatible.
        """
        loaded = sample.pedigree
        sample.pedigree = self.pedigree_validator.validate(
            loaded,
            self.config.analysis.proband or sample.proband,
            sample.sample_names,
        )
        logger.debug(f"Pedigree validated for samples {sample.sample_names}")
        self._analysis_pedigree = loaded if loaded.is_empty else sample.pedigree
        return self._analysis_pedigree

    def _record_load(self, load_start: float, context: AnalysisContext) -> None:
        self.metrics_collector.record_timing(
            "sample_load_seconds", time.perf_counter() - load_start
        )
        self.metrics_collector.record_count("input_variants_total", len(context))
        self.metrics_collector.record_count("input_genes_total", len(context.genes))

    def _record_step_metrics(self, step: AnalysisStep, duration: float, failed: int) -> None:
        self.metrics_collector.record_timing(
            "step_duration_seconds", duration, {"step": step.name}
        )
        self.metrics_collector.record_count(
            "items_filtered_total", failed, {"step": step.name}
        )

    def _build_metadata(self, correlation_id: str, duration: float) -> Dict[str, Any]:
        """Build result metadata."""
        return {
            "correlation_id": correlation_id,
            "timestamp": datetime.now().isoformat(),
            "duration_seconds": duration,
            "analysis_mode": self.config.analysis.analysis_mode.value,
            "version": __version__,
        }
