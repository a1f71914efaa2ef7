"""
Variant Ranker - Variant Filtering and Gene Prioritisation Pipeline.

Analyses a cohort's genomic variants against a configurable sequence of
variant filters, gene filters and prioritisers, runs Mendelian segregation
analysis over the pedigree and ranks the genes by a combined score.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Closed set of step kinds dispatched exhaustively by the executor
    - Configuration-driven step selection via YAML

Main Components:
    - domain: Core entities (VariantEvaluation, Gene, Pedigree, AnalysisStep)
    - interfaces: Protocols for step units and external collaborators
    - filters / prioritisers: Reference step units
    - inheritance: Segregation analysis
    - scoring: Gene scorers (raw score, rank based)
    - pipeline: Step ordering, filter runners, executor and run context
    - adapters: In-memory factories, providers, loggers and metrics
    - config / registry: YAML configuration and step registry

Example:
    >>> from variant_ranker.pipeline.executor import PipelineExecutor
    >>> executor = PipelineExecutor(sample_factory, annotation_provider, config,
    ...                             audit_logger, metrics_collector)
    >>> results = executor.run_analysis(steps, vcf_path="cohort.vcf", ped_path="cohort.ped")
    >>> print(results.genes[0].symbol, results.genes[0].combined_score)

"""

import logging

__version__ = "0.3.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Variant Ranker.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import variant_ranker
        >>> variant_ranker.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("variant_ranker").setLevel(level)
