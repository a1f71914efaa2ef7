"""
Step Unit Protocols.

Defines the interfaces of the pluggable units an AnalysisStep wraps.
Concrete units live in variant_ranker.filters and variant_ranker.prioritisers;
any other object with the same shape can be wrapped as well.

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Filters are stateless and return a FilterResult; they never record
      it themselves (the runners record into the AnalysisContext)
    - Prioritisers mutate Gene.priority_results and return nothing
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from variant_ranker.domain.entities import Gene, VariantEvaluation
    from variant_ranker.domain.value_objects import FilterResult, FilterType, PriorityType


@runtime_checkable
class VariantFilter(Protocol):
    """Accepts or rejects individual variants."""

    @property
    def filter_type(self) -> FilterType:
        ...

    def run_filter(self, variant: VariantEvaluation) -> FilterResult:
        """
        Evaluate one variant.

        Args:
            variant: Variant with whatever annotations the runner attached

        Returns:
            FilterResult of this filter's type
        """
        ...


@runtime_checkable
class GeneFilter(Protocol):
    """Accepts or rejects genes on gene-level properties."""

    @property
    def filter_type(self) -> FilterType:
        ...

    def run_filter(self, gene: Gene) -> FilterResult:
        ...


@runtime_checkable
class Prioritiser(Protocol):
    """Assigns a relevance score to genes without rejecting them."""

    @property
    def priority_type(self) -> PriorityType:
        ...

    def prioritise_genes(self, genes: List[Gene]) -> None:
        """
        Add a PriorityResult of this prioritiser's type to every gene.

        Args:
            genes: Genes to score, mutated in place
        """
        ...
