"""
Inheritance Filter Implementation.

Gene filter keeping genes whose passing variants segregate according to
the requested mode of inheritance. The compatible modes must already be
on the gene (the executor runs segregation analysis before the first
step that depends on it).
"""

from __future__ import annotations

from variant_ranker.domain.entities import Gene, ModeOfInheritance
from variant_ranker.domain.value_objects import FilterResult, FilterType


class InheritanceFilter:
    """Filter genes by compatibility with a mode of inheritance."""

    def __init__(self, mode_of_inheritance: ModeOfInheritance) -> None:
        self.mode_of_inheritance = mode_of_inheritance

    @property
    def name(self) -> str:
        return "inheritance_filter"

    @property
    def filter_type(self) -> FilterType:
        return FilterType.INHERITANCE_FILTER

    def run_filter(self, gene: Gene) -> FilterResult:
        if gene.is_compatible_with(self.mode_of_inheritance):
            return FilterResult.pass_(self.filter_type)
        return FilterResult.fail(
            self.filter_type,
            reason=f"not compatible with {self.mode_of_inheritance.value}",
        )

    def __repr__(self) -> str:
        return f"InheritanceFilter({self.mode_of_inheritance.value})"
