"""
In-Memory Knowledge Sources.

Dictionary-backed DiseaseSource and PhenotypeScoreSource for the
prioritisers.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional

from variant_ranker.domain.entities import Disease
from variant_ranker.domain.value_objects import PriorityType


class InMemoryDiseaseSource:
    """Known diseases per gene symbol."""

    def __init__(self, diseases: Optional[Mapping[str, Iterable[Disease]]] = None) -> None:
        self._diseases: Dict[str, List[Disease]] = {
            symbol: list(entries) for symbol, entries in (diseases or {}).items()
        }

    def diseases_for(self, gene_symbol: str) -> List[Disease]:
        return list(self._diseases.get(gene_symbol, []))


class InMemoryPhenotypeScoreSource:
    """Precomputed phenotype similarity scores per priority type and gene."""

    def __init__(
        self, scores: Optional[Mapping[PriorityType, Mapping[str, float]]] = None
    ) -> None:
        self._scores: Dict[PriorityType, Dict[str, float]] = {
            priority_type: dict(by_gene) for priority_type, by_gene in (scores or {}).items()
        }

    def score_for(self, priority_type: PriorityType, gene_symbol: str) -> Optional[float]:
        return self._scores.get(priority_type, {}).get(gene_symbol)
