"""
Knowledge Source Protocols.

Reference data read by the bundled prioritisers: known disease
associations per gene and externally computed phenotype similarity
scores per gene.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from variant_ranker.domain.entities import Disease
    from variant_ranker.domain.value_objects import PriorityType


@runtime_checkable
class DiseaseSource(Protocol):
    """Known Mendelian diseases per gene."""

    def diseases_for(self, gene_symbol: str) -> List[Disease]:
        ...


@runtime_checkable
class PhenotypeScoreSource(Protocol):
    """Phenotype similarity scores per gene, in [0, 1]."""

    def score_for(self, priority_type: PriorityType, gene_symbol: str) -> Optional[float]:
        ...
