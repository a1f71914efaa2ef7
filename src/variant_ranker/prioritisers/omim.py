"""
OMIM Prioritiser.

Scores genes by how well the segregation pattern of their variants fits
the inheritance of the Mendelian diseases known for the gene.

Scoring:
    - gene without known diseases: 1.0 (no evidence against it)
    - disease with unknown inheritance: 1.0
    - disease whose inheritance the gene is compatible with: 1.0
    - any other disease: 0.5
    - gene score: best disease score

Depends on Gene.inheritance_modes, so the executor runs segregation
analysis before this prioritiser.
"""

from __future__ import annotations

import logging
from typing import List

from variant_ranker.domain.entities import Disease, Gene
from variant_ranker.domain.value_objects import PriorityResult, PriorityType
from variant_ranker.interfaces.knowledge_sources import DiseaseSource

logger = logging.getLogger(__name__)

MATCHING_INHERITANCE_FACTOR = 1.0
MISMATCHED_INHERITANCE_FACTOR = 0.5


class OmimPrioritiser:
    """Prioritise genes against known disease inheritance."""

    def __init__(self, disease_source: DiseaseSource) -> None:
        self.disease_source = disease_source

    @property
    def name(self) -> str:
        return "omim_prioritiser"

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.OMIM_PRIORITY

    def prioritise_genes(self, genes: List[Gene]) -> None:
        for gene in genes:
            diseases = self.disease_source.diseases_for(gene.symbol)
            score = max(
                (self._inheritance_factor(gene, d) for d in diseases),
                default=MATCHING_INHERITANCE_FACTOR,
            )
            gene.add_priority_result(
                PriorityResult(
                    priority_type=self.priority_type,
                    gene_symbol=gene.symbol,
                    score=score,
                    description=", ".join(d.disease_id for d in diseases),
                )
            )
        logger.debug(f"OMIM prioritised {len(genes)} genes")

    def _inheritance_factor(self, gene: Gene, disease: Disease) -> float:
        if not disease.inheritance_modes:
            return MATCHING_INHERITANCE_FACTOR
        if any(gene.is_compatible_with(mode) for mode in disease.inheritance_modes):
            return MATCHING_INHERITANCE_FACTOR
        return MISMATCHED_INHERITANCE_FACTOR

    def __repr__(self) -> str:
        return "OmimPrioritiser()"
