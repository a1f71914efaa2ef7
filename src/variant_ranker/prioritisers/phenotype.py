"""
Phenotype Score Prioritiser.

Records externally computed phenotype similarity scores (HiPhive, Phive,
Phenix, ExomeWalker) as priority results. Computing the similarity is
the score source's business; genes it does not know score 0.0.
"""

from __future__ import annotations

import logging
from typing import List

from variant_ranker.config.models import PhenotypePrioritiserConfig
from variant_ranker.domain.entities import Gene
from variant_ranker.domain.value_objects import PriorityResult, PriorityType
from variant_ranker.interfaces.knowledge_sources import PhenotypeScoreSource

logger = logging.getLogger(__name__)


class PhenotypePrioritiser:
    """Prioritise genes by phenotype similarity."""

    def __init__(
        self,
        config: PhenotypePrioritiserConfig,
        score_source: PhenotypeScoreSource,
    ) -> None:
        """
        Initialize prioritiser.

        Args:
            config: Selects which phenotype priority type is produced
            score_source: Supplies per-gene similarity scores
        """
        self.config = config
        self.score_source = score_source

    @property
    def name(self) -> str:
        return "phenotype_prioritiser"

    @property
    def priority_type(self) -> PriorityType:
        return self.config.priority_type

    def prioritise_genes(self, genes: List[Gene]) -> None:
        unscored = 0
        for gene in genes:
            score = self.score_source.score_for(self.priority_type, gene.symbol)
            if score is None:
                unscored += 1
                score = 0.0
            gene.add_priority_result(
                PriorityResult(
                    priority_type=self.priority_type,
                    gene_symbol=gene.symbol,
                    score=score,
                )
            )
        if unscored:
            logger.info(
                f"{unscored}/{len(genes)} genes have no {self.priority_type.value} score"
            )

    def __repr__(self) -> str:
        return f"PhenotypePrioritiser({self.priority_type.value})"
