"""
Scoring Package - Gene Scoring Strategies.
"""

from variant_ranker.scoring.gene_scorer import (
    GeneScorer,
    RankBasedGeneScorer,
    RawScoreGeneScorer,
    create_gene_scorer,
)

__all__ = [
    "GeneScorer",
    "RankBasedGeneScorer",
    "RawScoreGeneScorer",
    "create_gene_scorer",
]
