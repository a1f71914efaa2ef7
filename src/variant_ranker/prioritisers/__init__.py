"""
Prioritisers Package - Gene Prioritiser Implementations.

    - OmimPrioritiser: Known disease inheritance vs observed segregation
    - PhenotypePrioritiser: Externally computed phenotype similarity

Prioritisers never reject genes; they add a PriorityResult per gene.
"""

from variant_ranker.prioritisers.omim import OmimPrioritiser
from variant_ranker.prioritisers.phenotype import PhenotypePrioritiser

__all__ = ["OmimPrioritiser", "PhenotypePrioritiser"]
