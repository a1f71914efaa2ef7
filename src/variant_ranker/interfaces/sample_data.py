"""
Sample Data Factory Protocol.

Defines the interface for materialising the data of an analysis run
from a VCF and an optional pedigree file. Parsing is not part of this
package; any factory producing the domain entities can be plugged in.

The factory is responsible for:
    - Building a full Sample (eager mode)
    - Building a Sample without variants or genes (sparse mode)
    - Streaming variants one at a time (sparse mode)
    - Building the known-gene index (sparse mode)

Design Notes:
    - Fatal load problems raise SampleDataError; the run aborts
    - stream_variants returns a single-pass iterator, a new one per call
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, List, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from variant_ranker.domain.entities import Gene, Sample, VariantEvaluation


class SampleDataError(Exception):
    """Raised when the sample data of a run cannot be loaded."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


@runtime_checkable
class SampleDataFactory(Protocol):
    """Abstract interface for loading sample data."""

    def create(self, vcf_path: str, ped_path: Optional[str] = None) -> Sample:
        """
        Load sample names, pedigree, every variant and the derived genes.

        Raises:
            SampleDataError: If the files cannot be loaded
        """
        ...

    def create_without_variants_or_genes(
        self, vcf_path: str, ped_path: Optional[str] = None
    ) -> Sample:
        """Load sample names and pedigree only."""
        ...

    def stream_variants(self, vcf_path: str) -> Iterator[VariantEvaluation]:
        """Stream variants without annotations, in file order."""
        ...

    def create_known_genes(self) -> List[Gene]:
        """Fresh Gene objects for every gene of the reference data."""
        ...
