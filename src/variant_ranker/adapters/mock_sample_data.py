"""
Mock Sample Data Factory.

An in-memory SampleDataFactory for development and testing. Serves a
fixed list of variants as if they had been read from a VCF, and can
generate a deterministic random cohort.
"""

from __future__ import annotations

import random
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set

from variant_ranker.domain.entities import (
    Gene,
    Genotype,
    Pedigree,
    Sample,
    VariantEffect,
    VariantEvaluation,
)
from variant_ranker.domain.value_objects import FrequencyData, PathogenicityData
from variant_ranker.interfaces.sample_data import SampleDataError


class MockSampleDataFactory:
    """Fake sample data for development and testing."""

    MOCK_GENES = [
        "FGFR2", "CFTR", "BRCA1", "BRCA2", "TP53", "MYH7", "SCN1A", "DMD",
        "COL1A1", "FBN1", "PKD1", "RYR1", "TTN", "LMNA", "MECP2", "GJB2",
    ]

    MOCK_EFFECTS = [
        VariantEffect.MISSENSE_VARIANT,
        VariantEffect.MISSENSE_VARIANT,
        VariantEffect.MISSENSE_VARIANT,
        VariantEffect.STOP_GAINED,
        VariantEffect.FRAMESHIFT_VARIANT,
        VariantEffect.SPLICE_DONOR_VARIANT,
        VariantEffect.SYNONYMOUS_VARIANT,
        VariantEffect.INTRON_VARIANT,
    ]

    def __init__(
        self,
        variants: Iterable[VariantEvaluation],
        sample_names: Sequence[str] = ("proband",),
        pedigree: Optional[Pedigree] = None,
        proband: Optional[str] = None,
        extra_genes: Iterable[str] = (),
        strip_annotations_on_stream: bool = True,
        missing_paths: Iterable[str] = (),
    ) -> None:
        """
        Initialize mock factory.

        Args:
            variants: Variants "in the VCF", in file order
            sample_names: VCF sample columns
            pedigree: Contents of the PED file; only returned when a ped path is given
            proband: Proband sample name
            extra_genes: Known genes without variants
            strip_annotations_on_stream: Stream variants without annotations
            missing_paths: Paths that raise SampleDataError, like unreadable files
        """
        self._variants = list(variants)
        self._sample_names = list(sample_names)
        self._pedigree = pedigree or Pedigree.empty()
        self._proband = proband
        self._strip = strip_annotations_on_stream
        self._missing_paths: Set[str] = set(missing_paths)

        symbols: List[str] = []
        for symbol in [v.gene_symbol for v in self._variants] + list(extra_genes):
            if symbol and symbol not in symbols:
                symbols.append(symbol)
        self._gene_symbols = symbols
        self.stream_count = 0

    @classmethod
    def with_random_variants(
        cls,
        seed: int = 42,
        n_genes: int = 8,
        variants_per_gene: int = 3,
        sample_names: Sequence[str] = ("proband",),
        **kwargs,
    ) -> MockSampleDataFactory:
        """
        Deterministic random cohort.

        Every sample is HET or HOM_ALT at every variant; annotations are
        attached so the same data serves both analysis modes.
        """
        rng = random.Random(seed)
        variants: List[VariantEvaluation] = []
        for g, symbol in enumerate(cls.MOCK_GENES[:n_genes]):
            chromosome = str(g % 22 + 1)
            for i in range(variants_per_gene):
                genotypes = {
                    name: rng.choice([Genotype.HET, Genotype.HET, Genotype.HOM_ALT])
                    for name in sample_names
                }
                variants.append(
                    VariantEvaluation(
                        chromosome=chromosome,
                        position=1_000 * (g + 1) + 10 * i + 1,
                        ref="A",
                        alt=rng.choice(["C", "G", "T"]),
                        gene_symbol=symbol,
                        gene_id=g + 1,
                        variant_effect=rng.choice(cls.MOCK_EFFECTS),
                        genotypes=genotypes,
                        frequency_data=FrequencyData(
                            frequencies={"GNOMAD": round(rng.uniform(0.0, 3.0), 3)}
                        ),
                        pathogenicity_data=PathogenicityData(
                            scores={"REVEL": round(rng.uniform(0.0, 1.0), 3)}
                        ),
                    )
                )
        return cls(variants, sample_names=sample_names, **kwargs)

    @property
    def variants(self) -> List[VariantEvaluation]:
        return list(self._variants)

    def create(self, vcf_path: str, ped_path: Optional[str] = None) -> Sample:
        self._check_path(vcf_path)
        sample = self.create_without_variants_or_genes(vcf_path, ped_path)
        genes: Dict[str, Gene] = {s: Gene(symbol=s) for s in self._gene_symbols}
        for variant in self._variants:
            gene = genes.get(variant.gene_symbol)
            if gene is not None:
                gene.add_variant_key(variant.key)
        sample.variants = list(self._variants)
        sample.genes = list(genes.values())
        return sample

    def create_without_variants_or_genes(
        self, vcf_path: str, ped_path: Optional[str] = None
    ) -> Sample:
        self._check_path(vcf_path)
        if ped_path is not None:
            self._check_path(ped_path)
        return Sample(
            sample_names=list(self._sample_names),
            pedigree=self._pedigree if ped_path is not None else Pedigree.empty(),
            proband=self._proband,
        )

    def stream_variants(self, vcf_path: str) -> Iterator[VariantEvaluation]:
        self._check_path(vcf_path)
        self.stream_count += 1
        return self._stream()

    def create_known_genes(self) -> List[Gene]:
        return [Gene(symbol=s) for s in self._gene_symbols]

    def _stream(self) -> Iterator[VariantEvaluation]:
        for variant in self._variants:
            yield variant.without_annotations() if self._strip else variant

    def _check_path(self, path: str) -> None:
        if not path or path in self._missing_paths:
            raise SampleDataError(f"Cannot read {path!r}", path=path)
