"""
Core Domain Entities.

This module defines the fundamental entities of the variant analysis
domain: variants, genes, pedigrees and the per-run sample.

Design Notes:
    - VariantEvaluation and Pedigree are immutable (frozen Pydantic models)
    - Gene is a mutable dataclass; its scores are written by the gene scorer
    - Genes reference their variants by key, never by copy
    - Pass/fail of genes and variants is derived from the run's
      AnalysisContext, it is not stored on the entities
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, Field, model_validator

from variant_ranker.domain.value_objects import (
    FrequencyData,
    PathogenicityData,
    PriorityResult,
    PriorityType,
)

if TYPE_CHECKING:
    from variant_ranker.pipeline.analysis_context import AnalysisContext


class ModeOfInheritance(str, Enum):
    """Mendelian segregation patterns."""

    ANY = "ANY"
    AUTOSOMAL_DOMINANT = "AUTOSOMAL_DOMINANT"
    AUTOSOMAL_RECESSIVE = "AUTOSOMAL_RECESSIVE"
    X_DOMINANT = "X_DOMINANT"
    X_RECESSIVE = "X_RECESSIVE"
    MITOCHONDRIAL = "MITOCHONDRIAL"

    @classmethod
    def concrete_modes(cls) -> Tuple[ModeOfInheritance, ...]:
        """Every mode except ANY."""
        return tuple(m for m in cls if m is not cls.ANY)


class Sex(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    UNKNOWN = "UNKNOWN"


class AffectedStatus(str, Enum):
    AFFECTED = "AFFECTED"
    UNAFFECTED = "UNAFFECTED"
    MISSING = "MISSING"


class Genotype(str, Enum):
    """Diploid genotype call of one sample."""

    HOM_REF = "0/0"
    HET = "0/1"
    HOM_ALT = "1/1"
    NO_CALL = "./."

    @property
    def has_alt(self) -> bool:
        return self in (Genotype.HET, Genotype.HOM_ALT)


class VariantEffect(str, Enum):
    """Most severe predicted consequence of a variant."""

    STOP_GAINED = "STOP_GAINED"
    FRAMESHIFT_VARIANT = "FRAMESHIFT_VARIANT"
    START_LOST = "START_LOST"
    STOP_LOST = "STOP_LOST"
    SPLICE_DONOR_VARIANT = "SPLICE_DONOR_VARIANT"
    SPLICE_ACCEPTOR_VARIANT = "SPLICE_ACCEPTOR_VARIANT"
    SPLICE_REGION_VARIANT = "SPLICE_REGION_VARIANT"
    INFRAME_INSERTION = "INFRAME_INSERTION"
    INFRAME_DELETION = "INFRAME_DELETION"
    MISSENSE_VARIANT = "MISSENSE_VARIANT"
    SYNONYMOUS_VARIANT = "SYNONYMOUS_VARIANT"
    FIVE_PRIME_UTR_VARIANT = "FIVE_PRIME_UTR_VARIANT"
    THREE_PRIME_UTR_VARIANT = "THREE_PRIME_UTR_VARIANT"
    INTRON_VARIANT = "INTRON_VARIANT"
    UPSTREAM_GENE_VARIANT = "UPSTREAM_GENE_VARIANT"
    DOWNSTREAM_GENE_VARIANT = "DOWNSTREAM_GENE_VARIANT"
    INTERGENIC_VARIANT = "INTERGENIC_VARIANT"
    SEQUENCE_VARIANT = "SEQUENCE_VARIANT"


_X_CHROMOSOMES = {"X", "23"}
_MT_CHROMOSOMES = {"M", "MT", "25"}
_Y_CHROMOSOMES = {"Y", "24"}


def _normalise_chromosome(chromosome: str) -> str:
    chrom = chromosome.upper()
    if chrom.startswith("CHR"):
        chrom = chrom[3:]
    return chrom


class VariantEvaluation(BaseModel):
    """A called variant with its genotypes and (optional) annotations."""

    chromosome: str = Field(..., description="Contig name, with or without 'chr'")
    position: int = Field(..., ge=1, description="1-based position")
    ref: str
    alt: str
    gene_symbol: str = Field(default="", description="Assigned gene, '' if none")
    gene_id: int = Field(default=0, ge=0)
    variant_effect: VariantEffect = VariantEffect.SEQUENCE_VARIANT
    genotypes: Dict[str, Genotype] = Field(
        default_factory=dict, description="Sample name -> genotype call"
    )
    frequency_data: Optional[FrequencyData] = None
    pathogenicity_data: Optional[PathogenicityData] = None

    model_config = {"frozen": True}

    @property
    def key(self) -> str:
        """Stable handle used by genes and the analysis context."""
        return f"{self.chromosome}-{self.position}-{self.ref}-{self.alt}"

    @property
    def is_x_chromosomal(self) -> bool:
        return _normalise_chromosome(self.chromosome) in _X_CHROMOSOMES

    @property
    def is_mitochondrial(self) -> bool:
        return _normalise_chromosome(self.chromosome) in _MT_CHROMOSOMES

    @property
    def is_autosomal(self) -> bool:
        chrom = _normalise_chromosome(self.chromosome)
        return chrom not in _X_CHROMOSOMES | _MT_CHROMOSOMES | _Y_CHROMOSOMES

    def genotype_of(self, sample_name: str) -> Genotype:
        return self.genotypes.get(sample_name, Genotype.NO_CALL)

    def with_frequency_data(self, data: Optional[FrequencyData]) -> VariantEvaluation:
        return self.model_copy(update={"frequency_data": data})

    def with_pathogenicity_data(
        self, data: Optional[PathogenicityData]
    ) -> VariantEvaluation:
        return self.model_copy(update={"pathogenicity_data": data})

    def without_annotations(self) -> VariantEvaluation:
        return self.model_copy(
            update={"frequency_data": None, "pathogenicity_data": None}
        )

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(eq=False)
class Gene:
    """
    A gene and the variants assigned to it.

    Variants are held as keys into the run's AnalysisContext. Scores stay
    at their defaults until the gene scorer writes them.
    """

    symbol: str
    gene_id: int = 0
    variant_keys: List[str] = field(default_factory=list)
    priority_results: Dict[PriorityType, PriorityResult] = field(default_factory=dict)
    inheritance_modes: Set[ModeOfInheritance] = field(default_factory=set)
    filter_score: float = 0.0
    priority_score: float = 1.0
    combined_score: float = 0.0

    def add_variant_key(self, key: str) -> None:
        if key not in self.variant_keys:
            self.variant_keys.append(key)

    def remove_variant_key(self, key: str) -> None:
        if key in self.variant_keys:
            self.variant_keys.remove(key)

    def add_priority_result(self, result: PriorityResult) -> None:
        self.priority_results[result.priority_type] = result

    def is_compatible_with(self, mode: ModeOfInheritance) -> bool:
        """ANY is compatible with every gene."""
        return mode is ModeOfInheritance.ANY or mode in self.inheritance_modes

    @property
    def has_variants(self) -> bool:
        return bool(self.variant_keys)

    def __repr__(self) -> str:
        return (
            f"Gene({self.symbol}, variants={len(self.variant_keys)}, "
            f"combined_score={self.combined_score:.4f})"
        )


class Disease(BaseModel):
    """A known Mendelian disease associated with a gene."""

    disease_id: str
    disease_name: str = ""
    inheritance_modes: List[ModeOfInheritance] = Field(default_factory=list)

    model_config = {"frozen": True}


class Individual(BaseModel):
    """A pedigree member."""

    family_id: str = ""
    id: str
    father_id: Optional[str] = None
    mother_id: Optional[str] = None
    sex: Sex = Sex.UNKNOWN
    status: AffectedStatus = AffectedStatus.MISSING

    model_config = {"frozen": True}

    @property
    def is_affected(self) -> bool:
        return self.status is AffectedStatus.AFFECTED

    @property
    def is_unaffected(self) -> bool:
        return self.status is AffectedStatus.UNAFFECTED

    @property
    def is_male(self) -> bool:
        return self.sex is Sex.MALE

    @property
    def is_female(self) -> bool:
        return self.sex is Sex.FEMALE


class Pedigree(BaseModel):
    """
    The individuals of a family and their relationships.

    Structural checks run on construction: identifiers are unique,
    referenced parents are members, fathers are not female and mothers
    are not male.
    """

    individuals: Tuple[Individual, ...] = ()

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_structure(self) -> Pedigree:
        counts = Counter(i.id for i in self.individuals)
        duplicates = sorted(i for i, n in counts.items() if n > 1)
        if duplicates:
            raise ValueError(f"Duplicate individual ids in pedigree: {duplicates}")

        by_id = {i.id: i for i in self.individuals}
        for individual in self.individuals:
            father = by_id.get(individual.father_id) if individual.father_id else None
            mother = by_id.get(individual.mother_id) if individual.mother_id else None
            if individual.father_id and father is None:
                raise ValueError(
                    f"Father {individual.father_id} of {individual.id} is not in the pedigree"
                )
            if individual.mother_id and mother is None:
                raise ValueError(
                    f"Mother {individual.mother_id} of {individual.id} is not in the pedigree"
                )
            if father is not None and father.is_female:
                raise ValueError(f"Father {father.id} of {individual.id} is female")
            if mother is not None and mother.is_male:
                raise ValueError(f"Mother {mother.id} of {individual.id} is male")
        return self

    @classmethod
    def empty(cls) -> Pedigree:
        return cls()

    @classmethod
    def of(cls, *individuals: Individual) -> Pedigree:
        return cls(individuals=tuple(individuals))

    @classmethod
    def just_proband(cls, proband_id: str, sex: Sex = Sex.UNKNOWN) -> Pedigree:
        """Single affected individual, used for single-sample analyses."""
        return cls.of(
            Individual(
                family_id="FAM",
                id=proband_id,
                sex=sex,
                status=AffectedStatus.AFFECTED,
            )
        )

    @property
    def is_empty(self) -> bool:
        return not self.individuals

    @property
    def identifiers(self) -> List[str]:
        return [i.id for i in self.individuals]

    @property
    def family_ids(self) -> Set[str]:
        return {i.family_id for i in self.individuals}

    def get_individual(self, individual_id: Optional[str]) -> Optional[Individual]:
        if individual_id is None:
            return None
        for individual in self.individuals:
            if individual.id == individual_id:
                return individual
        return None

    def contains(self, individual_id: str) -> bool:
        return self.get_individual(individual_id) is not None

    def __len__(self) -> int:
        return len(self.individuals)


@dataclass
class Sample:
    """
    Everything loaded for one analysis run.

    In sparse mode variants and genes start empty and are filled by the
    executor from the variant stream and the known-gene index.
    """

    sample_names: List[str]
    pedigree: Pedigree = field(default_factory=Pedigree.empty)
    proband: Optional[str] = None
    variants: List[VariantEvaluation] = field(default_factory=list)
    genes: List[Gene] = field(default_factory=list)


class StepResult(BaseModel):
    """Result of a single analysis step for the audit trail."""

    step_name: str
    step_kind: str
    input_count: int
    output_count: int
    duration_seconds: float
    failed_items: List[str] = Field(
        default_factory=list, description="Variant keys or gene symbols that failed"
    )

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all failed)."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)


@dataclass
class AnalysisResults:
    """Complete result of an analysis run."""

    sample: Sample
    genes: List[Gene]
    context: AnalysisContext
    audit_trail: List[StepResult] = field(default_factory=list)
    metrics: Dict[str, Any] = field(default_factory=dict)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def passed_genes(self) -> List[Gene]:
        return [g for g in self.genes if self.context.gene_passed(g)]

    @property
    def top_gene(self) -> Optional[Gene]:
        return self.genes[0] if self.genes else None
