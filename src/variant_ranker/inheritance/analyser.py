"""
Inheritance Mode Analyser.

Tests the passing variants of a gene against Mendelian segregation
patterns in a pedigree.

Rules (per variant, NO_CALL never disqualifies anyone):
    AUTOSOMAL_DOMINANT: affected HET, unaffected HOM_REF
    AUTOSOMAL_RECESSIVE:
        homozygous: affected HOM_ALT, unaffected not HOM_ALT,
                    unaffected parents of an affected are carriers
        compound heterozygous: two variants, affected HET at both,
                    no unaffected HOM_ALT or HET at both, and no
                    affected inherits both alleles from one parent
    X_RECESSIVE: affected HOM_ALT (HET accepted in males), unaffected
                 females not HOM_ALT, unaffected males HOM_REF
    X_DOMINANT / MITOCHONDRIAL: affected carry an alt allele,
                 unaffected HOM_REF

At least one affected individual must carry a qualifying call.

Design Notes:
    - The pedigree is always an explicit parameter
    - An empty pedigree is compatible with every mode
    - A gene with no passing variants has no compatible mode
"""

from __future__ import annotations

import logging
from itertools import combinations
from typing import TYPE_CHECKING, Iterable, List, Set

from variant_ranker.domain.entities import (
    Gene,
    Genotype,
    Individual,
    ModeOfInheritance,
    Pedigree,
    VariantEvaluation,
)

if TYPE_CHECKING:
    from variant_ranker.pipeline.analysis_context import AnalysisContext

logger = logging.getLogger(__name__)


class InheritanceModeAnalyser:
    """Computes the inheritance modes each gene is compatible with."""

    def analyse(
        self, gene: Gene, pedigree: Pedigree, context: AnalysisContext
    ) -> Set[ModeOfInheritance]:
        """
        Compatible modes of one gene.

        Args:
            gene: Gene to test
            pedigree: Family of the analysed samples
            context: Run context deciding which variants currently pass

        Returns:
            Set of concrete modes (never contains ANY)
        """
        variants = context.passed_variants(gene)
        if not variants:
            return set()
        if pedigree.is_empty:
            return set(ModeOfInheritance.concrete_modes())

        autosomal = [v for v in variants if v.is_autosomal]
        x_linked = [v for v in variants if v.is_x_chromosomal]
        mitochondrial = [v for v in variants if v.is_mitochondrial]

        modes: Set[ModeOfInheritance] = set()
        if any(self._segregates_dominant(v, pedigree, het_only=True) for v in autosomal):
            modes.add(ModeOfInheritance.AUTOSOMAL_DOMINANT)
        if self._segregates_autosomal_recessive(autosomal, pedigree):
            modes.add(ModeOfInheritance.AUTOSOMAL_RECESSIVE)
        if any(self._segregates_dominant(v, pedigree) for v in x_linked):
            modes.add(ModeOfInheritance.X_DOMINANT)
        if any(self._segregates_x_recessive(v, pedigree) for v in x_linked):
            modes.add(ModeOfInheritance.X_RECESSIVE)
        if any(self._segregates_dominant(v, pedigree) for v in mitochondrial):
            modes.add(ModeOfInheritance.MITOCHONDRIAL)
        return modes

    def analyse_genes(
        self, genes: Iterable[Gene], pedigree: Pedigree, context: AnalysisContext
    ) -> int:
        """
        Write inheritance_modes on every currently passing gene.

        Returns:
            Number of genes analysed
        """
        analysed = 0
        for gene in genes:
            if not context.gene_passed(gene):
                continue
            gene.inheritance_modes = self.analyse(gene, pedigree, context)
            analysed += 1
        logger.debug(f"Computed inheritance modes for {analysed} genes")
        return analysed

    # -------------------------------------------------------------------------
    # Single-variant patterns
    # -------------------------------------------------------------------------

    @staticmethod
    def _segregates_dominant(
        variant: VariantEvaluation, pedigree: Pedigree, het_only: bool = False
    ) -> bool:
        carrier_found = False
        for individual in pedigree.individuals:
            genotype = variant.genotype_of(individual.id)
            if genotype is Genotype.NO_CALL:
                continue
            if individual.is_affected:
                qualifies = genotype is Genotype.HET if het_only else genotype.has_alt
                if not qualifies:
                    return False
                carrier_found = True
            elif individual.is_unaffected and genotype is not Genotype.HOM_REF:
                return False
        return carrier_found

    @staticmethod
    def _segregates_x_recessive(variant: VariantEvaluation, pedigree: Pedigree) -> bool:
        carrier_found = False
        for individual in pedigree.individuals:
            genotype = variant.genotype_of(individual.id)
            if genotype is Genotype.NO_CALL:
                continue
            if individual.is_affected:
                # males are hemizygous; callers often report them as HET
                if genotype is Genotype.HOM_ALT or (
                    individual.is_male and genotype is Genotype.HET
                ):
                    carrier_found = True
                else:
                    return False
            elif individual.is_unaffected:
                if individual.is_male and genotype.has_alt:
                    return False
                if genotype is Genotype.HOM_ALT:
                    return False
        return carrier_found

    def _segregates_autosomal_recessive(
        self, variants: List[VariantEvaluation], pedigree: Pedigree
    ) -> bool:
        if any(self._segregates_homozygous(v, pedigree) for v in variants):
            return True
        return any(
            self._segregates_compound_het(first, second, pedigree)
            for first, second in combinations(variants, 2)
        )

    @staticmethod
    def _segregates_homozygous(variant: VariantEvaluation, pedigree: Pedigree) -> bool:
        carrier_found = False
        for individual in pedigree.individuals:
            genotype = variant.genotype_of(individual.id)
            if genotype is Genotype.NO_CALL:
                continue
            if individual.is_affected:
                if genotype is not Genotype.HOM_ALT:
                    return False
                carrier_found = True
            elif individual.is_unaffected and genotype is Genotype.HOM_ALT:
                return False

        for individual in pedigree.individuals:
            if not individual.is_affected:
                continue
            for parent in _parents(individual, pedigree):
                genotype = variant.genotype_of(parent.id)
                if parent.is_unaffected and genotype is Genotype.HOM_REF:
                    return False
        return carrier_found

    # -------------------------------------------------------------------------
    # Two-variant pattern
    # -------------------------------------------------------------------------

    @staticmethod
    def _segregates_compound_het(
        first: VariantEvaluation, second: VariantEvaluation, pedigree: Pedigree
    ) -> bool:
        carrier_found = False
        for individual in pedigree.individuals:
            a = first.genotype_of(individual.id)
            b = second.genotype_of(individual.id)
            if individual.is_affected:
                if a not in (Genotype.HET, Genotype.NO_CALL):
                    return False
                if b not in (Genotype.HET, Genotype.NO_CALL):
                    return False
                if a is Genotype.HET and b is Genotype.HET:
                    carrier_found = True
            elif individual.is_unaffected:
                if Genotype.HOM_ALT in (a, b):
                    return False
                if a is Genotype.HET and b is Genotype.HET:
                    return False
        if not carrier_found:
            return False

        for individual in pedigree.individuals:
            if not individual.is_affected:
                continue
            parents = _parents(individual, pedigree)
            if len(parents) != 2:
                continue
            carries = [
                (first.genotype_of(p.id).has_alt, second.genotype_of(p.id).has_alt)
                for p in parents
            ]
            called = all(
                first.genotype_of(p.id) is not Genotype.NO_CALL
                and second.genotype_of(p.id) is not Genotype.NO_CALL
                for p in parents
            )
            # both alleles from one parent and none from the other: in cis
            if called and ((True, True) in carries and (False, False) in carries):
                return False
        return True


def _parents(individual: Individual, pedigree: Pedigree) -> List[Individual]:
    parents = [
        pedigree.get_individual(individual.father_id),
        pedigree.get_individual(individual.mother_id),
    ]
    return [p for p in parents if p is not None]
