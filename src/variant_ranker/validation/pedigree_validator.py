"""
Pedigree Validator - Check a Pedigree Against the VCF Samples.

Runs after the sample is loaded and before any step:
    - Empty pedigree + zero or one sample: single affected proband
    - Empty pedigree + several samples: error
    - Exactly one family
    - Proband is a member and affected
    - Every VCF sample is a member of the pedigree

Design Notes:
    - Fail-fast: all problems are collected into one error
    - Structural checks (parents, sexes, duplicate ids) already ran when
      the Pedigree was constructed
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from variant_ranker.domain.entities import Pedigree

logger = logging.getLogger(__name__)


class PedigreeValidationError(Exception):
    """Raised when the pedigree is incompatible with the analysed samples."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class PedigreeSampleValidator:
    """Validates the pedigree of a run against its sample names."""

    def validate(
        self,
        pedigree: Pedigree,
        proband: Optional[str],
        sample_names: Sequence[str],
    ) -> Pedigree:
        """
        Validate, returning the pedigree the analysis should use.

        Args:
            pedigree: Pedigree loaded with the sample (possibly empty)
            proband: Proband sample name; defaults to the first sample
            sample_names: Sample names of the VCF, in column order

        Returns:
            The pedigree, or a single-proband pedigree for single-sample runs

        Raises:
            PedigreeValidationError: If validation fails
        """
        proband = proband or (sample_names[0] if sample_names else None)

        if pedigree.is_empty:
            if len(sample_names) > 1:
                raise PedigreeValidationError(
                    f"No pedigree supplied for a multi-sample VCF "
                    f"({len(sample_names)} samples)",
                    field="pedigree",
                )
            if proband is None:
                return pedigree
            logger.debug(f"Using single-proband pedigree for {proband}")
            return Pedigree.just_proband(proband)

        errors: List[str] = []

        families = pedigree.family_ids
        if len(families) != 1:
            errors.append(
                f"Pedigree must contain exactly one family, found {sorted(families)}"
            )

        proband_error = self._validate_proband(pedigree, proband)
        if proband_error:
            errors.append(proband_error)

        missing = [name for name in sample_names if not pedigree.contains(name)]
        if missing:
            errors.append(f"VCF samples not in pedigree: {missing}")

        if errors:
            error_message = "; ".join(errors)
            logger.error(f"Pedigree validation failed: {error_message}")
            raise PedigreeValidationError(error_message)

        logger.debug(
            f"Pedigree validated: {len(pedigree)} individuals, proband={proband}"
        )
        return pedigree

    def _validate_proband(self, pedigree: Pedigree, proband: Optional[str]) -> Optional[str]:
        if proband is None:
            return "No proband given and the VCF has no samples"
        individual = pedigree.get_individual(proband)
        if individual is None:
            return f"Proband {proband} is not in the pedigree"
        if not individual.is_affected:
            return f"Proband {proband} is not affected"
        return None
