"""
Validation Package - Input Validation.

    - PedigreeSampleValidator: Pedigree vs VCF sample names
"""

from variant_ranker.validation.pedigree_validator import (
    PedigreeSampleValidator,
    PedigreeValidationError,
)

__all__ = ["PedigreeSampleValidator", "PedigreeValidationError"]
