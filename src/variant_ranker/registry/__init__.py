"""
Registry Module - Dynamic Step Management.

This module provides a registry for analysis step units, enabling
config-driven step selection and custom unit registration.

Components:
    - StepRegistry: Central registry for step units
    - StepInfo: Metadata about registered units
    - create_step_registry: Registry pre-filled with the bundled units
"""

from variant_ranker.registry.step_registry import (
    StepInfo,
    StepRegistry,
    create_step_registry,
)

__all__ = [
    "StepInfo",
    "StepRegistry",
    "create_step_registry",
]
