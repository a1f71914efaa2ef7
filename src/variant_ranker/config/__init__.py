"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of Variant Ranker:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - AnalysisConfig: Root configuration object
    - AnalysisSettings: Run-wide settings (mode, retention, scoring)
    - One model per bundled step (frequency, pathogenicity, ...)
    - steps: Ordered list of enabled step names

Design Principles:
    - Type-safe via Pydantic
    - Validation on load (fail fast)
    - Support for profiles (e.g. strict, exploratory)
"""

from variant_ranker.config.loader import ConfigLoader, load_config
from variant_ranker.config.models import (
    AnalysisConfig,
    AnalysisMode,
    AnalysisSettings,
    RetentionPolicy,
    ScoringMode,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisMode",
    "AnalysisSettings",
    "ConfigLoader",
    "RetentionPolicy",
    "ScoringMode",
    "load_config",
]
