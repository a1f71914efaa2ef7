"""
Step Registry - Dynamic Analysis Step Management.

This module provides a thread-safe registry for managing analysis step
units. Units are registered under a name together with their StepKind,
enabled in the configured order and instantiated as AnalysisSteps.

Usage:
    registry = StepRegistry()
    registry.register("frequency_filter", StepKind.VARIANT_FILTER,
                      FrequencyFilter, "1.0.0", config.frequency_filter)
    registry.enable_steps(["frequency_filter"])

    steps = registry.get_enabled_steps()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Dict, List, Optional, Type

from variant_ranker.config.models import AnalysisConfig
from variant_ranker.domain.steps import AnalysisStep, StepKind
from variant_ranker.filters import (
    FrequencyFilter,
    InheritanceFilter,
    PathogenicityFilter,
    PriorityScoreFilter,
    VariantEffectFilter,
)
from variant_ranker.interfaces.knowledge_sources import DiseaseSource, PhenotypeScoreSource
from variant_ranker.prioritisers import OmimPrioritiser, PhenotypePrioritiser

logger = logging.getLogger(__name__)


@dataclass
class StepInfo:
    """Metadata about a registered step unit."""

    name: str
    kind: StepKind
    version: str
    enabled: bool
    unit_class: Type[Any]
    config: Any
    description: str = ""
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "version": self.version,
            "enabled": self.enabled,
            "description": self.description,
            "tags": self.tags,
            "config_type": type(self.config).__name__ if self.config else None,
        }


class StepRegistry:
    """
    Thread-safe registry for analysis step units.

    Supports:
        - Dynamic registration of custom units
        - Config-driven enable/disable and ordering
        - Version tracking per unit
        - Factory functions for units with extra collaborators
    """

    def __init__(self) -> None:
        self._steps: Dict[str, StepInfo] = {}
        self._enabled_order: List[str] = []
        self._lock = RLock()
        self._factory_overrides: Dict[str, Callable[[Any], Any]] = {}
        logger.debug("StepRegistry initialized")

    def register(
        self,
        name: str,
        kind: StepKind,
        unit_class: Type[Any],
        version: str,
        config: Any,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a step unit.

        Args:
            name: Unique name for the unit
            kind: Kind of step the unit implements
            unit_class: Unit class (must accept config in __init__)
            version: Version string for the unit
            config: Configuration object for the unit
            description: Optional description
            tags: Optional tags for categorization

        Raises:
            ValueError: If a unit with this name is already registered
        """
        with self._lock:
            if name in self._steps:
                raise ValueError(
                    f"Step '{name}' is already registered. "
                    f"Use unregister() first or update_config()."
                )
            self._steps[name] = StepInfo(
                name=name,
                kind=kind,
                version=version,
                enabled=False,
                unit_class=unit_class,
                config=config,
                description=description,
                tags=tags or [],
            )
            logger.info(f"Registered step: {name} v{version} ({kind.value})")

    def register_with_factory(
        self,
        name: str,
        kind: StepKind,
        factory: Callable[[Any], Any],
        version: str,
        config: Any,
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """Register a step unit built by a factory function taking the config."""
        with self._lock:
            if name in self._steps:
                raise ValueError(f"Step '{name}' is already registered.")
            self._steps[name] = StepInfo(
                name=name,
                kind=kind,
                version=version,
                enabled=False,
                unit_class=type(None),
                config=config,
                description=description,
                tags=tags or [],
            )
            self._factory_overrides[name] = factory
            logger.info(f"Registered step with factory: {name} v{version}")

    def unregister(self, name: str) -> bool:
        with self._lock:
            if name not in self._steps:
                logger.warning(f"Cannot unregister: step '{name}' not found")
                return False
            del self._steps[name]
            self._factory_overrides.pop(name, None)
            if name in self._enabled_order:
                self._enabled_order.remove(name)
            logger.info(f"Unregistered step: {name}")
            return True

    def get_step(self, name: str) -> Optional[AnalysisStep]:
        """Instantiate one registered step, or None if unknown."""
        with self._lock:
            info = self._steps.get(name)
            if info is None:
                return None
            return self._instantiate_step(info)

    def get_enabled_steps(self) -> List[AnalysisStep]:
        """
        Instantiate every enabled step, in enabled order.

        Raises:
            Exception: If a unit cannot be instantiated
        """
        with self._lock:
            steps = []
            for name in self._enabled_order:
                info = self._steps.get(name)
                if info and info.enabled:
                    try:
                        steps.append(self._instantiate_step(info))
                    except Exception as e:
                        logger.error(f"Failed to instantiate step '{name}': {e}")
                        raise
            return steps

    def _instantiate_step(self, info: StepInfo) -> AnalysisStep:
        if info.name in self._factory_overrides:
            unit = self._factory_overrides[info.name](info.config)
        else:
            unit = info.unit_class(info.config)
        return AnalysisStep(info.kind, unit)

    def list_all(self) -> Dict[str, StepInfo]:
        with self._lock:
            return dict(self._steps)

    def enable_steps(self, names: List[str]) -> None:
        """
        Enable specific steps by name and set their order.

        Raises:
            ValueError: If any step name is not registered
        """
        with self._lock:
            unknown = [n for n in names if n not in self._steps]
            if unknown:
                raise ValueError(f"Unknown steps: {unknown}")

            for info in self._steps.values():
                info.enabled = False
            self._enabled_order = []
            for name in names:
                self._steps[name].enabled = True
                self._enabled_order.append(name)
            logger.info(f"Enabled steps: {names}")

    def disable_step(self, name: str) -> bool:
        with self._lock:
            if name not in self._steps:
                return False
            self._steps[name].enabled = False
            if name in self._enabled_order:
                self._enabled_order.remove(name)
            logger.info(f"Disabled step: {name}")
            return True

    def enable_step(self, name: str) -> bool:
        """Enable a step, appending it to the order if not already enabled."""
        with self._lock:
            if name not in self._steps:
                return False
            self._steps[name].enabled = True
            if name not in self._enabled_order:
                self._enabled_order.append(name)
            logger.info(f"Enabled step: {name}")
            return True

    def update_config(self, name: str, config: Any) -> bool:
        with self._lock:
            if name not in self._steps:
                return False
            self._steps[name].config = config
            logger.info(f"Updated config for step: {name}")
            return True

    def get_version(self, name: str) -> Optional[str]:
        with self._lock:
            info = self._steps.get(name)
            return info.version if info else None

    def get_versions(self) -> Dict[str, str]:
        with self._lock:
            return {name: info.version for name, info in self._steps.items()}

    @property
    def enabled_count(self) -> int:
        with self._lock:
            return len(self._enabled_order)

    @property
    def registered_count(self) -> int:
        with self._lock:
            return len(self._steps)

    def clear(self) -> None:
        with self._lock:
            self._steps.clear()
            self._enabled_order.clear()
            self._factory_overrides.clear()
            logger.info("Cleared all steps from registry")


def create_step_registry(
    config: AnalysisConfig,
    disease_source: Optional[DiseaseSource] = None,
    phenotype_scores: Optional[PhenotypeScoreSource] = None,
) -> StepRegistry:
    """
    Registry with the bundled step units, enabled as config.steps lists.

    Args:
        config: Analysis configuration
        disease_source: Known diseases, required by omim_prioritiser
        phenotype_scores: Phenotype scores, required by phenotype_prioritiser

    Raises:
        ValueError: If config.steps names an unknown step
    """
    registry = StepRegistry()
    registry.register(
        "variant_effect_filter",
        StepKind.VARIANT_FILTER,
        VariantEffectFilter,
        "1.0.0",
        config.variant_effect_filter,
        description="Removes off-target variant effects",
    )
    registry.register(
        "frequency_filter",
        StepKind.VARIANT_FILTER,
        FrequencyFilter,
        "1.0.0",
        config.frequency_filter,
        description="Removes common variants",
        tags=["annotation"],
    )
    registry.register(
        "pathogenicity_filter",
        StepKind.VARIANT_FILTER,
        PathogenicityFilter,
        "1.0.0",
        config.pathogenicity_filter,
        description="Scores predicted pathogenicity",
        tags=["annotation"],
    )
    registry.register_with_factory(
        "inheritance_filter",
        StepKind.GENE_FILTER,
        lambda _: InheritanceFilter(config.inheritance_filter_mode),
        "1.0.0",
        config.inheritance_filter,
        description="Keeps genes segregating with the mode of inheritance",
        tags=["inheritance"],
    )
    registry.register(
        "priority_score_filter",
        StepKind.GENE_FILTER,
        PriorityScoreFilter,
        "1.0.0",
        config.priority_score_filter,
        description="Keeps genes with a minimum priority score",
    )
    registry.register_with_factory(
        "omim_prioritiser",
        StepKind.PRIORITISER,
        lambda _: OmimPrioritiser(_require(disease_source, "omim_prioritiser")),
        "1.0.0",
        None,
        description="Known disease inheritance vs observed segregation",
        tags=["inheritance"],
    )
    registry.register_with_factory(
        "phenotype_prioritiser",
        StepKind.PRIORITISER,
        lambda cfg: PhenotypePrioritiser(
            cfg, _require(phenotype_scores, "phenotype_prioritiser")
        ),
        "1.0.0",
        config.phenotype_prioritiser,
        description="Phenotype similarity scores",
    )
    registry.enable_steps(config.steps)
    return registry


def _require(source: Any, step_name: str) -> Any:
    if source is None:
        raise ValueError(f"Step '{step_name}' needs a data source but none was given")
    return source
