"""
Configuration schemas for tnacompare analyses.

Provides validated configuration classes using dataclasses, loadable from
YAML.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .core.transition import MODEL_ALIASES, MODEL_TYPES
from .networks.centrality import AVAILABLE_MEASURES
from .stats.multiple_testing import ADJUST_METHODS


def _check_level(level: float) -> None:
    if not 0 < level < 1:
        raise ValueError(f"level must be in (0, 1), got {level}")


def _check_iter(n: int) -> None:
    if n < 1:
        raise ValueError(f"iter must be >= 1, got {n}")


@dataclass
class BootstrapConfig:
    """Bootstrap edge-stability configuration."""
    iter: int = 1000
    level: float = 0.05
    method: str = "stability"
    threshold: Optional[float] = None
    consistency_range: Tuple[float, float] = (0.75, 1.25)
    seed: Optional[int] = 42

    def __post_init__(self):
        """Validate bootstrap configuration."""
        valid_method = {"stability", "threshold"}
        if self.method not in valid_method:
            raise ValueError(f"method must be one of {valid_method}, got {self.method}")
        _check_iter(self.iter)
        _check_level(self.level)
        self.consistency_range = tuple(self.consistency_range)
        if len(self.consistency_range) != 2 or self.consistency_range[0] > self.consistency_range[1]:
            raise ValueError(
                f"consistency_range must be (low, high) with low <= high, got {self.consistency_range}"
            )


@dataclass
class PermutationConfig:
    """Permutation test configuration."""
    iter: int = 1000
    adjust: str = "none"
    level: float = 0.05
    paired: bool = False
    seed: Optional[int] = 42

    def __post_init__(self):
        """Validate permutation configuration."""
        if self.adjust not in ADJUST_METHODS:
            raise ValueError(f"adjust must be one of {set(ADJUST_METHODS)}, got {self.adjust}")
        _check_iter(self.iter)
        _check_level(self.level)


@dataclass
class ReliabilityConfig:
    """Split-half reliability configuration."""
    iter: int = 100
    split: float = 0.5
    model_type: str = "relative"
    beta: float = 0.1
    seed: Optional[int] = 42

    def __post_init__(self):
        """Validate reliability configuration."""
        valid_type = set(MODEL_TYPES) | set(MODEL_ALIASES)
        if self.model_type not in valid_type:
            raise ValueError(f"model_type must be one of {valid_type}, got {self.model_type}")
        _check_iter(self.iter)
        if not 0 < self.split < 1:
            raise ValueError(f"split must be in (0, 1), got {self.split}")


@dataclass
class GroupComparisonConfig:
    """Omnibus and post-hoc group test configuration."""
    parametric: bool = True
    adjust: str = "bonferroni"
    level: float = 0.05

    def __post_init__(self):
        """Validate group comparison configuration."""
        if self.adjust not in ADJUST_METHODS:
            raise ValueError(f"adjust must be one of {set(ADJUST_METHODS)}, got {self.adjust}")
        _check_level(self.level)


@dataclass
class StabilityConfig:
    """Centrality stability configuration."""
    measures: List[str] = field(default_factory=lambda: ["InStrength", "OutStrength", "Betweenness"])
    iter: int = 500
    drop_props: List[float] = field(
        default_factory=lambda: [0.1, 0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9]
    )
    threshold: float = 0.7
    certainty: float = 0.95
    seed: Optional[int] = 42

    def __post_init__(self):
        """Validate stability configuration."""
        unknown = [m for m in self.measures if m not in AVAILABLE_MEASURES]
        if unknown:
            raise ValueError(f"measures must be in {set(AVAILABLE_MEASURES)}, got {unknown}")
        _check_iter(self.iter)
        if any(not 0 < p < 1 for p in self.drop_props):
            raise ValueError(f"drop_props must lie in (0, 1), got {self.drop_props}")
        if not 0 < self.certainty <= 1:
            raise ValueError(f"certainty must be in (0, 1], got {self.certainty}")


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "WARNING"

    def __post_init__(self):
        """Validate logging configuration."""
        valid_level = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        self.level = self.level.upper()
        if self.level not in valid_level:
            raise ValueError(f"level must be one of {valid_level}, got {self.level}")


@dataclass
class AnalysisConfig:
    """Complete analysis configuration."""
    bootstrap: BootstrapConfig = field(default_factory=BootstrapConfig)
    permutation: PermutationConfig = field(default_factory=PermutationConfig)
    reliability: ReliabilityConfig = field(default_factory=ReliabilityConfig)
    groups: GroupComparisonConfig = field(default_factory=GroupComparisonConfig)
    stability: StabilityConfig = field(default_factory=StabilityConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AnalysisConfig:
        """Create AnalysisConfig from dictionary (e.g., from YAML)."""
        data = data or {}
        unknown = set(data) - {"bootstrap", "permutation", "reliability", "groups", "stability", "logging"}
        if unknown:
            raise ValueError(f"Unknown config section(s): {sorted(unknown)}")
        return cls(
            bootstrap=BootstrapConfig(**data.get('bootstrap', {})),
            permutation=PermutationConfig(**data.get('permutation', {})),
            reliability=ReliabilityConfig(**data.get('reliability', {})),
            groups=GroupComparisonConfig(**data.get('groups', {})),
            stability=StabilityConfig(**data.get('stability', {})),
            logging=LoggingConfig(**data.get('logging', {})),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> AnalysisConfig:
        """Load configuration from YAML file."""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)


def configure_logging(config: AnalysisConfig | LoggingConfig) -> None:
    """Set the ``tnacompare`` logger level from a config."""
    if isinstance(config, AnalysisConfig):
        config = config.logging
    logging.getLogger("tnacompare").setLevel(config.level)
