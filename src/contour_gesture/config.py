"""
Tunable thresholds for region selection, finger counting and gesture classification.

Defaults were tuned for a 640x480 webcam at arm's length; re-tune per deployment
through a YAML file (see ``config.default.yaml``).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectorConfig:
    """Region selection settings."""
    min_area: float = 5000.0  # a region must strictly exceed this


@dataclass(frozen=True)
class AnalyzerConfig:
    """Finger counting and gesture classification settings."""
    min_defect_depth: float = 25.0  # px, defects must be strictly deeper
    max_defect_angle: float = 85.0  # degrees, valid defects are strictly narrower
    peace_min_dx: float = 40.0  # px between the two topmost points
    ok_max_distance: float = 50.0  # px, minimum pairwise distance for "OK"


@dataclass(frozen=True)
class GeometryConfig:
    """Mask cleanup and contour extraction settings."""
    morph_kernel: int = 5
    median_blur: int = 5
    approx_epsilon: float = 3.0  # px, approxPolyDP tolerance


@dataclass(frozen=True)
class PipelineConfig:
    """Main configuration class."""
    selector: SelectorConfig = field(default_factory=SelectorConfig)
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    geometry: GeometryConfig = field(default_factory=GeometryConfig)


_SECTIONS = {
    "selector": SelectorConfig,
    "analyzer": AnalyzerConfig,
    "geometry": GeometryConfig,
}


def load_config(path: Optional[Union[str, Path]] = None) -> PipelineConfig:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to config file. If None, the built-in defaults are returned.

    Returns:
        Configuration object with all settings
    """
    if path is None:
        return PipelineConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {config_path}: {e}") from e

    logger.debug("Loaded configuration from %s", config_path)
    return config_from_dict(data or {})


def config_from_dict(data: Dict[str, Any]) -> PipelineConfig:
    """Convert a (possibly partial) dictionary to a configuration object."""
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ConfigError(f"Unknown configuration sections: {sorted(unknown)}")

    sections = {name: _build_section(name, cls, data.get(name) or {}) for name, cls in _SECTIONS.items()}
    if sections["geometry"].median_blur % 2 == 0:
        raise ConfigError("geometry.median_blur must be odd")
    return PipelineConfig(**sections)


def _build_section(name: str, cls, values: Dict[str, Any]):
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")

    known = {f.name: f for f in fields(cls)}
    unknown = set(values) - set(known)
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {sorted(unknown)}")

    kwargs = {}
    for key, value in values.items():
        default = known[key].default
        try:
            value = type(default)(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{name}.{key}: expected {type(default).__name__}, got {value!r}") from e
        if value <= 0:
            raise ConfigError(f"{name}.{key} must be positive, got {value!r}")
        kwargs[key] = value
    return cls(**kwargs)
