"""
Configuration handling for RippleRadar
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from rippleradar.errors import InvalidGeometryError
from rippleradar.geometry import ANGLE_UNITS
from rippleradar.ring import MISSING_ANGLE_POLICIES

MISSING_DISTANCE_POLICIES = ("reject", "random", "fixed")


@dataclass
class FieldConfig:
    """Configuration for the ring layout and placement rules"""

    # Distance bands
    ring_count: int = 3
    min_distance: float = 0.0
    max_distance: float = 1000.0

    # Slot layout
    item_footprint: float = 18.0
    spacing: float = 10.0

    # Ring radii: ring i sits at disk_radius + ring_padding * (i + 1)
    origin: Tuple[float, float] = (0.0, 0.0)
    disk_radius: float = 8.0
    ring_padding: float = 40.0
    max_ring_radius: Optional[float] = None  # Rings beyond this radius are not built

    # Units and fallbacks
    angle_unit: str = "degrees"  # Options: "degrees", "radians"
    missing_angle_policy: str = "random"  # Options: "random", "first"
    missing_distance_policy: str = "reject"  # Options: "reject", "random", "fixed"
    default_ring_index: int = 0  # Used by the "fixed" missing distance policy

    # Random seed for reproducible fallback placement
    random_seed: Optional[int] = None

    def validate(self) -> None:
        """Raise InvalidGeometryError if any value is out of range"""
        if self.ring_count < 0:
            raise InvalidGeometryError(f"ring_count must be >= 0, got {self.ring_count}")
        if self.ring_count > 0 and self.max_distance <= self.min_distance:
            raise InvalidGeometryError(
                f"max_distance ({self.max_distance}) must be greater than "
                f"min_distance ({self.min_distance})"
            )
        if self.item_footprint <= 0:
            raise InvalidGeometryError(f"item_footprint must be > 0, got {self.item_footprint}")
        if self.spacing < 0:
            raise InvalidGeometryError(f"spacing must be >= 0, got {self.spacing}")
        if self.disk_radius < 0:
            raise InvalidGeometryError(f"disk_radius must be >= 0, got {self.disk_radius}")
        if self.ring_padding <= 0:
            raise InvalidGeometryError(f"ring_padding must be > 0, got {self.ring_padding}")
        if self.max_ring_radius is not None and self.max_ring_radius < 0:
            raise InvalidGeometryError(
                f"max_ring_radius must be >= 0, got {self.max_ring_radius}"
            )
        if self.angle_unit not in ANGLE_UNITS:
            raise InvalidGeometryError(f"Unknown angle unit '{self.angle_unit}'")
        if self.missing_angle_policy not in MISSING_ANGLE_POLICIES:
            raise InvalidGeometryError(
                f"Unknown missing angle policy '{self.missing_angle_policy}'"
            )
        if self.missing_distance_policy not in MISSING_DISTANCE_POLICIES:
            raise InvalidGeometryError(
                f"Unknown missing distance policy '{self.missing_distance_policy}'"
            )

    def ring_radius(self, index: int) -> float:
        """Radius of the ring at ``index``"""
        return self.disk_radius + self.ring_padding * (index + 1)


@dataclass
class PresentationConfig:
    """Configuration for the presentation adapter"""

    item_radius: float = 18.0
    rotation_duration: float = 1.5
    rotation_samples: int = 16


@dataclass
class Config:
    """Master configuration for RippleRadar"""

    # General settings
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    # Component configurations
    radar: FieldConfig = field(default_factory=FieldConfig)
    presentation: PresentationConfig = field(default_factory=PresentationConfig)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Config":
        """Load configuration from a YAML file"""
        with open(path, "r") as f:
            config_dict = yaml.safe_load(f) or {}
        return cls.from_dict(config_dict)

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Config":
        """Create configuration from a dictionary"""
        config = Config()

        # Update top-level fields
        for key, value in config_dict.items():
            if key not in ["radar", "presentation"] and hasattr(config, key):
                setattr(config, key, value)

        # Update nested configs
        if "radar" in config_dict:
            field_dict = dict(config_dict["radar"])
            if "origin" in field_dict:
                field_dict["origin"] = tuple(field_dict["origin"])
            config.radar = FieldConfig(**field_dict)
        if "presentation" in config_dict:
            config.presentation = PresentationConfig(**config_dict["presentation"])

        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a dictionary"""
        return {
            # General settings
            "log_level": self.log_level,
            "log_dir": self.log_dir,
            # Component configurations
            "radar": {
                "ring_count": self.radar.ring_count,
                "min_distance": self.radar.min_distance,
                "max_distance": self.radar.max_distance,
                "item_footprint": self.radar.item_footprint,
                "spacing": self.radar.spacing,
                "origin": list(self.radar.origin),
                "disk_radius": self.radar.disk_radius,
                "ring_padding": self.radar.ring_padding,
                "max_ring_radius": self.radar.max_ring_radius,
                "angle_unit": self.radar.angle_unit,
                "missing_angle_policy": self.radar.missing_angle_policy,
                "missing_distance_policy": self.radar.missing_distance_policy,
                "default_ring_index": self.radar.default_ring_index,
                "random_seed": self.radar.random_seed,
            },
            "presentation": {
                "item_radius": self.presentation.item_radius,
                "rotation_duration": self.presentation.rotation_duration,
                "rotation_samples": self.presentation.rotation_samples,
            },
        }

    def to_yaml(self, path: Union[str, Path]) -> None:
        """Save configuration to a YAML file"""
        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False)


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from a YAML file or use defaults"""
    if config_path and os.path.exists(config_path):
        config = Config.from_yaml(config_path)
    else:
        config = Config()

    # Use environment variables if available
    log_level = os.environ.get("RIPPLERADAR_LOG_LEVEL")
    if log_level:
        config.log_level = log_level.upper()

    return config
