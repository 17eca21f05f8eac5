"""
Configuration management for polycsg.

Handles loading, validation, and access to numerical tolerance profiles.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from polycsg.core.exceptions import ConfigurationError
from polycsg.csg.plane import EPSILON


class ToleranceConfig(BaseModel):
    """Numerical tolerance settings for boolean operations."""

    name: str = "default"
    epsilon: float = Field(default=EPSILON, gt=0)
    bbox_tolerance: float | None = Field(default=None, ge=0)
    volume_tolerance: float = Field(default=1e-4, gt=0)
    description: str = ""

    @property
    def effective_bbox_tolerance(self) -> float:
        """Bounding-box overlap slack; falls back to ``epsilon``."""
        if self.bbox_tolerance is None:
            return self.epsilon
        return self.bbox_tolerance


def load_tolerance(path: str | Path) -> ToleranceConfig:
    """
    Load a single tolerance profile from a YAML file.

    The file must contain a top-level ``tolerance`` mapping.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Tolerance profile not found: {path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse tolerance profile: {path}",
            details={"error": str(e)},
        )

    if not isinstance(data, dict) or "tolerance" not in data:
        raise ConfigurationError(
            f"Missing 'tolerance' section in profile: {path}",
        )

    tolerance_data: dict[str, Any] = dict(data["tolerance"] or {})
    tolerance_data.setdefault("name", path.stem)
    try:
        return ToleranceConfig(**tolerance_data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid tolerance profile: {path}",
            details={"error": str(e)},
        )


@dataclass
class ConfigManager:
    """
    Central configuration manager for polycsg.

    Loads and validates tolerance profiles from ``<config_dir>/profiles/*.yaml``.

    Example:
        >>> config = ConfigManager(config_dir=Path("config"))
        >>> tight = config.get_profile("tight")
        >>> tight.epsilon
        1e-07
    """

    config_dir: Path
    _profiles: dict[str, ToleranceConfig] = field(default_factory=dict, init=False)
    _loaded: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Initialize configuration manager."""
        self.config_dir = Path(self.config_dir)
        if not self.config_dir.exists():
            raise ConfigurationError(
                f"Configuration directory not found: {self.config_dir}"
            )

    def load(self) -> None:
        """Load all tolerance profiles from disk."""
        profiles_dir = self.config_dir / "profiles"
        if profiles_dir.exists():
            for config_file in sorted(profiles_dir.glob("*.yaml")):
                self._profiles[config_file.stem] = load_tolerance(config_file)
        self._loaded = True

    def get_profile(self, name: str) -> ToleranceConfig:
        """
        Get tolerance profile by name.

        Args:
            name: Profile name (without .yaml extension)

        Returns:
            ToleranceConfig instance

        Raises:
            ConfigurationError: If profile not found
        """
        if not self._loaded:
            self.load()

        if name not in self._profiles:
            available = list(self._profiles.keys())
            raise ConfigurationError(
                f"Tolerance profile not found: {name}",
                details={"available": available},
            )
        return self._profiles[name]

    def list_profiles(self) -> list[str]:
        """List available tolerance profiles."""
        if not self._loaded:
            self.load()
        return list(self._profiles.keys())
