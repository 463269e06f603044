"""Tunable configuration for the calculators and analyzer."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_CONFIG_PATH = "config/manabase.yaml"


def load_yaml(config_path: Union[str, Path]) -> dict:
    """Load a YAML config file, returning {} for an empty document."""
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@dataclass(frozen=True)
class HypergeometricConfig:
    """Parameters for the hypergeometric source requirement model."""

    reference_turn: int = 3
    """Turn by which the colored sources must be in hand"""

    confidence: float = 0.90
    """Target probability of having the sources by the reference turn"""

    starting_hand_size: int = 7
    """Opening hand size"""

    on_play: bool = False
    """On the play the turn-1 draw is skipped"""

    def __post_init__(self):
        if self.reference_turn < 1:
            raise ValueError(f"reference_turn must be >= 1, got {self.reference_turn}")
        if not 0.0 < self.confidence <= 1.0:
            raise ValueError(f"confidence must be in (0, 1], got {self.confidence}")
        if self.starting_hand_size < 0:
            raise ValueError(
                f"starting_hand_size must be >= 0, got {self.starting_hand_size}"
            )

    @property
    def draws(self) -> int:
        """Cards seen by the reference turn."""
        draws = self.starting_hand_size + self.reference_turn
        if self.on_play:
            draws -= 1
        return draws

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "HypergeometricConfig":
        data = data or {}
        return cls(
            reference_turn=data.get("reference_turn", 3),
            confidence=data.get("confidence", 0.90),
            starting_hand_size=data.get("starting_hand_size", 7),
            on_play=data.get("on_play", False),
        )

    def to_dict(self) -> dict:
        return {
            "reference_turn": self.reference_turn,
            "confidence": self.confidence,
            "starting_hand_size": self.starting_hand_size,
            "on_play": self.on_play,
        }


@dataclass(frozen=True)
class PipIntensityConfig:
    """Card-count thresholds for pip density warnings."""

    high: int = 3
    very_high: int = 5

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PipIntensityConfig":
        data = data or {}
        return cls(high=data.get("high", 3), very_high=data.get("very_high", 5))


@dataclass(frozen=True)
class ManaBaseConfig:
    """Top-level configuration loaded from config/manabase.yaml."""

    default_algorithm: str = "simple"
    default_format: str = "standard"
    hypergeometric: HypergeometricConfig = field(default_factory=HypergeometricConfig)
    pip_intensity: PipIntensityConfig = field(default_factory=PipIntensityConfig)

    @classmethod
    def from_config(cls, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> "ManaBaseConfig":
        """Create config from YAML file. Missing keys keep their defaults."""
        config = load_yaml(config_path)

        calc_config = config.get("calculator", {}) or {}
        return cls(
            default_algorithm=calc_config.get("default_algorithm", "simple"),
            default_format=calc_config.get("default_format", "standard"),
            hypergeometric=HypergeometricConfig.from_dict(config.get("hypergeometric")),
            pip_intensity=PipIntensityConfig.from_dict(config.get("pip_intensity")),
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "default_algorithm": self.default_algorithm,
            "default_format": self.default_format,
            "hypergeometric": self.hypergeometric.to_dict(),
            "pip_intensity": {
                "high": self.pip_intensity.high,
                "very_high": self.pip_intensity.very_high,
            },
        }
