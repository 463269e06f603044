"""Data models for the mana base calculator."""

from manabase.models.color import COLOR_ORDER, Color, guild_name
from manabase.models.config import HypergeometricConfig, ManaBaseConfig, PipIntensityConfig
from manabase.models.format import PRESETS, Format, FormatPreset, FormatTarget
from manabase.models.mana import (
    CardCost,
    ColoredSymbol,
    DeckEntry,
    DualLand,
    GenericHybridSymbol,
    GenericSymbol,
    HybridSymbol,
    ManaSymbol,
    PhyrexianSymbol,
    SnowSymbol,
)
from manabase.models.manabase import (
    Algorithm,
    ManaBaseAllocation,
    ManaBaseResult,
    PipStatistics,
)

__all__ = [
    "Color",
    "COLOR_ORDER",
    "guild_name",
    "HypergeometricConfig",
    "ManaBaseConfig",
    "PipIntensityConfig",
    "Format",
    "FormatPreset",
    "FormatTarget",
    "PRESETS",
    "ManaSymbol",
    "ColoredSymbol",
    "GenericSymbol",
    "HybridSymbol",
    "PhyrexianSymbol",
    "GenericHybridSymbol",
    "SnowSymbol",
    "CardCost",
    "DeckEntry",
    "DualLand",
    "Algorithm",
    "PipStatistics",
    "ManaBaseAllocation",
    "ManaBaseResult",
]
