"""Land allocation algorithms."""

from collections.abc import Mapping
from fractions import Fraction
from typing import Iterable, Optional, Union

from manabase.calculator.apportionment import apportion, fill_basic_slots
from manabase.calculator.base import ManaCalculator
from manabase.calculator.cmc_weighted import CmcWeightedCalculator
from manabase.calculator.hypergeometric import (
    HypergeometricCalculator,
    minimum_sources,
    probability_at_least,
)
from manabase.calculator.simple import SimpleCalculator
from manabase.models.color import Color
from manabase.models.config import HypergeometricConfig
from manabase.models.mana import DualLand
from manabase.models.manabase import Algorithm, ManaBaseAllocation


def get_calculator(
    algorithm: Union[Algorithm, str],
    hypergeo_config: Optional[HypergeometricConfig] = None,
) -> ManaCalculator:
    """Return the calculator for an algorithm tag or name."""
    if isinstance(algorithm, str):
        algorithm = Algorithm.from_string(algorithm)

    if algorithm is Algorithm.SIMPLE:
        return SimpleCalculator()
    if algorithm is Algorithm.CMC_WEIGHTED:
        return CmcWeightedCalculator()
    if algorithm is Algorithm.HYPERGEOMETRIC:
        return HypergeometricCalculator(hypergeo_config)
    raise ValueError(f"Unsupported algorithm: {algorithm!r}")


def calculate(
    algorithm: Union[Algorithm, str],
    pip_counts: Mapping[Color, Fraction],
    weighted_pip_counts: Mapping[Color, Fraction],
    color_identity: Iterable[Color],
    target_lands: int,
    hypergeo_config: Optional[HypergeometricConfig] = None,
    *,
    total_cards: Optional[int] = None,
    max_pips: Optional[Mapping[Color, int]] = None,
    dual_lands: Optional[Iterable[DualLand]] = None,
) -> ManaBaseAllocation:
    """Run one allocation algorithm. See ManaCalculator.calculate."""
    return get_calculator(algorithm, hypergeo_config).calculate(
        pip_counts,
        weighted_pip_counts,
        color_identity,
        target_lands,
        total_cards=total_cards,
        max_pips=max_pips,
        dual_lands=dual_lands,
    )


__all__ = [
    "ManaCalculator",
    "SimpleCalculator",
    "CmcWeightedCalculator",
    "HypergeometricCalculator",
    "apportion",
    "calculate",
    "fill_basic_slots",
    "get_calculator",
    "minimum_sources",
    "probability_at_least",
]
