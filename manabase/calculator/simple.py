"""Proportional land allocation by raw pip share."""

from fractions import Fraction
from typing import Optional

from manabase.calculator.base import ManaCalculator, proportional_basics
from manabase.models.color import Color
from manabase.models.manabase import Algorithm


class SimpleCalculator(ManaCalculator):
    """Each color gets lands in proportion to its share of pips.

    Example: pips {W: 7, U: 3}, 10 lands → {W: 7, U: 3}
    """

    algorithm = Algorithm.SIMPLE

    def _allocate(
        self,
        pip_counts: dict[Color, Fraction],
        weighted_pip_counts: dict[Color, Fraction],
        identity: list[Color],
        target_lands: int,
        total_cards: Optional[int],
        max_pips: dict[Color, int],
        sources: dict[Color, int],
        basic_slots: int,
    ) -> dict[Color, int]:
        return proportional_basics(pip_counts, target_lands, sources, basic_slots)
