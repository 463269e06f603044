"""Land allocation weighted by the mana value of each pip's card."""

from fractions import Fraction
from typing import Optional

from manabase.calculator.base import ManaCalculator, proportional_basics
from manabase.models.color import Color
from manabase.models.manabase import Algorithm


class CmcWeightedCalculator(ManaCalculator):
    """Same apportionment as Simple, but over CMC-weighted pips.

    A pip on a 6-drop counts six times as much as a pip on a 1-drop: the
    expensive spell is cast later and needs its color on a specific turn,
    while the cheap one can wait for any of the early land drops.
    """

    algorithm = Algorithm.CMC_WEIGHTED

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
        # No weighted data supplied: fall back to raw pips
        weights = weighted_pip_counts
        if sum(weighted_pip_counts.values()) == 0:
            weights = pip_counts
        return proportional_basics(weights, target_lands, sources, basic_slots)
