"""Shared calculator behaviour: validation, dual lands and the degenerate deck case."""

import logging
from collections.abc import Mapping
from fractions import Fraction
from typing import Iterable, Optional

from manabase.calculator.apportionment import fill_basic_slots
from manabase.errors import InconsistentColorIdentity, InvalidTarget
from manabase.models.color import Color, sort_colors
from manabase.models.mana import DualLand, dual_land_count, dual_sources
from manabase.models.manabase import Algorithm, ManaBaseAllocation

logger = logging.getLogger(__name__)


class ManaCalculator:
    """Base class for land allocation algorithms.

    Subclasses implement _allocate(); calculate() handles validation, dual
    land accounting and the colorless fallback so every variant behaves the
    same at the edges.
    """

    algorithm: Algorithm = Algorithm.SIMPLE

    @property
    def name(self) -> str:
        return self.algorithm.display_name

    def calculate(
        self,
        pip_counts: Mapping[Color, Fraction],
        weighted_pip_counts: Mapping[Color, Fraction],
        color_identity: Iterable[Color],
        target_lands: int,
        total_cards: Optional[int] = None,
        max_pips: Optional[Mapping[Color, int]] = None,
        dual_lands: Optional[Iterable[DualLand]] = None,
    ) -> ManaBaseAllocation:
        """
        Allocate the basic lands of a target_lands mana base.

        Dual lands take their slots first. The remaining basics cover what
        each color still needs after counting its dual sources.

        Args:
            pip_counts: Raw pip counts per color
            weighted_pip_counts: CMC-weighted pip counts per color
            color_identity: Colors eligible for lands
            target_lands: Total lands, dual lands included
            total_cards: Deck size (checked against target_lands when given)
            max_pips: Highest single-card pip count per color
            dual_lands: Non-basic lands already in the deck

        Returns:
            ManaBaseAllocation of basics summing to target_lands minus the
            dual land count

        Raises:
            InvalidTarget: target_lands negative, above total_cards or below
                the dual land count
            InconsistentColorIdentity: identity and pip colors disagree
        """
        identity = sort_colors(color_identity)
        validate_target(target_lands, total_cards)
        validate_identity(identity, pip_counts)

        duals = tuple(dual_lands or ())
        basic_slots = target_lands - dual_land_count(duals)
        if basic_slots < 0:
            raise InvalidTarget(
                f"{dual_land_count(duals)} dual lands exceed target_lands ({target_lands})",
                target_lands=target_lands,
                total_cards=total_cards,
            )

        if not identity:
            logger.info(f"Empty color identity: allocating all {basic_slots} basics to Colorless")
            return ManaBaseAllocation({Color.COLORLESS: basic_slots})

        provided = dual_sources(duals)
        sources = {c: provided.get(c, 0) for c in identity}
        if duals:
            logger.debug(
                f"{len(duals)} dual land(s) leave {basic_slots} basic slots; sources: "
                + ", ".join(f"{c.symbol}={n}" for c, n in sources.items())
            )

        counts = self._allocate(
            pip_counts={c: Fraction(pip_counts[c]) for c in identity},
            weighted_pip_counts={
                c: Fraction(weighted_pip_counts.get(c, 0)) for c in identity
            },
            identity=identity,
            target_lands=target_lands,
            total_cards=total_cards,
            max_pips=dict(max_pips or {}),
            sources=sources,
            basic_slots=basic_slots,
        )

        allocation = ManaBaseAllocation({c: counts.get(c, 0) for c in identity})
        logger.debug(f"{self.name} allocation: {allocation.to_dict()}")
        return allocation

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
        raise NotImplementedError


def proportional_basics(
    weights: Mapping[Color, Fraction],
    target_lands: int,
    sources: Mapping[Color, int],
    basic_slots: int,
) -> dict[Color, int]:
    """
    Basics for a proportional mana base after dual land sources.

    Each color's share of the whole mana base is target_lands * weight / total.
    Dual sources are subtracted from that share; what is left is fitted to
    the basic slots. Without dual lands this is apportion(weights, target_lands).

    Example:
        weights {U: 10, B: 10}, 24 lands, 4 U/B duals → need 8 each → {U: 10, B: 10}
    """
    total = sum(weights.values(), Fraction(0))
    needs = {}
    for color, weight in weights.items():
        baseline = Fraction(target_lands) * weight / total
        needs[color] = max(Fraction(0), baseline - sources.get(color, 0))
    return fill_basic_slots(needs, basic_slots, weights)


def validate_target(target_lands: int, total_cards: Optional[int] = None) -> None:
    """Raise InvalidTarget if the land target is out of range."""
    if isinstance(target_lands, bool) or not isinstance(target_lands, int):
        raise InvalidTarget(
            f"target_lands must be an integer, got {target_lands!r}",
            total_cards=total_cards,
        )
    if target_lands < 0:
        raise InvalidTarget(
            f"target_lands cannot be negative, got {target_lands}",
            target_lands=target_lands,
            total_cards=total_cards,
        )
    if total_cards is not None and target_lands > total_cards:
        raise InvalidTarget(
            f"target_lands ({target_lands}) exceeds total_cards ({total_cards})",
            target_lands=target_lands,
            total_cards=total_cards,
        )


def validate_identity(identity: list[Color], pip_counts: Mapping[Color, Fraction]) -> None:
    """Identity must be exactly the colored colors with positive pips."""
    pip_colors = sort_colors(c for c, n in pip_counts.items() if n > 0)
    if identity != pip_colors or Color.COLORLESS in identity:
        raise InconsistentColorIdentity(
            [c.symbol for c in identity],
            [c.symbol for c in pip_colors],
        )
