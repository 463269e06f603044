"""Hypergeometric source requirements.

For each color, find the fewest sources that give at least the configured
confidence of holding r sources of that color by the reference turn, where r
is the heaviest single-card requirement for the color. The per-color minimums
are reduced by dual land sources and fitted to the basic land budget with
largest-remainder apportionment.

P(X >= r) = 1 - sum_{i<r} C(K, i) * C(L - K, n - i) / C(L, n)

with L = library size, K = sources, n = cards seen. Terms are evaluated in
log space (lgamma) so large decks do not overflow.
"""

import logging
from fractions import Fraction
from math import exp, inf, lgamma
from typing import Iterable, Optional

from manabase.calculator.apportionment import fill_basic_slots
from manabase.calculator.base import ManaCalculator, validate_target
from manabase.errors import InvalidTarget
from manabase.models.color import Color, sort_colors
from manabase.models.config import HypergeometricConfig
from manabase.models.manabase import Algorithm

logger = logging.getLogger(__name__)

# Float slack when comparing a probability against the threshold
PROBABILITY_EPSILON = 1e-12


def log_comb(n: int, k: int) -> float:
    """Natural log of C(n, k); -inf when the combination is empty."""
    if n < 0 or k < 0 or k > n:
        return -inf
    return lgamma(n + 1) - lgamma(k + 1) - lgamma(n - k + 1)


def probability_at_least(population: int, successes: int, draws: int, required: int) -> float:
    """
    P(X >= required) for X ~ Hypergeometric(population, successes, draws).

    Args:
        population: Cards in the library (L)
        successes: Sources in the library (K)
        draws: Cards seen (n), capped at population
        required: Sources needed (r)

    Returns:
        Probability in [0, 1]
    """
    if required <= 0:
        return 1.0
    draws = min(draws, population)
    if successes < required or draws < required:
        return 0.0

    log_total = log_comb(population, draws)
    miss = 0.0
    for i in range(required):
        log_p = log_comb(successes, i) + log_comb(population - successes, draws - i) - log_total
        if log_p != -inf:
            miss += exp(log_p)

    return min(1.0, max(0.0, 1.0 - miss))


def minimum_sources(
    population: int,
    draws: int,
    required: int,
    confidence: float,
    max_sources: int,
) -> Optional[int]:
    """
    Smallest K in [0, max_sources] with P(X >= required) >= confidence.

    P is non-decreasing in K, so the first hit of a linear scan is minimal.

    Returns:
        The minimal K, or None if no candidate reaches the threshold
    """
    for sources in range(0, min(max_sources, population) + 1):
        probability = probability_at_least(population, sources, draws, required)
        if probability + PROBABILITY_EPSILON >= confidence:
            return sources
    return None


class HypergeometricCalculator(ManaCalculator):
    """Probability-driven minimum sources per color, fitted to the budget."""

    algorithm = Algorithm.HYPERGEOMETRIC

    def __init__(self, config: Optional[HypergeometricConfig] = None):
        """
        Initialize calculator.

        Args:
            config: Reference turn, confidence and hand size
        """
        self.config = config or HypergeometricConfig()

    def library_size(self, total_cards: Optional[int]) -> int:
        """Cards left in the library after the opening hand."""
        if total_cards is None:
            raise InvalidTarget("Hypergeometric calculation needs total_cards")
        size = total_cards - self.config.starting_hand_size
        if size <= 0:
            raise InvalidTarget(
                f"Deck of {total_cards} cards is too small for a "
                f"{self.config.starting_hand_size}-card opening hand",
                total_cards=total_cards,
            )
        return size

    def requirements(
        self,
        color_identity: Iterable[Color],
        target_lands: int,
        total_cards: Optional[int],
        max_pips: Optional[dict[Color, int]] = None,
    ) -> dict[Color, int]:
        """
        Minimal sources per color before fitting to the land budget.

        Args:
            color_identity: Colors to evaluate
            target_lands: Upper bound of the search for each color
            total_cards: Deck size
            max_pips: Required simultaneous pips per color (default 1)

        Returns:
            Color -> minimal sources (capped at target_lands)
        """
        validate_target(target_lands, total_cards)
        population = self.library_size(total_cards)
        draws = min(self.config.draws, population)
        max_pips = max_pips or {}

        result = {}
        for color in sort_colors(color_identity):
            required = max(1, max_pips.get(color, 1))
            sources = minimum_sources(
                population, draws, required, self.config.confidence, target_lands
            )
            if sources is None:
                logger.warning(
                    f"{color.display_name}: {self.config.confidence:.0%} confidence of "
                    f"{required} source(s) by turn {self.config.reference_turn} is "
                    f"unreachable with {target_lands} lands; using all {target_lands}"
                )
                sources = target_lands
            result[color] = sources

        logger.debug(
            f"Source requirements (L={population}, n={draws}): "
            + ", ".join(f"{c.symbol}={s}" for c, s in result.items())
        )
        return result

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
        required = self.requirements(identity, target_lands, total_cards, max_pips)
        # Dual lands already count as sources of each color they produce
        needs = {c: max(0, required[c] - sources.get(c, 0)) for c in identity}

        if sum(needs.values()) > basic_slots:
            logger.info(
                f"Source requirements ({sum(needs.values())} basics) exceed the "
                f"{basic_slots} basic slots; scaling down proportionally"
            )

        # Over budget: needs scale down. Otherwise the surplus follows pips.
        return fill_basic_slots(needs, basic_slots, pip_counts)
