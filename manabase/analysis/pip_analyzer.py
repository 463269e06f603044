"""Pip intensity analysis: deck entries -> aggregate color requirements."""

import logging
from collections import defaultdict
from fractions import Fraction
from typing import Iterable, Optional

from manabase.models.color import Color, sort_colors
from manabase.models.config import PipIntensityConfig
from manabase.models.mana import DeckEntry
from manabase.models.manabase import PipStatistics

logger = logging.getLogger(__name__)


class PipAnalyzer:
    """Aggregates raw and CMC-weighted pip counts across a deck."""

    def __init__(self, intensity: Optional[PipIntensityConfig] = None):
        """
        Initialize analyzer.

        Args:
            intensity: Thresholds for pip density warnings
        """
        self.intensity = intensity or PipIntensityConfig()

    def analyze_deck(self, entries: Iterable[DeckEntry]) -> PipStatistics:
        """
        Compute pip statistics for a deck.

        Basic lands are skipped. Colorless and generic symbols add no pips
        but still count toward a card's CMC for weighting. Hybrid symbols
        split one pip evenly across their two colors.

        Args:
            entries: Deck entries with parsed costs

        Returns:
            PipStatistics for the deck
        """
        pip_counts: dict[Color, Fraction] = defaultdict(Fraction)
        weighted: dict[Color, Fraction] = defaultdict(Fraction)
        max_pips: dict[Color, int] = {}
        intensity: dict[Color, int] = defaultdict(int)
        spell_count = 0
        total_cmc = 0.0

        for entry in entries:
            if entry.is_basic_land:
                continue

            card_pips = {
                color: weight
                for color, weight in entry.cost.pip_weights.items()
                if color.is_colored
            }
            cmc = Fraction(entry.effective_cmc).limit_denominator()
            qty = entry.quantity

            if not entry.is_land:
                spell_count += qty
                total_cmc += entry.effective_cmc * qty

            for color, weight in card_pips.items():
                pip_counts[color] += weight * qty
                weighted[color] += weight * cmc * qty

            for color, required in entry.cost.pip_requirements.items():
                if not color.is_colored:
                    continue
                max_pips[color] = max(max_pips.get(color, 0), required)
                if required >= 2:
                    intensity[color] += qty

        identity = frozenset(c for c, n in pip_counts.items() if n > 0)
        order = sort_colors(identity)

        stats = PipStatistics(
            pip_counts={c: pip_counts[c] for c in order},
            weighted_pip_counts={c: weighted[c] for c in order},
            color_identity=identity,
            max_pips={c: max_pips[c] for c in order},
            pip_intensity={c: intensity[c] for c in order if intensity[c] > 0},
            spell_count=spell_count,
            total_cmc=total_cmc,
        )

        logger.debug(
            f"Analyzed {spell_count} spells: "
            + ", ".join(f"{c.symbol}={float(n):g}" for c, n in stats.pip_counts.items())
        )
        if not identity:
            logger.info("No colored pips found; deck has an empty color identity")

        return stats

    def intensity_warnings(self, stats: PipStatistics) -> list[str]:
        """
        Warnings for colors with many double-pip (or heavier) cards.

        Returns:
            Warning strings, most intense color first
        """
        ranked = sorted(
            stats.pip_intensity.items(),
            key=lambda item: (-item[1], item[0].order),
        )

        warnings = []
        for color, count in ranked:
            name = color.display_name
            if count >= self.intensity.very_high:
                warnings.append(
                    f"{name} has very high pip density ({count} cards with double+ pips). "
                    f"Strongly consider additional {name.lower()} sources, fetch lands, "
                    f"or mana rocks."
                )
            elif count >= self.intensity.high:
                warnings.append(
                    f"{name} has high pip density ({count} cards with "
                    f"{{{color.symbol}}}{{{color.symbol}}} or more). Consider additional "
                    f"{name.lower()} sources or mana rocks."
                )
        return warnings


def analyze(
    entries: Iterable[DeckEntry],
) -> tuple[dict[Color, Fraction], dict[Color, Fraction], frozenset]:
    """
    Analyze deck entries into (pip_counts, weighted_pip_counts, color_identity).

    Use PipAnalyzer.analyze_deck for the full statistics.
    """
    stats = PipAnalyzer().analyze_deck(entries)
    return stats.pip_counts, stats.weighted_pip_counts, stats.color_identity
