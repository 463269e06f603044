"""Pip statistics, land allocation and result models."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Iterator, Optional

from manabase.models.color import Color, color_string, guild_name, sort_colors
from manabase.models.config import HypergeometricConfig
from manabase.models.format import FormatTarget
from manabase.models.mana import DualLand, dual_land_count


class Algorithm(Enum):
    """Land allocation algorithms."""

    SIMPLE = "simple"
    CMC_WEIGHTED = "cmc"
    HYPERGEOMETRIC = "hypergeo"

    @classmethod
    def from_string(cls, value: str) -> "Algorithm":
        """Parse algorithm name (case-insensitive, with aliases)."""
        mapping = {
            "simple": cls.SIMPLE,
            "proportional": cls.SIMPLE,
            "cmc": cls.CMC_WEIGHTED,
            "cmc-weighted": cls.CMC_WEIGHTED,
            "cmc_weighted": cls.CMC_WEIGHTED,
            "weighted": cls.CMC_WEIGHTED,
            "hypergeo": cls.HYPERGEOMETRIC,
            "hypergeometric": cls.HYPERGEOMETRIC,
        }
        key = value.strip().lower()
        if key not in mapping:
            raise ValueError(
                f"Unknown algorithm {value!r}. Valid algorithms: "
                f"{', '.join(a.value for a in cls)}"
            )
        return mapping[key]

    @property
    def display_name(self) -> str:
        return {
            Algorithm.SIMPLE: "Simple",
            Algorithm.CMC_WEIGHTED: "CMC-Weighted",
            Algorithm.HYPERGEOMETRIC: "Hypergeometric",
        }[self]


def _ratios(counts: dict[Color, Fraction]) -> dict[Color, float]:
    total = sum(counts.values())
    if total == 0:
        return {}
    return {color: float(count / total) for color, count in counts.items()}


@dataclass(frozen=True)
class PipStatistics:
    """Aggregate color requirements of a deck."""

    pip_counts: dict[Color, Fraction] = field(default_factory=dict)
    weighted_pip_counts: dict[Color, Fraction] = field(default_factory=dict)
    color_identity: frozenset = frozenset()

    # Highest single-card pip requirement per color
    max_pips: dict[Color, int] = field(default_factory=dict)
    # Cards (times quantity) with two or more pips of a color
    pip_intensity: dict[Color, int] = field(default_factory=dict)

    spell_count: int = 0
    total_cmc: float = 0.0

    @property
    def total_pips(self) -> Fraction:
        return sum(self.pip_counts.values(), Fraction(0))

    @property
    def average_cmc(self) -> float:
        if self.spell_count == 0:
            return 0.0
        return self.total_cmc / self.spell_count

    @property
    def colors(self) -> list[Color]:
        """Color identity in WUBRG order."""
        return sort_colors(self.color_identity)

    def raw_ratios(self) -> dict[Color, float]:
        """Share of raw pips per color."""
        return _ratios(self.pip_counts)

    def weighted_ratios(self) -> dict[Color, float]:
        """Share of CMC-weighted pips per color."""
        return _ratios(self.weighted_pip_counts)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "color_identity": color_string(self.color_identity),
            "guild": guild_name(self.color_identity),
            "pip_counts": {c.symbol: float(v) for c, v in self.pip_counts.items()},
            "weighted_pip_counts": {
                c.symbol: float(v) for c, v in self.weighted_pip_counts.items()
            },
            "raw_ratios": {c.symbol: round(v, 4) for c, v in self.raw_ratios().items()},
            "weighted_ratios": {
                c.symbol: round(v, 4) for c, v in self.weighted_ratios().items()
            },
            "max_pips": {c.symbol: v for c, v in self.max_pips.items()},
            "pip_intensity": {c.symbol: v for c, v in self.pip_intensity.items()},
            "spell_count": self.spell_count,
            "average_cmc": round(self.average_cmc, 2),
        }


class ManaBaseAllocation(Mapping):
    """Immutable Color -> land count mapping.

    Built once per calculation. Entries are kept in W, U, B, R, G, C order.
    """

    def __init__(self, counts: Mapping):
        for color, count in counts.items():
            if not isinstance(color, Color):
                raise TypeError(f"Allocation keys must be Color, got {color!r}")
            if not isinstance(count, int) or count < 0:
                raise ValueError(f"Land count for {color.display_name} must be a non-negative int, got {count!r}")
        self._counts = {c: counts[c] for c in sort_colors(counts)}

    def __getitem__(self, color: Color) -> int:
        return self._counts[color]

    def __iter__(self) -> Iterator[Color]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __hash__(self) -> int:
        return hash(tuple(self._counts.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{c.symbol}: {n}" for c, n in self._counts.items())
        return f"ManaBaseAllocation({{{inner}}})"

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def lands(self) -> dict[str, int]:
        """Basic land name -> count, skipping zero entries."""
        return {c.basic_land: n for c, n in self._counts.items() if n > 0}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {c.symbol: n for c, n in self._counts.items()}


@dataclass(frozen=True)
class ManaBaseResult:
    """Final output of the assembler, consumed by CLI/export layers."""

    allocation: ManaBaseAllocation
    target: FormatTarget
    algorithm: Algorithm
    statistics: PipStatistics

    # Minimum sources per color (hypergeometric only)
    source_requirements: Optional[dict[Color, int]] = None
    hypergeometric: Optional[HypergeometricConfig] = None

    warnings: tuple[str, ...] = ()

    # Non-basic lands counted before the basics were allocated
    dual_lands: tuple[DualLand, ...] = ()

    @property
    def basic_count(self) -> int:
        return self.allocation.total

    @property
    def dual_count(self) -> int:
        return dual_land_count(self.dual_lands)

    @property
    def raw_ratios(self) -> dict[Color, float]:
        return self.statistics.raw_ratios()

    @property
    def weighted_ratios(self) -> dict[Color, float]:
        return self.statistics.weighted_ratios()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        data = {
            "algorithm": self.algorithm.value,
            "format": self.target.to_dict(),
            "allocation": self.allocation.to_dict(),
            "lands": self.allocation.lands(),
            "dual_lands": [land.to_dict() for land in self.dual_lands],
            "statistics": self.statistics.to_dict(),
            "warnings": list(self.warnings),
        }
        if self.source_requirements is not None:
            data["source_requirements"] = {
                c.symbol: n for c, n in self.source_requirements.items()
            }
        if self.hypergeometric is not None:
            data["hypergeometric"] = self.hypergeometric.to_dict()
        return data
