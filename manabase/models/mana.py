"""Mana symbol, card cost and deck entry models."""

from dataclasses import dataclass, field
from fractions import Fraction
from math import ceil
from typing import Iterator, Optional

from manabase.errors import InvalidDeckEntry
from manabase.models.color import BASIC_LANDS, Color, sort_colors


# ============================================================================
# Mana Symbols
# ============================================================================


@dataclass(frozen=True)
class ManaSymbol:
    """A single cost token. Subclasses are produced only by the parser."""

    @property
    def mana_value(self) -> int:
        """Contribution to converted mana cost."""
        return 1

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        """Color signal carried by this symbol (colorless excluded)."""
        return {}

    @property
    def notation(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class ColoredSymbol(ManaSymbol):
    """{W}, {U}, {B}, {R}, {G} or {C}."""

    color: Color

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        if not self.color.is_colored:
            return {}
        return {self.color: Fraction(1)}

    @property
    def notation(self) -> str:
        return f"{{{self.color.symbol}}}"


@dataclass(frozen=True)
class GenericSymbol(ManaSymbol):
    """{N}; {X}/{Y}/{Z} are variable and count as zero."""

    count: int
    variable: bool = False
    letter: str = ""

    @property
    def mana_value(self) -> int:
        return self.count

    @property
    def notation(self) -> str:
        if self.variable:
            return f"{{{self.letter or 'X'}}}"
        return f"{{{self.count}}}"


@dataclass(frozen=True)
class HybridSymbol(ManaSymbol):
    """{W/U}: payable with either color. Split evenly across the colored halves.

    {C/W} has one colored candidate, so W carries the full pip.
    """

    first: Color
    second: Color
    phyrexian: bool = False

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        colored = [c for c in (self.first, self.second) if c.is_colored]
        share = Fraction(1, len(colored))
        return {color: share for color in colored}

    @property
    def notation(self) -> str:
        suffix = "/P" if self.phyrexian else ""
        return f"{{{self.first.symbol}/{self.second.symbol}{suffix}}}"


@dataclass(frozen=True)
class PhyrexianSymbol(ManaSymbol):
    """{W/P}: payable with the color or life. Still a full color commitment."""

    color: Color

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        return {self.color: Fraction(1)}

    @property
    def notation(self) -> str:
        return f"{{{self.color.symbol}/P}}"


@dataclass(frozen=True)
class GenericHybridSymbol(ManaSymbol):
    """{2/W}: payable with the color or two generic mana."""

    color: Color
    generic: int = 2

    @property
    def mana_value(self) -> int:
        return self.generic

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        return {self.color: Fraction(1)}

    @property
    def notation(self) -> str:
        return f"{{{self.generic}/{self.color.symbol}}}"


@dataclass(frozen=True)
class SnowSymbol(ManaSymbol):
    """{S}: one mana from a snow source."""

    @property
    def notation(self) -> str:
        return "{S}"


# ============================================================================
# Card Cost & Deck Entry
# ============================================================================


@dataclass(frozen=True)
class CardCost:
    """Ordered sequence of mana symbols for one card."""

    symbols: tuple[ManaSymbol, ...] = ()

    def __iter__(self) -> Iterator[ManaSymbol]:
        return iter(self.symbols)

    def __len__(self) -> int:
        return len(self.symbols)

    @property
    def cmc(self) -> int:
        """Converted mana cost (hybrid and Phyrexian count 1 each)."""
        return sum(s.mana_value for s in self.symbols)

    @property
    def pip_weights(self) -> dict[Color, Fraction]:
        """Per-color pip totals for a single copy of the card."""
        totals: dict[Color, Fraction] = {}
        for symbol in self.symbols:
            for color, weight in symbol.pip_weights.items():
                totals[color] = totals.get(color, Fraction(0)) + weight
        return totals

    @property
    def pip_requirements(self) -> dict[Color, int]:
        """Simultaneous pips of each color needed to cast one copy.

        Fractional hybrid pips round up to whole symbols.
        """
        return {color: ceil(weight) for color, weight in self.pip_weights.items()}

    @property
    def has_colored_pips(self) -> bool:
        return bool(self.pip_weights)

    @property
    def notation(self) -> str:
        return "".join(s.notation for s in self.symbols)

    def __str__(self) -> str:
        return self.notation


@dataclass(frozen=True)
class DeckEntry:
    """A card in the deck with its parsed cost and quantity."""

    name: str
    cost: CardCost = field(default_factory=CardCost)
    quantity: int = 1
    # Provider-supplied mana value; overrides the cost-derived CMC when set
    cmc: Optional[float] = None
    type_line: Optional[str] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise InvalidDeckEntry(self.name, f"quantity must be >= 1, got {self.quantity}")
        if self.cmc is not None and self.cmc < 0:
            raise InvalidDeckEntry(self.name, f"cmc must be >= 0, got {self.cmc}")
        if self.effective_cmc == 0 and self.cost.has_colored_pips:
            raise InvalidDeckEntry(
                self.name,
                f"cost {self.cost.notation} has colored pips but cmc is 0",
            )

    @property
    def effective_cmc(self) -> float:
        return self.cost.cmc if self.cmc is None else self.cmc

    @property
    def is_basic_land(self) -> bool:
        """Basic lands carry no color requirement and are skipped."""
        type_line = (self.type_line or "").lower()
        if "basic" in type_line and "land" in type_line:
            return True
        basic_names = {name.lower() for name in BASIC_LANDS.values()}
        name = self.name.strip().lower()
        return name in basic_names or name.startswith("snow-covered ")

    @property
    def is_land(self) -> bool:
        return self.is_basic_land or "land" in (self.type_line or "").lower()


@dataclass(frozen=True)
class DualLand:
    """A non-basic land already in the deck that produces one or more colors.

    Each copy counts as a source of every color it produces and takes one
    land slot away from the basics.
    """

    name: str
    colors: frozenset = frozenset()
    count: int = 1

    def __post_init__(self):
        colors = frozenset(self.colors)
        object.__setattr__(self, "colors", colors)
        if self.count < 1:
            raise InvalidDeckEntry(self.name, f"land count must be >= 1, got {self.count}")
        if not colors or any(not isinstance(c, Color) or not c.is_colored for c in colors):
            raise InvalidDeckEntry(self.name, "a dual land must produce at least one color (W, U, B, R, G)")

    @property
    def color_string(self) -> str:
        return "".join(c.symbol for c in sort_colors(self.colors))

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {"name": self.name, "colors": self.color_string, "count": self.count}


def dual_sources(dual_lands) -> dict[Color, int]:
    """Sources per color provided by dual lands."""
    sources: dict[Color, int] = {}
    for land in dual_lands or ():
        for color in land.colors:
            sources[color] = sources.get(color, 0) + land.count
    return sources


def dual_land_count(dual_lands) -> int:
    """Land slots taken by dual lands."""
    return sum(land.count for land in dual_lands or ())
