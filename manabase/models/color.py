"""Color model and color-pair naming."""

from enum import Enum
from typing import Iterable, Optional


class Color(Enum):
    """MTG colors plus colorless, in WUBRG(C) order."""

    WHITE = "W"
    BLUE = "U"
    BLACK = "B"
    RED = "R"
    GREEN = "G"
    COLORLESS = "C"

    @classmethod
    def from_string(cls, value: str) -> Optional["Color"]:
        """Parse single color from a letter or name (case-insensitive)."""
        mapping = {
            "w": cls.WHITE,
            "white": cls.WHITE,
            "u": cls.BLUE,
            "blue": cls.BLUE,
            "b": cls.BLACK,
            "black": cls.BLACK,
            "r": cls.RED,
            "red": cls.RED,
            "g": cls.GREEN,
            "green": cls.GREEN,
            "c": cls.COLORLESS,
            "colorless": cls.COLORLESS,
        }
        return mapping.get(value.strip().lower())

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.name.title()

    @property
    def basic_land(self) -> str:
        """Name of the basic land that produces this color."""
        return BASIC_LANDS[self]

    @property
    def order(self) -> int:
        """Position in the fixed W, U, B, R, G, C tie-break order."""
        return COLOR_ORDER.index(self)

    @property
    def is_colored(self) -> bool:
        return self is not Color.COLORLESS


COLOR_ORDER = [
    Color.WHITE,
    Color.BLUE,
    Color.BLACK,
    Color.RED,
    Color.GREEN,
    Color.COLORLESS,
]

BASIC_LANDS = {
    Color.WHITE: "Plains",
    Color.BLUE: "Island",
    Color.BLACK: "Swamp",
    Color.RED: "Mountain",
    Color.GREEN: "Forest",
    Color.COLORLESS: "Wastes",
}

# Guild names for two-color pairs (WUBRG order)
GUILD_NAMES = {
    "WU": "Azorius",
    "UB": "Dimir",
    "BR": "Rakdos",
    "RG": "Gruul",
    "WG": "Selesnya",
    "WB": "Orzhov",
    "UR": "Izzet",
    "BG": "Golgari",
    "WR": "Boros",
    "UG": "Simic",
}


def sort_colors(colors: Iterable[Color]) -> list[Color]:
    """Sort colors into W, U, B, R, G, C order."""
    return sorted(set(colors), key=lambda c: c.order)


def color_string(colors: Iterable[Color]) -> str:
    """Render colors as a WUBRG-ordered string, e.g. {U, W} -> "WU"."""
    return "".join(c.symbol for c in sort_colors(colors))


def guild_name(colors: Iterable[Color]) -> Optional[str]:
    """Get guild name for a two-color combination, or None."""
    return GUILD_NAMES.get(color_string(colors))
