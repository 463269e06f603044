"""Deck format presets and resolved format targets."""

from dataclasses import dataclass
from enum import Enum

from manabase.errors import InvalidTarget


class Format(Enum):
    """Supported deck formats."""

    COMMANDER = "commander"
    STANDARD = "standard"
    MODERN = "modern"
    LIMITED = "limited"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class FormatPreset:
    """Default deck shape for a format."""

    format: Format
    total_cards: int
    target_lands: int
    min_lands: int
    max_lands: int
    description: str

    @property
    def recommended_range(self) -> tuple[int, int]:
        return self.min_lands, self.max_lands


PRESETS = {
    Format.COMMANDER: FormatPreset(
        Format.COMMANDER, 100, 38, 36, 40, "100-card singleton with a commander"
    ),
    Format.STANDARD: FormatPreset(
        Format.STANDARD, 60, 24, 20, 26, "60-card constructed with recent sets"
    ),
    Format.MODERN: FormatPreset(
        Format.MODERN, 60, 24, 20, 26, "60-card constructed with 8th Edition onwards"
    ),
    Format.LIMITED: FormatPreset(
        Format.LIMITED, 40, 17, 16, 18, "40-card draft or sealed deck"
    ),
    Format.CUSTOM: FormatPreset(
        Format.CUSTOM, 60, 24, 20, 30, "User-defined deck size and land count"
    ),
}


@dataclass(frozen=True)
class FormatTarget:
    """Resolved deck size and land target."""

    total_cards: int
    target_lands: int
    format: Format = Format.CUSTOM

    def __post_init__(self):
        if self.total_cards <= 0:
            raise InvalidTarget(
                f"total_cards must be positive, got {self.total_cards}",
                target_lands=self.target_lands,
                total_cards=self.total_cards,
            )
        if self.target_lands < 0 or self.target_lands > self.total_cards:
            raise InvalidTarget(
                f"target_lands must be between 0 and {self.total_cards}, "
                f"got {self.target_lands}",
                target_lands=self.target_lands,
                total_cards=self.total_cards,
            )

    @property
    def preset(self) -> FormatPreset:
        return PRESETS[self.format]

    @property
    def spell_slots(self) -> int:
        return self.total_cards - self.target_lands

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON export."""
        return {
            "format": self.format.value,
            "total_cards": self.total_cards,
            "target_lands": self.target_lands,
        }

    def __str__(self) -> str:
        return f"{self.format.display_name} ({self.total_cards} cards, {self.target_lands} lands)"
