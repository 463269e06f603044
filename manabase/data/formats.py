"""Format resolver: preset name or custom numbers -> FormatTarget."""

import logging
from typing import Optional, Union

from manabase.errors import InvalidTarget, UnknownFormat
from manabase.models.format import PRESETS, Format, FormatPreset, FormatTarget

logger = logging.getLogger(__name__)

FORMAT_ALIASES = {
    "commander": Format.COMMANDER,
    "edh": Format.COMMANDER,
    "standard": Format.STANDARD,
    "modern": Format.MODERN,
    "limited": Format.LIMITED,
    "draft": Format.LIMITED,
    "sealed": Format.LIMITED,
    "custom": Format.CUSTOM,
}

FormatSpec = Union[str, Format, FormatTarget, tuple[int, int]]


def parse_format_name(name: str) -> Format:
    """Parse a format name or alias (case-insensitive)."""
    key = name.strip().lower()
    if key not in FORMAT_ALIASES:
        raise UnknownFormat(name, [f.value for f in Format])
    return FORMAT_ALIASES[key]


def resolve_format(
    spec: FormatSpec,
    total_cards: Optional[int] = None,
    target_lands: Optional[int] = None,
) -> FormatTarget:
    """
    Resolve a format preset or custom parameters into a FormatTarget.

    Args:
        spec: Preset name ("commander", "edh", ...), Format, an explicit
            (total_cards, target_lands) pair, or an existing FormatTarget
        total_cards: Override the preset deck size
        target_lands: Override the preset land count

    Returns:
        Validated FormatTarget

    Raises:
        UnknownFormat: If the name is not a known preset
        InvalidTarget: If the numbers are out of range
    """
    if isinstance(spec, FormatTarget):
        if total_cards is None and target_lands is None:
            return spec
        fmt = spec.format
        base_cards, base_lands = spec.total_cards, spec.target_lands
    elif isinstance(spec, tuple):
        if len(spec) != 2:
            raise InvalidTarget(f"Custom format needs (total_cards, target_lands), got {spec!r}")
        fmt = Format.CUSTOM
        base_cards, base_lands = spec
    else:
        fmt = spec if isinstance(spec, Format) else parse_format_name(spec)
        preset = PRESETS[fmt]
        base_cards, base_lands = preset.total_cards, preset.target_lands

    cards = base_cards if total_cards is None else total_cards
    lands = base_lands if target_lands is None else target_lands

    for label, value in (("total_cards", cards), ("target_lands", lands)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidTarget(
                f"{label} must be an integer, got {value!r}",
                target_lands=lands if isinstance(lands, int) else None,
                total_cards=cards if isinstance(cards, int) else None,
            )

    target = FormatTarget(total_cards=cards, target_lands=lands, format=fmt)
    logger.debug(f"Resolved format {spec!r} -> {target}")
    return target


def detect_format(total_cards: int, format_hint: Optional[str] = None) -> Format:
    """
    Detect a format from a free-text hint or from deck size.

    Args:
        total_cards: Number of cards in the deck
        format_hint: Optional text such as "Commander precon" or "Sealed pool"

    Returns:
        Best matching Format
    """
    if format_hint:
        lower = format_hint.lower()
        for alias, fmt in FORMAT_ALIASES.items():
            if alias != "custom" and alias in lower:
                return fmt

    # Fallback to card count heuristics
    if total_cards >= 99:
        return Format.COMMANDER
    if total_cards <= 45:
        return Format.LIMITED
    return Format.STANDARD


def land_range_warning(target: FormatTarget) -> Optional[str]:
    """Warn when the land count is outside the format's recommended range."""
    low, high = target.preset.recommended_range
    if target.format is Format.CUSTOM:
        # Scale the custom range to the deck size (20-30 lands per 60 cards)
        low = round(low * target.total_cards / 60)
        high = round(high * target.total_cards / 60)
    if low <= target.target_lands <= high:
        return None
    return (
        f"{target.target_lands} lands is outside the recommended {low}-{high} "
        f"for {target.format.display_name} ({target.total_cards} cards)."
    )


def list_presets() -> list[FormatPreset]:
    """All format presets in declaration order."""
    return [PRESETS[f] for f in Format]
