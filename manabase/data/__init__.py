"""Parsing and input resolution modules."""

from manabase.data.deck_loader import LoadedDeck, entry_from_dict, load_deck
from manabase.data.formats import detect_format, land_range_warning, list_presets, resolve_format
from manabase.data.mana_cost import parse_mana_cost, parse_symbol

__all__ = [
    "parse_mana_cost",
    "parse_symbol",
    "resolve_format",
    "detect_format",
    "land_range_warning",
    "list_presets",
    "LoadedDeck",
    "entry_from_dict",
    "load_deck",
]
