"""Mana base calculator: land counts from a deck's color requirements."""

__version__ = "0.1.0"

from manabase.analysis import ManaBaseAssembler, PipAnalyzer, analyze
from manabase.calculator import calculate, get_calculator
from manabase.data import parse_mana_cost, resolve_format
from manabase.models import Algorithm, Color, DeckEntry, HypergeometricConfig

__all__ = [
    "__version__",
    "Algorithm",
    "Color",
    "DeckEntry",
    "HypergeometricConfig",
    "ManaBaseAssembler",
    "PipAnalyzer",
    "analyze",
    "calculate",
    "get_calculator",
    "parse_mana_cost",
    "resolve_format",
]
