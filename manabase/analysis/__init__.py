"""Pip analysis and mana base orchestration."""

from manabase.analysis.mana_base import ManaBaseAssembler, verify_allocation
from manabase.analysis.pip_analyzer import PipAnalyzer, analyze

__all__ = [
    "ManaBaseAssembler",
    "PipAnalyzer",
    "analyze",
    "verify_allocation",
]
