"""Interface contracts for module integration and validation.

Contracts define the expected input/output types and required methods
for each module, so alternative implementations can be checked against
the same expectations.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Protocol, runtime_checkable

from manabase.models.color import Color
from manabase.models.format import FormatTarget
from manabase.models.mana import DeckEntry
from manabase.models.manabase import ManaBaseAllocation, PipStatistics


# ============================================================================
# Protocol Definitions (Duck Typing Interfaces)
# ============================================================================


@runtime_checkable
class CalculatorProtocol(Protocol):
    """Protocol for land allocation algorithms."""

    def calculate(
        self,
        pip_counts: dict,
        weighted_pip_counts: dict,
        color_identity: Iterable[Color],
        target_lands: int,
        total_cards: Optional[int] = None,
        max_pips: Optional[dict] = None,
        dual_lands: Optional[Iterable] = None,
    ) -> ManaBaseAllocation:
        """Allocate the basics of a target_lands mana base around dual lands."""
        ...


@runtime_checkable
class PipAnalyzerProtocol(Protocol):
    """Protocol for pip analysis implementations."""

    def analyze_deck(self, entries: Iterable[DeckEntry]) -> PipStatistics:
        """Aggregate pip statistics for a deck."""
        ...

    def intensity_warnings(self, stats: PipStatistics) -> list[str]:
        """Warnings for pip-intensive colors."""
        ...


@runtime_checkable
class FormatResolverProtocol(Protocol):
    """Protocol for format resolution."""

    def __call__(
        self,
        spec,
        total_cards: Optional[int] = None,
        target_lands: Optional[int] = None,
    ) -> FormatTarget:
        """Resolve a preset or custom parameters."""
        ...


# ============================================================================
# Contract Dataclasses (For Testing & Validation)
# ============================================================================


@dataclass
class CalculatorContract:
    """Contract specification for calculator implementations."""

    output_type: type = ManaBaseAllocation
    required_methods: list[str] = field(default_factory=lambda: ["calculate"])

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = []

        for method in self.required_methods:
            if not hasattr(instance, method):
                errors.append(f"Missing required method: {method}")
            elif not callable(getattr(instance, method)):
                errors.append(f"Method {method} is not callable")

        return len(errors) == 0, errors

    def validate_output(
        self,
        allocation: object,
        target_lands: int,
        dual_count: int = 0,
    ) -> tuple[bool, str]:
        """Validate exact sum (basics plus dual lands) and non-negativity of an allocation."""
        if not isinstance(allocation, self.output_type):
            return False, f"Expected {self.output_type.__name__}, got {type(allocation).__name__}"
        negative = [c.symbol for c, n in allocation.items() if n < 0]
        if negative:
            return False, f"Negative land counts for {', '.join(negative)}"
        if allocation.total + dual_count != target_lands:
            return False, (
                f"Allocation sums to {allocation.total} + {dual_count} dual lands, "
                f"expected {target_lands}"
            )
        return True, ""


@dataclass
class AnalyzerContract:
    """Contract specification for pip analyzers."""

    output_type: type = PipStatistics
    required_methods: list[str] = field(
        default_factory=lambda: ["analyze_deck", "intensity_warnings"]
    )

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        errors = []

        for method in self.required_methods:
            if not hasattr(instance, method):
                errors.append(f"Missing required method: {method}")

        return len(errors) == 0, errors

    def validate_output(self, stats: object) -> tuple[bool, str]:
        """Identity must be exactly the colors with positive pips."""
        if not isinstance(stats, self.output_type):
            return False, f"Expected PipStatistics, got {type(stats).__name__}"
        pip_colors = {c for c, n in stats.pip_counts.items() if n > 0}
        if pip_colors != set(stats.color_identity):
            return False, "Color identity does not match pip colors"
        if any(n < 0 for n in stats.pip_counts.values()):
            return False, "Negative pip count"
        return True, ""


@dataclass
class ResolverContract:
    """Contract specification for format resolvers."""

    output_type: type = FormatTarget

    def validate(self, instance: object) -> tuple[bool, list[str]]:
        """Validate that instance fulfills the contract."""
        if not callable(instance):
            return False, ["Resolver is not callable"]
        return True, []

    def validate_output(self, target: object) -> tuple[bool, str]:
        """Validate a resolved target."""
        if not isinstance(target, self.output_type):
            return False, f"Expected FormatTarget, got {type(target).__name__}"
        if not 0 <= target.target_lands <= target.total_cards:
            return False, f"target_lands {target.target_lands} out of range"
        return True, ""


# ============================================================================
# Contract Registry
# ============================================================================


CONTRACTS = {
    "calculator": CalculatorContract(),
    "analyzer": AnalyzerContract(),
    "resolver": ResolverContract(),
}


def validate_all_contracts(modules: dict[str, object]) -> dict[str, tuple[bool, list[str]]]:
    """
    Validate all modules against their contracts.

    Args:
        modules: Dict mapping contract name to module instance

    Returns:
        Dict mapping contract name to (is_valid, errors) tuple
    """
    results = {}

    for name, instance in modules.items():
        if name in CONTRACTS:
            contract = CONTRACTS[name]
            is_valid, errors = contract.validate(instance)
            results[name] = (is_valid, errors)
        else:
            results[name] = (False, [f"Unknown contract: {name}"])

    return results
