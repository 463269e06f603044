"""Mana base orchestration: format -> pips -> calculator -> result."""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from manabase.analysis.pip_analyzer import PipAnalyzer
from manabase.calculator import HypergeometricCalculator, get_calculator
from manabase.data.formats import FormatSpec, land_range_warning, resolve_format
from manabase.errors import InternalInvariantViolation
from manabase.models.color import Color
from manabase.models.config import DEFAULT_CONFIG_PATH, HypergeometricConfig, ManaBaseConfig
from manabase.models.mana import DeckEntry, DualLand, dual_land_count, dual_sources
from manabase.models.manabase import Algorithm, ManaBaseAllocation, ManaBaseResult

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


class ManaBaseAssembler:
    """Main orchestrator for a mana base calculation."""

    def __init__(
        self,
        config: Optional[ManaBaseConfig] = None,
        pip_analyzer: Optional[PipAnalyzer] = None,
    ):
        """
        Initialize assembler.

        Args:
            config: Defaults for algorithm, format and hypergeometric tuning
            pip_analyzer: Pip analysis module
        """
        self.config = config or ManaBaseConfig()
        self.pip_analyzer = pip_analyzer or PipAnalyzer(self.config.pip_intensity)

    @classmethod
    def from_config(cls, config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> "ManaBaseAssembler":
        """Create assembler from YAML config file."""
        return cls(config=ManaBaseConfig.from_config(config_path))

    def assemble(
        self,
        entries: Iterable[DeckEntry],
        format: Optional[FormatSpec] = None,
        algorithm: Optional[Union[Algorithm, str]] = None,
        total_cards: Optional[int] = None,
        target_lands: Optional[int] = None,
        hypergeo_config: Optional[HypergeometricConfig] = None,
        progress_callback: Optional[ProgressCallback] = None,
        dual_lands: Optional[Iterable[DualLand]] = None,
    ) -> ManaBaseResult:
        """
        Run a complete mana base calculation.

        Args:
            entries: Deck entries with parsed costs
            format: Preset name, (total_cards, target_lands) or FormatTarget;
                defaults to the configured format
            algorithm: Algorithm tag or name; defaults to the configured one
            total_cards: Override the format's deck size
            target_lands: Override the format's land count
            hypergeo_config: Override the configured hypergeometric tuning
            progress_callback: Optional callback(step, total, message)
            dual_lands: Non-basic lands already in the deck; they fill land
                slots before the basics and count as sources of their colors

        Returns:
            ManaBaseResult with allocation and diagnostics

        Raises:
            InvalidTarget: Bad format or land target, or more dual lands than
                the land target
            InconsistentColorIdentity: Bad pip data
            InternalInvariantViolation: Basics plus dual lands do not sum to
                the target
        """
        total_steps = 4

        def report_progress(step: int, message: str):
            if progress_callback:
                progress_callback(step, total_steps, message)
            logger.info(f"[{step}/{total_steps}] {message}")

        if algorithm is None:
            algorithm = self.config.default_algorithm
        if isinstance(algorithm, str):
            algorithm = Algorithm.from_string(algorithm)
        hypergeo_config = hypergeo_config or self.config.hypergeometric
        duals = tuple(dual_lands or ())

        # Step 1: Resolve format
        report_progress(1, "Resolving format")
        target = resolve_format(
            format if format is not None else self.config.default_format,
            total_cards=total_cards,
            target_lands=target_lands,
        )

        # Step 2: Analyze pips
        report_progress(2, "Analyzing pip distribution")
        stats = self.pip_analyzer.analyze_deck(list(entries))

        # Step 3: Calculate allocation
        report_progress(3, f"Calculating {algorithm.display_name} allocation for {target}")
        calculator = get_calculator(algorithm, hypergeo_config)
        allocation = calculator.calculate(
            stats.pip_counts,
            stats.weighted_pip_counts,
            stats.color_identity,
            target.target_lands,
            total_cards=target.total_cards,
            max_pips=stats.max_pips,
            dual_lands=duals,
        )

        source_requirements = None
        if isinstance(calculator, HypergeometricCalculator) and stats.color_identity:
            source_requirements = calculator.requirements(
                stats.color_identity,
                target.target_lands,
                target.total_cards,
                stats.max_pips,
            )

        # Step 4: Verify and package
        report_progress(4, "Verifying allocation")
        verify_allocation(
            allocation,
            target.target_lands,
            stats.color_identity,
            dual_count=dual_land_count(duals),
        )

        warnings = []
        range_warning = land_range_warning(target)
        if range_warning:
            warnings.append(range_warning)
        warnings.extend(self.pip_analyzer.intensity_warnings(stats))

        provided = dual_sources(duals)
        if source_requirements:
            for color, needed in source_requirements.items():
                have = allocation[color] + provided.get(color, 0)
                if have < needed:
                    warnings.append(
                        f"{color.display_name} gets {have} sources but needs "
                        f"{needed} sources for {hypergeo_config.confidence:.0%} by turn "
                        f"{hypergeo_config.reference_turn}. Add fixing or more lands."
                    )

        result = ManaBaseResult(
            allocation=allocation,
            target=target,
            algorithm=algorithm,
            statistics=stats,
            source_requirements=source_requirements,
            hypergeometric=hypergeo_config if algorithm is Algorithm.HYPERGEOMETRIC else None,
            warnings=tuple(warnings),
            dual_lands=duals,
        )

        logger.info(
            f"Mana base complete: {allocation.lands() or 'no lands'} "
            f"({len(warnings)} warnings)"
        )
        return result


def verify_allocation(
    allocation: ManaBaseAllocation,
    target_lands: int,
    color_identity: Iterable[Color],
    dual_count: int = 0,
) -> None:
    """
    Check the exact-sum and key-set invariants of a finished allocation.

    The basics plus dual_count dual lands must equal target_lands.

    Raises:
        InternalInvariantViolation: If the allocation is inconsistent
    """
    if allocation.total + dual_count != target_lands:
        raise InternalInvariantViolation(
            "Allocation does not sum to the land target",
            target_lands,
            allocation.total + dual_count,
        )
    if any(count < 0 for count in allocation.values()):
        raise InternalInvariantViolation(
            "Allocation has a negative land count", 0, min(allocation.values())
        )

    expected = set(color_identity) or {Color.COLORLESS}
    if set(allocation) != expected:
        raise InternalInvariantViolation(
            "Allocation colors do not match the color identity",
            len(expected),
            len(allocation),
        )
