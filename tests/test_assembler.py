"""Mana base assembler tests."""

import pytest

from manabase.analysis.mana_base import ManaBaseAssembler, verify_allocation
from manabase.data.mana_cost import parse_mana_cost
from manabase.errors import InternalInvariantViolation, InvalidTarget, UnknownFormat
from manabase.models.color import Color
from manabase.models.config import HypergeometricConfig, ManaBaseConfig
from manabase.models.format import Format
from manabase.models.mana import DeckEntry
from manabase.models.manabase import Algorithm, ManaBaseAllocation

W, U, B, R, G, C = (
    Color.WHITE,
    Color.BLUE,
    Color.BLACK,
    Color.RED,
    Color.GREEN,
    Color.COLORLESS,
)


def entry(name, cost, quantity=1):
    return DeckEntry(name=name, cost=parse_mana_cost(cost), quantity=quantity)


@pytest.fixture
def azorius_deck():
    return [
        entry("Plains", "", 9),
        entry("Island", "", 8),
        entry("Tithe Taker", "{1}{W}", 3),
        entry("Sentinel", "{3}{W}{W}", 2),
        entry("Counterspell", "{U}{U}", 2),
        entry("Opt", "{U}", 2),
        entry("Dovin's Veto", "{W}{U}", 2),
        entry("Hybrid Guard", "{W/U}{W/U}", 2),
        entry("Mind Stone", "{2}", 2),
    ]


class TestAssemble:
    """Test the full pipeline."""

    def test_limited_simple(self, azorius_deck):
        result = ManaBaseAssembler().assemble(azorius_deck, format="limited", algorithm="simple")

        assert result.algorithm is Algorithm.SIMPLE
        assert result.target.format is Format.LIMITED
        assert result.allocation.total == 17
        assert set(result.allocation) == {W, U}
        assert result.source_requirements is None
        assert result.hypergeometric is None

    def test_statistics_echoed(self, azorius_deck):
        result = ManaBaseAssembler().assemble(azorius_deck, format="limited")

        # W: 3 + 4 + 2 + 2, U: 4 + 2 + 2 + 2
        assert result.statistics.pip_counts == {W: 11, U: 10}
        assert result.raw_ratios[W] == pytest.approx(11 / 21)
        assert set(result.weighted_ratios) == {W, U}

    @pytest.mark.parametrize("algorithm", list(Algorithm))
    def test_every_algorithm_hits_target(self, azorius_deck, algorithm):
        result = ManaBaseAssembler().assemble(azorius_deck, format="standard", algorithm=algorithm)

        assert result.allocation.total == 24

    def test_hypergeometric_requirements(self, azorius_deck):
        result = ManaBaseAssembler().assemble(
            azorius_deck, format="limited", algorithm=Algorithm.HYPERGEOMETRIC
        )

        assert set(result.source_requirements) == {W, U}
        assert result.hypergeometric == HypergeometricConfig()
        # Counterspell and Sentinel need two sources of their color
        assert result.source_requirements[U] > 6
        assert result.source_requirements[W] > 6

    def test_custom_numbers(self, azorius_deck):
        result = ManaBaseAssembler().assemble(azorius_deck, format=(45, 18))

        assert result.target.total_cards == 45
        assert result.allocation.total == 18

    def test_overrides(self, azorius_deck):
        result = ManaBaseAssembler().assemble(azorius_deck, format="limited", target_lands=16)

        assert result.allocation.total == 16

    def test_config_defaults(self, azorius_deck):
        config = ManaBaseConfig(default_algorithm="cmc", default_format="commander")

        result = ManaBaseAssembler(config=config).assemble(azorius_deck)

        assert result.algorithm is Algorithm.CMC_WEIGHTED
        assert result.allocation.total == 38

    def test_degenerate_deck(self):
        result = ManaBaseAssembler().assemble(
            [entry("Sol Ring", "{1}", 1), entry("Wastes", "", 17)],
            format="limited",
            algorithm="hypergeo",
        )

        assert result.allocation == {C: 17}
        assert result.source_requirements is None

    def test_land_range_warning(self, azorius_deck):
        result = ManaBaseAssembler().assemble(azorius_deck, format="limited", target_lands=12)

        assert any("outside the recommended 16-18" in w for w in result.warnings)

    def test_under_sourced_warning(self):
        deck = [entry("Triple Blue", "{U}{U}{U}", 4), entry("Splash", "{R}", 1)]

        result = ManaBaseAssembler().assemble(
            deck, format=(40, 10), algorithm="hypergeo"
        )

        assert result.allocation.total == 10
        assert any("Add fixing or more lands" in w for w in result.warnings)

    def test_progress_callback(self, azorius_deck):
        calls = []

        ManaBaseAssembler().assemble(
            azorius_deck,
            format="limited",
            progress_callback=lambda step, total, message: calls.append((step, total)),
        )

        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_invalid_target(self, azorius_deck):
        with pytest.raises(InvalidTarget):
            ManaBaseAssembler().assemble(azorius_deck, format="limited", target_lands=41)

    def test_unknown_format(self, azorius_deck):
        with pytest.raises(UnknownFormat):
            ManaBaseAssembler().assemble(azorius_deck, format="vintage cube")

    def test_to_dict(self, azorius_deck):
        data = ManaBaseAssembler().assemble(azorius_deck, format="limited").to_dict()

        assert data["algorithm"] == "simple"
        assert data["format"] == {"format": "limited", "total_cards": 40, "target_lands": 17}
        assert sum(data["allocation"].values()) == 17
        assert set(data["lands"]) <= {"Plains", "Island"}


class TestVerifyAllocation:
    """Test the internal invariant check."""

    def test_valid(self):
        verify_allocation(ManaBaseAllocation({W: 10, U: 7}), 17, {W, U})

    def test_sum_mismatch(self):
        with pytest.raises(InternalInvariantViolation) as exc_info:
            verify_allocation(ManaBaseAllocation({W: 10, U: 6}), 17, {W, U})

        assert exc_info.value.expected == 17
        assert exc_info.value.actual == 16

    def test_not_a_user_error(self):
        with pytest.raises(RuntimeError):
            verify_allocation(ManaBaseAllocation({W: 10}), 17, {W})

        assert not issubclass(InternalInvariantViolation, ValueError)

    def test_wrong_colors(self):
        with pytest.raises(InternalInvariantViolation):
            verify_allocation(ManaBaseAllocation({W: 17}), 17, {W, U})

    def test_colorless_for_empty_identity(self):
        verify_allocation(ManaBaseAllocation({C: 17}), 17, set())


class TestAllocationModel:
    """Test ManaBaseAllocation behaviour."""

    def test_immutable(self):
        allocation = ManaBaseAllocation({W: 1})

        with pytest.raises(TypeError):
            allocation[W] = 2

    def test_rejects_negative(self):
        with pytest.raises(ValueError):
            ManaBaseAllocation({W: -1})

    def test_rejects_non_color_keys(self):
        with pytest.raises(TypeError):
            ManaBaseAllocation({"W": 1})

    def test_ordered(self):
        assert list(ManaBaseAllocation({G: 1, W: 2, C: 0})) == [W, G, C]

    def test_lands_skip_zero(self):
        assert ManaBaseAllocation({W: 17, U: 0}).lands() == {"Plains": 17}
