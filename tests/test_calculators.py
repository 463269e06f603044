"""Calculator family tests."""

from fractions import Fraction

import pytest

from manabase.analysis.pip_analyzer import analyze
from manabase.calculator import (
    CmcWeightedCalculator,
    HypergeometricCalculator,
    SimpleCalculator,
    calculate,
    get_calculator,
)
from manabase.data.mana_cost import parse_mana_cost
from manabase.errors import InconsistentColorIdentity, InvalidTarget
from manabase.models.color import Color
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

ALL_ALGORITHMS = list(Algorithm)


def entry(name, cost, quantity=1):
    return DeckEntry(name=name, cost=parse_mana_cost(cost), quantity=quantity)


def run(algorithm, pips, weighted=None, lands=17, cards=40, max_pips=None):
    identity = {c for c, n in pips.items() if n > 0}
    return calculate(
        algorithm,
        pips,
        weighted if weighted is not None else pips,
        identity,
        lands,
        total_cards=cards,
        max_pips=max_pips,
    )


class TestDispatch:
    """Test algorithm selection."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("simple", SimpleCalculator),
            ("cmc", CmcWeightedCalculator),
            ("CMC-Weighted", CmcWeightedCalculator),
            ("hypergeo", HypergeometricCalculator),
            ("hypergeometric", HypergeometricCalculator),
        ],
    )
    def test_get_calculator_by_name(self, name, expected):
        assert isinstance(get_calculator(name), expected)

    def test_unknown_algorithm(self):
        with pytest.raises(ValueError, match="Unknown algorithm"):
            get_calculator("karsten")

    def test_calculator_name(self):
        assert get_calculator(Algorithm.CMC_WEIGHTED).name == "CMC-Weighted"


class TestSimple:
    """Test proportional allocation."""

    def test_scenario_exact(self):
        assert run(Algorithm.SIMPLE, {W: 10, U: 5}, lands=15, cards=40) == {W: 10, U: 5}

    def test_scenario_no_remainder(self):
        assert run(Algorithm.SIMPLE, {W: 7, U: 3}, lands=10, cards=40) == {W: 7, U: 3}

    def test_scenario_largest_remainder(self):
        # Quotas 2.5 / 1.25 / 1.25
        result = run(Algorithm.SIMPLE, {W: 2, U: 1, B: 1}, lands=5, cards=40)

        assert result == {W: 3, U: 1, B: 1}

    def test_scenario_remainder_tie_break(self):
        result = run(Algorithm.SIMPLE, {W: 2, U: 1, B: 1}, lands=6, cards=40)

        assert result == {W: 3, U: 2, B: 1}

    def test_returns_allocation(self):
        result = run(Algorithm.SIMPLE, {W: 10, U: 5}, lands=15)

        assert isinstance(result, ManaBaseAllocation)
        assert list(result) == [W, U]
        assert result.lands() == {"Plains": 10, "Island": 5}

    def test_fractional_hybrid_pips(self):
        pips, weighted, identity = analyze([
            entry("Hybrid", "{W/U}{W/U}", 4),
            entry("Mono", "{W}", 4),
        ])

        result = calculate(Algorithm.SIMPLE, pips, weighted, identity, 12, total_cards=40)

        # W 8 pips, U 4 pips
        assert result == {W: 8, U: 4}

    @pytest.mark.parametrize("extra", [1, 2, 5, 10, 40])
    def test_monotonic_in_own_pips(self, extra):
        base = {W: 6, U: 5, B: 4}
        bumped = {W: 6, U: 5 + extra, B: 4}

        before = run(Algorithm.SIMPLE, base, lands=17)
        after = run(Algorithm.SIMPLE, bumped, lands=17)

        assert after[U] >= before[U]


class TestCmcWeighted:
    """Test CMC-weighted allocation."""

    def test_same_raw_pips_different_curves(self):
        # Both decks: 8 white pips, 8 red pips
        cheap_red = [entry("Plains Knight", "{4}{W}", 8), entry("Goblin", "{R}", 8)]
        costly_red = [entry("Soldier", "{W}", 8), entry("Dragon", "{4}{R}", 8)]

        pips_a, weighted_a, identity_a = analyze(cheap_red)
        pips_b, weighted_b, identity_b = analyze(costly_red)
        assert pips_a == pips_b

        simple_a = calculate(Algorithm.SIMPLE, pips_a, weighted_a, identity_a, 16, total_cards=40)
        simple_b = calculate(Algorithm.SIMPLE, pips_b, weighted_b, identity_b, 16, total_cards=40)
        assert simple_a == simple_b == {W: 8, R: 8}

        cmc_a = calculate(Algorithm.CMC_WEIGHTED, pips_a, weighted_a, identity_a, 16, total_cards=40)
        cmc_b = calculate(Algorithm.CMC_WEIGHTED, pips_b, weighted_b, identity_b, 16, total_cards=40)
        assert cmc_a[R] < cmc_b[R]
        assert cmc_a == {W: 13, R: 3}
        assert cmc_b == {W: 3, R: 13}

    def test_zero_weighted_falls_back_to_raw(self):
        result = run(Algorithm.CMC_WEIGHTED, {W: 3, U: 1}, weighted={W: 0, U: 0}, lands=8)

        assert result == {W: 6, U: 2}


class TestCommonInvariants:
    """Properties shared by every algorithm."""

    DECKS = [
        {W: 10, U: 5},
        {W: 2, U: 1, B: 1},
        {W: Fraction(7, 2), U: Fraction(1, 2), R: 9},
        {G: 1},
        {W: 1, U: 1, B: 1, R: 1, G: 1},
        {W: 30, U: 1},
    ]

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    @pytest.mark.parametrize("pips", DECKS)
    @pytest.mark.parametrize("lands, cards", [(0, 40), (1, 40), (17, 40), (24, 60), (38, 100)])
    def test_exact_sum_and_non_negative(self, algorithm, pips, lands, cards):
        result = run(algorithm, pips, lands=lands, cards=cards)

        assert result.total == lands
        assert all(n >= 0 for n in result.values())
        assert set(result) == set(pips)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_idempotent(self, algorithm):
        pips = {W: 9, U: Fraction(5, 2), B: 4}
        weighted = {W: 20, U: 11, B: 14}

        first = run(algorithm, pips, weighted, lands=17, max_pips={W: 2})
        second = run(algorithm, pips, weighted, lands=17, max_pips={W: 2})

        assert first == second
        assert hash(first) == hash(second)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_degenerate_deck(self, algorithm):
        pips, weighted, identity = analyze([entry("Sol Ring", "{1}", 4), entry("Matter Reshaper", "{2}{C}", 4)])

        result = calculate(algorithm, pips, weighted, identity, 17, total_cards=40)

        assert result == {C: 17}
        assert result.lands() == {"Wastes": 17}

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_negative_target(self, algorithm):
        with pytest.raises(InvalidTarget):
            run(algorithm, {W: 1}, lands=-1)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_target_above_deck_size(self, algorithm):
        with pytest.raises(InvalidTarget) as exc_info:
            run(algorithm, {W: 1}, lands=41, cards=40)

        assert exc_info.value.target_lands == 41
        assert exc_info.value.total_cards == 40

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_identity_color_without_pips(self, algorithm):
        with pytest.raises(InconsistentColorIdentity):
            calculate(algorithm, {W: 3}, {W: 3}, {W, U}, 17, total_cards=40)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_pips_outside_identity(self, algorithm):
        with pytest.raises(InconsistentColorIdentity):
            calculate(algorithm, {W: 3, U: 2}, {W: 3, U: 2}, {W}, 17, total_cards=40)

    def test_colorless_in_identity_rejected(self):
        with pytest.raises(InconsistentColorIdentity):
            calculate(Algorithm.SIMPLE, {C: 3}, {C: 3}, {C}, 17)
