"""Largest-remainder apportionment tests."""

from fractions import Fraction

import pytest

from manabase.calculator.apportionment import apportion
from manabase.errors import InvalidTarget
from manabase.models.color import Color

W, U, B, R, G, C = (
    Color.WHITE,
    Color.BLUE,
    Color.BLACK,
    Color.RED,
    Color.GREEN,
    Color.COLORLESS,
)


class TestApportion:
    """Test the shared rounding routine."""

    def test_exact_quotas(self):
        assert apportion({W: 10, U: 5}, 15) == {W: 10, U: 5}

    def test_half_remainder_beats_quarter(self):
        # Quotas 2.5 / 1.25 / 1.25: W has the largest remainder
        assert apportion({W: 2, U: 1, B: 1}, 5) == {W: 3, U: 1, B: 1}

    def test_tie_goes_to_earlier_color(self):
        # Quotas 1.5 / 1.5
        assert apportion({U: 1, B: 1}, 3) == {U: 2, B: 1}

    def test_tie_after_exact_quota(self):
        # Quotas 3 / 1.5 / 1.5: one land left, U and B tie, U comes first
        assert apportion({W: 2, U: 1, B: 1}, 6) == {W: 3, U: 2, B: 1}

    def test_tie_order_ignores_input_order(self):
        assert apportion({G: 1, R: 1}, 1) == {R: 1, G: 0}

    def test_largest_remainder_wins(self):
        # Quotas 3.4 / 3.6
        assert apportion({W: 17, U: 18}, 7) == {W: 3, U: 4}

    def test_fraction_weights(self):
        weights = {W: Fraction(3, 2), U: Fraction(1, 2)}

        assert apportion(weights, 4) == {W: 3, U: 1}

    def test_float_weights(self):
        assert sum(apportion({W: 0.1, U: 0.2, B: 0.7}, 17).values()) == 17

    def test_zero_weight_color_kept(self):
        assert apportion({W: 5, U: 0}, 3) == {W: 3, U: 0}

    def test_all_zero_weights_split_evenly(self):
        assert apportion({W: 0, U: 0, B: 0}, 7) == {W: 3, U: 2, B: 2}

    def test_zero_total(self):
        assert apportion({W: 3, U: 1}, 0) == {W: 0, U: 0}

    def test_empty_weights_zero_total(self):
        assert apportion({}, 0) == {}

    def test_empty_weights_positive_total(self):
        with pytest.raises(ValueError):
            apportion({}, 3)

    def test_negative_total(self):
        with pytest.raises(InvalidTarget):
            apportion({W: 1}, -1)

    def test_negative_weight(self):
        with pytest.raises(ValueError, match="negative"):
            apportion({W: 1, U: -1}, 5)

    @pytest.mark.parametrize("total", [0, 1, 16, 17, 18, 24, 38, 99])
    def test_exact_sum(self, total):
        weights = {W: 7, U: Fraction(9, 2), B: 3, R: 1, G: Fraction(1, 3)}

        result = apportion(weights, total)

        assert sum(result.values()) == total
        assert all(n >= 0 for n in result.values())

    def test_each_color_within_one_of_quota(self):
        weights = {W: 13, U: 7, R: 5}
        result = apportion(weights, 17)

        for color, weight in weights.items():
            quota = Fraction(17 * weight, 25)
            assert abs(result[color] - quota) < 1
