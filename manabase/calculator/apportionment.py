"""Largest-remainder (Hare-Niemeyer) apportionment.

Every calculator rounds through this one function, so the exact-sum
guarantee lives in a single place.
"""

from collections.abc import Mapping
from fractions import Fraction
from math import floor
from numbers import Rational, Real
from typing import Union

from manabase.errors import InvalidTarget
from manabase.models.color import Color, sort_colors

Weight = Union[Rational, Real]


def apportion(weights: Mapping[Color, Weight], total: int) -> dict[Color, int]:
    """
    Split an integer total across colors in proportion to their weights.

    Each color first gets floor(total * weight / sum). The leftover units go
    one at a time to the largest fractional remainders, ties broken by
    W, U, B, R, G, C order. All-zero weights are treated as equal weights.

    Args:
        weights: Color -> non-negative weight (int, Fraction or float)
        total: Non-negative integer to distribute

    Returns:
        Color -> int, summing exactly to total

    Examples:
        {W: 2, U: 1, B: 1}, 5 → quotas 2.5/1.25/1.25 → {W: 3, U: 1, B: 1}
        {U: 1, B: 1}, 3 → quotas 1.5/1.5, tie → {U: 2, B: 1}
    """
    if total < 0:
        raise InvalidTarget(f"Cannot apportion a negative total ({total})", target_lands=total)

    colors = sort_colors(weights)
    if not colors:
        if total == 0:
            return {}
        raise ValueError(f"Cannot apportion {total} across zero colors")

    # Exact arithmetic keeps remainder ties exact
    values = {c: Fraction(weights[c]) for c in colors}
    for color, value in values.items():
        if value < 0:
            raise ValueError(f"Weight for {color.display_name} is negative: {value}")

    weight_sum = sum(values.values(), Fraction(0))
    if weight_sum == 0:
        values = {c: Fraction(1) for c in colors}
        weight_sum = Fraction(len(colors))

    quotas = {c: values[c] * total / weight_sum for c in colors}
    result = {c: floor(q) for c, q in quotas.items()}

    remaining = total - sum(result.values())
    by_remainder = sorted(colors, key=lambda c: (-(quotas[c] - result[c]), c.order))
    for color in by_remainder[:remaining]:
        result[color] += 1

    return result


def fill_basic_slots(
    needs: Mapping[Color, Weight],
    basic_slots: int,
    weights: Mapping[Color, Weight],
) -> dict[Color, int]:
    """
    Round per-color needs onto the basic land slots.

    When the needs fill the slots (or overflow them) the slots are split in
    proportion to the needs. Otherwise every need is met and the extra slots
    follow the weights. Both cases round once, through apportion().

    Args:
        needs: Color -> lands still wanted after other sources
        basic_slots: Basic lands available
        weights: Color -> share for distributing extra slots

    Returns:
        Color -> int, summing exactly to basic_slots

    Examples:
        needs {U: 8, B: 8}, 20 slots, weights {U: 1, B: 1} → {U: 10, B: 10}
    """
    colors = sort_colors(needs)
    values = {c: Fraction(needs[c]) for c in colors}
    total_need = sum(values.values(), Fraction(0))

    if total_need >= basic_slots:
        return apportion(values, basic_slots)

    shares = {c: Fraction(weights.get(c, 0)) for c in colors}
    share_sum = sum(shares.values(), Fraction(0))
    if share_sum == 0:
        shares = {c: Fraction(1) for c in colors}
        share_sum = Fraction(len(colors))

    extras = basic_slots - total_need
    return apportion(
        {c: values[c] + extras * shares[c] / share_sum for c in colors},
        basic_slots,
    )
