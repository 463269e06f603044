"""Mana cost parser for curly-brace notation.

Turns strings like "{2}{W}{W}", "{W/U}" or "{B/P}" into typed symbols.
Parsing is pure: no I/O and no shared state.
"""

import logging
import re
from functools import lru_cache

from manabase.errors import MalformedCost
from manabase.models.color import Color
from manabase.models.mana import (
    CardCost,
    ColoredSymbol,
    GenericHybridSymbol,
    GenericSymbol,
    HybridSymbol,
    ManaSymbol,
    PhyrexianSymbol,
    SnowSymbol,
)

logger = logging.getLogger(__name__)

# Symbol body patterns (matched against the upper-cased text inside braces)
GENERIC_PATTERN = re.compile(r"[0-9]+")
NEGATIVE_PATTERN = re.compile(r"-[0-9]+")
VARIABLE_PATTERN = re.compile(r"[XYZ]")
COLOR_LETTERS = "WUBRGC"
COLORED_LETTERS = "WUBRG"


def _color(letter: str) -> Color:
    return Color(letter)


def parse_symbol(body: str, cost: str = "", position: int = 0) -> ManaSymbol:
    """
    Parse the text inside one pair of braces.

    Args:
        body: Symbol text without braces (e.g., "W", "2", "W/U", "B/P")
        cost: Full cost string, for error reporting
        position: Offset of the opening brace, for error reporting

    Returns:
        The parsed ManaSymbol

    Raises:
        MalformedCost: If the symbol is not recognized
    """
    token = f"{{{body}}}"
    text = body.strip().upper()

    def fail(reason: str) -> MalformedCost:
        return MalformedCost(cost or token, token, position, reason)

    if not text:
        raise fail("empty symbol")

    if GENERIC_PATTERN.fullmatch(text):
        return GenericSymbol(int(text))
    if NEGATIVE_PATTERN.fullmatch(text):
        raise fail("generic value cannot be negative")
    if VARIABLE_PATTERN.fullmatch(text):
        return GenericSymbol(0, variable=True, letter=text)
    if text == "S":
        return SnowSymbol()
    if len(text) == 1:
        if text in COLOR_LETTERS:
            return ColoredSymbol(_color(text))
        raise fail(f"unrecognized color letter {text!r}")

    parts = [p.strip() for p in text.split("/")]
    if len(parts) == 1:
        raise fail("non-numeric generic value or unknown symbol")
    if any(not p for p in parts):
        raise fail("empty hybrid component")

    # {W/P}
    if len(parts) == 2 and parts[1] == "P":
        if parts[0] not in COLORED_LETTERS:
            raise fail(f"Phyrexian symbol needs a color, got {parts[0]!r}")
        return PhyrexianSymbol(_color(parts[0]))

    # {2/W}
    if len(parts) == 2 and GENERIC_PATTERN.fullmatch(parts[0]):
        if parts[1] not in COLORED_LETTERS:
            raise fail(f"unrecognized color letter {parts[1]!r}")
        return GenericHybridSymbol(_color(parts[1]), generic=int(parts[0]))

    # {W/U} and {W/U/P}
    phyrexian = len(parts) == 3 and parts[2] == "P"
    if len(parts) == 2 or phyrexian:
        first, second = parts[0], parts[1]
        for letter in (first, second):
            if letter not in COLOR_LETTERS:
                raise fail(f"unrecognized color letter {letter!r}")
        if first == second:
            raise fail("hybrid symbol repeats the same color")
        return HybridSymbol(_color(first), _color(second), phyrexian=phyrexian)

    raise fail("unrecognized symbol")


@lru_cache(maxsize=4096)
def parse_mana_cost(cost: str) -> CardCost:
    """
    Parse a mana-cost string into an ordered CardCost.

    Args:
        cost: Mana cost (e.g., "{2}{W}{W}", "{W/U}{W/U}", "")

    Returns:
        CardCost; an empty string yields an empty cost with cmc 0

    Raises:
        MalformedCost: On unbalanced braces, stray characters or bad symbols

    Examples:
        "{2}{W}{W}" → [Generic(2), W, W], cmc 4
        "{W/U}{W/U}" → [Hybrid(W,U), Hybrid(W,U)], cmc 2
        "{B/P}" → [Phyrexian(B)], cmc 1
    """
    if cost is None:
        return CardCost()

    symbols: list[ManaSymbol] = []
    pos = 0
    length = len(cost)

    while pos < length:
        ch = cost[pos]

        if ch.isspace():
            pos += 1
            continue
        if ch == "}":
            raise MalformedCost(cost, ch, pos, "unbalanced '}'")
        if ch != "{":
            raise MalformedCost(cost, ch, pos, "character outside braces")

        end = cost.find("}", pos + 1)
        nested = cost.find("{", pos + 1)
        if end == -1:
            raise MalformedCost(cost, cost[pos:], pos, "unclosed '{'")
        if nested != -1 and nested < end:
            raise MalformedCost(cost, cost[pos:nested], pos, "unclosed '{'")

        symbols.append(parse_symbol(cost[pos + 1:end], cost, pos))
        pos = end + 1

    parsed = CardCost(tuple(symbols))
    logger.debug(f"Parsed {cost!r} -> {parsed.notation} (cmc {parsed.cmc})")
    return parsed

