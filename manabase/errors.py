"""Error taxonomy for the mana base engine.

Input problems (bad costs, bad deck entries, bad targets) derive from
ValueError. InternalInvariantViolation derives from RuntimeError so callers
can tell a logic defect apart from user input errors.
"""

from typing import Optional


class ManaBaseError(Exception):
    """Base class for every error raised by the package."""


class MalformedCost(ManaBaseError, ValueError):
    """A mana-cost string could not be parsed."""

    def __init__(self, cost: str, token: str, position: int, reason: str):
        self.cost = cost
        self.token = token
        self.position = position
        self.reason = reason
        super().__init__(
            f"Malformed mana cost {cost!r}: {reason} "
            f"(token {token!r} at position {position})"
        )


class InvalidDeckEntry(ManaBaseError, ValueError):
    """A deck entry is internally inconsistent."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid deck entry {name!r}: {reason}")


class InvalidTarget(ManaBaseError, ValueError):
    """Land target or deck size is out of range."""

    def __init__(
        self,
        message: str,
        target_lands: Optional[int] = None,
        total_cards: Optional[int] = None,
    ):
        self.target_lands = target_lands
        self.total_cards = total_cards
        super().__init__(message)


class UnknownFormat(InvalidTarget):
    """Format name is not one of the presets."""

    def __init__(self, name: str, valid: list[str]):
        self.name = name
        self.valid = valid
        super().__init__(f"Unknown format {name!r}. Valid formats: {', '.join(valid)}")


class InconsistentColorIdentity(ManaBaseError, ValueError):
    """Color identity does not match the colors that have pips."""

    def __init__(self, identity: list[str], pip_colors: list[str]):
        self.identity = identity
        self.pip_colors = pip_colors
        super().__init__(
            f"Color identity {''.join(identity) or '(empty)'} does not match "
            f"colors with pips {''.join(pip_colors) or '(none)'}"
        )


class InternalInvariantViolation(ManaBaseError, RuntimeError):
    """Computed allocation broke an invariant. This is a bug, not bad input."""

    def __init__(self, message: str, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"{message} (expected {expected}, got {actual})")
