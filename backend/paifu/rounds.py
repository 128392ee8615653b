"""
Round number codec.

Tenhou logs pack the prevailing wind and the dealer position into a single
integer: 0-3 are East 1-4, 4-7 are South 1-4.
"""

from enum import Enum

HANDS_PER_ROUND = 4
_MAX_ROUND_NUMBER = 7


class RoundWind(str, Enum):
    """Prevailing wind of a half-game."""

    EAST = "東"
    SOUTH = "南"


class InvalidRoundNumberError(ValueError):
    """Raised when a round number is outside 0..7."""

    def __init__(self, round_number: object) -> None:
        super().__init__(f"invalid round number: {round_number!r}")
        self.round_number = round_number


def _validate(round_number: object) -> int:
    if (
        not isinstance(round_number, int)
        or isinstance(round_number, bool)
        or not 0 <= round_number <= _MAX_ROUND_NUMBER
    ):
        raise InvalidRoundNumberError(round_number)
    return round_number


def round_of(round_number: int) -> RoundWind:
    r = _validate(round_number)
    return RoundWind.EAST if r < HANDS_PER_ROUND else RoundWind.SOUTH


def hand_of(round_number: int) -> int:
    """Return the hand position (1-4) within the round."""
    r = _validate(round_number)
    return r % HANDS_PER_ROUND + 1
