"""
Value objects for decoded log hands and assembled games.

A hand is a discriminated union on `kind`: DecodedHand carries every field
read from the log, FailedHand only keeps the source URL and why decoding
stopped. Aggregation code matches on the variant instead of probing
individual optional fields.
"""

from enum import IntEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from paifu.rounds import HANDS_PER_ROUND, RoundWind

NUM_SEATS = 4

SeatNames = tuple[str, str, str, str]
SeatPoints = tuple[int, int, int, int]

NO_POINT_CHANGE: SeatPoints = (0, 0, 0, 0)


class Seat(IntEnum):
    """Seat index in log order."""

    EAST = 0
    SOUTH = 1
    WEST = 2
    NORTH = 3


class DecodedHand(BaseModel, frozen=True):
    """One hand read from a viewer URL."""

    kind: Literal["decoded"] = "decoded"
    url: str
    names: SeatNames
    start_points: SeatPoints
    get_points: SeatPoints = NO_POINT_CHANGE
    round: RoundWind
    hand: int = Field(ge=1, le=HANDS_PER_ROUND)
    homba: int = Field(ge=0)
    riichi_stick: int = Field(ge=0)
    end_of_a_hand: str

    def name(self, seat: Seat) -> str:
        return self.names[seat]

    def start_point(self, seat: Seat) -> int:
        return self.start_points[seat]

    def get_point(self, seat: Seat) -> int:
        return self.get_points[seat]


class FailedHand(BaseModel, frozen=True):
    """A viewer URL whose log could not be decoded."""

    kind: Literal["failed"] = "failed"
    url: str
    reason: str
    field: str | None = None  # first schema field that did not match
    decoded_text: str | None = None  # percent-decoded fragment, when decoding got that far


Hand = Annotated[DecodedHand | FailedHand, Field(discriminator="kind")]


class Game(BaseModel, frozen=True):
    """Summary of one article's hands, derived from the last hand."""

    title: str
    hands: tuple[Hand, ...] = ()
    names: SeatNames | None = None
    points: SeatPoints | None = None  # start + delta per seat after the last hand
    first: tuple[str, ...] | None = None  # None when any seat's result is unknown

    @property
    def winners_label(self) -> str | None:
        if self.first is None:
            return None
        return ",".join(self.first)
