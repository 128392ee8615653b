"""Score aggregation over decoded hands."""

from paifu.models import DecodedHand, FailedHand, Seat, SeatPoints


def result_point(seat: Seat, hand: DecodedHand | FailedHand | None) -> int | None:
    """Return the seat's score after the hand, or None when the hand was not decoded."""
    if not isinstance(hand, DecodedHand):
        return None
    return hand.start_point(seat) + hand.get_point(seat)


def result_points(hand: DecodedHand | FailedHand | None) -> SeatPoints | None:
    points = [result_point(seat, hand) for seat in Seat]
    if any(p is None for p in points):
        return None
    return tuple(points)  # type: ignore[return-value]


def winners(hand: DecodedHand | FailedHand | None) -> tuple[str, ...] | None:
    """Return the names of every seat tied for the highest result point, in seat order.

    Returns None (not an empty tuple) when any seat's result point is unknown.
    """
    points = result_points(hand)
    if points is None or not isinstance(hand, DecodedHand):
        return None
    top = max(points)
    return tuple(hand.name(seat) for seat in Seat if points[seat] == top)
