"""Row layouts for the logs and games tables."""

from typing import Any

from paifu.models import DecodedHand, FailedHand, Game

# Columns after (note_key, title, url) in the logs table.
_HAND_VALUE_COLUMNS = 17


def hand_row(note_key: str, title: str, hand: DecodedHand | FailedHand) -> tuple[Any, ...]:
    """Build a logs row; a failed hand keeps only its note key, title and url."""
    if isinstance(hand, FailedHand):
        return (note_key, title, hand.url, *([None] * _HAND_VALUE_COLUMNS))
    return (
        note_key,
        title,
        hand.url,
        hand.round.value,
        hand.hand,
        hand.homba,
        hand.riichi_stick,
        *hand.names,
        *hand.start_points,
        *hand.get_points,
        hand.end_of_a_hand,
    )


def game_row(note_key: str, game: Game) -> tuple[Any, ...]:
    names = game.names or (None, None, None, None)
    points = game.points or (None, None, None, None)
    return (note_key, game.title, *names, *points, game.winners_label)
