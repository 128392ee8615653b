"""Assembly of a game summary from the viewer URLs of one article."""

from collections.abc import Iterable

import structlog

from paifu.aggregate import result_points, winners
from paifu.decoder import DEFAULT_VIEWER_HOST, decode_hand
from paifu.models import DecodedHand, Game
from paifu.urls import extract_log_urls

logger = structlog.get_logger()


def assemble_game(title: str, urls: Iterable[str]) -> Game:
    """Decode every URL in order and summarize the game from the last hand.

    Undecodable URLs stay in `hands` as FailedHand so positions match the
    source; if the last one failed, the derived fields are left unset.
    """
    hands = tuple(decode_hand(url) for url in urls)
    if not hands:
        return Game(title=title)

    last = hands[-1]
    failed = sum(1 for h in hands if not isinstance(h, DecodedHand))
    if failed:
        logger.info("assembled game with undecodable hands", title=title, hands=len(hands), failed=failed)

    return Game(
        title=title,
        hands=hands,
        names=last.names if isinstance(last, DecodedHand) else None,
        points=result_points(last),
        first=winners(last),
    )


def game_from_body(title: str, body: str, host: str = DEFAULT_VIEWER_HOST) -> Game:
    return assemble_game(title, extract_log_urls(body, host))
