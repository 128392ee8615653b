"""Tenhou viewer log decoding: hands, games and score aggregation."""

from paifu.aggregate import result_point, result_points, winners
from paifu.assembler import assemble_game, game_from_body
from paifu.decoder import decode_hand, encode_log_url, parse_log_url
from paifu.models import DecodedHand, FailedHand, Game, Hand, Seat
from paifu.rounds import InvalidRoundNumberError, RoundWind, hand_of, round_of
from paifu.schema import MalformedLogPayloadError
from paifu.urls import extract_log_urls

__all__ = [
    "DecodedHand",
    "FailedHand",
    "Game",
    "Hand",
    "InvalidRoundNumberError",
    "MalformedLogPayloadError",
    "RoundWind",
    "Seat",
    "assemble_game",
    "decode_hand",
    "encode_log_url",
    "extract_log_urls",
    "game_from_body",
    "hand_of",
    "parse_log_url",
    "result_point",
    "result_points",
    "round_of",
    "winners",
]
