"""
Decoder for tenhou viewer URLs.

A viewer URL carries a game log in its fragment as percent-encoded JSON:

    https://tenhou.net/5/#json={"name": [...], "log": [[...], ...]}

Only the first hand of `log` is read. `parse_log_url` raises
MalformedLogPayloadError for anything it cannot decode; `decode_hand` is the
boundary used by the assembler and turns that error into a FailedHand plus a
single diagnostic log entry.
"""

import json
from typing import Any
from urllib.parse import quote, unquote

import structlog
from pydantic import ValidationError

from paifu.models import NO_POINT_CHANGE, DecodedHand, FailedHand
from paifu.rounds import InvalidRoundNumberError, hand_of, round_of
from paifu.schema import MalformedLogPayloadError, destructure, destructure_names, first_hand_record

logger = structlog.get_logger()

FRAGMENT_MARKER = "#json="
DEFAULT_VIEWER_HOST = "tenhou.net"
DEFAULT_VIEWER_PATH = "5"

# Safety limits against pathological fragments.
MAX_FRAGMENT_LEN = 256 * 1024
MAX_JSON_DEPTH = 32

# DecodedHand fields validated by pydantic, mapped back to the log field they come from.
_MODEL_FIELD_SOURCES = {
    "homba": "round_info",
    "riichi_stick": "round_info",
    "hand": "round_info",
}


def _exceeds_depth(text: str, limit: int) -> bool:
    """Check bracket nesting of a JSON document without parsing it."""
    depth = 0
    in_string = False
    escaped = False
    for ch in text:
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch in "[{":
            depth += 1
            if depth > limit:
                return True
        elif ch in "]}":
            depth -= 1
    return False


def decode_fragment(url: str) -> str:
    """Return the percent-decoded text following the first `#json=` marker."""
    _, marker, fragment = url.partition(FRAGMENT_MARKER)
    if not marker:
        raise MalformedLogPayloadError(f"URL has no '{FRAGMENT_MARKER}' fragment", field="fragment")
    if len(fragment) > MAX_FRAGMENT_LEN:
        raise MalformedLogPayloadError(
            f"fragment too large: {len(fragment)} characters (max {MAX_FRAGMENT_LEN})",
            field="fragment",
        )
    try:
        return unquote(fragment, errors="strict")
    except UnicodeDecodeError as exc:
        raise MalformedLogPayloadError(f"fragment is not valid percent-encoded UTF-8: {exc}", field="fragment") from exc


def _load_payload(text: str) -> dict[str, Any]:
    if _exceeds_depth(text, MAX_JSON_DEPTH):
        raise MalformedLogPayloadError(f"payload nested deeper than {MAX_JSON_DEPTH} levels", field="payload")
    try:
        payload = json.loads(text)
    except ValueError as exc:  # JSONDecodeError, or an integer literal over the int digit limit
        raise MalformedLogPayloadError(f"Malformed JSON: {exc}", field="payload") from exc
    if not isinstance(payload, dict):
        raise MalformedLogPayloadError(
            f"payload must be a JSON object, got {type(payload).__name__}",
            field="payload",
        )
    return payload


def parse_hand_payload(url: str, text: str) -> DecodedHand:
    """Build a DecodedHand from the decoded fragment text of `url`."""
    payload = _load_payload(text)
    names = destructure_names(payload)
    fields = destructure(first_hand_record(payload))

    round_number, homba, riichi_stick = fields["round_info"]
    end = fields["end"]
    try:
        wind = round_of(round_number)
        position = hand_of(round_number)
    except InvalidRoundNumberError as exc:
        raise MalformedLogPayloadError(str(exc), field="round_info") from exc

    try:
        return DecodedHand(
            url=url,
            names=names,
            start_points=fields["start_points"],
            get_points=end.deltas if end.deltas is not None else NO_POINT_CHANGE,
            round=wind,
            hand=position,
            homba=homba,
            riichi_stick=riichi_stick,
            end_of_a_hand=end.classifier,
        )
    except ValidationError as exc:
        loc = exc.errors()[0]["loc"]
        source = _MODEL_FIELD_SOURCES.get(str(loc[0]), str(loc[0])) if loc else None
        raise MalformedLogPayloadError(f"Invalid hand values: {exc}", field=source) from exc


def parse_log_url(url: str) -> DecodedHand:
    """Decode a viewer URL, raising MalformedLogPayloadError on failure."""
    return parse_hand_payload(url, decode_fragment(url))


def decode_hand(url: str) -> DecodedHand | FailedHand:
    """Decode a viewer URL into a DecodedHand, or a FailedHand if the log is unusable."""
    decoded: str | None = None
    try:
        decoded = decode_fragment(url)
        return parse_hand_payload(url, decoded)
    except MalformedLogPayloadError as exc:
        logger.warning(
            "failed to decode log url",
            error=str(exc),
            field=exc.field,
            url=url,
            decoded=decoded,
        )
        return FailedHand(url=url, reason=str(exc), field=exc.field, decoded_text=decoded)


def encode_log_url(
    payload: dict[str, Any],
    host: str = DEFAULT_VIEWER_HOST,
    path: str = DEFAULT_VIEWER_PATH,
) -> str:
    """Build a viewer URL carrying `payload` in its fragment."""
    text = json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
    return f"https://{host}/{path}/{FRAGMENT_MARKER}{quote(text, safe='')}"
