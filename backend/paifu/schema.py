"""
Positional schema for tenhou JSON logs.

The viewer payload carries each hand as a plain JSON array whose meaning is
implied by position:

    [[round_number, homba, riichi_sticks],
     [east_start, south_start, west_start, north_start],
     dora, ura_dora,
     east_haipai, east_tsumo, east_sutepai,
     ... (south, west, north),
     end]

`end` is `[classifier, deltas?, ...]`. This module names every position,
checks its shape and reports the first field that does not match.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

SEAT_KEYS = ("east", "south", "west", "north")
_SEAT_SEQUENCES = ("haipai", "tsumo", "sutepai")


class MalformedLogPayloadError(Exception):
    """Raised when a viewer URL payload cannot be decoded into a hand."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class FieldKind(str, Enum):
    INTS = "ints"  # fixed-arity array of integers
    LIST = "list"  # array whose content is not consumed
    END = "end"  # [classifier, deltas?, ...]


@dataclass(frozen=True)
class FieldSpec:
    name: str
    kind: FieldKind
    arity: int | None = None


class EndRecord(NamedTuple):
    classifier: str
    deltas: tuple[int, ...] | None


HAND_RECORD_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("round_info", FieldKind.INTS, 3),
    FieldSpec("start_points", FieldKind.INTS, len(SEAT_KEYS)),
    FieldSpec("dora", FieldKind.LIST),
    FieldSpec("ura_dora", FieldKind.LIST),
    *(FieldSpec(f"{seat}_{sequence}", FieldKind.LIST) for seat in SEAT_KEYS for sequence in _SEAT_SEQUENCES),
    FieldSpec("end", FieldKind.END),
)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _int_tuple(name: str, value: object, arity: int) -> tuple[int, ...]:
    if not isinstance(value, list):
        raise MalformedLogPayloadError(f"'{name}' must be an array, got {type(value).__name__}", field=name)
    if len(value) < arity:
        raise MalformedLogPayloadError(f"'{name}' must have {arity} integers, got {len(value)}", field=name)
    items = value[:arity]
    if not all(_is_int(item) for item in items):
        raise MalformedLogPayloadError(f"'{name}' must contain integers, got {items!r}", field=name)
    return tuple(items)


def _match_end(name: str, value: list[Any]) -> EndRecord:
    if not value:
        raise MalformedLogPayloadError(f"'{name}' must not be empty", field=name)
    classifier = value[0]
    if not isinstance(classifier, str):
        raise MalformedLogPayloadError(
            f"'{name}' classifier must be a string, got {type(classifier).__name__}",
            field=name,
        )
    if len(value) < 2:  # noqa: PLR2004
        return EndRecord(classifier=classifier, deltas=None)
    return EndRecord(classifier=classifier, deltas=_int_tuple(f"{name}.deltas", value[1], len(SEAT_KEYS)))


def _match(spec: FieldSpec, value: object) -> Any:  # noqa: ANN401
    if not isinstance(value, list):
        raise MalformedLogPayloadError(
            f"'{spec.name}' must be an array, got {type(value).__name__}",
            field=spec.name,
        )
    if spec.kind is FieldKind.INTS:
        return _int_tuple(spec.name, value, spec.arity or 0)
    if spec.kind is FieldKind.END:
        return _match_end(spec.name, value)
    return value


def destructure(record: object) -> dict[str, Any]:
    """Map a positional hand record to {field name: value} using HAND_RECORD_SCHEMA.

    Trailing elements beyond the schema are ignored.
    """
    if not isinstance(record, list):
        raise MalformedLogPayloadError(f"hand record must be an array, got {type(record).__name__}", field="log")
    values: dict[str, Any] = {}
    for index, spec in enumerate(HAND_RECORD_SCHEMA):
        if index >= len(record):
            raise MalformedLogPayloadError(
                f"hand record has {len(record)} elements, '{spec.name}' expected at index {index}",
                field=spec.name,
            )
        values[spec.name] = _match(spec, record[index])
    return values


def destructure_names(payload: dict[str, Any]) -> tuple[str, str, str, str]:
    names = payload.get("name")
    if not isinstance(names, list) or len(names) < len(SEAT_KEYS):
        raise MalformedLogPayloadError("'name' must be an array of 4 player names", field="name")
    seat_names = names[: len(SEAT_KEYS)]
    if not all(isinstance(n, str) for n in seat_names):
        raise MalformedLogPayloadError(f"'name' must contain strings, got {seat_names!r}", field="name")
    return tuple(seat_names)  # type: ignore[return-value]


def first_hand_record(payload: dict[str, Any]) -> object:
    log = payload.get("log")
    if not isinstance(log, list) or not log:
        raise MalformedLogPayloadError("'log' must be a non-empty array", field="log")
    return log[0]
