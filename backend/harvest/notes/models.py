"""Models for note API responses."""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, Field, field_validator

from paifu.models import Game

# The note API reports list timestamps without an offset; they are Japan time.
JST = timezone(timedelta(hours=9), "JST")


def parse_publish_at(value: str | datetime) -> datetime:
    """Parse an API timestamp, treating naive values as JST."""
    parsed = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=JST)
    return parsed


class NoteSummary(BaseModel, frozen=True):
    """One article as listed by the creator contents endpoint."""

    id: int
    key: str
    name: str
    publish_at: datetime

    @field_validator("publish_at", mode="before")
    @classmethod
    def _parse_publish_at(cls, v: str | datetime) -> datetime:
        return parse_publish_at(v)


class NotePage(BaseModel, frozen=True):
    contents: list[NoteSummary] = Field(default_factory=list)
    is_last_page: bool
    total_count: int = 0


class NoteDetail(NoteSummary, frozen=True):
    """A single article with its body and the game decoded from it."""

    body: str
    game: Game
