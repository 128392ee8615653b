"""HTTP client for the note API."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING, Any

import httpx
import structlog

from harvest.notes.models import NoteDetail, NotePage, NoteSummary
from paifu.assembler import game_from_body
from paifu.decoder import DEFAULT_VIEWER_HOST

if TYPE_CHECKING:
    from types import TracebackType

logger = structlog.get_logger()


class NoteApiError(Exception):
    """Raised when the note API cannot be reached or returns a non-200 response."""


class NoteClient:
    """Fetches article listings and article bodies for one creator."""

    def __init__(
        self,
        base_url: str,
        creator: str,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._creator = creator
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def __enter__(self) -> NoteClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def _get_data(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        try:
            response = self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise NoteApiError(f"request to {url} failed: {exc}") from exc
        if response.status_code != HTTPStatus.OK:
            raise NoteApiError(f"{url} returned {response.status_code}: {response.text}")
        try:
            return response.json()["data"]
        except (ValueError, KeyError, TypeError) as exc:
            raise NoteApiError(f"{url} returned an unexpected body: {exc}") from exc

    def find_notes(self, page: int = 1) -> NotePage:
        """Return one page of the creator's notes (pages start at 1)."""
        url = f"{self._base_url}/v2/creators/{self._creator}/contents"
        data = self._get_data(url, params={"kind": "note", "page": page})
        try:
            return NotePage(
                contents=[
                    NoteSummary(id=c["id"], key=c["key"], name=c["name"], publish_at=c["publishAt"])
                    for c in data["contents"]
                ],
                is_last_page=data["isLastPage"],
                total_count=data.get("totalCount", 0),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise NoteApiError(f"unexpected contents page {page}: {exc}") from exc

    def find_note_by_key(self, key: str, viewer_host: str = DEFAULT_VIEWER_HOST) -> NoteDetail:
        """Fetch a single note and decode the game logs linked from its body."""
        data = self._get_data(f"{self._base_url}/v1/notes/{key}")
        try:
            name = data["name"]
            body = data["body"] or ""
            note_id = data["id"]
            publish_at = data["publish_at"]
        except (KeyError, TypeError) as exc:
            raise NoteApiError(f"note {key} is missing field: {exc}") from exc

        game = game_from_body(name, body, viewer_host)
        logger.debug("fetched note", key=key, hands=len(game.hands))
        try:
            return NoteDetail(id=note_id, key=key, name=name, publish_at=publish_at, body=body, game=game)
        except ValueError as exc:
            raise NoteApiError(f"note {key} has invalid fields: {exc}") from exc
