"""Walk a creator's note listing and store every new or republished note."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from harvest.notes.client import NoteApiError
from paifu.decoder import DEFAULT_VIEWER_HOST

if TYPE_CHECKING:
    from datetime import datetime

    from harvest.notes.client import NoteClient
    from harvest.notes.models import NoteSummary
    from harvest.storage.repository import SheetRepository

logger = structlog.get_logger()


def _to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def is_up_to_date(stored: list[NoteSummary], note: NoteSummary) -> bool:
    """Check whether `note` is already stored with the same publish time.

    The listing only reports publish times to the minute, so stored times are
    compared at minute precision.
    """
    existing = next((n for n in stored if n.key == note.key), None)
    if existing is None:
        return False
    return _to_minute(existing.publish_at) == _to_minute(note.publish_at)


class NoteSynchronizer:
    def __init__(
        self,
        repository: SheetRepository,
        client: NoteClient,
        *,
        game_title_keyword: str,
        viewer_host: str = DEFAULT_VIEWER_HOST,
        max_pages: int | None = None,
    ) -> None:
        self._repository = repository
        self._client = client
        self._viewer_host = viewer_host
        self._game_title_keyword = game_title_keyword
        self._max_pages = max_pages

    def sync(self) -> int:
        """Fetch every listing page and store notes that changed. Returns the number stored.

        A note that fails to fetch is logged and skipped; a listing page that
        fails to fetch raises NoteApiError.
        """
        stored = self._repository.get_notes()
        appended = 0
        page_number = 1
        while True:
            page = self._client.find_notes(page_number)
            logger.info("fetched note page", page=page_number, notes=len(page.contents), total=page.total_count)
            for note in page.contents:
                if self._sync_note(stored, note):
                    appended += 1
            if page.is_last_page:
                break
            if self._max_pages is not None and page_number >= self._max_pages:
                logger.info("stopping at page limit", max_pages=self._max_pages)
                break
            page_number += 1
        logger.info("note sync finished", appended=appended)
        return appended

    def _sync_note(self, stored: list[NoteSummary], note: NoteSummary) -> bool:
        if is_up_to_date(stored, note):
            return False
        try:
            detail = self._client.find_note_by_key(note.key, self._viewer_host)
        except NoteApiError as exc:
            logger.warning("failed to fetch note", key=note.key, error=str(exc))
            return False
        self._repository.append_note(detail, game_title_keyword=self._game_title_keyword)
        return True
