"""SQLite-backed storage for notes and their decoded games."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

import structlog

from harvest.notes.models import NoteSummary
from harvest.storage.rows import game_row, hand_row

if TYPE_CHECKING:
    from harvest.notes.models import NoteDetail
    from harvest.storage.connection import SheetDatabase

logger = structlog.get_logger()

_LOG_PLACEHOLDERS = ", ".join(["?"] * 20)
_GAME_PLACEHOLDERS = ", ".join(["?"] * 11)


class SheetRepository:
    """Reads stored note keys and appends harvested notes with their hand and game rows."""

    def __init__(self, db: SheetDatabase) -> None:
        self._db = db

    def get_notes(self) -> list[NoteSummary]:
        rows = self._db.connection.execute(
            "SELECT key, id, name, publish_at FROM notes ORDER BY rowid",
        ).fetchall()
        return [
            NoteSummary(key=key, id=note_id, name=name, publish_at=publish_at)
            for key, note_id, name, publish_at in rows
        ]

    def append_note(self, note: NoteDetail, *, game_title_keyword: str) -> None:
        """Store a note; game articles also get one logs row per hand and a games row.

        Rows are keyed on the note key: storing the same note again replaces its
        previous rows, and notes sharing a title keep separate rows.
        """
        conn = self._db.connection
        try:
            conn.execute(
                "INSERT INTO notes (key, id, name, publish_at, body) VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET "
                "id = excluded.id, name = excluded.name, publish_at = excluded.publish_at, body = excluded.body",
                (note.key, note.id, note.name, note.publish_at.isoformat(), note.body),
            )
            conn.execute("DELETE FROM logs WHERE note_key = ?", (note.key,))
            conn.execute("DELETE FROM games WHERE note_key = ?", (note.key,))
            if game_title_keyword in note.name:
                conn.executemany(
                    f"INSERT INTO logs VALUES ({_LOG_PLACEHOLDERS})",  # noqa: S608
                    [hand_row(note.key, note.name, hand) for hand in note.game.hands],
                )
                conn.execute(
                    f"INSERT INTO games VALUES ({_GAME_PLACEHOLDERS})",  # noqa: S608
                    game_row(note.key, note.game),
                )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise
        logger.info("stored note", key=note.key, name=note.name, hands=len(note.game.hands))
