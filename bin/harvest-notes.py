"""Harvest tenhou logs linked from a creator's notes into the sheet database.

Usage: uv run python bin/harvest-notes.py

Configuration comes from HARVEST_* environment variables (see
backend/harvest/settings.py); HARVEST_NOTE_API_BASE is required.
"""

import sys
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend"))

from harvest.notes.client import NoteApiError, NoteClient
from harvest.settings import HarvestSettings
from harvest.storage.connection import SheetDatabase
from harvest.storage.repository import SheetRepository
from harvest.sync import NoteSynchronizer
from shared.logging import setup_logging


def main() -> None:
    settings = HarvestSettings()  # type: ignore[call-arg]
    setup_logging(log_dir=settings.log_dir)

    db = SheetDatabase(settings.database_path)
    db.connect()
    try:
        with NoteClient(settings.note_api_base, settings.creator, timeout=settings.request_timeout) as client:
            synchronizer = NoteSynchronizer(
                SheetRepository(db),
                client,
                viewer_host=settings.viewer_host,
                game_title_keyword=settings.game_title_keyword,
                max_pages=settings.max_pages,
            )
            try:
                appended = synchronizer.sync()
            except NoteApiError as e:
                print(f"Error: {e}")
                sys.exit(1)
    finally:
        db.close()

    print(f"Stored {appended} note(s).")


if __name__ == "__main__":
    main()
