"""SQLite tabular storage: notes, per-hand logs and game summaries."""

from harvest.storage.connection import SheetDatabase
from harvest.storage.repository import SheetRepository

__all__ = [
    "SheetDatabase",
    "SheetRepository",
]
