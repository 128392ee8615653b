"""Tests for SheetRepository over a temporary SQLite file."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from urllib.parse import quote

import pytest

from harvest.notes.models import JST, NoteDetail
from harvest.storage.connection import SheetDatabase
from harvest.storage.repository import SheetRepository
from paifu.assembler import assemble_game
from paifu.tests.factories import make_log_url

if TYPE_CHECKING:
    from pathlib import Path

_BROKEN_URL = "https://tenhou.net/5/#json=" + quote("{broken")


def _detail(name: str = "Mリーグ 第1試合", urls: list[str] | None = None, key: str = "n0001") -> NoteDetail:
    urls = [make_log_url(start_points=[30000, 25000, 20000, 25000])] if urls is None else urls
    return NoteDetail(
        id=101,
        key=key,
        name=name,
        publish_at=datetime(2023, 10, 2, 21, 30, 12, tzinfo=JST),
        body="<p>body</p>",
        game=assemble_game(name, urls),
    )


@pytest.fixture
def db(tmp_path: Path):
    database = SheetDatabase(tmp_path / "sheets.db")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def repo(db: SheetDatabase) -> SheetRepository:
    return SheetRepository(db)


def _rows(db: SheetDatabase, table: str) -> list[tuple]:
    return db.connection.execute(f"SELECT * FROM {table}").fetchall()  # noqa: S608


class TestSheetDatabase:
    def test_connection_requires_connect(self, tmp_path: Path):
        with pytest.raises(RuntimeError, match="not connected"):
            _ = SheetDatabase(tmp_path / "x.db").connection

    def test_creates_parent_directory(self, tmp_path: Path):
        database = SheetDatabase(tmp_path / "nested" / "sheets.db")
        database.connect()
        database.close()
        assert (tmp_path / "nested" / "sheets.db").exists()


class TestGetNotes:
    def test_empty(self, repo: SheetRepository):
        assert repo.get_notes() == []

    def test_round_trips_publish_time(self, repo: SheetRepository):
        repo.append_note(_detail(), game_title_keyword="Mリーグ")

        notes = repo.get_notes()

        assert len(notes) == 1
        assert notes[0].key == "n0001"
        assert notes[0].id == 101
        assert notes[0].publish_at == datetime(2023, 10, 2, 21, 30, 12, tzinfo=JST)


class TestAppendNote:
    def test_game_article_writes_logs_and_games(self, repo: SheetRepository, db: SheetDatabase):
        detail = _detail()
        repo.append_note(detail, game_title_keyword="Mリーグ")

        logs = _rows(db, "logs")
        assert len(logs) == 1
        assert logs[0] == (
            "n0001",
            "Mリーグ 第1試合",
            detail.game.hands[0].url,
            "東",
            1,
            0,
            0,
            "East-san",
            "South-san",
            "West-san",
            "North-san",
            30000,
            25000,
            20000,
            25000,
            -3900,
            3900,
            0,
            0,
            "和了",
        )
        assert _rows(db, "games") == [
            (
                "n0001",
                "Mリーグ 第1試合",
                "East-san",
                "South-san",
                "West-san",
                "North-san",
                26100,
                28900,
                20000,
                25000,
                "South-san",
            ),
        ]

    def test_other_articles_only_store_note(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(name="今日の雑記"), game_title_keyword="Mリーグ")

        assert len(_rows(db, "notes")) == 1
        assert _rows(db, "logs") == []
        assert _rows(db, "games") == []

    def test_failed_hand_row_keeps_only_title_and_url(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(urls=[make_log_url(), _BROKEN_URL]), game_title_keyword="Mリーグ")

        logs = _rows(db, "logs")
        assert len(logs) == 2
        assert logs[1][:3] == ("n0001", "Mリーグ 第1試合", _BROKEN_URL)
        assert all(value is None for value in logs[1][3:])
        game = _rows(db, "games")[0]
        assert game[:2] == ("n0001", "Mリーグ 第1試合")
        assert all(value is None for value in game[2:])

    def test_reappend_replaces_rows(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(), game_title_keyword="Mリーグ")
        repo.append_note(
            _detail(urls=[make_log_url(round_number=1), make_log_url(round_number=2)]),
            game_title_keyword="Mリーグ",
        )

        assert len(_rows(db, "notes")) == 1
        assert [row[4] for row in _rows(db, "logs")] == [2, 3]
        assert len(_rows(db, "games")) == 1

    def test_notes_sharing_a_title_keep_their_own_rows(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(name="Mリーグ 観戦記", key="n1"), game_title_keyword="Mリーグ")
        second_urls = [make_log_url(round_number=4), make_log_url(round_number=5)]
        repo.append_note(
            _detail(name="Mリーグ 観戦記", key="n2", urls=second_urls),
            game_title_keyword="Mリーグ",
        )

        assert [row[0] for row in _rows(db, "logs")] == ["n1", "n2", "n2"]
        assert sorted(row[0] for row in _rows(db, "games")) == ["n1", "n2"]

    def test_retitled_note_drops_its_old_rows(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(name="Mリーグ 第1試合"), game_title_keyword="Mリーグ")
        repo.append_note(_detail(name="Mリーグ 第1試合 (改)"), game_title_keyword="Mリーグ")

        assert [row[1] for row in _rows(db, "logs")] == ["Mリーグ 第1試合 (改)"]
        assert [row[1] for row in _rows(db, "games")] == ["Mリーグ 第1試合 (改)"]

    def test_note_leaving_the_keyword_clears_game_rows(self, repo: SheetRepository, db: SheetDatabase):
        repo.append_note(_detail(), game_title_keyword="Mリーグ")
        repo.append_note(_detail(name="今日の雑記"), game_title_keyword="Mリーグ")

        assert len(_rows(db, "notes")) == 1
        assert _rows(db, "logs") == []
        assert _rows(db, "games") == []
