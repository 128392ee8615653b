import pytest
from pydantic import ValidationError

from harvest.settings import HarvestSettings


class TestHarvestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("HARVEST_NOTE_API_BASE", "https://note.test/api")
        monkeypatch.delenv("HARVEST_DATABASE_PATH", raising=False)
        settings = HarvestSettings()
        assert settings.note_api_base == "https://note.test/api"
        assert settings.creator == "seppu"
        assert settings.database_path == "backend/sheets.db"
        assert settings.viewer_host == "tenhou.net"
        assert settings.game_title_keyword == "Mリーグ"
        assert settings.request_timeout == 10.0
        assert settings.max_pages is None

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("HARVEST_NOTE_API_BASE", "https://note.test/api")
        monkeypatch.setenv("HARVEST_CREATOR", "someone")
        monkeypatch.setenv("HARVEST_MAX_PAGES", "3")
        monkeypatch.setenv("HARVEST_REQUEST_TIMEOUT", "2.5")
        settings = HarvestSettings()
        assert settings.creator == "someone"
        assert settings.max_pages == 3
        assert settings.request_timeout == 2.5

    def test_api_base_required(self, monkeypatch):
        monkeypatch.delenv("HARVEST_NOTE_API_BASE", raising=False)
        with pytest.raises(ValidationError, match="note_api_base"):
            HarvestSettings()

    def test_empty_api_base_rejected(self, monkeypatch):
        monkeypatch.setenv("HARVEST_NOTE_API_BASE", "")
        with pytest.raises(ValidationError, match="note_api_base"):
            HarvestSettings()

    def test_max_pages_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("HARVEST_NOTE_API_BASE", "https://note.test/api")
        monkeypatch.setenv("HARVEST_MAX_PAGES", "0")
        with pytest.raises(ValidationError, match="max_pages"):
            HarvestSettings()
