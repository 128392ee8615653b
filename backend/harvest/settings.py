"""Harvester configuration via environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings


class HarvestSettings(BaseSettings):
    model_config = {"env_prefix": "HARVEST_"}

    # Base URL of the note API -- required, no default.
    note_api_base: str = Field(min_length=1)
    creator: str = "seppu"

    # SQLite file holding the notes/logs/games tables
    database_path: str = "backend/sheets.db"
    log_dir: str = "backend/logs/harvest"

    viewer_host: str = "tenhou.net"
    # Only articles whose title contains this keyword get logs/games rows
    game_title_keyword: str = "Mリーグ"

    request_timeout: float = Field(default=10.0, gt=0)
    max_pages: int | None = Field(default=None, ge=1)
