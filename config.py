"""
Data source configuration.

Uses Pydantic Settings; every field can be overridden with a BOULDER_*
environment variable or a .env file next to the app.
"""

import time
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR = Path(__file__).parent

SHEET_EXPORT_URL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"


class Settings(BaseSettings):
    """Where the roster and results CSVs come from."""

    data_source: Literal["local", "google-sheets"] = Field(default="local")

    # === Local files ===
    teams_file: str = Field(default="teams.csv")
    results_file: str = Field(default="results.csv")

    # === Google Sheets ===
    # Published "Publish to web" CSV URLs take priority over sheet id + gid
    teams_url: Optional[str] = Field(default=None)
    results_url: Optional[str] = Field(default=None)
    teams_sheet_id: Optional[str] = Field(default=None)
    teams_gid: str = Field(default="0")
    results_sheet_id: Optional[str] = Field(default=None)
    results_gid: str = Field(default="0")

    cache_ttl_seconds: int = Field(default=300, description="How long loaded CSVs stay cached")
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="BOULDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def uses_sheets(self) -> bool:
        return self.data_source == "google-sheets"

    def _sheet_url(self, url: Optional[str], sheet_id: Optional[str], gid: str) -> str:
        if not url:
            url = SHEET_EXPORT_URL.format(sheet_id=sheet_id or "", gid=gid)
        # cache-busting so a re-published sheet shows up straight away
        sep = "&" if "?" in url else "?"
        return f"{url}{sep}cachebust={int(time.time() * 1000)}"

    def _local_path(self, name: str) -> str:
        path = Path(name)
        if not path.is_absolute():
            path = APP_DIR / path
        return str(path)

    def teams_source(self) -> str:
        if self.uses_sheets:
            return self._sheet_url(self.teams_url, self.teams_sheet_id, self.teams_gid)
        return self._local_path(self.teams_file)

    def results_source(self) -> str:
        if self.uses_sheets:
            return self._sheet_url(self.results_url, self.results_sheet_id, self.results_gid)
        return self._local_path(self.results_file)

    def source_label(self) -> str:
        if self.uses_sheets:
            return "Data loaded from Google Sheets"
        return f"Data loaded from {self.teams_file} and {self.results_file}"


def get_settings() -> Settings:
    return Settings()
