from __future__ import annotations

from pathlib import Path
from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_home() -> Path:
    return Path.home() / ".meeting_assistant"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MA_", case_sensitive=False)

    app_name: str = "Meeting Assistant"

    data_dir: Path = Field(default_factory=lambda: _default_home() / "data")
    logs_dir: Path = Field(default_factory=lambda: _default_home() / "logs")

    # Empty means a SQLite file inside data_dir
    database_url: str = ""

    cors_origins: List[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    )

    host: str = "127.0.0.1"
    port: int = 2022

    # Artificial pause per generation step; 0 disables it
    processing_delay_seconds: float = 0.1

    log_level: str = "INFO"

    def resolved_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'meeting_assistant.db'}"

    def ensure_dirs(self) -> None:
        for d in [self.data_dir, self.logs_dir]:
            d.mkdir(parents=True, exist_ok=True)
