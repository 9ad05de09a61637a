from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_jobs_dir() -> Path:
    # <repo>/print_jobs
    return (Path(__file__).resolve().parents[2] / "print_jobs").resolve()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SPOOLDOC_", extra="ignore")

    APP_NAME: str = Field(default="spooldoc")
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON: bool = Field(default=False)

    JOBS_DIR: Path = Field(default_factory=_default_jobs_dir)
    JOB_SNAPSHOTS_DIR: Optional[Path] = Field(default=None)
    MAX_WORKERS: int = Field(default=4, ge=1)

    # Classification heuristics; empirical, kept tunable.
    PDF_SEARCH_WINDOW: int = Field(default=1024, ge=0)
    TEXT_PRINTABLE_THRESHOLD: float = Field(default=0.8, gt=0.0, lt=1.0)
    TEXT_LINES_PER_PAGE: int = Field(default=50, ge=1)

    # Preview rendering
    THUMBNAILS_ENABLED: bool = Field(default=True)
    THUMBNAIL_SIZE: int = Field(default=300, ge=16)
    TEXT_SNIPPET_MAX_CHARS: int = Field(default=200, ge=1)
    TEXT_SNIPPET_MAX_LINES: int = Field(default=15, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
