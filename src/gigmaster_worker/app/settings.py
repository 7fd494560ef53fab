from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_config_dir() -> Path:
    return Path.home() / ".config" / "gigmaster"


class Settings(BaseSettings):
    """Runtime configuration for the GigMaster worker process."""

    model_config = SettingsConfigDict(
        env_prefix="GIGMASTER_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    library_dir: Optional[Path] = Field(
        default=None,
        description="Directory holding curated content libraries (defaults to <config_dir>/library).",
    )
    drum_library_file: str = Field(default="drums-core.json", max_length=128)
    progression_library_file: str = Field(default="progressions-core.json", max_length=128)
    phrase_library_file: str = Field(default="phrases-bimmuda.json", max_length=128)
    library_timeout_seconds: float = Field(
        default=5.0,
        ge=0.1,
        le=60.0,
        description="Upper bound for loading all content libraries before built-in sets are used.",
    )
    default_genre: str = Field(default="rock", min_length=1, max_length=32)
    album_max_tracks: int = Field(default=12, ge=1, le=20)
    log_level: str = Field(default="INFO", max_length=16)

    @model_validator(mode="after")
    def _normalise(self) -> "Settings":
        self.default_genre = self.default_genre.strip().lower() or "rock"
        self.log_level = self.log_level.strip().upper() or "INFO"
        if self.library_dir is None:
            self.library_dir = self.config_dir / "library"
        return self

    def library_path(self, kind: str) -> Path:
        file_names = {
            "drums": self.drum_library_file,
            "progressions": self.progression_library_file,
            "phrases": self.phrase_library_file,
        }
        if kind not in file_names:
            raise KeyError(f"unknown library kind: {kind}")
        assert self.library_dir is not None
        return self.library_dir / file_names[kind]

    def ensure_directories(self) -> None:
        self.config_dir.mkdir(parents=True, exist_ok=True)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = Settings()
    settings.ensure_directories()
    return settings
