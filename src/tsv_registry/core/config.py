from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

LogFormat = Literal["json", "console"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TSV_REGISTRY_",
        env_file=".env",
        extra="ignore",
    )

    input_path: Path = Field(default=Path("registry.md"))
    out_dir: Path = Field(default=Path("dist"))
    run_root: Path | None = Field(default=None)

    serve_dir: Path = Field(default=Path("../dist"))
    serve_addr: str = Field(default="127.0.0.1:8787")

    log_level: str = Field(default="INFO")
    log_format: LogFormat = Field(default="console")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    return Settings()
