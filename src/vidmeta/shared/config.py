from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # ffprobe
    ffprobe_bin: str = Field(default="ffprobe", alias="FFPROBE_BIN")
    ffprobe_loglevel: str = Field(default="error", alias="FFPROBE_LOGLEVEL")  # quiet|panic|fatal|error|warning
