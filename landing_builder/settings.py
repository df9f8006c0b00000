"""Application settings and configuration."""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application settings
    debug: bool = Field(False)
    host: str = Field("0.0.0.0")
    port: int = Field(3000)

    # Build settings
    project_path: str = Field(default_factory=os.getcwd)
    build_command: str = Field("npx nuxt generate")
    build_output_path: str = Field(".output/public")
    # Not applied to running builds
    build_timeout_seconds: int = Field(10 * 60)

    # API settings
    api_title: str = Field("Landing Page Build Server")
    api_version: str = Field("1.0.0")
    api_description: str = Field("Serial build queue for static landing page variants")

    # Logging settings
    log_level: str = Field("INFO")
    log_format: str = Field("text")
    log_dir: str = Field("logs")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("port")
    @classmethod
    def _check_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {value}")
        return value

    @field_validator("build_timeout_seconds")
    @classmethod
    def _check_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("build_timeout_seconds must be positive")
        return value

    @field_validator("build_command")
    @classmethod
    def _check_command(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("build_command cannot be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.upper()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
