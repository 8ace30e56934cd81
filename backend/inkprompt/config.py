"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    inkprompt_env: str = "development"
    inkprompt_log_level: str = "info"
    inkprompt_host: str = "127.0.0.1"
    inkprompt_port: int = 8000

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Generation backend used when a request names none
    default_backend: str = "balanced-tier"

    # Rule/capability tables (empty = packaged engine/data)
    rules_dir: str = ""

    # Record store
    history_dir: str = ""
    history_limit: int = 20

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
