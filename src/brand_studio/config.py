from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Loads keys from process env, and also from a local .env file.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    data_dir: str = "data"
    log_level: str = "INFO"

    # Keys
    gemini_api_key: str | None = None
    openai_api_key: str | None = None

    # "gemini" or "openai"
    text_provider: str = "gemini"

    # Models
    gemini_text_model: str = "gemini-2.5-flash"
    openai_text_model: str = "gpt-4.1-mini"

    copywriter_history_limit: int = 50


settings = Settings()
