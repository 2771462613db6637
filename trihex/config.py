from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Board geometry
    board_height: int = 600
    board_padding: int = 40
    click_radius_ratio: float = 0.6

    # History API
    history_api_url: str = "http://localhost:3000/api"
    history_timeout_seconds: float = 10.0

    # Rules oracle
    default_variant: str = "default"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TRIHEX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
