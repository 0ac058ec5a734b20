"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    quizscene_env: str = "development"
    quizscene_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Model routing
    model_cheap: str = "claude-haiku-4-5-20251001"
    model_mid: str = "claude-sonnet-4-5-20250929"
    model_frontier: str = "claude-sonnet-4-5-20250929"

    # Catalog: extra descriptor directory loaded after the built-in one,
    # and where generated / saved components are written
    catalog_dir: str = ""
    component_store_dir: str = "data/components"

    # Referential checks on definition_card images as well as road objects
    strict_references: bool = False
    # Generate missing components in the background after a chat edit
    auto_heal_enabled: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
