"""Configuration settings for the application.

This module defines the configuration settings using Pydantic's
SettingsConfigDict to load environment variables from a .env file.
"""

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("uvicorn")


class Settings(BaseSettings):
    """Settings class for the application."""

    # ENVIRONMENT CONFIG
    environment: str = "dev"
    testing: bool = bool(0)
    log_level: str = "INFO"

    # API CONFIG
    project_name: str = "TableGen API"
    api_v1_str: str = "/api/v1"
    backend_cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:8000",
    ]

    # LLM CONFIG
    llm_provider: str = "openai"
    llm_model: str = "gpt-4o-mini"
    llm_timeout: int = 60
    openai_api_key: Optional[str] = None

    # SUPABASE CONFIG
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None
    supabase_jwt_secret: Optional[str] = None
    supabase_tables_table: str = "user_tables"

    # TABLE STORE CONFIG
    table_store_provider: str = "sqlite"
    table_states_db_uri: str = "/data/user_tables.db"
    max_saved_tables: int = 5

    # LANGSMITH CONFIG
    langsmith_tracing: bool = False
    langsmith_endpoint: str = "https://api.smith.langchain.com"
    langsmith_project: str = "tablegen"
    langsmith_api_key: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=["../../.env", "../.env", ".env"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get the settings for the application."""
    logger.info("Loading config settings from the environment...")

    settings = Settings()

    if settings.openai_api_key:
        logger.info("OpenAI API key is set")
    else:
        logger.warning("OpenAI API key is not set")

    if not settings.supabase_url:
        logger.warning("Supabase URL is not set, sign-in and sign-up will fail")

    if not settings.supabase_jwt_secret:
        logger.warning("Supabase JWT secret is not set, every bearer token will be rejected")

    return settings
