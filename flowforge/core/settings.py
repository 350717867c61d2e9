import logging
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


logger = logging.getLogger(__name__)


PROJECT_ROOT = Path(__file__).resolve().parents[2]
ROOT_ENV = PROJECT_ROOT / ".env"
ROOT_ENV_LOCAL = PROJECT_ROOT / ".env.local"
DEFAULT_KNOWLEDGE_CORPUS = PROJECT_ROOT / "docs" / "n8n_documentation.md"


class Settings(BaseSettings):
    """
    flowforge - Global Configuration Registry
    Centralizes all environment variables using Pydantic Settings.
    """

    model_config = SettingsConfigDict(
        env_file=(str(ROOT_ENV), str(ROOT_ENV_LOCAL)),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Generation backend
    ANTHROPIC_API_KEY: Optional[str] = None
    GENERATION_MODEL: str = "claude-opus-4-20250514"
    GENERATION_MAX_TOKENS: int = Field(default=8000, ge=1)
    GENERATION_TEMPERATURE: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    # Knowledge corpus
    KNOWLEDGE_CORPUS_PATH: str = str(DEFAULT_KNOWLEDGE_CORPUS)

    # Request guardrails
    MIN_DESCRIPTION_LENGTH: int = Field(default=10, ge=1)

    # n8n deployment target
    N8N_DEPLOY_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    N8N_WORKFLOW_TAGS: List[str] = ["AI-Generated"]

    # HTTP surface
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    @field_validator("APP_ENV", mode="before")
    @classmethod
    def _normalize_environment_label(cls, value: str | None) -> str:
        return str(value or "development").strip().lower()

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str:
        return str(value or "INFO").strip().upper()


settings = Settings()  # type: ignore[call-arg]
