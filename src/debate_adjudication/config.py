"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel, computed_field

from debate_adjudication.exceptions import ConfigurationError


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.0-flash"
    temperature: float = 0.7
    max_output_tokens: int = 8192


class AdjudicationConfig(BaseModel, frozen=True):
    """Retry and timeout policy for each adjudication stage."""

    max_attempts: int = 3
    timeout_seconds: float = 60.0
    timeout_backoff_seconds: float = 2.0
    network_backoff_seconds: float = 3.0


class UploadConfig(BaseModel, frozen=True):
    """Uploaded transcript handling configuration."""

    upload_dir: Path = Path("./public/temp")
    max_upload_bytes: int = 10 * 1024 * 1024


class DatabaseConfig(BaseModel, frozen=True):
    """Immutable database connection configuration."""

    host: str
    port: str
    user: str
    password: str
    database: str
    url_override: str | None = None

    @computed_field
    @property
    def url(self) -> str:
        """Returns the full database connection URL."""
        if self.url_override:
            return self.url_override
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    gemini: GeminiConfig
    adjudication: AdjudicationConfig
    upload: UploadConfig
    database: DatabaseConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.7")),
            max_output_tokens=int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "8192")),
        ),
        adjudication=AdjudicationConfig(
            max_attempts=int(os.getenv("ADJUDICATION_MAX_ATTEMPTS", "3")),
            timeout_seconds=float(os.getenv("ADJUDICATION_TIMEOUT_SECONDS", "60")),
            timeout_backoff_seconds=float(
                os.getenv("ADJUDICATION_TIMEOUT_BACKOFF_SECONDS", "2")
            ),
            network_backoff_seconds=float(
                os.getenv("ADJUDICATION_NETWORK_BACKOFF_SECONDS", "3")
            ),
        ),
        upload=UploadConfig(
            upload_dir=Path(os.getenv("UPLOAD_DIR", "./public/temp")),
        ),
        database=DatabaseConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            port=os.getenv("POSTGRES_PORT", "5432"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            database=os.getenv("POSTGRES_DB", "debate_adjudication"),
            url_override=os.getenv("DATABASE_URL") or None,
        ),
    )


def validate_config(config: AppConfig) -> None:
    """
    Checks settings the service cannot start without.

    Raises:
        ConfigurationError: If the Gemini API key is not set.
    """
    if not config.gemini.api_key.strip():
        raise ConfigurationError("GEMINI_API_KEY")
