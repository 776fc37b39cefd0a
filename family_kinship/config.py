"""Application configuration using Pydantic Settings."""

import logging
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class DatabaseSettings(BaseSettings):
    """Database path settings."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_", env_file=".env", extra="ignore")

    family_db_path: str = "data/family.db"

    def ensure_dirs(self) -> None:
        """Create the database directory if needed."""
        Path(self.family_db_path).parent.mkdir(parents=True, exist_ok=True)


class KinshipSettings(BaseSettings):
    """Kinship resolution settings."""

    model_config = SettingsConfigDict(env_prefix="KINSHIP_", env_file=".env", extra="ignore")

    default_language: str = "en"
    extended_terms: bool = False


class LLMSettings(BaseSettings):
    """Local LLM used to answer free-form kinship questions."""

    model_config = SettingsConfigDict(env_prefix="LLM_", env_file=".env", extra="ignore")

    enabled: bool = False
    base_url: str = "http://localhost:11434"
    model: str = "llama3"
    timeout: int = 60


class APISettings(BaseSettings):
    """HTTP server settings."""

    model_config = SettingsConfigDict(env_prefix="API_", env_file=".env", extra="ignore")

    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    database: DatabaseSettings = DatabaseSettings()
    kinship: KinshipSettings = KinshipSettings()
    llm: LLMSettings = LLMSettings()
    api: APISettings = APISettings()


def setup_logging(level: str = None) -> None:
    """Configure root logging for service entry points."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


settings = Settings()
