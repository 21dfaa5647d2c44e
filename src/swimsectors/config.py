"""Application configuration with environment validation.

Usage:
    from swimsectors.config import get_settings

    settings = get_settings()
    print(settings.year_being_processed)
    print(settings.b_sector_percentage)

Settings are read from environment variables and an optional .env file in the
current directory or the project root. Command line options override the
season year, the B-sector percentage, and the NQT directory.
"""

from datetime import date
from enum import StrEnum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_file() -> Path | None:
    """Find .env file, checking both current dir and project root."""
    if Path(".env").exists():
        return Path(".env")
    # config.py -> swimsectors -> src -> project_root
    project_root = Path(__file__).parent.parent.parent
    env_file = project_root / ".env"
    if env_file.exists():
        return env_file
    return None


class Environment(StrEnum):
    """Application environment."""

    LOCAL = "local"
    DEVELOPMENT = "development"
    PRODUCTION = "production"


class LogFormat(StrEnum):
    """Log output format."""

    CONSOLE = "console"
    JSON = "json"


class Settings(BaseSettings):
    """Settings for a sector ranking run."""

    model_config = SettingsConfigDict(
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Environment = Environment.LOCAL

    # Supabase (optional - only needed for commands that touch the database)
    supabase_url: str | None = Field(default=None, description="Supabase project URL")
    supabase_key: SecretStr | None = Field(default=None, description="Supabase API key")

    # Season
    year_being_processed: int = Field(
        default_factory=lambda: date.today().year,
        description="Competition year being ranked",
    )
    b_sector_percentage: int = Field(
        default=120, description="Alternative NQT as a percentage of the NQT (e.g. 120)"
    )
    nqt_dir: Path = Field(
        default=Path("."),
        description="Directory containing NationalQualifyingTimes-<year> folders",
    )

    # Result selection
    results_org: str = Field(default="PAC", description="Organization whose splashes are ranked")

    # Batch behaviour
    progress_interval: int = Field(default=500, description="Log progress every N swimmers")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: LogFormat = Field(default=LogFormat.CONSOLE, description="Log output format")

    @field_validator("b_sector_percentage")
    @classmethod
    def validate_b_sector_percentage(cls, v: int) -> int:
        if v <= 100:
            raise ValueError("b_sector_percentage must be greater than 100")
        return v

    @field_validator("progress_interval")
    @classmethod
    def validate_progress_interval(cls, v: int) -> int:
        if v < 1:
            raise ValueError("progress_interval must be at least 1")
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are loaded once and cached. To reload, clear the cache:
        get_settings.cache_clear()
    """
    return Settings()
