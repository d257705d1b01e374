"""
Configuration for the Traffic Monitor backend.
Default values and environment variable overrides.
"""
import os
from pathlib import Path

from pydantic import BaseModel, Field


# Default SQLite file next to the backend package
DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "traffic.db"


class Settings(BaseModel):
    """Runtime settings for the API and the record store"""

    # Record store
    database_url: str = Field(
        default=f"sqlite+aiosqlite:///{DEFAULT_DB_PATH}",
        description="SQLAlchemy async URL of the vehicles store",
    )
    db_echo: bool = False

    # HTTP
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Aggregation
    sample_limit: int = Field(default=10, ge=1, le=1000)
    low_confidence_threshold: float = Field(default=0.7, ge=0.0, le=1.0)

    log_level: str = "INFO"


def _env_int(name: str, default: int, low: int, high: int) -> int:
    try:
        value = int(os.getenv(name, default))
    except ValueError:
        return default
    return value if low <= value <= high else default


def _env_float(name: str, default: float, low: float, high: float) -> float:
    try:
        value = float(os.getenv(name, default))
    except ValueError:
        return default
    # Out-of-range values fall back like unparsable ones
    return value if low <= value <= high else default


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def load_settings() -> Settings:
    """Build settings from TM_* environment variables"""
    defaults = Settings()
    return Settings(
        database_url=os.getenv("TM_DATABASE_URL", defaults.database_url),
        db_echo=_env_bool("TM_DB_ECHO"),
        cors_origins=_env_list("TM_CORS_ORIGINS", "*"),
        sample_limit=_env_int("TM_SAMPLE_LIMIT", defaults.sample_limit, 1, 1000),
        low_confidence_threshold=_env_float(
            "TM_LOW_CONFIDENCE_THRESHOLD", defaults.low_confidence_threshold, 0.0, 1.0
        ),
        log_level=os.getenv("TM_LOG_LEVEL", defaults.log_level).upper(),
    )
