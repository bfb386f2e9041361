# campus_nav/core/config.py
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# PROJECT_ROOT = parent of campus_nav/ → .../
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables (.env file).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    APP_NAME: str = "Campus Navigation API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # JSON document with "locations" and "paths"
    CAMPUS_DATA_FILE: Path = PROJECT_ROOT / "data" / "campus_data.json"


settings = Settings()
