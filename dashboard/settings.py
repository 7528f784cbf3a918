import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    # Remote API Configuration
    api_url: str = Field(default="http://localhost:8080/api", alias="DASHBOARD_API_URL")
    api_timeout: float = Field(default=10.0, alias="DASHBOARD_API_TIMEOUT")

    # Sync Configuration
    refresh_interval_seconds: float = Field(
        default=30.0, alias="DASHBOARD_REFRESH_INTERVAL"
    )
    max_bulk_size: int = Field(default=100, alias="DASHBOARD_MAX_BULK_SIZE")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="DASHBOARD_LOG_LEVEL")


def load_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings.model_validate(dict(os.environ))


global_settings = load_settings()
