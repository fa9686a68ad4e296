from datetime import datetime
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_ignore_empty=True)

    # App Settings
    APP_NAME: str = "EU Parliament Plenary Viewer"
    PROJECT_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ALLOWED_ORIGINS: str = "*"  # Comma-separated string or "*"
    HOST: str = "0.0.0.0"
    PORT: int = 4000

    # Upstream open-data API
    UPSTREAM_BASE_URL: str = "https://data.europarl.europa.eu/api/v2"
    DEFAULT_FORMAT: str = "application/ld+json"
    UPSTREAM_TIMEOUT: float = 30.0

    # Response cache
    CACHE_DURATION_SECONDS: int = 2 * 60 * 60

    # View client; empty means in-process calls to this app
    PROXY_BASE_URL: str = ""
    MEETINGS_YEAR: int | None = None
    MEETINGS_WINDOW: int = 10
    MEETINGS_FALLBACK_OFFSET: int = 0

    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Parse ALLOWED_ORIGINS
    @property
    def allowed_origins_list(self) -> List[str]:
        if self.ALLOWED_ORIGINS == "*":
            return ["*"]
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def meetings_year(self) -> int:
        return self.MEETINGS_YEAR or datetime.now().year


settings = Settings()
