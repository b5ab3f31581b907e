from pathlib import Path
import os
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]  # repo root

ENV_FILE = os.getenv("ENV_FILE", str(BASE_DIR / ".env"))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=ENV_FILE, extra="ignore")

    APP_ENV: str = "local"
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'evalsys.db'}"
    CORS_ORIGINS: str = "*"  # Comma-separated list of allowed origins, or "*" for all
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "UTC"  # end-of-day rounding happens in this zone

    # deployment-wide defaults for new evaluations
    SECTION_AWARE_DEFAULT: bool = False
    RESULTS_SHARING_DEFAULT: str = "visible"
    INSTRUCTOR_VIEW_RESPONSES_DEFAULT: bool = True

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list, handling '*' for development"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


settings = Settings()
