# backend/tugas/core/config.py
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# backend/ (pages/ and public/ live under it)
BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "tugas"

    SESSION_SECRET: str = "dev-secret"
    SESSION_COOKIE: str = "tugas.sid"
    SESSION_MAX_AGE: int = 60 * 60 * 24  # 1 day

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # "production" turns on Secure cookies
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    PUBLIC_DIR: Path = BASE_DIR / "public"
    PAGES_DIR: Path = BASE_DIR / "pages"

    # CORS middleware is only added when this is non-empty
    CORS_ORIGINS: List[str] = []

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def IS_PRODUCTION(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
