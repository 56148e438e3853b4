from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List

class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "halal_bites"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""

    @property
    def DATABASE_URL(self) -> str:
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    REDIS_URL: str = "redis://localhost:6379"
    SENTRY_DSN: str | None = None
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Halal Bites API"

    # Listing cache + rate limiting
    RESTAURANTS_CACHE_TTL: int = 300
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    LISTING_RATE_LIMIT: str = "120/minute"
    WRITE_RATE_LIMIT: str = "20/minute"

    # Admin session (comma-separated, index-aligned)
    ADMIN_USERS: str = ""
    ADMIN_PASSWORD_HASHES: str = ""
    ADMIN_SESSION_SECRET: str = "CHANGE_ME"
    ADMIN_SESSION_MAX_AGE: int = 60 * 60 * 8

    # Geocoding
    NOMINATIM_URL: str = "https://nominatim.openstreetmap.org/search"
    NOMINATIM_USER_AGENT: str = "halal-bites-api/1.0"
    MAPBOX_TOKEN: str | None = None
    GEOCODER_TIMEOUT: float = 15
    GEOCODER_MAX_RETRIES: int = 2

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def admin_users(self) -> List[str]:
        return [u.strip() for u in self.ADMIN_USERS.split(",") if u.strip()]

    @property
    def admin_password_hashes(self) -> List[str]:
        return [h.strip() for h in self.ADMIN_PASSWORD_HASHES.split(",")]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()
