from functools import lru_cache
from typing import List, Optional
from urllib.parse import quote_plus
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application configuration loaded from environment variables.
    Uses Pydantic's BaseSettings for robust env parsing and validation.
    """

    # App
    APP_NAME: str = "Team Roster"
    ENVIRONMENT: str = "development"  # development | staging | production
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database (support single URL or split parts)
    DATABASE_URL: Optional[str] = None
    DB_SCHEME: str = "postgresql+psycopg"
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "team_roster"

    # JWT / Auth (access tokens are issued by the host platform, verified here)
    JWT_SECRET_KEY: str = "change-this-secret-in-env"  # MUST be overridden in production
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "team-roster"
    JWT_AUDIENCE: str = "team-roster-users"

    # Request-authenticity tokens embedded in the rendered roster
    NONCE_TOKEN_SECRET: str = "change-this-nonce-secret"  # MUST be overridden
    NONCE_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # CORS
    # Comma-separated origins, e.g. "http://localhost:3000,https://myapp.com"
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    # Security middleware toggles
    ENABLE_RATE_LIMITER: bool = True
    RATE_LIMIT_REQUESTS: int = 100  # requests
    RATE_LIMIT_WINDOW_SECONDS: int = 60  # per this many seconds
    RATE_LIMIT_STORAGE_URI: Optional[str] = None  # e.g., "redis://localhost:6379"

    # Roster view
    TEAM_LEAD_ROLE: str = "Team_Lead"
    PROGRAMS_URL: str = "/programs"
    TRAIT_FADE_THRESHOLD: int = 50
    DEFAULT_AVATAR_URL: str = "/static/img/default-profile.webp"
    AVATAR_SIZE: int = 60
    GOAL_UPDATES_PATH: str = "/api/teams/goal-updates"
    DISPLAY_TIMEZONE: str = "UTC"  # IANA name; aware timestamps are shown in this zone
    ENABLE_ROSTER_DEBUG: bool = False

    # Pydantic v2 settings configuration
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def allowed_origins_list(self) -> List[str]:
        """
        Parses comma-separated origins into a list. Trims spaces, omits empties.
        """
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    def build_database_url(self) -> str:
        """
        Compose a SQLAlchemy URL from individual DB_* parts when DATABASE_URL is not provided.
        """
        if self.DATABASE_URL:
            return str(self.DATABASE_URL)
        return f"{self.DB_SCHEME}://{self.DB_USER}:{quote_plus(self.DB_PASSWORD)}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @field_validator("DEBUG", "ENABLE_ROSTER_DEBUG", mode="before")
    def _normalize_flags(cls, v):
        # Accept "1", "true", "True", etc.
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes", "on")
        return bool(v)


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance to avoid re-parsing env on each import.
    """
    return Settings()
