from pydantic_settings import BaseSettings
from typing import List, Any
import json
from pathlib import Path


DEFAULT_JWT_SECRET = "CHANGE_ME"


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # JSON array first, then comma-separated
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Campus Syllabus Hub"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./campus_hub.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_ECHO: bool = False

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 15
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12  # 4 for tests (fast), 12 for prod

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    AUTH_RATE_LIMIT: str = "20 per 15 minutes"
    SEARCH_RATE_LIMIT: str = "50 per 5 minutes"

    # ==========================================
    # Pagination
    # ==========================================
    DEFAULT_PAGE_LIMIT: int = 20
    RATINGS_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 100

    # ==========================================
    # Requests
    # ==========================================
    MAX_REQUEST_SIZE: int = 1024 * 1024  # 1MB

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "logs/app.log"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if self.LOG_FILE:
            Path(self.LOG_FILE).parent.mkdir(exist_ok=True, parents=True)

    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


def validate_config(config: "Settings") -> List[str]:
    """
    Check settings that the API cannot safely run without.

    Returns a list of warnings. Raises RuntimeError in production when
    a critical value is missing or left at its default.
    """
    errors = []
    warnings = []

    if not config.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not config.JWT_SECRET_KEY or config.JWT_SECRET_KEY == DEFAULT_JWT_SECRET:
        message = "JWT_SECRET_KEY is not set or using default value"
        if config.is_production():
            errors.append(message)
        else:
            warnings.append(message)

    if config.is_production() and "sqlite" in config.DATABASE_URL:
        warnings.append("SQLite database configured in production")

    if errors:
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    return warnings


# Create settings instance
settings = Settings()
