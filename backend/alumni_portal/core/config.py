from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Alumni Portal"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_PREFIX: str = "/api"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 3000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./alumni_portal.db"
    DB_ECHO: bool = False

    # ==========================================
    # Security
    # ==========================================
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 30
    BCRYPT_ROUNDS: int = 10  # 4 for tests (fast), 10+ for prod

    # Approval / moderation endpoints require an admin or representative
    # of the target university when enabled
    ENFORCE_MODERATOR_SCOPE: bool = True

    # ==========================================
    # Media host (Cloudinary) - URLs are uploaded client-side
    # ==========================================
    CLOUDINARY_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""

    # ==========================================
    # HTTP
    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    CORS_ORIGINS_STR: str = "*"
    MAX_REQUEST_SIZE_MB: int = 50

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Rate limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    RATE_LIMIT_PER_MINUTE: int = 120
    AUTH_RATE_LIMIT: str = "10/minute"

    # ==========================================
    # Directory & search
    # ==========================================
    DIRECTORY_RESULT_LIMIT: int = 50
    SEARCH_RESULT_LIMIT: int = 50

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


settings = Settings()
