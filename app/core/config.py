from pydantic import model_validator
from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    # Environment
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database - defaults to a local SQLite file, override with environment variable for production
    DATABASE_URL: str = "sqlite:///./wanderblocks.db"
    DB_CONNECT_TIMEOUT_SECONDS: int = 10
    DB_POOL_TIMEOUT_SECONDS: int = 30
    # Postgres only
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    # Create missing tables on startup (development convenience; use alembic in production)
    AUTO_CREATE_TABLES: bool = True

    # Admin gate for waitlist listing/count. Empty leaves those routes open.
    ADMIN_API_TOKEN: str = ""

    # Redis (for rate limiting) - defaults to local, override for production
    REDIS_URL: str = "redis://localhost:6379"
    # Registrations per client IP per minute; 0 disables the limiter
    WAITLIST_RATE_LIMIT_PER_MINUTE: int = 10

    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3002",
        "http://127.0.0.1:3000",
        "https://wanderblocks.com",
        "https://www.wanderblocks.com",
    ]

    @model_validator(mode="after")
    def check_production(self):
        if self.ENVIRONMENT == "production":
            missing = []
            if not self.ADMIN_API_TOKEN:
                missing.append("ADMIN_API_TOKEN")
            if self.DATABASE_URL.startswith("sqlite"):
                missing.append("DATABASE_URL (SQLite is not allowed in production)")
            if missing:
                raise ValueError(f"Missing required production settings: {', '.join(missing)}")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")

    class Config:
        # Use absolute path to .env file
        env_file = Path(__file__).parent.parent.parent / ".env"
        env_file_encoding = 'utf-8'


settings = Settings()
