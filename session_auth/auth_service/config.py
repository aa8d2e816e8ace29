"""
Configuration management for the auth service
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Auth service configuration loaded from environment variables"""

    # Service Configuration
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./app.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Token Configuration
    JWT_SECRET: str = "change-this-secret-in-prod"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: int = 60 * 60 * 24  # seconds

    # Password hashing work factor
    HASH_ROUNDS: int = 29000

    # Session cookie
    COOKIE_NAME: str = "user"

    # Rate/bot guard (requests per minute, by role)
    RATE_LIMIT_ADMIN: int = 20
    RATE_LIMIT_USER: int = 10
    RATE_LIMIT_GUEST: int = 5
    BOT_USER_AGENTS: List[str] = [
        "bot",
        "crawler",
        "spider",
        "curl",
        "wget",
        "python-requests",
        "scrapy",
        "headless",
    ]

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


# Global settings instance
settings = Settings()
