"""Application configuration with environment-based settings."""
import os
from typing import Optional
from dotenv import load_dotenv


class Config:
    """Base configuration class following Single Responsibility Principle."""

    # Load environment variables
    load_dotenv()

    # Storage Configuration
    CUSTOMER_STORAGE_TYPE: str = os.getenv("CUSTOMER_STORAGE_TYPE", "redis")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    REDIS_MAX_CONNECTIONS: int = int(os.getenv("REDIS_MAX_CONNECTIONS", "20"))

    # Rate Limiting
    RATELIMIT_ENABLED: bool = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"
    RATELIMIT_STORAGE_URL: str = os.getenv("RATELIMIT_STORAGE_URL", "memory://")
    RATELIMIT_DEFAULT: str = os.getenv("RATELIMIT_DEFAULT", "1000 per hour;100 per minute")

    # Monitoring
    SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
    ENABLE_METRICS: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"

    # Application
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")

    SUPPORTED_STORAGE_TYPES = ("redis", "memory")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        problems = []

        storage_type = (cls.CUSTOMER_STORAGE_TYPE or "").lower()
        if storage_type not in cls.SUPPORTED_STORAGE_TYPES:
            problems.append(f"CUSTOMER_STORAGE_TYPE must be one of {', '.join(cls.SUPPORTED_STORAGE_TYPES)}")
        if storage_type == "redis" and not cls.REDIS_URL:
            problems.append("REDIS_URL is required for redis storage")

        if problems:
            raise ValueError(f"Invalid configuration: {'; '.join(problems)}")


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    CUSTOMER_STORAGE_TYPE = "memory"
    REDIS_URL = "redis://localhost:6379/15"  # Use different DB for tests
    RATELIMIT_ENABLED = False
    ENABLE_METRICS = False
    SENTRY_DSN = None


def get_config() -> type[Config]:
    """Factory method to get configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    config_map = {
        "development": DevelopmentConfig,
        "production": ProductionConfig,
        "testing": TestingConfig,
    }

    return config_map.get(env, DevelopmentConfig)
