"""
Application configuration management using Pydantic Settings
Handles all environment variables and application settings
"""

from pydantic_settings import BaseSettings
from typing import Optional, List
from functools import lru_cache

class Settings(BaseSettings):
    """Main application settings"""

    # Application Settings
    APP_NAME: str = "ShopperzStop API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5

    # Durable storage (orders and wishlist only)
    STORAGE_BACKEND: str = "sql"  # sql | redis | memory
    DATABASE_URL: str = "sqlite:///./shopperz.db"
    DATABASE_ECHO: bool = False
    REDIS_URL: str = "redis://localhost:6379/0"
    STORAGE_KEY_ORDERS: str = "shopperz_orders"
    STORAGE_KEY_WISHLIST: str = "shopperz_wishlist"

    # Admin access
    ADMIN_USERNAME: str = "xrrahul"
    ADMIN_PASSWORD: str = "xr123"
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Checkout
    CHECKOUT_DELAY_SECONDS: float = 2.5
    CHECKOUT_SESSION_RETENTION_SECONDS: float = 600.0

    # Orders
    ORDER_STRICT_TRANSITIONS: bool = False

    # AI/ML Services
    OPENAI_API_KEY: Optional[str] = None
    AI_MODEL: str = "gpt-4o-mini"
    AI_TIMEOUT_SECONDS: float = 15.0
    AI_MAX_TOKENS: int = 300

    # Monitoring
    PROMETHEUS_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True

@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()

# Global settings instance
settings = get_settings()
