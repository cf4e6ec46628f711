"""Application configuration.

This module provides environment-specific configuration settings for the application.
"""

import os


class Config:
    """Base configuration with settings common to all environments."""

    # Security
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-key-change-in-production")

    # Flask settings
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    TESTING: bool = False

    # Application settings
    APP_NAME: str = os.getenv("APP_NAME", "hsa-receipt-tracker")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Request body limit for posted OCR text
    MAX_CONTENT_LENGTH: int = 1 * 1024 * 1024  # 1MB

    # External OCR service
    OCR_SERVICE_URL: str = os.getenv("OCR_SERVICE_URL", "http://localhost:5002")
    OCR_TIMEOUT: float = float(os.getenv("OCR_TIMEOUT", "40"))  # seconds

    # Receipt extraction heuristics
    RECEIPT_TWO_DIGIT_YEAR_PIVOT: int = int(os.getenv("RECEIPT_TWO_DIGIT_YEAR_PIVOT", "50"))
    RECEIPT_MAX_AMOUNT: str = os.getenv("RECEIPT_MAX_AMOUNT", "10000")
    RECEIPT_MAX_LINE_ITEMS: int = int(os.getenv("RECEIPT_MAX_LINE_ITEMS", "10"))

    # Rate limiting (Flask-Limiter)
    RATELIMIT_ENABLED: bool = os.getenv("RATELIMIT_ENABLED", "true").lower() == "true"

    def __init__(self) -> None:
        """Initialize configuration."""
        # Set environment if not set
        os.environ.setdefault("FLASK_ENV", "development")


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG: bool = True


class UnitTestConfig(Config):  # noqa: D101
    """Testing configuration."""

    TESTING: bool = True
    DEBUG: bool = True
    RATELIMIT_ENABLED: bool = False
    OCR_SERVICE_URL: str = "http://ocr.test"
    OCR_TIMEOUT: float = 5.0


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG: bool = False
    TESTING: bool = False


def get_config() -> Config:
    """Get the appropriate configuration based on environment."""
    env = os.getenv("FLASK_ENV", "development").lower()

    configs = {
        "development": DevelopmentConfig,
        "testing": UnitTestConfig,
        "production": ProductionConfig,
    }

    config_class = configs.get(env, DevelopmentConfig)
    return config_class()
