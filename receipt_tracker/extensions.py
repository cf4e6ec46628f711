"""Application Flask extensions.

This module initializes and configures the Flask extensions used in the application.
"""

import logging

from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

logger = logging.getLogger(__name__)

# Initialize rate limiter to keep clients from flooding the OCR service
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["400 per day", "100 per hour"],
    storage_uri="memory://",
)


def init_app(app: Flask) -> None:
    """Initialize all extensions with the Flask application."""
    limiter.init_app(app)
    app.logger.info(f"Rate limiting enabled: {app.config.get('RATELIMIT_ENABLED', True)}")
