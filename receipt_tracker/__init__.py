import logging
import os

from dotenv import load_dotenv
from flask import Flask
from flask_cors import CORS

from config import Config, get_config

# Load environment variables from .env file
load_dotenv()

# Initialize logger
logger = logging.getLogger(__name__)

__all__ = ["create_app"]


def create_app(config: Config | type | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Optional configuration object or class. When omitted the
                configuration is chosen from the FLASK_ENV environment variable.
    Returns:
        Flask: The configured Flask application instance.
    """
    if config is None:
        config = get_config()

    # Create the Flask application
    app = Flask(__name__)

    # Load configuration from config object
    app.config.from_object(config)

    # Configure app components
    _configure_logging(app)
    _initialize_components(app)
    _initialize_cli(app)

    return app


def _configure_logging(app: Flask) -> None:
    """Configure application logging."""
    if app.debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO
    logger.setLevel(log_level)

    # Log app configuration
    logger.debug("Application configuration:")
    logger.debug(f"- ENV: {app.config.get('ENVIRONMENT', 'Not set')}")
    logger.debug(f"- DEBUG: {app.debug}")
    logger.debug(f"- OCR_SERVICE_URL: {app.config.get('OCR_SERVICE_URL', 'Not set')}")
    logger.debug(f"- OCR_TIMEOUT: {app.config.get('OCR_TIMEOUT', 'Not set')}")


def _initialize_components(app: Flask) -> None:
    """Initialize core application components."""
    from .extensions import init_app as init_extensions

    # Initialize extensions
    init_extensions(app)

    # Register blueprints
    _register_blueprints(app)

    # Register error handlers
    from .errors import init_app as init_errors

    init_errors(app)
    logger.debug("Registered error handlers")

    # Configure CORS
    _configure_cors(app)

    # Log registered routes
    _log_registered_routes(app)


def _initialize_cli(app: Flask) -> None:
    """Initialize CLI commands."""
    from .receipts.cli import register_commands as register_receipt_commands

    register_receipt_commands(app)
    logger.debug("Initialized CLI commands")


def _register_blueprints(app: Flask) -> None:
    """Register all application blueprints."""
    logger.debug("Registering blueprints...")

    from .api import bp as api_bp

    app.register_blueprint(api_bp, url_prefix="/api/v1")
    logger.debug(f"Registered blueprint: {api_bp.name} at /api/v1")


def _configure_cors(app: Flask) -> None:
    """Configure CORS settings from the environment."""
    cors_origins = os.getenv("CORS_ORIGINS", "*").split(",")
    cors_methods = os.getenv("CORS_METHODS", "GET,POST,OPTIONS").split(",")
    cors_allow_headers = os.getenv("CORS_ALLOW_HEADERS", "Content-Type,X-Requested-With").split(",")
    cors_expose_headers = os.getenv("CORS_EXPOSE_HEADERS", "Content-Length").split(",")

    CORS(
        app,
        resources={
            r"/api/*": {
                "origins": cors_origins,
                "methods": cors_methods,
                "allow_headers": cors_allow_headers,
                "expose_headers": cors_expose_headers,
                "supports_credentials": False,
            }
        },
    )


def _log_registered_routes(app: Flask) -> None:
    """Log all registered routes for debugging."""
    logger.debug("Registered routes:")
    for rule in app.url_map.iter_rules():
        methods = list((rule.methods or set()) - {"OPTIONS", "HEAD"})
        logger.debug(f"  {rule.endpoint}: {rule.rule} {methods}")
