"""Error handling for the application.

Every error is returned as JSON; there are no HTML error pages.
"""

from __future__ import annotations

from typing import cast

from flask import Flask, Response, current_app, jsonify
from werkzeug.exceptions import HTTPException


def init_app(app: Flask) -> None:
    """Initialize error handlers with the Flask application."""
    # Register global error handlers
    app.register_error_handler(404, not_found_error)
    app.register_error_handler(500, internal_error)
    app.register_error_handler(HTTPException, handle_http_exception)
    app.register_error_handler(Exception, handle_exception)


def _create_error_response(message: str, status_code: int, error_type: str = "error") -> Response:
    """Create a standardized error response.

    Args:
        message: The error message
        status_code: The HTTP status code
        error_type: The type of error (error, warning, info)

    Returns:
        JSON response
    """
    response = jsonify({"status": error_type, "message": message, "code": status_code})
    response.status_code = status_code
    return cast(Response, response)


def not_found_error(error: HTTPException) -> Response:
    """Handle 404 Not Found errors."""
    return _create_error_response("Resource not found", 404)


def internal_error(error: Exception) -> Response:
    """Handle 500 Internal Server errors."""
    return _create_error_response("Internal server error", 500)


def handle_exception(error: Exception) -> Response:
    """Handle all unhandled exceptions."""
    current_app.logger.error(f"Unhandled exception: {str(error)}", exc_info=True)

    return _create_error_response("An unexpected error occurred", 500)


def handle_http_exception(error: HTTPException) -> Response:
    """Handle HTTP exceptions."""
    status_code = error.code if error.code is not None else 500
    return _create_error_response(error.description or "HTTP error occurred", status_code)
