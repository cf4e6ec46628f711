"""Pytest configuration and fixtures for the test suite."""

import os
from pathlib import Path
import sys
from typing import Generator

import pytest
from flask import Flask
from flask.testing import FlaskClient, FlaskCliRunner

# Add the project root to the Python path first to avoid import issues
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)

# Set test environment variables before the app reads its configuration
os.environ.update(
    {
        "FLASK_ENV": "testing",
        "FLASK_APP": "receipt_tracker",
        "SECRET_KEY": "test-secret-key",
        "TESTING": "True",
    }
)

from receipt_tracker import create_app  # noqa: E402


@pytest.fixture(scope="function")
def app() -> Generator[Flask, None, None]:
    """Create and configure a new app instance for testing."""
    app = create_app()

    app.config.update(
        TESTING=True,
        SECRET_KEY="test-secret-key",
        RATELIMIT_ENABLED=False,
        OCR_SERVICE_URL="http://ocr.test",
        OCR_TIMEOUT=5,
    )

    # Push application context
    ctx = app.app_context()
    ctx.push()

    yield app

    # Pop the application context
    ctx.pop()


@pytest.fixture
def client(app: Flask) -> Generator[FlaskClient, None, None]:
    """Create a test client for the application."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def runner(app: Flask) -> FlaskCliRunner:
    """Create a CLI runner for testing Click commands.

    Args:
        app: The Flask application fixture.

    Returns:
        FlaskCliRunner: The CLI test runner.
    """
    return app.test_cli_runner()

