"""OCR service client for fetching the text of an uploaded receipt image.

Image decoding and OCR happen in a separate image service; this client only asks that
service for the text of an image by its identifier.
"""

from dataclasses import dataclass
import logging
from typing import Any

import requests
from flask import current_app

logger = logging.getLogger(__name__)

DEFAULT_OCR_SERVICE_URL = "http://localhost:5002"
DEFAULT_OCR_TIMEOUT = 40  # seconds

EXTRACT_BY_ID_PATH = "/ocr/extract-by-id"


class OCRServiceError(RuntimeError):
    """Raised when the external OCR service fails or returns no usable text."""


@dataclass(frozen=True)
class OCRResult:
    """Text returned by the OCR service for one image."""

    image_id: str
    text: str
    processing_time_ms: int | None = None
    text_length: int = 0


class OCRService:
    """Client for the external OCR text-extraction service."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        """Initialize OCR client with configuration.

        Args:
            base_url: OCR service root URL, defaults to OCR_SERVICE_URL from config
            timeout: Request timeout in seconds, defaults to OCR_TIMEOUT from config
        """
        self.base_url = (base_url or self._get_config("OCR_SERVICE_URL", DEFAULT_OCR_SERVICE_URL)).rstrip("/")
        self.timeout = float(timeout if timeout is not None else self._get_config("OCR_TIMEOUT", DEFAULT_OCR_TIMEOUT))

    def _get_config(self, key: str, default: Any) -> Any:
        """Get a value from Flask configuration, falling back outside an app context."""
        try:
            return current_app.config.get(key, default)
        except RuntimeError:
            return default

    def extract_text_from_image_id(self, image_id: str) -> OCRResult:
        """Ask the OCR service for the text of an uploaded image.

        Args:
            image_id: Opaque identifier of the image in the image service

        Returns:
            OCRResult with the extracted text

        Raises:
            ValueError: If no image id is given
            OCRServiceError: If the service is unreachable, times out or reports a failure
        """
        if not image_id or not image_id.strip():
            raise ValueError("No image id provided")

        url = f"{self.base_url}{EXTRACT_BY_ID_PATH}"
        logger.debug(f"Requesting OCR text for image {image_id} from {url} (timeout={self.timeout}s)")

        try:
            response = requests.post(url, json={"image_id": image_id}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"OCR extraction timed out after {self.timeout}s for image {image_id}")
            raise OCRServiceError(f"Failed to extract text from image: timed out after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"OCR extraction error for image {image_id}: {e}")
            raise OCRServiceError(f"Failed to extract text from image: {e}") from e
        except ValueError as e:
            logger.error(f"OCR service returned invalid JSON for image {image_id}: {e}")
            raise OCRServiceError("Failed to extract text from image: invalid response from OCR service") from e

        return self._parse_response(image_id, payload)

    def _parse_response(self, image_id: str, payload: Any) -> OCRResult:
        """Validate the OCR service payload and build an OCRResult."""
        if not isinstance(payload, dict) or not payload.get("success"):
            details = payload.get("details") if isinstance(payload, dict) else None
            raise OCRServiceError(details or "Failed to extract text from image")

        data = payload.get("data") or {}
        text = data.get("text")
        if not isinstance(text, str):
            raise OCRServiceError("OCR service response did not include any text")

        logger.debug(f"OCR returned {len(text)} chars for image {image_id}")
        return OCRResult(
            image_id=image_id,
            text=text,
            processing_time_ms=data.get("processing_time_ms"),
            text_length=data.get("text_length", len(text)),
        )
