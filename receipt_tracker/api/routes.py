from __future__ import annotations

from typing import Any, Tuple

from flask import Response, current_app, jsonify, request
from marshmallow import ValidationError

from receipt_tracker.constants.categories import HSA_ELIGIBILITY_NOTE, get_medical_categories
from receipt_tracker.extensions import limiter
from receipt_tracker.services.ocr_service import OCRService, OCRServiceError
from receipt_tracker.services.receipt_extractor import ExtractedReceipt, ReceiptTextExtractor

from . import bp
from .schemas import CategorySchema, ExtractedReceiptSchema, OCRParseRequestSchema, ReceiptTextSchema

# Schema instances
receipt_text_schema = ReceiptTextSchema()
ocr_parse_request_schema = OCRParseRequestSchema()
extracted_receipt_schema = ExtractedReceiptSchema()
categories_schema = CategorySchema(many=True)


def _get_extractor() -> ReceiptTextExtractor:
    """Build the receipt extractor from the current app configuration."""
    return ReceiptTextExtractor.from_config(current_app.config)


def _create_api_response(
    data: Any = None,
    message: str = "Success",
    status: str = "success",
    code: int = 200,
    extra: dict[str, Any] | None = None,
) -> Tuple[Response, int]:
    """Create a standardized API response."""
    response_data: dict[str, Any] = {"status": status, "message": message}
    if data is not None:
        response_data["data"] = data
    if extra:
        response_data.update(extra)
    return jsonify(response_data), code


def _handle_validation_error(error: ValidationError) -> Tuple[Response, int]:
    """Handle validation errors consistently."""
    return (
        jsonify({"status": "error", "message": "Validation failed", "errors": error.messages}),
        400,
    )


def _handle_service_error(error: Exception, operation: str) -> Tuple[Response, int]:
    """Handle service layer errors consistently."""
    current_app.logger.error(f"Error in {operation}: {str(error)}", exc_info=True)
    return (
        jsonify({"status": "error", "message": f"Failed to {operation}", "error": str(error)}),
        500,
    )


def _review_suggestions(receipt: ExtractedReceipt) -> dict[str, Any]:
    return {
        "review_required": receipt.review_required,
        "fields_to_verify": receipt.fields_to_verify,
    }


# Health Check
@bp.route("/health")
def health_check() -> Response:
    """API Health Check"""
    return jsonify({"status": "healthy"})


@bp.route("/receipts/meta/categories", methods=["GET"])
def get_categories() -> Tuple[Response, int]:
    """Get the medical category catalogue for the receipt form."""
    return _create_api_response(
        data=categories_schema.dump(get_medical_categories()),
        message="Categories retrieved successfully",
        extra={"note": HSA_ELIGIBILITY_NOTE},
    )


@bp.route("/receipts/parse", methods=["POST"])
def parse_receipt_text() -> Tuple[Response, int]:
    """Parse receipt text that has already been extracted from an image.

    Empty text is not an error: it yields an empty result with every field flagged
    for manual entry.
    """
    try:
        data = receipt_text_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _handle_validation_error(e)

    try:
        receipt = _get_extractor().parse(data["text"])
    except Exception as e:
        return _handle_service_error(e, "parse receipt text")

    return _create_api_response(
        data=extracted_receipt_schema.dump(receipt),
        message="Receipt text parsed successfully",
        extra={"suggestions": _review_suggestions(receipt)},
    )


@bp.route("/receipts/ocr/parse", methods=["POST"])
@limiter.limit("30 per minute")
def parse_receipt_image() -> Tuple[Response, int]:
    """Run OCR on an uploaded image and parse the resulting text.

    Returns:
        Parsed receipt fields plus OCR metadata, or 502 when the OCR service fails
    """
    try:
        data = ocr_parse_request_schema.load(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _handle_validation_error(e)

    image_id = data["image_id"].strip()
    if not image_id:
        return _handle_validation_error(ValidationError({"image_id": ["Image id must not be blank."]}))

    current_app.logger.info(f"Processing OCR for image ID: {image_id}")

    try:
        ocr_result = OCRService().extract_text_from_image_id(image_id)
    except OCRServiceError as e:
        current_app.logger.warning(f"OCR extraction failed for image {image_id}: {e}")
        return (
            jsonify(
                {
                    "status": "error",
                    "message": "OCR processing failed",
                    "error": str(e),
                    "suggestion": "You can still enter receipt details manually",
                }
            ),
            502,
        )

    current_app.logger.debug(f"Extracted text ({len(ocr_result.text)} chars): {ocr_result.text[:100]}...")

    try:
        receipt = _get_extractor().parse(ocr_result.text)
    except Exception as e:
        return _handle_service_error(e, "parse receipt text")

    receipt_data = extracted_receipt_schema.dump(receipt)
    receipt_data.update(
        {
            "image_id": image_id,
            "ocr_processing_time": ocr_result.processing_time_ms,
            "text_length": ocr_result.text_length,
        }
    )
    return _create_api_response(
        data=receipt_data,
        message="Receipt data extracted and parsed successfully",
        extra={"suggestions": _review_suggestions(receipt)},
    )
