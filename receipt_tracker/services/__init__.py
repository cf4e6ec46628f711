"""Receipt services: text extraction and the OCR service client."""

from .ocr_service import OCRResult, OCRService, OCRServiceError
from .receipt_extractor import ExtractedReceipt, LineItem, ReceiptTextExtractor

__all__ = [
    "ExtractedReceipt",
    "LineItem",
    "OCRResult",
    "OCRService",
    "OCRServiceError",
    "ReceiptTextExtractor",
]
