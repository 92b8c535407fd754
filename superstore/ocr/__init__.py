"""OCR engine base class, factory, and sheet text processing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from .processor import (
    ExtractedItem,
    OCRResult,
    ValidationReport,
    detect_form_type,
    extract_employee,
    extract_item_quantities,
    extract_shift,
    process_ocr_text,
    validate_ocr_result,
)

if TYPE_CHECKING:
    from ..config import SuperstoreConfig

# Receives recognition progress as a fraction between 0.0 and 1.0
ProgressCallback = Callable[[float], None]


class OCRBackend(ABC):
    """Abstract base for turning a photographed sheet into raw text."""

    @abstractmethod
    async def recognize_text(
        self, image_path: str, progress: ProgressCallback | None = None
    ) -> str:
        """Recognize all text on one sheet image, line by line."""
        ...


def create_backend(config: SuperstoreConfig) -> OCRBackend:
    """Create an OCR backend based on configuration."""
    backend_name = config.ocr.backend

    match backend_name:
        case "claude":
            from .claude import ClaudeOCRBackend

            return ClaudeOCRBackend(
                api_key=config.ocr.claude.api_key,
                model=config.ocr.claude.model,
            )
        case "easyocr":
            from .local import EasyOCRBackend

            return EasyOCRBackend(
                languages=config.ocr.easyocr.languages,
                gpu=config.ocr.easyocr.gpu,
            )
        case _:
            raise ValueError(
                f"Unknown OCR backend: {backend_name!r} "
                f"(choose claude or easyocr)"
            )


__all__ = [
    "OCRBackend",
    "ProgressCallback",
    "create_backend",
    "ExtractedItem",
    "OCRResult",
    "ValidationReport",
    "detect_form_type",
    "extract_employee",
    "extract_item_quantities",
    "extract_shift",
    "process_ocr_text",
    "validate_ocr_result",
]
