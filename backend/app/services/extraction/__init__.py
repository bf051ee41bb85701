"""Document-field extraction from OCR text."""

from app.services.extraction.models import (
    DEFAULT_FIELD_LABELS,
    DEFAULT_SURNAME_PARTICLES,
    ExtractionConfig,
    ExtractionResult,
)
from app.services.extraction.service import DEFAULT_CONFIG, FieldExtractor, extract

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_FIELD_LABELS",
    "DEFAULT_SURNAME_PARTICLES",
    "ExtractionConfig",
    "ExtractionResult",
    "FieldExtractor",
    "extract",
]
