"""Document processing package for extracting text from uploaded documents.

Usage:
    from app.core.document_processing import (
        ExtractionResult,
        ExtractionError,
        get_extractor,
    )
"""

from app.core.document_processing.base import (
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    ExtractorRegistry,
    get_extractor,
)

# Import extractors to register them
from app.core.document_processing import pdf_extractor  # noqa: F401
from app.core.document_processing.pdf_extractor import PDFExtractor

__all__ = [
    "BaseExtractor",
    "ExtractionError",
    "ExtractionResult",
    "ExtractorRegistry",
    "PDFExtractor",
    "get_extractor",
]
