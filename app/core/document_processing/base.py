"""Base extractor interface and registry for document processing.

Defines the contract that document extractors implement, plus a registry
for extractor selection based on file type.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from app.core.errors import RelayError


@dataclass
class ExtractionResult:
    """Result of document extraction."""

    raw_text: str
    """Full concatenated text, before normalization."""

    page_count: int
    """Total number of pages."""

    word_count: int = 0
    """Total word count across all pages."""

    metadata: dict[str, Any] = field(default_factory=dict)
    """Additional extraction metadata (filename, empty pages, etc.)."""

    warnings: list[str] = field(default_factory=list)
    """Any warnings during extraction (pages without a text layer, etc.)."""


class BaseExtractor(ABC):
    """Base class for document extractors."""

    @abstractmethod
    def can_handle(self, mime_type: str, file_extension: str) -> bool:
        """Check if this extractor can handle the given file type.

        Args:
            mime_type: MIME type of the file (e.g., 'application/pdf')
            file_extension: File extension including dot (e.g., '.pdf')

        Returns:
            True if this extractor can handle the file type
        """
        pass

    @abstractmethod
    async def extract(
        self,
        file_bytes: bytes,
        filename: str,
        **kwargs: Any,
    ) -> ExtractionResult:
        """Extract text from a document.

        Args:
            file_bytes: Raw file content
            filename: Original filename (used in logs and metadata)
            **kwargs: Extractor-specific options

        Returns:
            ExtractionResult with raw text and metadata

        Raises:
            ExtractionError: If extraction fails
        """
        pass


class ExtractionError(RelayError):
    """Raised when document extraction fails."""

    def __init__(self, message: str, extractor: str = None):
        super().__init__(message)
        self.extractor = extractor


class ExtractorRegistry:
    """Registry for document extractors."""

    _extractors: list[BaseExtractor] = []

    @classmethod
    def register(cls, extractor: BaseExtractor) -> None:
        """Register an extractor."""
        cls._extractors.append(extractor)

    @classmethod
    def get_extractor(
        cls,
        mime_type: str = None,
        file_extension: str = None,
    ) -> Optional[BaseExtractor]:
        """Get appropriate extractor for file type, or None if no match."""
        for extractor in cls._extractors:
            if extractor.can_handle(mime_type or "", file_extension or ""):
                return extractor
        return None


def get_extractor(
    mime_type: str = None,
    file_extension: str = None,
) -> Optional[BaseExtractor]:
    """Convenience function to get extractor from registry."""
    return ExtractorRegistry.get_extractor(mime_type, file_extension)
