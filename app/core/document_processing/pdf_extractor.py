"""PDF text extractor.

Uses PyMuPDF (fitz) for native text extraction. Scanned PDFs without a
text layer extract to little or no text; there is no OCR fallback.
"""

import asyncio
from typing import Any

from app.core.document_processing.base import (
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    ExtractorRegistry,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

# Lazy import to avoid loading heavy libraries at module load
fitz = None


def _get_fitz():
    """Lazy load PyMuPDF."""
    global fitz
    if fitz is None:
        try:
            import fitz as _fitz
            fitz = _fitz
        except ImportError:
            raise ImportError(
                "PyMuPDF (fitz) is required for PDF extraction. "
                "Install with: pip install pymupdf"
            )
    return fitz


class PDFExtractor(BaseExtractor):
    """PDF document extractor backed by PyMuPDF."""

    def can_handle(self, mime_type: str, file_extension: str) -> bool:
        """Check if this extractor can handle the file."""
        return (
            mime_type == "application/pdf"
            or file_extension.lower() in (".pdf",)
        )

    async def extract(
        self,
        file_bytes: bytes,
        filename: str,
        **kwargs: Any,
    ) -> ExtractionResult:
        """Extract text from a PDF.

        Parsing runs in a worker thread so the event loop keeps serving
        other requests. Upload ceilings are enforced by the caller.

        Args:
            file_bytes: Raw PDF content
            filename: Original filename
            **kwargs: Unused

        Returns:
            ExtractionResult with the page texts joined by blank lines

        Raises:
            ExtractionError: If the bytes are not a readable PDF
        """
        if not file_bytes:
            raise ExtractionError("Empty PDF content", extractor="pdf")

        return await asyncio.to_thread(self._extract_sync, file_bytes, filename)

    def _extract_sync(self, file_bytes: bytes, filename: str) -> ExtractionResult:
        fitz_lib = _get_fitz()

        try:
            doc = fitz_lib.open(stream=file_bytes, filetype="pdf")
        except Exception as e:
            logger.error(f"PDF extraction failed for {filename}: {e}")
            raise ExtractionError(
                f"PDF extraction failed: {e}",
                extractor="pdf",
            ) from e

        try:
            page_count = len(doc)
            if page_count == 0:
                raise ExtractionError("PDF has no pages", extractor="pdf")

            page_texts: list[str] = []
            empty_pages = 0

            for page in doc:
                text = page.get_text("text")
                if not text.strip():
                    empty_pages += 1
                page_texts.append(text)
        except ExtractionError:
            raise
        except Exception as e:
            logger.error(f"PDF extraction failed for {filename}: {e}")
            raise ExtractionError(
                f"PDF extraction failed: {e}",
                extractor="pdf",
            ) from e
        finally:
            doc.close()

        raw_text = "\n\n".join(page_texts)
        word_count = len(raw_text.split())

        warnings: list[str] = []
        if page_count and empty_pages == page_count:
            warnings.append("No text layer found; the PDF may need OCR")

        logger.info(
            f"Extracted PDF {filename}: {page_count} pages, "
            f"{word_count} words, {empty_pages} empty pages"
        )

        return ExtractionResult(
            raw_text=raw_text,
            page_count=page_count,
            word_count=word_count,
            metadata={
                "filename": filename,
                "empty_pages": empty_pages,
            },
            warnings=warnings,
        )


# Register the extractor
ExtractorRegistry.register(PDFExtractor())
