"""In-memory cache for the knowledge-base reference document.

Holds the extracted text of at most one document per process. Loading a
document replaces the previous one entirely.

There is no locking: each load swaps in a new immutable ``CachedDocument``
with a single assignment, so concurrent loads are last-write-wins in order
of completion and an in-flight chat request sees either the old or the new
text, never a mix.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from app.core.config import get_settings
from app.core.document_processing import ExtractionError, get_extractor
from app.core.errors import MissingInputError, PayloadTooLargeError
from app.core.logging import get_logger

logger = get_logger(__name__)

_TRAILING_SPACE_RE = re.compile(r"[ \t]+\n")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class CachedDocument:
    """Extracted text of the current reference document."""

    text: str = ""
    source: str | None = None
    loaded_at: datetime | None = None

    @property
    def length(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a successful document load."""

    char_count: int
    preview: str
    page_count: int = 0
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CacheStatus:
    loaded: bool
    char_count: int


def normalize_text(raw: str) -> str:
    """
    Normalize extracted document text.

    Strips NUL bytes, drops spaces and tabs before line breaks, collapses
    runs of three or more newlines to a single blank line and trims the
    result.

    Args:
        raw: Text as returned by the extractor

    Returns:
        Normalized text
    """
    text = (raw or "").replace("\x00", "")
    text = _TRAILING_SPACE_RE.sub("\n", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.strip()


class DocumentCache:
    """Process-wide slot holding the reference document text."""

    def __init__(self) -> None:
        self._document = CachedDocument()

    @property
    def document(self) -> CachedDocument:
        return self._document

    @property
    def text(self) -> str:
        return self._document.text

    async def load(self, file_bytes: bytes, filename: str = "document.pdf") -> LoadResult:
        """
        Extract, normalize and cache a document, replacing the current one.

        Args:
            file_bytes: Raw PDF content
            filename: Original filename (for logs)

        Returns:
            LoadResult with the cached char count and a short preview

        Raises:
            MissingInputError: If no bytes were supplied
            PayloadTooLargeError: If the document exceeds MAX_KB_UPLOAD_BYTES
            ExtractionError: If the bytes are not a readable PDF
        """
        if not file_bytes:
            raise MissingInputError("No document content supplied")

        settings = get_settings()
        if len(file_bytes) > settings.MAX_KB_UPLOAD_BYTES:
            raise PayloadTooLargeError(len(file_bytes), settings.MAX_KB_UPLOAD_BYTES)

        extractor = get_extractor(mime_type="application/pdf", file_extension=".pdf")
        if extractor is None:
            raise ExtractionError("No PDF extractor registered", extractor="pdf")

        result = await extractor.extract(file_bytes, filename)
        text = normalize_text(result.raw_text)

        self._document = CachedDocument(
            text=text,
            source=filename,
            loaded_at=datetime.now(timezone.utc),
        )

        if not text:
            logger.warning(f"Document {filename} loaded but has no text (missing OCR?)")
        else:
            logger.info(f"Document cached: {len(text)} chars from {filename}")

        return LoadResult(
            char_count=len(text),
            preview=text[: settings.KB_PREVIEW_CHARS],
            page_count=result.page_count,
            warnings=list(result.warnings),
        )

    async def load_from_path(self, path: str | Path) -> None:
        """
        Best-effort load of a document from disk.

        Failures are logged and swallowed; the cache keeps its prior value.

        Args:
            path: Filesystem path of the PDF
        """
        path = Path(path)
        try:
            file_bytes = path.read_bytes()
            await self.load(file_bytes, filename=str(path))
        except Exception as e:
            logger.error(f"Could not preload document from {path}: {e}")

    def status(self) -> CacheStatus:
        """Report whether a non-empty document is cached and its size."""
        document = self._document
        return CacheStatus(loaded=document.length > 0, char_count=document.length)

    def clear(self) -> None:
        """Drop the cached document. Always succeeds."""
        self._document = CachedDocument()
        logger.info("Document cache cleared")


# Global document cache instance
document_cache = DocumentCache()
