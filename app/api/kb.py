"""API endpoints for the knowledge-base reference document."""

import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.core.config import get_settings
from app.core.document_cache import document_cache
from app.core.document_processing import ExtractionError
from app.core.errors import MissingInputError, PayloadTooLargeError
from app.core.logging import get_logger, log_with_context
from app.core.schemas_relay import KbStatusResponse, KbUploadResponse, OkResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/kb", tags=["kb"])

MISSING_FILE_DETAIL = "Missing file (field 'file')."


@router.post("/upload", response_model=KbUploadResponse)
async def upload_document(file: UploadFile | None = File(default=None)) -> KbUploadResponse:
    """Upload a PDF and make it the current reference document.

    Raises:
        HTTPException 400: If no file was sent
        HTTPException 413: If the file exceeds MAX_KB_UPLOAD_BYTES
        HTTPException 500: If the PDF cannot be processed
    """
    if file is None:
        raise HTTPException(status_code=400, detail=MISSING_FILE_DETAIL)

    settings = get_settings()
    if file.size is not None and file.size > settings.MAX_KB_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="File too large")

    try:
        file_bytes = await file.read()
        result = await document_cache.load(file_bytes, filename=file.filename or "document.pdf")
    except MissingInputError as e:
        raise HTTPException(status_code=400, detail=MISSING_FILE_DETAIL) from e
    except PayloadTooLargeError as e:
        raise HTTPException(status_code=413, detail="File too large") from e
    except ExtractionError as e:
        logger.exception(f"[/kb/upload] extraction failed for {file.filename}")
        raise HTTPException(status_code=500, detail="Error processing the PDF") from e
    except Exception as e:
        logger.exception("[/kb/upload] error")
        raise HTTPException(status_code=500, detail="Error processing the PDF") from e

    log_with_context(
        logger,
        logging.INFO,
        "Reference document uploaded",
        filename=file.filename,
        pages=result.page_count,
        chars=result.char_count,
    )
    for warning in result.warnings:
        logger.warning(f"[/kb/upload] {file.filename}: {warning}")

    return KbUploadResponse(ok=True, chars=result.char_count, preview=result.preview)


@router.get("/status", response_model=KbStatusResponse)
async def get_status() -> KbStatusResponse:
    """Report whether a reference document is cached."""
    status = document_cache.status()
    return KbStatusResponse(loaded=status.loaded, chars=status.char_count)


@router.post("/clear", response_model=OkResponse)
async def clear_document() -> OkResponse:
    """Drop the cached reference document."""
    document_cache.clear()
    return OkResponse(ok=True)
