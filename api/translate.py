"""Document translation endpoints."""

from functools import lru_cache
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool
from core.config import settings
from core.exceptions import (
    AlignmentMismatch,
    DetectionError,
    DocumentTranslationError,
    RenderError,
    ServiceTimeout,
    SourceReadError,
    TranslationError,
)
from core.logging import log
from core.utils import get_extension, validate_image_format, validate_payload_size
from pipeline.document_translator import DocumentTranslationPipeline

router = APIRouter(prefix="/api", tags=["translate"])


class DocumentTranslateRequest(BaseModel):
    """Request model for translating a stored image."""
    image_name: str
    target_language: Optional[str] = None


class ParagraphsResponse(BaseModel):
    """Response model for paragraph extraction."""
    paragraphs: List[Dict[str, Any]]
    total_paragraphs: int


@lru_cache(maxsize=1)
def get_pipeline() -> DocumentTranslationPipeline:
    """Shared pipeline instance (provider clients are thread-safe)."""
    return DocumentTranslationPipeline.from_settings()


# Ordered: subclasses before their parents
ERROR_STATUS = [
    (SourceReadError, 404),
    (DetectionError, 422),
    (AlignmentMismatch, 502),
    (TranslationError, 502),
    (ServiceTimeout, 504),
    (RenderError, 500),
]


def to_http_exception(error: DocumentTranslationError) -> HTTPException:
    """Map a pipeline error to an HTTP error response."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=f"{error.stage}: {error.message}")
    return HTTPException(status_code=500, detail=f"{error.stage}: {error.message}")


async def read_upload(file: UploadFile) -> bytes:
    """Read and validate an uploaded image."""
    extension = get_extension(file.filename or "")
    if not validate_image_format(extension):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format: {extension or 'none'}"
        )

    content = await file.read()
    if not content:
        raise HTTPException(status_code=400, detail="Uploaded file is empty")
    if not validate_payload_size(content, settings.MAX_FILE_SIZE_MB):
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Maximum size: {settings.MAX_FILE_SIZE_MB}MB"
        )
    return content


@router.post("/translate/document")
async def translate_document(request: DocumentTranslateRequest,
                             pipeline: DocumentTranslationPipeline = Depends(get_pipeline)):
    """Translate a stored image and store the result.

    The rendered image is written under ``translated-<image_name>`` and
    returned as JPEG.

    Args:
        request: Stored image name and optional target language

    Returns:
        Response: image/jpeg body; ``X-Translated-Key`` header, plus
        ``X-Persist-Error`` when the result could not be stored

    Raises:
        HTTPException: If any pipeline stage fails
    """
    try:
        result = await run_in_threadpool(
            pipeline.translate_stored, request.image_name, request.target_language
        )
    except DocumentTranslationError as e:
        raise to_http_exception(e)
    except Exception as e:
        log.error(f"Document translation error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to translate document: {str(e)}"
        )

    headers = {"X-Translated-Key": result.translated_key}
    if not result.persisted and result.persist_error is not None:
        error = result.persist_error
        headers["X-Persist-Error"] = f"{type(error).__name__}: {error.message}"

    return Response(content=result.image_bytes, media_type="image/jpeg", headers=headers)


@router.post("/translate/upload")
async def translate_upload(file: UploadFile = File(...),
                           target_language: Optional[str] = Form(None),
                           pipeline: DocumentTranslationPipeline = Depends(get_pipeline)):
    """Translate an uploaded image and return the result without storing it.

    Args:
        file: Uploaded image
        target_language: Optional target language code

    Returns:
        Response: image/jpeg body

    Raises:
        HTTPException: If the upload is invalid or any pipeline stage fails
    """
    content = await read_upload(file)

    try:
        output = await run_in_threadpool(pipeline.translate_document, content, target_language)
    except DocumentTranslationError as e:
        raise to_http_exception(e)
    except Exception as e:
        log.error(f"Upload translation error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to translate upload: {str(e)}"
        )

    log.info(f"Translated upload {file.filename} ({len(output)} bytes)")
    return Response(content=output, media_type="image/jpeg")


@router.post("/translate/paragraphs", response_model=ParagraphsResponse)
async def extract_paragraphs(file: UploadFile = File(...),
                             pipeline: DocumentTranslationPipeline = Depends(get_pipeline)):
    """Return the paragraph records extracted from an uploaded image.

    Debug endpoint: runs OCR and extraction only.
    """
    content = await read_upload(file)

    try:
        records = await run_in_threadpool(pipeline.extract, content)
    except DocumentTranslationError as e:
        raise to_http_exception(e)
    except Exception as e:
        log.error(f"Paragraph extraction error: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to extract paragraphs: {str(e)}"
        )

    return ParagraphsResponse(
        paragraphs=[record.model_dump() for record in records],
        total_paragraphs=len(records),
    )
