"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Dict, Any
from core.config import settings
from ingestion.file_handler import HEIF_AVAILABLE
from ocr.vision_client import VISION_AVAILABLE
from storage.object_store import GCS_AVAILABLE
from translation.google_translator import TRANSLATE_AVAILABLE

router = APIRouter(prefix="/api", tags=["health"])


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    version: str
    dependencies: Dict[str, Any]


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint.
    
    Returns:
        HealthResponse: System status and dependency checks
    """
    dependencies = {
        "vision": "available" if VISION_AVAILABLE else "unavailable",
        "translate": "available" if TRANSLATE_AVAILABLE else "unavailable",
        "gcs": "available" if GCS_AVAILABLE else "unavailable",
        "heif": "available" if HEIF_AVAILABLE else "unavailable",
        "storage_backend": settings.STORAGE_BACKEND,
        "target_language": settings.TARGET_LANGUAGE,
    }
    
    return HealthResponse(
        status="healthy",
        version="1.0.0",
        dependencies=dependencies,
    )
