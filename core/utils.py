"""Utility functions for the document translation service."""

import secrets
from datetime import datetime
from pathlib import PurePosixPath
from typing import Optional

SUPPORTED_FORMATS = {'jpg', 'jpeg', 'png', 'webp', 'bmp', 'gif', 'heic', 'heif'}


def generate_request_id() -> str:
    """Generate a unique request ID.
    
    Format: req_{timestamp}_{random}
    
    Returns:
        str: Unique request identifier
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    random_str = secrets.token_hex(4)
    return f"req_{timestamp}_{random_str}"


def translated_key(image_key: str, prefix: Optional[str] = None) -> str:
    """Derive the storage key for a translated image.
    
    The prefix is prepended to the whole key, so ``images/a.jpg`` becomes
    ``translated-images/a.jpg``.
    
    Args:
        image_key: Key of the source image
        prefix: Key prefix (default from settings.TRANSLATED_PREFIX)
        
    Returns:
        str: Key of the translated image
    """
    if prefix is None:
        from core.config import settings
        prefix = settings.TRANSLATED_PREFIX
    return f"{prefix}{image_key}"


def get_extension(filename: str) -> str:
    """Return the lowercase extension of a filename or key, without the dot."""
    return PurePosixPath(filename).suffix[1:].lower()


def validate_image_format(extension: str) -> bool:
    """Validate that file extension is supported.
    
    Args:
        extension: File extension (without dot)
        
    Returns:
        bool: True if format is supported
    """
    return extension.lower() in SUPPORTED_FORMATS


def validate_payload_size(payload: bytes, max_size_mb: int) -> bool:
    """Validate that an in-memory payload is within size limits.
    
    Args:
        payload: Raw bytes
        max_size_mb: Maximum size in megabytes
        
    Returns:
        bool: True if payload is within limits
    """
    size_mb = len(payload) / (1024 * 1024)
    return size_mb <= max_size_mb
