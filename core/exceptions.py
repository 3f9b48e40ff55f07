"""Error taxonomy for the translate-and-render pipeline.

Each error names the pipeline ``stage`` it was raised in. Stages fail fast:
nothing raised here is ever accompanied by a partial result.
"""

from typing import Optional


class DocumentTranslationError(Exception):
    """Base class for all pipeline failures."""
    
    stage = "pipeline"
    
    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class SourceReadError(DocumentTranslationError):
    """Image bytes could not be fetched from object storage."""
    
    stage = "storage_read"


class DetectionError(DocumentTranslationError):
    """OCR call failed or returned no text."""
    
    stage = "ocr"


class TranslationError(DocumentTranslationError):
    """Translation call failed."""
    
    stage = "translation"


class AlignmentMismatch(TranslationError):
    """Translation segment count differs from the paragraph count sent."""
    
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Translation returned {actual} segments for {expected} paragraphs"
        )
        self.expected = expected
        self.actual = actual


class RenderError(DocumentTranslationError):
    """Surface decode, compositing or encoding failed."""
    
    stage = "render"


class PersistError(DocumentTranslationError):
    """Write-back of the rendered image to storage failed."""
    
    stage = "storage_write"


class ServiceTimeout(DocumentTranslationError):
    """An external call did not finish within its deadline."""
    
    def __init__(self, service: str, timeout: float):
        super().__init__(f"{service} call exceeded deadline of {timeout:.1f}s")
        self.service = service
        self.timeout = timeout
        self.stage = service
