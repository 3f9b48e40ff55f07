"""Google Cloud Vision document text detection.

Wraps ``ImageAnnotatorClient.document_text_detection`` and converts the
response into the local ``TextAnnotation`` model.
"""

from typing import Optional
from pydantic import ValidationError
from core.config import settings
from core.deadline import call_with_deadline
from core.exceptions import DetectionError, ServiceTimeout
from core.logging import log
from ocr.schema import TextAnnotation

# Optional Google Cloud Vision import
try:
    from google.api_core import exceptions as google_exceptions
    from google.cloud import vision
    VISION_AVAILABLE = True
except ImportError:
    VISION_AVAILABLE = False
    log.warning("google-cloud-vision not installed. Text detection will be unavailable.")


class VisionOCRClient:
    """Document text detection backed by Google Cloud Vision."""

    def __init__(self, client=None, timeout: Optional[float] = None):
        """Initialize the OCR client.

        Args:
            client: Preconfigured ImageAnnotatorClient (created lazily if None)
            timeout: Deadline in seconds (default from settings.OCR_TIMEOUT_SECONDS)
        """
        self._client = client
        self.timeout = timeout if timeout is not None else settings.OCR_TIMEOUT_SECONDS

    @property
    def client(self):
        if self._client is None:
            if not VISION_AVAILABLE:
                raise DetectionError("google-cloud-vision is not installed. Install it with: pip install google-cloud-vision")
            log.info("Initializing Google Cloud Vision client...")
            self._client = vision.ImageAnnotatorClient()
        return self._client

    def detect(self, image_bytes: bytes) -> TextAnnotation:
        """Run document text detection on raw image bytes.

        Args:
            image_bytes: Encoded image

        Returns:
            TextAnnotation: Hierarchical OCR result

        Raises:
            DetectionError: If the call fails or no text was found
            ServiceTimeout: If the call exceeds its deadline
        """
        client = self.client
        log.info(f"Running document text detection ({len(image_bytes)} bytes)...")

        try:
            response = call_with_deadline(
                client.document_text_detection,
                image={"content": image_bytes},
                timeout=self.timeout,
                service="ocr",
            )
        except ServiceTimeout:
            raise
        except Exception as e:
            if VISION_AVAILABLE and isinstance(e, google_exceptions.DeadlineExceeded):
                raise ServiceTimeout("ocr", self.timeout)
            log.error(f"Text detection failed: {str(e)}")
            raise DetectionError(f"Text detection failed: {str(e)}", cause=e)

        if response.error.message:
            log.error(f"Vision API error: {response.error.message}")
            raise DetectionError(f"Vision API error: {response.error.message}")

        try:
            annotation = TextAnnotation.from_vision(response.full_text_annotation)
        except ValidationError as e:
            raise DetectionError(f"Malformed text detection result: {str(e)}", cause=e)

        if annotation.is_empty:
            log.warning("Text detection returned no text")
            raise DetectionError("No text detected in image")

        log.info(f"Text detection found {annotation.paragraph_count} paragraphs "
                 f"across {len(annotation.pages)} page(s)")
        return annotation
