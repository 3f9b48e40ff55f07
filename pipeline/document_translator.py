"""Document translation pipeline - main orchestrator.

This module orchestrates the complete translate-and-render flow:
1. Decode image bytes into a drawable RGB surface (the base layer)
2. OCR (document text detection)
3. Paragraph geometry extraction
4. Translation of all paragraphs in one batch
5. Compositing of the translations into their regions
6. JPEG encoding, and optionally persistence under ``translated-<key>``

Every stage fails fast. Nothing is persisted unless rendering and encoding
succeeded.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from core.config import settings
from core.deadline import call_with_deadline
from core.exceptions import DocumentTranslationError, RenderError
from core.logging import request_logger
from core.utils import generate_request_id, translated_key
from ingestion.file_handler import FileHandler
from layout.paragraph_extractor import ParagraphRecord, extract_paragraphs
from rendering.compositor import RegionCompositor
from storage.object_store import ObjectStore
from translation.adapter import TranslationAdapter, Translator


@dataclass
class TranslationResult:
    """Outcome of translating a stored image."""
    image_bytes: bytes
    source_key: str
    translated_key: str
    persisted: bool
    paragraphs: List[ParagraphRecord] = field(default_factory=list)
    persist_error: Optional[DocumentTranslationError] = None


class DocumentTranslationPipeline:
    """Translate the text of a document image in place."""

    def __init__(self,
                 ocr_client,
                 translator: Translator,
                 store: Optional[ObjectStore] = None,
                 compositor: Optional[RegionCompositor] = None,
                 target_language: Optional[str] = None,
                 translation_mode: Optional[str] = None,
                 jpeg_quality: Optional[int] = None,
                 empty_paragraph_policy: Optional[str] = None,
                 default_glyph_height: Optional[int] = None,
                 storage_timeout: Optional[float] = None):
        """Initialize pipeline.

        Args:
            ocr_client: Object with ``detect(bytes) -> TextAnnotation``
            translator: Translation backend
            store: Object store for ``translate_stored`` (optional)
            compositor: Region compositor (default built from settings)
            target_language: Default target language code
            translation_mode: joined | batch | per_paragraph
            jpeg_quality: Output JPEG quality
            empty_paragraph_policy: 'skip' or 'default_height' for paragraphs
                without a measurable first symbol
            default_glyph_height: Glyph height used by 'default_height' and for
                degenerate symbol boxes
            storage_timeout: Deadline for storage calls in seconds
        """
        self.ocr_client = ocr_client
        self.adapter = TranslationAdapter(translator, mode=translation_mode)
        self.store = store
        self.compositor = compositor or RegionCompositor()
        self.target_language = target_language or settings.TARGET_LANGUAGE
        self.jpeg_quality = jpeg_quality or settings.JPEG_QUALITY
        self.empty_paragraph_policy = empty_paragraph_policy or settings.EMPTY_PARAGRAPH_POLICY
        if self.empty_paragraph_policy not in ("skip", "default_height"):
            raise ValueError(f"Unknown empty paragraph policy: {self.empty_paragraph_policy}")
        self.default_glyph_height = default_glyph_height or settings.DEFAULT_GLYPH_HEIGHT
        self.storage_timeout = storage_timeout if storage_timeout is not None else settings.STORAGE_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls) -> "DocumentTranslationPipeline":
        """Build the production pipeline: Cloud Vision, Cloud Translation, configured store."""
        from ocr.vision_client import VisionOCRClient
        from storage.object_store import get_object_store
        from translation.google_translator import GoogleTranslator

        return cls(
            ocr_client=VisionOCRClient(),
            translator=GoogleTranslator(),
            store=get_object_store(),
        )

    def extract(self, image_bytes: bytes) -> List[ParagraphRecord]:
        """OCR and paragraph extraction only."""
        annotation = self.ocr_client.detect(image_bytes)
        default_height = self.default_glyph_height if self.empty_paragraph_policy == "default_height" else None
        return extract_paragraphs(
            annotation,
            default_glyph_height=default_height,
            fallback_glyph_height=self.default_glyph_height,
        )

    def render(self,
               image_bytes: bytes,
               target_language: Optional[str] = None,
               request_id: Optional[str] = None) -> Tuple[bytes, List[ParagraphRecord]]:
        """Run the full flow and return the encoded JPEG with the translated records."""
        request_id = request_id or generate_request_id()
        log = request_logger(request_id)
        target_language = target_language or self.target_language

        log.info(f"Translating document ({len(image_bytes)} bytes) to '{target_language}'")

        # Step 1: Decode the base layer
        surface = FileHandler.load_image(image_bytes)

        # Step 2-3: OCR and extraction
        records = self.extract(image_bytes)

        # Step 4: Translation
        records = self.adapter.translate_paragraphs(records, target_language)

        # Step 5: Compositing
        try:
            self.compositor.composite(surface, records)
        except DocumentTranslationError:
            raise
        except Exception as e:
            log.error(f"Compositing failed: {str(e)}")
            raise RenderError(f"Compositing failed: {str(e)}", cause=e)

        # Step 6: Encoding
        output = FileHandler.encode_jpeg(surface, quality=self.jpeg_quality)
        log.info(f"Rendered {len(records)} paragraph(s) into {len(output)} byte JPEG")
        return output, records

    def translate_document(self, image_bytes: bytes, target_language: Optional[str] = None) -> bytes:
        """Translate a document image and return the encoded JPEG.

        Raises:
            DetectionError, TranslationError, AlignmentMismatch, RenderError,
            ServiceTimeout
        """
        output, _ = self.render(image_bytes, target_language)
        return output

    def translate_stored(self, image_key: str, target_language: Optional[str] = None) -> TranslationResult:
        """Translate an image from object storage and store the result.

        The result is written under ``translated_key(image_key)``. A failed
        write does not discard the rendered image: the result comes back with
        ``persisted=False`` and the write error attached: ``PersistError`` when
        the store rejected the write, ``ServiceTimeout`` when it missed its
        deadline.

        Raises:
            SourceReadError: If the source image cannot be read
            DetectionError, TranslationError, AlignmentMismatch, RenderError,
            ServiceTimeout
        """
        if self.store is None:
            raise ValueError("No object store configured for this pipeline")

        request_id = generate_request_id()
        log = request_logger(request_id)
        output_key = translated_key(image_key)

        image_bytes = call_with_deadline(self.store.read, image_key,
                                         service="storage", timeout=self.storage_timeout)
        output, records = self.render(image_bytes, target_language, request_id=request_id)

        result = TranslationResult(
            image_bytes=output,
            source_key=image_key,
            translated_key=output_key,
            persisted=False,
            paragraphs=records,
        )
        try:
            call_with_deadline(self.store.write, output_key, output, "image/jpeg",
                               service="storage", timeout=self.storage_timeout)
            result.persisted = True
        except DocumentTranslationError as e:
            log.error(f"Rendered image could not be stored under '{output_key}': {e.message}")
            result.persist_error = e

        log.info(f"Translated '{image_key}' -> '{output_key}' (persisted: {result.persisted})")
        return result
