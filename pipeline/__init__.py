"""Document translation pipeline (OCR -> extraction -> translation -> compositing)."""

from pipeline.document_translator import DocumentTranslationPipeline, TranslationResult

__all__ = [
    'DocumentTranslationPipeline',
    'TranslationResult'
]
