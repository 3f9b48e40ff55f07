"""OCR module.

This module provides:
- Typed OCR hierarchy (pages, blocks, paragraphs, words, symbols)
- Google Cloud Vision document text detection client
"""

from ocr.schema import BoundingBox, Vertex, Symbol, Word, Paragraph, Block, Page, TextAnnotation
from ocr.vision_client import VisionOCRClient

__all__ = [
    'BoundingBox',
    'Vertex',
    'Symbol',
    'Word',
    'Paragraph',
    'Block',
    'Page',
    'TextAnnotation',
    'VisionOCRClient'
]
