"""Layout module: paragraph geometry extraction from OCR results."""

from layout.paragraph_extractor import ParagraphRecord, extract_paragraphs, paragraph_text, measure_glyph_height

__all__ = [
    'ParagraphRecord',
    'extract_paragraphs',
    'paragraph_text',
    'measure_glyph_height'
]
