"""Paragraph geometry extraction from a hierarchical OCR result.

Walks pages -> blocks -> paragraphs in source order and projects each
paragraph to a flat ``ParagraphRecord`` carrying its text, its bounding box
and an estimate of the native glyph height. The walk never re-sorts: the
position of a record in the returned list is the only link between a
paragraph and its translation downstream.
"""

from typing import List, Optional
from pydantic import BaseModel, Field
from core.logging import log
from ocr.schema import BoundingBox, Paragraph, TextAnnotation


class ParagraphRecord(BaseModel):
    """One paragraph region in document reading order."""
    index: int
    text: str
    bounding_box: BoundingBox
    glyph_height: int = Field(gt=0)
    translated_text: Optional[str] = None


def paragraph_text(paragraph: Paragraph) -> str:
    """Words joined by single spaces, each word its symbols concatenated."""
    return " ".join(word.text for word in paragraph.words)


def measure_glyph_height(paragraph: Paragraph) -> Optional[int]:
    """Height of the first symbol of the first word.

    Returns:
        Bottom-edge y minus top-edge y of that symbol's box, or None when the
        paragraph has no words, the first word has no symbols, or the symbol
        has no bounding box.
    """
    if not paragraph.words or not paragraph.words[0].symbols:
        return None
    box = paragraph.words[0].symbols[0].bounding_box
    if box is None:
        return None
    return box.vertices[2].y - box.vertices[0].y


def extract_paragraphs(annotation: TextAnnotation,
                       default_glyph_height: Optional[int] = None,
                       fallback_glyph_height: int = 16) -> List[ParagraphRecord]:
    """Project an OCR result onto ordered paragraph records.

    Args:
        annotation: OCR hierarchy
        default_glyph_height: Glyph height for paragraphs whose first word has
            no measurable symbol. When None such paragraphs are skipped.
        fallback_glyph_height: Replaces a measured height that is not positive
            (degenerate symbol box).

    Returns:
        List[ParagraphRecord]: One record per kept paragraph, page -> block ->
        paragraph order.
    """
    records = []
    seen = 0

    for page_idx, page in enumerate(annotation.pages):
        for block_idx, block in enumerate(page.blocks):
            for para_idx, paragraph in enumerate(block.paragraphs):
                seen += 1
                where = f"page {page_idx} block {block_idx} paragraph {para_idx}"

                glyph_height = measure_glyph_height(paragraph)
                if glyph_height is None:
                    if default_glyph_height is None:
                        log.debug(f"Skipping {where}: no symbols to measure")
                        continue
                    glyph_height = default_glyph_height
                elif glyph_height <= 0:
                    log.debug(f"Degenerate glyph height {glyph_height} at {where}, using {fallback_glyph_height}")
                    glyph_height = fallback_glyph_height

                # Newline is the segment separator for joined translation
                text = paragraph_text(paragraph).replace("\r", " ").replace("\n", " ")
                if not text.strip():
                    log.debug(f"Skipping {where}: empty text")
                    continue

                records.append(ParagraphRecord(
                    index=len(records),
                    text=text,
                    bounding_box=paragraph.bounding_box,
                    glyph_height=glyph_height,
                ))

    log.info(f"Extracted {len(records)} paragraph(s) from {seen} OCR paragraph(s)")
    return records
