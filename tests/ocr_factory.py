"""Builders for OCR hierarchies and test doubles used across the test suite."""

from typing import List, Optional
import numpy as np
from PIL import Image
from core.exceptions import PersistError, ServiceTimeout
from ocr.schema import Block, BoundingBox, Page, Paragraph, Symbol, TextAnnotation, Word
from storage.object_store import LocalObjectStore
from translation.adapter import Translator


def make_word(text: str, x: int = 0, y: int = 0, char_width: int = 10, height: int = 20) -> Word:
    """A word whose symbols sit side by side, each ``char_width`` x ``height``."""
    symbols = [
        Symbol(
            text=char,
            bounding_box=BoundingBox.from_rect(x + i * char_width, y, x + (i + 1) * char_width, y + height),
        )
        for i, char in enumerate(text)
    ]
    return Word(
        symbols=symbols,
        bounding_box=BoundingBox.from_rect(x, y, x + len(text) * char_width, y + height),
    )


def make_paragraph(text: str, box=(0, 0, 100, 30), glyph_height: int = 20) -> Paragraph:
    """A paragraph of space-separated words placed at the top-left of ``box``."""
    x1, y1 = box[0], box[1]
    words = []
    cursor = x1
    for token in text.split():
        words.append(make_word(token, x=cursor, y=y1, height=glyph_height))
        cursor += (len(token) + 1) * 10
    return Paragraph(words=words, bounding_box=BoundingBox.from_rect(*box))


def make_annotation(pages: List[List[List[Paragraph]]]) -> TextAnnotation:
    """pages -> blocks -> paragraphs."""
    return TextAnnotation(
        text="\n".join(
            " ".join(word.text for word in paragraph.words)
            for page in pages for block in page for paragraph in block
        ),
        pages=[
            Page(blocks=[Block(paragraphs=list(block)) for block in page])
            for page in pages
        ],
    )


def image_to_array(image: Image.Image) -> np.ndarray:
    """Pixels of an image as an RGB array."""
    return np.array(image.convert('RGB'))


class FixedWidthFont:
    """Font stand-in where every character has the same advance."""

    def __init__(self, char_width: float = 12):
        self.char_width = char_width

    def getlength(self, text: str) -> float:
        return len(text) * self.char_width


class WidthTableFont:
    """Font stand-in with per-character advances."""

    def __init__(self, widths: dict, default: float = 10):
        self.widths = widths
        self.default = default

    def getlength(self, text: str) -> float:
        return sum(self.widths.get(char, self.default) for char in text)


class FakeOCR:
    """OCR client returning a canned annotation, or raising a canned error."""

    def __init__(self, annotation: Optional[TextAnnotation] = None, error: Optional[Exception] = None):
        self.annotation = annotation
        self.error = error
        self.calls = 0

    def detect(self, image_bytes: bytes) -> TextAnnotation:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.annotation


class DictTranslator(Translator):
    """Translator mapping each line through a dictionary (unknown lines upper-cased)."""

    def __init__(self, mapping: Optional[dict] = None):
        self.mapping = mapping or {}
        self.requests = []

    def translate_text(self, text: str, target_language: str) -> str:
        self.requests.append((text, target_language))
        return "\n".join(self.mapping.get(line, line.upper()) for line in text.split("\n"))


class FailingWriteStore(LocalObjectStore):
    """Local store whose writes are rejected."""

    def write(self, key, data, content_type="image/jpeg"):
        raise PersistError(f"bucket unavailable for {key}")


class TimedOutWriteStore(LocalObjectStore):
    """Local store whose writes miss their deadline."""

    def write(self, key, data, content_type="image/jpeg"):
        raise ServiceTimeout("storage", 5)
