"""Typed model of a hierarchical OCR result.

Mirrors the ``fullTextAnnotation`` structure returned by document text
detection: pages -> blocks -> paragraphs -> words -> symbols. Paragraphs,
words and symbols carry a 4-vertex bounding box; symbols carry one character.

Instances can be built from a Vision API response (``from_vision``) or from a
JSON/dict payload of the same shape (camelCase or snake_case keys).
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class Vertex(BaseModel):
    """Pixel coordinate. Coordinates omitted by the provider are 0."""
    x: int = 0
    y: int = 0


class BoundingBox(BaseModel):
    """Four vertices, clockwise from top-left.

    Treated as the axis-aligned rectangle spanned by ``vertices[0]``
    (top-left) and ``vertices[2]`` (bottom-right).
    """
    vertices: List[Vertex] = Field(min_length=4, max_length=4)

    @classmethod
    def from_rect(cls, x1: int, y1: int, x2: int, y2: int) -> "BoundingBox":
        return cls(vertices=[
            Vertex(x=x1, y=y1),
            Vertex(x=x2, y=y1),
            Vertex(x=x2, y=y2),
            Vertex(x=x1, y=y2),
        ])

    @property
    def x1(self) -> int:
        return self.vertices[0].x

    @property
    def y1(self) -> int:
        return self.vertices[0].y

    @property
    def x2(self) -> int:
        return self.vertices[2].x

    @property
    def y2(self) -> int:
        return self.vertices[2].y

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1


class _OCRNode(BaseModel):
    class Config:
        populate_by_name = True
        extra = "ignore"


class Symbol(_OCRNode):
    text: str = ""
    bounding_box: Optional[BoundingBox] = Field(default=None, alias="boundingBox")


class Word(_OCRNode):
    symbols: List[Symbol] = []
    bounding_box: Optional[BoundingBox] = Field(default=None, alias="boundingBox")

    @property
    def text(self) -> str:
        return "".join(symbol.text for symbol in self.symbols)


class Paragraph(_OCRNode):
    words: List[Word] = []
    bounding_box: BoundingBox = Field(alias="boundingBox")


class Block(_OCRNode):
    paragraphs: List[Paragraph] = []
    bounding_box: Optional[BoundingBox] = Field(default=None, alias="boundingBox")


class Page(_OCRNode):
    blocks: List[Block] = []
    width: int = 0
    height: int = 0


class TextAnnotation(_OCRNode):
    """Root of the OCR hierarchy."""
    pages: List[Page] = []
    text: str = ""

    @property
    def paragraph_count(self) -> int:
        return sum(len(block.paragraphs) for page in self.pages for block in page.blocks)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip() and self.paragraph_count == 0

    @classmethod
    def from_vision(cls, annotation: Any) -> "TextAnnotation":
        """Build from a ``google.cloud.vision.TextAnnotation`` message."""
        return cls(
            text=annotation.text or "",
            pages=[
                Page(
                    width=page.width,
                    height=page.height,
                    blocks=[
                        Block(
                            bounding_box=_box_from_vision(block.bounding_box),
                            paragraphs=[
                                Paragraph(
                                    bounding_box=_box_from_vision(paragraph.bounding_box),
                                    words=[
                                        Word(
                                            bounding_box=_box_from_vision(word.bounding_box),
                                            symbols=[
                                                Symbol(
                                                    text=symbol.text,
                                                    bounding_box=_box_from_vision(symbol.bounding_box),
                                                )
                                                for symbol in word.symbols
                                            ],
                                        )
                                        for word in paragraph.words
                                    ],
                                )
                                for paragraph in block.paragraphs
                            ],
                        )
                        for block in page.blocks
                    ],
                )
                for page in annotation.pages
            ],
        )


def _box_from_vision(poly: Any) -> Optional[BoundingBox]:
    vertices = list(poly.vertices) if poly is not None else []
    if len(vertices) != 4:
        return None
    return BoundingBox(vertices=[Vertex(x=v.x, y=v.y) for v in vertices])
