"""Region compositor - re-renders translated paragraphs into their boxes.

For each paragraph, in extraction order:
1. Font size = paragraph glyph height
2. Greedy character-wise wrapping to the box width
3. Opaque white fill over the original box
4. Lines drawn top to bottom, baseline of line k at y1 + k * line_pitch
5. Lines whose baseline would fall below the box bottom are dropped
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
from PIL import Image, ImageDraw, ImageFont
from core.config import settings
from core.logging import log
from layout.paragraph_extractor import ParagraphRecord
from ocr.schema import BoundingBox
from rendering.fonts import FontLoader

LINE_PITCH_MODES = ("fixed", "glyph")
BACKGROUND_COLOR = "white"
TEXT_COLOR = "black"


@dataclass
class PlacedLine:
    text: str
    x: int
    baseline: int


@dataclass
class RegionLayout:
    """Where one paragraph's lines go inside its box."""
    index: int
    box: BoundingBox
    font_size: int
    line_pitch: int
    lines: List[PlacedLine] = field(default_factory=list)
    dropped_lines: int = 0


def wrap_text(text: str, max_width: float, font) -> List[str]:
    """Greedy character-wise wrapping.

    Characters are appended one at a time and the line is measured with
    ``font.getlength``. When the candidate line is wider than ``max_width``
    and the current line is not empty, the current line is closed and the
    character starts the next one. Breaks may fall mid-word.

    Args:
        text: Text to wrap
        max_width: Width budget in pixels
        font: Any object with ``getlength(str) -> float``

    Returns:
        List[str]: Wrapped lines
    """
    lines = []
    line = ""

    for char in text:
        candidate = line + char
        if line and font.getlength(candidate) > max_width:
            lines.append(line)
            line = char
        else:
            line = candidate

    if line:
        lines.append(line)
    return lines


class RegionCompositor:
    """Erases paragraph boxes and draws their translations in place."""

    def __init__(self,
                 font_loader: Optional[Callable[[int], object]] = None,
                 line_pitch_px: Optional[int] = None,
                 line_pitch_mode: Optional[str] = None):
        """Initialize compositor.

        Args:
            font_loader: Callable returning a font for a pixel size
                (default: FontLoader for settings.FONT_FAMILY)
            line_pitch_px: Vertical advance per line in fixed mode
            line_pitch_mode: 'fixed' (constant pitch) or 'glyph' (pitch equals
                the paragraph glyph height)
        """
        self.font_loader = font_loader or FontLoader().get
        self.line_pitch_px = line_pitch_px or settings.LINE_PITCH_PX
        self.line_pitch_mode = line_pitch_mode or settings.LINE_PITCH_MODE
        if self.line_pitch_mode not in LINE_PITCH_MODES:
            raise ValueError(f"Unknown line pitch mode: {self.line_pitch_mode}. Expected one of {LINE_PITCH_MODES}")

    def line_pitch_for(self, record: ParagraphRecord) -> int:
        if self.line_pitch_mode == "glyph":
            return record.glyph_height
        return self.line_pitch_px

    def layout_region(self, record: ParagraphRecord, font) -> RegionLayout:
        """Wrap and place one paragraph's translation. Pure."""
        box = record.bounding_box
        pitch = self.line_pitch_for(record)
        layout = RegionLayout(index=record.index, box=box, font_size=record.glyph_height, line_pitch=pitch)

        wrapped = wrap_text(record.translated_text or "", box.width, font)

        baseline = box.y1 + pitch
        for line in wrapped:
            if baseline > box.y2:
                break
            layout.lines.append(PlacedLine(text=line, x=box.x1, baseline=baseline))
            baseline += pitch

        layout.dropped_lines = len(wrapped) - len(layout.lines)
        return layout

    def composite(self, image: Image.Image, records: List[ParagraphRecord]) -> List[RegionLayout]:
        """Render every record onto ``image`` in place.

        Args:
            image: Drawable surface, mutated
            records: Translated paragraph records in extraction order

        Returns:
            List[RegionLayout]: Layout used for each record
        """
        if not records:
            log.info("No paragraphs to composite")
            return []

        draw = ImageDraw.Draw(image)
        layouts = []

        for record in records:
            font = self.font_loader(record.glyph_height)
            layout = self.layout_region(record, font)
            box = layout.box

            if box.width > 0 and box.height > 0:
                draw.rectangle(
                    [box.x1, box.y1, box.x1 + box.width - 1, box.y1 + box.height - 1],
                    fill=BACKGROUND_COLOR,
                )

            for line in layout.lines:
                self._draw_line(draw, line, font, layout.font_size)

            if layout.dropped_lines:
                log.debug(f"Paragraph {record.index}: dropped {layout.dropped_lines} overflowing line(s)")
            log.debug(f"Paragraph {record.index}: lines {[line.text for line in layout.lines]}")
            layouts.append(layout)

        log.info(f"Composited {len(layouts)} paragraph region(s)")
        return layouts

    @staticmethod
    def _draw_line(draw: ImageDraw.ImageDraw, line: PlacedLine, font, font_size: int):
        if isinstance(font, ImageFont.FreeTypeFont):
            draw.text((line.x, line.baseline), line.text, fill=TEXT_COLOR, font=font, anchor="ls")
        else:
            # Bitmap fonts have no anchor support; approximate the baseline
            draw.text((line.x, line.baseline - font_size), line.text, fill=TEXT_COLOR, font=font)
