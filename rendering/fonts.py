"""Font loading for a single configured font family."""

from functools import lru_cache
from typing import List, Optional
from PIL import ImageFont
from core.config import settings
from core.exceptions import RenderError
from core.logging import log


class FontLoader:
    """Loads the configured font family at arbitrary pixel sizes.

    Resolution order: explicit ``font_path``, then ``<family>.ttf`` and common
    file-name variants on the system font path, then Pillow's bundled
    scalable default font.
    """

    def __init__(self, font_family: Optional[str] = None, font_path: Optional[str] = None):
        self.font_family = font_family or settings.FONT_FAMILY
        self.font_path = font_path if font_path is not None else settings.FONT_PATH
        self._resolved: Optional[str] = None
        self._use_default = False
        self.get = lru_cache(maxsize=64)(self._load)

    def candidates(self) -> List[str]:
        if self.font_path:
            return [self.font_path]
        family = self.font_family
        compact = family.replace(" ", "")
        names = [f"{family}.ttf", f"{compact}.ttf", f"{compact.lower()}.ttf",
                 f"{family}.otf", f"{compact}.otf"]
        return list(dict.fromkeys(names))

    def _resolve(self, size: int):
        for candidate in self.candidates():
            try:
                font = ImageFont.truetype(candidate, size)
            except OSError:
                continue
            self._resolved = candidate
            log.info(f"Using font '{candidate}' for family '{self.font_family}'")
            return font

        if self.font_path:
            raise RenderError(f"Font file could not be loaded: {self.font_path}")

        log.warning(f"Font family '{self.font_family}' not found, using Pillow default font")
        self._use_default = True
        return ImageFont.load_default(size=size)

    def _load(self, size: int):
        """Font at ``size`` pixels (em height)."""
        size = max(1, int(size))
        if self._resolved:
            return ImageFont.truetype(self._resolved, size)
        if self._use_default:
            return ImageFont.load_default(size=size)
        return self._resolve(size)
