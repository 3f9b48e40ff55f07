"""Rendering module: fixed-family fonts and the region compositor."""

from rendering.fonts import FontLoader
from rendering.compositor import RegionCompositor, RegionLayout, PlacedLine, wrap_text

__all__ = [
    'FontLoader',
    'RegionCompositor',
    'RegionLayout',
    'PlacedLine',
    'wrap_text'
]
