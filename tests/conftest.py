"""Shared fixtures."""

import io
import pytest
from PIL import Image, ImageFont
from rendering.compositor import RegionCompositor
from storage.object_store import LocalObjectStore


def default_font(size: int):
    return ImageFont.load_default(size=size)


@pytest.fixture
def compositor():
    """Compositor using Pillow's bundled scalable font and a 16px line pitch."""
    return RegionCompositor(font_loader=default_font, line_pitch_px=16, line_pitch_mode="fixed")


@pytest.fixture
def store(tmp_path):
    return LocalObjectStore(root=str(tmp_path / "bucket"))


@pytest.fixture
def png_bytes():
    """A 200x100 light-grey PNG."""
    image = Image.new('RGB', (200, 100), color=(200, 200, 200))
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')
    return buffer.getvalue()
