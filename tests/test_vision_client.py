"""Unit tests for the Cloud Vision OCR adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock
import pytest
from core.exceptions import DetectionError
from ocr.vision_client import VisionOCRClient


def vision_box(x1, y1, x2, y2):
    return SimpleNamespace(vertices=[
        SimpleNamespace(x=x1, y=y1),
        SimpleNamespace(x=x2, y=y1),
        SimpleNamespace(x=x2, y=y2),
        SimpleNamespace(x=x1, y=y2),
    ])


def vision_response(text="Hi", error=""):
    symbols = [SimpleNamespace(text=c, bounding_box=vision_box(i * 10, 0, i * 10 + 10, 18)) for i, c in enumerate(text)]
    word = SimpleNamespace(symbols=symbols, bounding_box=vision_box(0, 0, 10 * len(text), 18))
    paragraph = SimpleNamespace(words=[word] if text else [], bounding_box=vision_box(0, 0, 100, 20))
    block = SimpleNamespace(paragraphs=[paragraph] if text else [], bounding_box=vision_box(0, 0, 100, 20))
    page = SimpleNamespace(blocks=[block], width=100, height=20)
    annotation = SimpleNamespace(text=text, pages=[page] if text else [])
    return SimpleNamespace(error=SimpleNamespace(message=error), full_text_annotation=annotation)


class TestVisionOCRClient:
    """Test response handling."""
    
    def test_detect_converts_response(self):
        client = MagicMock()
        client.document_text_detection.return_value = vision_response("Hi")
        ocr = VisionOCRClient(client=client, timeout=5)
        
        annotation = ocr.detect(b"image")
        
        client.document_text_detection.assert_called_once_with(image={"content": b"image"})
        paragraph = annotation.pages[0].blocks[0].paragraphs[0]
        assert paragraph.words[0].text == "Hi"
        assert paragraph.words[0].symbols[0].bounding_box.height == 18
    
    def test_api_error_message(self):
        client = MagicMock()
        client.document_text_detection.return_value = vision_response("Hi", error="Bad image data")
        with pytest.raises(DetectionError, match="Bad image data"):
            VisionOCRClient(client=client, timeout=5).detect(b"image")
    
    def test_no_text(self):
        client = MagicMock()
        client.document_text_detection.return_value = vision_response("")
        with pytest.raises(DetectionError, match="No text"):
            VisionOCRClient(client=client, timeout=5).detect(b"image")
    
    def test_call_failure(self):
        client = MagicMock()
        client.document_text_detection.side_effect = RuntimeError("unavailable")
        with pytest.raises(DetectionError, match="unavailable"):
            VisionOCRClient(client=client, timeout=5).detect(b"image")
