"""Integration tests for the HTTP endpoints."""

import io
from unittest.mock import MagicMock
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from api.translate import get_pipeline
from core.exceptions import DetectionError, ServiceTimeout
from main import app
from pipeline.document_translator import DocumentTranslationPipeline
from translation.adapter import Translator
from tests.ocr_factory import (
    DictTranslator,
    FailingWriteStore,
    FakeOCR,
    TimedOutWriteStore,
    make_annotation,
    make_paragraph,
)


@pytest.fixture
def pipeline(compositor, store):
    annotation = make_annotation([[[make_paragraph("Hello", box=(10, 10, 110, 40), glyph_height=20)]]])
    return DocumentTranslationPipeline(
        ocr_client=FakeOCR(annotation),
        translator=DictTranslator(),
        store=store,
        compositor=compositor,
        target_language="zh",
        translation_mode="joined",
        storage_timeout=5,
    )


@pytest.fixture
def client(pipeline):
    app.dependency_overrides[get_pipeline] = lambda: pipeline
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestHealth:
    """Test health endpoint."""
    
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestTranslateDocument:
    """Test translation of stored images."""
    
    def test_translates_and_stores(self, client, store, png_bytes):
        store.write("images/doc.png", png_bytes)
        
        response = client.post("/api/translate/document", json={"image_name": "images/doc.png"})
        
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.headers["x-translated-key"] == "translated-images/doc.png"
        assert "x-persist-error" not in response.headers
        assert store.read("translated-images/doc.png") == response.content
    
    def test_missing_image(self, client):
        response = client.post("/api/translate/document", json={"image_name": "images/none.png"})
        assert response.status_code == 404
    
    def test_detection_error(self, client, pipeline, store, png_bytes):
        store.write("doc.png", png_bytes)
        pipeline.ocr_client = FakeOCR(error=DetectionError("No text detected in image"))
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 422
        assert "No text detected" in response.json()["detail"]
        assert not store.path_for("translated-doc.png").exists()
    
    def test_persist_failure_returns_image(self, client, pipeline, store, tmp_path, png_bytes):
        store.write("doc.png", png_bytes)
        pipeline.store = FailingWriteStore(root=str(tmp_path / "bucket"))
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 200
        assert response.headers["content-type"] == "image/jpeg"
        assert response.headers["x-persist-error"].startswith("PersistError: ")
        assert Image.open(io.BytesIO(response.content)).size == (200, 100)
        assert not store.path_for("translated-doc.png").exists()
    
    def test_persist_timeout_named_in_header(self, client, pipeline, store, tmp_path, png_bytes):
        store.write("doc.png", png_bytes)
        pipeline.store = TimedOutWriteStore(root=str(tmp_path / "bucket"))
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 200
        assert response.headers["x-persist-error"].startswith("ServiceTimeout: storage call")
    
    def test_ocr_timeout(self, client, pipeline, store, png_bytes):
        store.write("doc.png", png_bytes)
        pipeline.ocr_client = FakeOCR(error=ServiceTimeout("ocr", 1.0))
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 504
        assert response.json()["detail"].startswith("ocr: ")
        assert not store.path_for("translated-doc.png").exists()
    
    def test_alignment_mismatch(self, client, pipeline, store, png_bytes):
        store.write("doc.png", png_bytes)
        translator = MagicMock(spec=Translator)
        translator.translate_text.return_value = "one\ntwo"
        pipeline.adapter.translator = translator
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 502
        assert not store.path_for("translated-doc.png").exists()
    
    def test_translation_error(self, client, pipeline, store, png_bytes):
        store.write("doc.png", png_bytes)
        translator = MagicMock(spec=Translator)
        translator.translate_text.side_effect = RuntimeError("quota exceeded")
        pipeline.adapter.translator = translator
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 502
        assert "quota exceeded" in response.json()["detail"]
    
    def test_render_error(self, client, pipeline, store, png_bytes):
        store.write("doc.png", png_bytes)
        compositor = MagicMock()
        compositor.composite.side_effect = ValueError("bad font size")
        pipeline.compositor = compositor
        
        response = client.post("/api/translate/document", json={"image_name": "doc.png"})
        
        assert response.status_code == 500
        assert response.json()["detail"].startswith("render: ")
        assert not store.path_for("translated-doc.png").exists()


class TestTranslateUpload:
    """Test translation of uploaded images."""
    
    def test_upload(self, client, png_bytes):
        response = client.post(
            "/api/translate/upload",
            files={"file": ("doc.png", png_bytes, "image/png")},
            data={"target_language": "fr"},
        )
        
        assert response.status_code == 200
        assert Image.open(io.BytesIO(response.content)).size == (200, 100)
    
    def test_unsupported_format(self, client):
        response = client.post("/api/translate/upload", files={"file": ("notes.txt", b"hello", "text/plain")})
        assert response.status_code == 400
    
    def test_paragraphs(self, client, png_bytes):
        response = client.post("/api/translate/paragraphs", files={"file": ("doc.png", png_bytes, "image/png")})
        
        assert response.status_code == 200
        body = response.json()
        assert body["total_paragraphs"] == 1
        assert body["paragraphs"][0]["text"] == "Hello"
        assert body["paragraphs"][0]["glyph_height"] == 20
