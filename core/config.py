"""Configuration management for the document translation service."""

from pathlib import Path
from typing import List, Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # API Settings
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_RELOAD: bool = True
    CORS_ORIGINS: List[str] = ["http://localhost:8081"]
    
    # Storage
    STORAGE_BACKEND: str = "local"  # local | gcs
    STORAGE_ROOT: str = "./storage"
    GCS_BUCKET: str = ""
    TRANSLATED_PREFIX: str = "translated-"  # Result key = prefix + source key
    MAX_FILE_SIZE_MB: int = 20
    
    # OCR / Translation
    TARGET_LANGUAGE: str = "zh"
    TRANSLATION_MODE: str = "joined"  # joined | batch | per_paragraph
    
    # Deadlines for external calls (seconds)
    OCR_TIMEOUT_SECONDS: float = 30.0
    TRANSLATE_TIMEOUT_SECONDS: float = 30.0
    STORAGE_TIMEOUT_SECONDS: float = 15.0
    
    # Rendering
    FONT_FAMILY: str = "Arial"
    FONT_PATH: Optional[str] = None  # Explicit .ttf/.otf overrides FONT_FAMILY lookup
    LINE_PITCH_PX: int = 16
    LINE_PITCH_MODE: str = "fixed"  # fixed | glyph
    DEFAULT_GLYPH_HEIGHT: int = 16
    EMPTY_PARAGRAPH_POLICY: str = "skip"  # skip | default_height
    JPEG_QUALITY: int = 90
    
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "./logs/app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()


def ensure_directories():
    """Create all required directories if they don't exist."""
    directories = [Path(settings.LOG_FILE).parent]
    if settings.STORAGE_BACKEND == "local":
        directories.append(Path(settings.STORAGE_ROOT))
    
    for directory in directories:
        Path(directory).mkdir(parents=True, exist_ok=True)


# Initialize directories on import
ensure_directories()
