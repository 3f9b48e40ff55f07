"""Main FastAPI application for the document translation service."""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from core.config import settings, ensure_directories
from core.logging import log
from api import health, translate

# Ensure directories exist
ensure_directories()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown."""
    # Startup
    log.info("Document translation service starting up...")
    log.info(f"Storage backend: {settings.STORAGE_BACKEND}")
    log.info(f"Default target language: {settings.TARGET_LANGUAGE} (mode: {settings.TRANSLATION_MODE})")
    log.info(f"API running on {settings.API_HOST}:{settings.API_PORT}")
    yield
    # Shutdown
    log.info("Document translation service shutting down...")


# Create FastAPI app
app = FastAPI(
    title="Document Translation Service",
    description="Layout-preserving translation of document images",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health.router)
app.include_router(translate.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )
