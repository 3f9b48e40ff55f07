"""Object storage: read image bytes by key, write result bytes by key.

Two backends share one interface:
- LocalObjectStore: keys are paths relative to a root directory
- GCSObjectStore: keys are object names in a Google Cloud Storage bucket
"""

from pathlib import Path
from typing import Optional
from core.config import settings
from core.exceptions import PersistError, SourceReadError
from core.logging import log

# Optional Google Cloud Storage import
try:
    from google.api_core import exceptions as google_exceptions
    from google.cloud import storage as gcs
    GCS_AVAILABLE = True
except ImportError:
    GCS_AVAILABLE = False
    log.warning("google-cloud-storage not installed. The gcs storage backend will be unavailable.")


class ObjectStore:
    """Interface of an image object store."""

    name = "abstract"

    def read(self, key: str) -> bytes:
        """Return the bytes stored under ``key``.

        Raises:
            SourceReadError: If the object is missing or unreadable
        """
        raise NotImplementedError

    def write(self, key: str, data: bytes, content_type: str = "image/jpeg") -> None:
        """Store ``data`` under ``key``, replacing any existing object.

        Raises:
            PersistError: If the write fails
        """
        raise NotImplementedError


class LocalObjectStore(ObjectStore):
    """Filesystem-backed store rooted at a directory."""

    name = "local"

    def __init__(self, root: Optional[str] = None):
        self.root = Path(root or settings.STORAGE_ROOT).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        """Map a key to a path under the root, rejecting keys that escape it."""
        path = (self.root / key).resolve()
        if path != self.root and self.root not in path.parents:
            raise ValueError(f"Key escapes storage root: {key}")
        return path

    def read(self, key: str) -> bytes:
        try:
            path = self.path_for(key)
            data = path.read_bytes()
        except (OSError, ValueError) as e:
            log.error(f"Failed to read object '{key}': {str(e)}")
            raise SourceReadError(f"Could not read image '{key}': {str(e)}", cause=e)
        log.info(f"Read object '{key}' ({len(data)} bytes)")
        return data

    def write(self, key: str, data: bytes, content_type: str = "image/jpeg") -> None:
        try:
            path = self.path_for(key)
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = path.parent / f".tmp_{path.name}"
            temp_path.write_bytes(data)
            temp_path.replace(path)
        except (OSError, ValueError) as e:
            log.error(f"Failed to write object '{key}': {str(e)}")
            raise PersistError(f"Could not store image '{key}': {str(e)}", cause=e)
        log.info(f"Wrote object '{key}' ({len(data)} bytes)")


class GCSObjectStore(ObjectStore):
    """Google Cloud Storage bucket."""

    name = "gcs"

    def __init__(self, bucket_name: Optional[str] = None, client=None, timeout: Optional[float] = None):
        self.bucket_name = bucket_name or settings.GCS_BUCKET
        if not self.bucket_name:
            raise ValueError("GCS_BUCKET must be set for the gcs storage backend")
        self._client = client
        self.timeout = timeout if timeout is not None else settings.STORAGE_TIMEOUT_SECONDS

    @property
    def bucket(self):
        if self._client is None:
            if not GCS_AVAILABLE:
                raise ImportError("google-cloud-storage is not installed. Install it with: pip install google-cloud-storage")
            log.info("Initializing Google Cloud Storage client...")
            self._client = gcs.Client()
        return self._client.bucket(self.bucket_name)

    def read(self, key: str) -> bytes:
        try:
            data = self.bucket.blob(key).download_as_bytes(timeout=self.timeout, retry=None)
        except Exception as e:
            log.error(f"Failed to download gs://{self.bucket_name}/{key}: {str(e)}")
            if GCS_AVAILABLE and isinstance(e, google_exceptions.NotFound):
                raise SourceReadError(f"Image not found: {key}", cause=e)
            raise SourceReadError(f"Could not read image '{key}': {str(e)}", cause=e)
        log.info(f"Downloaded gs://{self.bucket_name}/{key} ({len(data)} bytes)")
        return data

    def write(self, key: str, data: bytes, content_type: str = "image/jpeg") -> None:
        try:
            self.bucket.blob(key).upload_from_string(data, content_type=content_type, timeout=self.timeout, retry=None)
        except Exception as e:
            log.error(f"Failed to upload gs://{self.bucket_name}/{key}: {str(e)}")
            raise PersistError(f"Could not store image '{key}': {str(e)}", cause=e)
        log.info(f"Uploaded gs://{self.bucket_name}/{key} ({len(data)} bytes)")


def get_object_store(backend: Optional[str] = None) -> ObjectStore:
    """Create the configured store backend."""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "local":
        return LocalObjectStore()
    if backend == "gcs":
        return GCSObjectStore()
    raise ValueError(f"Unknown storage backend: {backend}")
