"""Object storage backends for source and translated images."""

from storage.object_store import ObjectStore, LocalObjectStore, GCSObjectStore, get_object_store

__all__ = [
    'ObjectStore',
    'LocalObjectStore',
    'GCSObjectStore',
    'get_object_store'
]
