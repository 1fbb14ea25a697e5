"""Key-value store bindings."""

from .base import KeyValueStore, ListPage, iter_key_pages
from .factory import open_store
from .local import LocalDirStore
from .memory import InMemoryStore
from .s3 import S3Store

__all__ = ["KeyValueStore", "ListPage", "iter_key_pages", "open_store", "InMemoryStore", "LocalDirStore", "S3Store"]
