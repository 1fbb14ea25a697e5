"""Resolve a store binding URL into a backend instance."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from core.errors import ConfigurationError
from core.store.base import KeyValueStore
from core.store.local import LocalDirStore
from core.store.memory import InMemoryStore
from core.store.s3 import S3Store

_MEMORY_STORES: dict[str, InMemoryStore] = {}


def _parse_url(url: str) -> tuple[str, str]:
    scheme, sep, rest = url.partition("://")
    if not sep:
        return "file", url
    return scheme.lower(), rest


def open_store(url: Optional[str], *, s3_client: Any | None = None) -> KeyValueStore:
    """Build a store from ``s3://bucket/root``, ``file://path``, a bare path or ``memory://name``."""
    if not url or not url.strip():
        raise ConfigurationError()
    scheme, rest = _parse_url(url.strip())

    if scheme == "s3":
        bucket, _, root = rest.partition("/")
        if not bucket:
            raise ConfigurationError("S3 store URL must include a bucket name.")
        if root and not root.endswith("/"):
            root += "/"
        return S3Store(bucket=bucket, root=root, client=s3_client)
    if scheme == "file":
        if not rest:
            raise ConfigurationError("File store URL must include a directory.")
        return LocalDirStore(Path(rest))
    if scheme == "memory":
        return _MEMORY_STORES.setdefault(rest, InMemoryStore())
    raise ConfigurationError(f"Unsupported store URL scheme: {scheme}")


def reset_memory_stores() -> None:
    _MEMORY_STORES.clear()


__all__ = ["open_store", "reset_memory_stores"]
