"""Local filesystem store: one file per key under a base directory."""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from core.constants import LIST_PAGE_SIZE
from core.errors import StoreError
from core.store.base import KeyValueStore, ListPage, paginate_sorted

SUFFIX = ".json"


class LocalDirStore(KeyValueStore):
    """Store each value as ``<quoted key>.json`` inside ``base_dir``."""

    def __init__(self, base_dir: str | Path = "data") -> None:
        self.base_dir = Path(base_dir)

    def _path_for(self, key: str) -> Path:
        if not key:
            raise StoreError("Key must not be empty")
        return self.base_dir / f"{quote(key, safe='')}{SUFFIX}"

    def put(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(value, encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to write {key}: {exc.strerror or exc}") from exc

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise StoreError(f"Failed to read {key}: {exc.strerror or exc}") from exc

    def list_keys(self, prefix: str = "", limit: int = LIST_PAGE_SIZE, cursor: Optional[str] = None) -> ListPage:
        if not self.base_dir.exists():
            return ListPage()
        keys = sorted(
            unquote(path.name[: -len(SUFFIX)])
            for path in self.base_dir.iterdir()
            if path.is_file() and path.name.endswith(SUFFIX)
        )
        return paginate_sorted(keys, prefix, limit, cursor)


__all__ = ["LocalDirStore"]
