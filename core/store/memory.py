"""Process-local store used for tests and dry runs."""

from __future__ import annotations

from typing import Optional

from core.constants import LIST_PAGE_SIZE
from core.store.base import KeyValueStore, ListPage, paginate_sorted


class InMemoryStore(KeyValueStore):
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def put(self, key: str, value: str) -> None:
        self.data[key] = value

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def list_keys(self, prefix: str = "", limit: int = LIST_PAGE_SIZE, cursor: Optional[str] = None) -> ListPage:
        return paginate_sorted(sorted(self.data), prefix, limit, cursor)


__all__ = ["InMemoryStore"]
