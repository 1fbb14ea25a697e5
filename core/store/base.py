"""Key-value store contract used by the writer and the aggregator."""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from core.constants import LIST_PAGE_SIZE


@dataclass(slots=True)
class ListPage:
    """One page of keys returned by :meth:`KeyValueStore.list_keys`."""

    keys: list[str] = field(default_factory=list)
    cursor: Optional[str] = None
    complete: bool = True


class KeyValueStore:
    """Minimal get/put/list-with-cursor interface over an external store."""

    def put(self, key: str, value: str) -> None:
        raise NotImplementedError

    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or ``None`` when the key is absent."""
        raise NotImplementedError

    def list_keys(self, prefix: str = "", limit: int = LIST_PAGE_SIZE, cursor: Optional[str] = None) -> ListPage:
        """Return up to ``limit`` keys starting with ``prefix`` in lexical order."""
        raise NotImplementedError


def paginate_sorted(keys: Sequence[str], prefix: str, limit: int, cursor: Optional[str]) -> ListPage:
    """Page through an already sorted key sequence using the last key as cursor."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    start = bisect.bisect_right(keys, cursor) if cursor else bisect.bisect_left(keys, prefix)
    page: list[str] = []
    index = start
    # Keys sharing a prefix are contiguous once sorted.
    while index < len(keys) and len(page) < limit and keys[index].startswith(prefix):
        page.append(keys[index])
        index += 1
    remaining = index < len(keys) and keys[index].startswith(prefix)
    if not remaining:
        return ListPage(keys=page, cursor=None, complete=True)
    return ListPage(keys=page, cursor=page[-1], complete=False)


def iter_key_pages(store: KeyValueStore, prefix: str = "", limit: int = LIST_PAGE_SIZE) -> Iterator[list[str]]:
    """Yield key batches until the store reports the listing complete."""
    cursor: Optional[str] = None
    while True:
        page = store.list_keys(prefix=prefix, limit=limit, cursor=cursor)
        yield page.keys
        if page.complete or not page.cursor:
            return
        cursor = page.cursor


__all__ = ["KeyValueStore", "ListPage", "iter_key_pages", "paginate_sorted"]
