"""Content-addressed render cache for notemark.

Provides (content_hash, config_hash) -> html caching. Rendering is a pure
function of text and configuration, so an unchanged note (reopening a file,
undo back to an earlier state) never needs rendering twice.

Thread Safety:
    DictRenderCache is not thread-safe. For concurrent rendering, wrap it with
    a lock or use a cache implementation with internal locking.

Example:
    >>> from notemark import render, DictRenderCache
    >>> cache = DictRenderCache()
    >>> html1 = render("# Hello", cache=cache)
    >>> html2 = render("# Hello", cache=cache)  # Cache hit, no re-render
"""

from __future__ import annotations

from collections import OrderedDict
from typing import TYPE_CHECKING, Protocol

from notemark.utils.hashing import hash_fields, hash_str

if TYPE_CHECKING:
    from notemark.config import RenderConfig


class RenderCache(Protocol):
    """Protocol for content-addressed render caches."""

    def get(self, content_hash: str, config_hash: str) -> str | None:
        """Return cached markup if present, else None."""
        ...

    def put(self, content_hash: str, config_hash: str, html: str) -> None:
        """Store markup in cache."""
        ...


class DictRenderCache:
    """In-memory render cache with least-recently-used eviction.

    Args:
        maxsize: Maximum number of entries kept (None = unbounded)
    """

    __slots__ = ("_data", "_maxsize", "hits", "misses")

    def __init__(self, maxsize: int | None = 256) -> None:
        if maxsize is not None and maxsize < 1:
            raise ValueError("maxsize must be a positive integer or None")
        self._data: OrderedDict[tuple[str, str], str] = OrderedDict()
        self._maxsize = maxsize
        self.hits = 0
        self.misses = 0

    def get(self, content_hash: str, config_hash: str) -> str | None:
        """Return cached markup if present, else None."""
        key = (content_hash, config_hash)
        html = self._data.get(key)
        if html is None:
            self.misses += 1
            return None
        self._data.move_to_end(key)
        self.hits += 1
        return html

    def put(self, content_hash: str, config_hash: str, html: str) -> None:
        """Store markup in cache, evicting the oldest entry when full."""
        key = (content_hash, config_hash)
        self._data[key] = html
        self._data.move_to_end(key)
        if self._maxsize is not None and len(self._data) > self._maxsize:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)


def hash_content(source: str) -> str:
    """Compute SHA256 hash of source for cache key."""
    return hash_str(source)


def hash_config(config: RenderConfig) -> str:
    """Compute hash of RenderConfig for cache key."""
    return hash_fields(config)


__all__ = [
    "DictRenderCache",
    "RenderCache",
    "hash_config",
    "hash_content",
]
