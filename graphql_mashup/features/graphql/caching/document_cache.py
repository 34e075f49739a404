"""Bounded cache of parsed and validated query documents.

Maps the exact query text (no whitespace normalization) to its parsed
DocumentNode. Only documents that already passed validation against the
model's schema are inserted, so a hit can skip both parse and validate.

Design decisions:
- OrderedDict gives O(1) LRU ordering via move_to_end/popitem
- One threading.Lock guards each get/put, never a parse or execute
- One cache per model instance, never a process-wide singleton
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import TYPE_CHECKING, Final

from graphql_mashup.infra.metrics.prometheus import (
    graphql_document_cache_evictions_total,
    graphql_document_cache_total,
)

if TYPE_CHECKING:
    from graphql import DocumentNode

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE: Final[int] = 100


class DocumentCache:
    """Thread-safe LRU cache of validated query documents.

    Example:
        cache = DocumentCache(max_size=2)
        cache.put("{ a }", doc_a)
        cache.put("{ b }", doc_b)
        cache.get("{ a }")          # refreshes "{ a }"
        cache.put("{ c }", doc_c)   # evicts "{ b }"

    Attributes:
        max_size: Maximum number of cached documents.
    """

    def __init__(self, max_size: int = DEFAULT_CACHE_SIZE) -> None:
        """Initialize the document cache.

        Args:
            max_size: Maximum number of cached documents.

        Raises:
            ValueError: If max_size is not a positive integer.
        """
        if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size < 1:
            raise ValueError(f"max_size must be a positive integer, got {max_size!r}")

        self.max_size = max_size
        self._cache: OrderedDict[str, DocumentNode] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def get(self, query: str) -> DocumentNode | None:
        """Return the cached document for ``query`` and mark it recently used."""
        with self._lock:
            document = self._cache.get(query)
            if document is None:
                self._misses += 1
            else:
                self._cache.move_to_end(query)
                self._hits += 1

        graphql_document_cache_total.labels(result="hit" if document is not None else "miss").inc()
        return document

    def put(self, query: str, document: DocumentNode) -> None:
        """Insert or refresh a validated document, evicting the LRU entry if full."""
        evicted = 0
        with self._lock:
            if query in self._cache:
                self._cache.move_to_end(query)
            self._cache[query] = document
            while len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                evicted += 1
            self._evictions += evicted

        if evicted:
            graphql_document_cache_evictions_total.inc(evicted)
            logger.debug("Evicted parsed documents", extra={"evicted": evicted})

    def clear(self) -> int:
        """Drop every cached document.

        Returns:
            Number of entries cleared.
        """
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count

    def keys(self) -> list[str]:
        """Cached query strings from least to most recently used."""
        with self._lock:
            return list(self._cache)

    def __contains__(self, query: object) -> bool:
        # Membership checks do not refresh recency
        with self._lock:
            return query in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics."""
        with self._lock:
            return {
                "size": len(self._cache),
                "max_size": self.max_size,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }


__all__ = [
    "DEFAULT_CACHE_SIZE",
    "DocumentCache",
]
