"""
In-process response cache.

LRU eviction with a per-entry TTL. Keys are derived from the API key and the
whitespace-normalized query text, so reformatting a query does not miss.
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from typing import Any, Optional

from ..core.query_types import CacheStats

logger = logging.getLogger(__name__)


FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
_UINT32 = 0xFFFFFFFF

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


# =============================================================================
# Cache key derivation
# =============================================================================


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a over the character codes of ``text``."""
    h = FNV_OFFSET_BASIS
    for char in text:
        h ^= ord(char)
        h = (h * FNV_PRIME) & _UINT32
    return h


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36_DIGITS[rem])
    return "".join(reversed(digits))


def normalize_query(query: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return " ".join(query.split())


def build_cache_key(api_key: str, query: str) -> str:
    """Build the ``cache_<base36 hash>`` key for an (API key, query) pair."""
    return "cache_" + to_base36(fnv1a_32(f"{api_key}::{normalize_query(query)}"))


# =============================================================================
# LRU + TTL cache
# =============================================================================


class ResponseCache:
    """
    Capacity-bounded LRU cache with time-to-live.

    Reading an entry marks it most recently used and restarts its TTL.

    Usage:
        cache = ResponseCache(max_size=100, ttl=60.0)
        cache.set(key, payload)
        payload = cache.get(key)  # None on miss or expiry
    """

    def __init__(self, max_size: int = 100, ttl: float = 60.0):
        """
        Initialize cache.

        Args:
            max_size: Maximum number of entries kept
            ttl: Entry lifetime in seconds
        """
        self.max_size = max_size
        self.ttl = ttl
        self._entries: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def get(self, key: str) -> Optional[Any]:
        """Get a live entry, or None."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        expires_at, value = entry
        now = time.monotonic()
        if now >= expires_at:
            del self._entries[key]
            logger.debug(f"Cache entry expired: {key}")
            return None

        self._entries[key] = (now + self.ttl, value)
        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Store an entry, evicting the least recently used one when full."""
        if key in self._entries:
            del self._entries[key]
        self._entries[key] = (time.monotonic() + self.ttl, value)

        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Cache evicted: {evicted}")

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def stats(self) -> CacheStats:
        """Return current size and capacity."""
        return CacheStats(size=len(self._entries), max=self.max_size)

    def __contains__(self, key: object) -> bool:
        entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and time.monotonic() < entry[0]

    def __len__(self) -> int:
        return len(self._entries)
