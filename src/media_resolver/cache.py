"""In-process cache for extraction results."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from .models import ExtractionResult, Platform


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """A cached result with its expiry time on the cache clock."""
    
    key: str
    value: ExtractionResult
    expires_at: Optional[float] = None
    
    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and self.expires_at <= now


def cache_key(url: str, platform: Platform) -> str:
    """Build the cache key for a normalized URL and its resolved platform."""
    return f"download:{platform.value}:{url}"


class EphemeralCache:
    """
    Key-value store with per-entry expiry and a bounded size.
    
    Expiry is checked lazily on access. When the number of entries exceeds
    ``max_entries``, expired entries are purged first and then the
    ``evict_batch`` oldest-inserted entries are dropped. Eviction follows
    insertion order, not access order.
    
    All operations are synchronous and never await, so they are atomic with
    respect to other tasks on the event loop.
    """
    
    def __init__(
        self,
        default_ttl: Optional[float] = 300,
        max_entries: int = 100,
        evict_batch: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be positive")
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self.evict_batch = max(1, min(evict_batch, max_entries))
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
    
    def get(self, key: str) -> Optional[ExtractionResult]:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        
        if entry.is_expired(self._clock()):
            self._entries.pop(key, None)
            return None
        
        return entry.value
    
    def set(self, key: str, value: ExtractionResult, ttl: Optional[float] = None) -> None:
        """
        Store a value, replacing any existing entry for the key.
        
        Args:
            key: Cache key
            value: Result to store
            ttl: Seconds until expiry; defaults to ``default_ttl``.
                 ``0`` or None (with no default) means no expiry.
        """
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = self._clock() + ttl if ttl else None
        
        # A rewrite counts as a fresh insertion
        self._entries.pop(key, None)
        self._entries[key] = CacheEntry(key=key, value=value, expires_at=expires_at)
        
        if len(self._entries) > self.max_entries:
            self._evict()
    
    def delete(self, key: str) -> None:
        self._entries.pop(key, None)
    
    def clear(self) -> None:
        self._entries.clear()
    
    def _evict(self) -> None:
        now = self._clock()
        for key in [k for k, e in self._entries.items() if e.is_expired(now)]:
            del self._entries[key]
        
        if len(self._entries) <= self.max_entries:
            return
        
        for _ in range(self.evict_batch):
            self._entries.popitem(last=False)
        logger.debug("Evicted %d cache entries, %d left", self.evict_batch, len(self._entries))
