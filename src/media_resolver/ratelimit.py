"""Per-client rate limiting."""

import time
from dataclasses import dataclass
from typing import Callable

from .errors import RateLimited


@dataclass
class _Bucket:
    tokens: float
    updated_at: float


class TokenBucketLimiter:
    """
    In-memory token bucket keyed by client identifier.
    
    Each client starts with ``capacity`` tokens, refilled continuously at
    ``capacity / window_seconds`` tokens per second. State lives only in
    this process.
    """
    
    # Prune full buckets once this many clients are tracked
    PRUNE_THRESHOLD = 10_000
    
    def __init__(
        self,
        capacity: int = 10,
        window_seconds: float = 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize rate limiter.
        
        Args:
            capacity: Maximum burst of requests per client
            window_seconds: Time to refill an empty bucket completely
            clock: Monotonic time source in seconds
        """
        self.capacity = capacity
        self.window_seconds = window_seconds
        self._rate = capacity / window_seconds
        self._clock = clock
        self._buckets: dict[str, _Bucket] = {}
    
    def consume(self, client_id: str, tokens: float = 1) -> None:
        """
        Take tokens from a client's bucket.
        
        Raises:
            RateLimited: If the bucket does not hold enough tokens
        """
        now = self._clock()
        bucket = self._buckets.get(client_id)
        if bucket is None:
            if len(self._buckets) >= self.PRUNE_THRESHOLD:
                self._prune(now)
            bucket = self._buckets[client_id] = _Bucket(tokens=self.capacity, updated_at=now)
        else:
            self._refill(bucket, now)
        
        if bucket.tokens < tokens:
            raise RateLimited(retry_after=(tokens - bucket.tokens) / self._rate)
        bucket.tokens -= tokens
    
    def remaining(self, client_id: str) -> float:
        """Tokens currently available to a client."""
        bucket = self._buckets.get(client_id)
        if bucket is None:
            return float(self.capacity)
        self._refill(bucket, self._clock())
        return bucket.tokens
    
    def reset(self) -> None:
        self._buckets.clear()
    
    def _refill(self, bucket: _Bucket, now: float) -> None:
        elapsed = max(0.0, now - bucket.updated_at)
        bucket.tokens = min(self.capacity, bucket.tokens + elapsed * self._rate)
        bucket.updated_at = now
    
    def _prune(self, now: float) -> None:
        for client_id in list(self._buckets):
            bucket = self._buckets[client_id]
            self._refill(bucket, now)
            if bucket.tokens >= self.capacity:
                del self._buckets[client_id]
