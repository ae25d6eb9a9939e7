"""Request pipeline: validation, platform resolution, caching and dispatch."""

import logging
from dataclasses import dataclass
from typing import Optional

from .cache import EphemeralCache, cache_key
from .models import ExtractionResult
from .platform import resolve_platform, validate_url
from .scraper import dispatch
from .scraper.fetcher import Fetcher, PageFetcher


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of one resolve call."""
    
    result: ExtractionResult
    cached: bool
    
    def to_payload(self) -> dict:
        payload = self.result.to_payload()
        payload["cached"] = self.cached
        return payload


class MediaResolver:
    """
    Resolves post URLs to extraction results.
    
    The resolver owns no global state: the cache and fetcher are injected,
    and one instance is shared by all request handlers of an app.
    """
    
    def __init__(
        self,
        cache: EphemeralCache,
        fetcher: Optional[Fetcher] = None,
        cache_ttl: Optional[float] = None,
    ):
        """
        Args:
            cache: Result cache
            fetcher: Page fetcher handed to scrapers
            cache_ttl: Seconds to keep successful results (cache default if None)
        """
        self.cache = cache
        self.fetcher = fetcher or PageFetcher()
        self.cache_ttl = cache_ttl
    
    async def resolve(
        self,
        url: object,
        platform: Optional[str] = None,
        request_id: str = "-",
    ) -> Resolution:
        """
        Resolve a client-supplied URL.
        
        Args:
            url: Raw URL from the request body
            platform: Optional platform hint ("auto" or None to detect)
            request_id: Identifier used to tag log lines
            
        Raises:
            ResolverError: For invalid input, unsupported platforms and
                upstream or extraction failures
        """
        normalized = validate_url(url)
        resolved = resolve_platform(normalized, platform)
        key = cache_key(normalized, resolved)
        
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("[%s] Cache hit for %s", request_id, key)
            return Resolution(result=cached, cached=True)
        
        logger.info("[%s] Extracting %s as %s", request_id, normalized, resolved.value)
        result = await dispatch(normalized, resolved, fetcher=self.fetcher)
        
        # Only complete extractions reach the cache
        self.cache.set(key, result, self.cache_ttl)
        logger.info(
            "[%s] Extracted %d video(s), %d image(s)",
            request_id, len(result.videos), len(result.images),
        )
        return Resolution(result=result, cached=False)
