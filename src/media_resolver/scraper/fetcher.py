"""Outbound page fetching with a browser identity and a body size cap."""

import asyncio
import logging
import random
from typing import Optional, Protocol

import aiohttp

from ..errors import ContentTooLarge, UpstreamTimeout, UpstreamUnreachable


logger = logging.getLogger(__name__)


USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
    "Mozilla/5.0 (Linux; Android 10; K) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Mobile Safari/537.36",
]

BROWSER_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'Accept-Language': 'en-US,en;q=0.9',
    'Accept-Encoding': 'gzip, deflate',
    'DNT': '1',
    'Upgrade-Insecure-Requests': '1',
    'Sec-Fetch-Dest': 'document',
    'Sec-Fetch-Mode': 'navigate',
    'Sec-Fetch-Site': 'none',
    'Sec-Fetch-User': '?1',
    'Cache-Control': 'max-age=0',
}

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_BYTES = 1024 * 1024


class Fetcher(Protocol):
    """Anything that can return the HTML of a page."""
    
    async def fetch(self, url: str) -> str: ...


async def read_capped(
    response: aiohttp.ClientResponse,
    max_bytes: int,
    chunk_size: int = 64 * 1024,
) -> bytes:
    """
    Read a response body, refusing to buffer more than ``max_bytes``.
    
    Raises:
        ContentTooLarge: As soon as the declared or received size exceeds the cap
    """
    declared = response.content_length
    if declared is not None and declared > max_bytes:
        raise ContentTooLarge(max_bytes)
    
    body = bytearray()
    async for chunk in response.content.iter_chunked(chunk_size):
        body.extend(chunk)
        if len(body) > max_bytes:
            raise ContentTooLarge(max_bytes)
    return bytes(body)


class PageFetcher:
    """Fetches pages over HTTP while looking like a regular browser."""
    
    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_bytes: int = DEFAULT_MAX_BYTES,
        user_agents: Optional[list[str]] = None,
    ):
        self.timeout = timeout
        self.max_bytes = max_bytes
        self.user_agents = user_agents or USER_AGENTS
    
    def build_headers(self) -> dict[str, str]:
        """Browser headers with a randomly picked User-Agent."""
        return {'User-Agent': random.choice(self.user_agents), **BROWSER_HEADERS}
    
    async def fetch(self, url: str) -> str:
        """
        GET a page and return its decoded body.
        
        Args:
            url: Page URL
            
        Returns:
            Response body as text
            
        Raises:
            UpstreamTimeout: The request did not finish within ``timeout``
            UpstreamUnreachable: Connection failure or an error status
            ContentTooLarge: The body is larger than ``max_bytes``
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=self.build_headers(), allow_redirects=True) as response:
                    if response.status >= 400:
                        raise UpstreamUnreachable(f"HTTP {response.status}", status=response.status)
                    
                    body = await read_capped(response, self.max_bytes)
                    charset = response.charset or 'utf-8'
        
        except asyncio.TimeoutError as e:
            raise UpstreamTimeout(f"Timeout after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise UpstreamUnreachable(f"Network error: {e}") from e
        
        logger.debug("Fetched %s (%d bytes)", url, len(body))
        try:
            return body.decode(charset, errors='replace')
        except LookupError:
            # Unknown charset label in Content-Type
            return body.decode('utf-8', errors='replace')
