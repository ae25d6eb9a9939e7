"""Shared fixtures for the test suite."""

from typing import Optional

import pytest

from media_resolver.errors import ResolverError


class FakeClock:
    """Manually advanced monotonic clock."""
    
    def __init__(self, start: float = 1000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Serves fixed HTML per URL and records every fetch."""
    
    def __init__(self, pages: Optional[dict[str, str]] = None, default: Optional[str] = None):
        self.pages = pages or {}
        self.default = default
        self.calls: list[str] = []
        self.error: Optional[ResolverError] = None
    
    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url in self.pages:
            return self.pages[url]
        if self.default is not None:
            return self.default
        return "<html><head></head><body></body></html>"


def make_page(meta: Optional[dict[str, str]] = None, scripts: Optional[list[str]] = None) -> str:
    """Build an HTML page with the given meta tags and inline scripts."""
    tags = []
    for key, value in (meta or {}).items():
        attr = "name" if key.startswith("twitter:") else "property"
        tags.append(f'<meta {attr}="{key}" content="{value}">')
    body = "".join(f"<script>{script}</script>" for script in scripts or [])
    return f"<html><head>{''.join(tags)}</head><body>{body}</body></html>"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher():
    return FakeFetcher()
