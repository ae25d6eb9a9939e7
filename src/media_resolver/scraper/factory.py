"""Platform dispatch to the matching extractor."""

from typing import Union

from ..errors import UnsupportedPlatform
from ..models import ExtractionResult, Platform
from .base import BaseScraper, PendingScraper
from .facebook import FacebookScraper
from .instagram import InstagramScraper
from .pinterest import PinterestScraper
from .tiktok import TikTokScraper
from .twitter import TwitterScraper
from .youtube import YouTubeScraper


# Registry of available scrapers
_SCRAPERS: dict[Platform, type[BaseScraper]] = {
    Platform.INSTAGRAM: InstagramScraper,
    Platform.TWITTER: TwitterScraper,
    Platform.YOUTUBE: YouTubeScraper,
    Platform.TIKTOK: TikTokScraper,
    Platform.FACEBOOK: FacebookScraper,
    Platform.PINTEREST: PinterestScraper,
}

# Platforms that are recognized but have no extractor
_UNSUPPORTED = frozenset({Platform.GENERIC})

_unmapped = set(Platform) - set(_SCRAPERS) - _UNSUPPORTED
if _unmapped:
    raise RuntimeError(f"Platforms without a scraper: {sorted(p.value for p in _unmapped)}")


def _as_platform(platform: Union[Platform, str]) -> Platform:
    if isinstance(platform, Platform):
        return platform
    try:
        return Platform(platform)
    except ValueError:
        raise UnsupportedPlatform(str(platform)) from None


def get_scraper(platform: Union[Platform, str], **kwargs) -> BaseScraper:
    """
    Get the scraper for a platform.
    
    Args:
        platform: Platform tag
        **kwargs: Additional arguments passed to scraper constructor
        
    Raises:
        UnsupportedPlatform: If no scraper handles the platform
    """
    platform = _as_platform(platform)
    scraper_class = _SCRAPERS.get(platform)
    if scraper_class is None:
        raise UnsupportedPlatform(platform.value)
    return scraper_class(**kwargs)


async def dispatch(url: str, platform: Union[Platform, str], **kwargs) -> ExtractionResult:
    """
    Extract a URL with the scraper of the given platform.
    
    Unsupported platforms are rejected before any network access.
    """
    scraper = get_scraper(platform, **kwargs)
    return await scraper.extract(url)


def list_supported_platforms() -> list[str]:
    """List platforms with a working scraper."""
    return sorted(
        platform.value
        for platform, scraper_class in _SCRAPERS.items()
        if not issubclass(scraper_class, PendingScraper)
    )
