"""Scraper module for extracting media metadata from social media posts."""

from .base import BaseScraper, MetaTagScraper, PendingScraper
from .fetcher import PageFetcher, read_capped
from .meta import MetaTags
from .script_fallback import try_script_fallback
from .instagram import InstagramScraper
from .twitter import TwitterScraper
from .facebook import FacebookScraper
from .pinterest import PinterestScraper
from .youtube import YouTubeScraper
from .tiktok import TikTokScraper
from .factory import get_scraper, dispatch, list_supported_platforms

__all__ = [
    "BaseScraper",
    "MetaTagScraper",
    "PendingScraper",
    "PageFetcher",
    "read_capped",
    "MetaTags",
    "try_script_fallback",
    "InstagramScraper",
    "TwitterScraper",
    "FacebookScraper",
    "PinterestScraper",
    "YouTubeScraper",
    "TikTokScraper",
    "get_scraper",
    "dispatch",
    "list_supported_platforms",
]
