"""Base scraper interface."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..errors import ExtractionFailed, PlatformNotImplemented
from ..models import ExtractionResult, MediaAsset, MediaKind, Platform
from .fetcher import Fetcher, PageFetcher
from .meta import MetaTags
from .script_fallback import try_script_fallback


logger = logging.getLogger(__name__)


class BaseScraper(ABC):
    """Abstract base class for per-platform extractors."""
    
    platform: Platform = Platform.GENERIC
    
    def __init__(self, fetcher: Optional[Fetcher] = None):
        self.fetcher = fetcher or PageFetcher()
    
    @abstractmethod
    async def extract(self, url: str) -> ExtractionResult:
        """
        Extract post metadata and media from a URL.
        
        Args:
            url: Normalized post URL
            
        Returns:
            ExtractionResult, with empty asset lists if the page has no media
        """
        pass
    
    async def _load_page(self, url: str) -> MetaTags:
        """Fetch and parse a page."""
        html = await self.fetcher.fetch(url)
        try:
            return MetaTags.parse(html)
        except Exception as e:
            raise ExtractionFailed(f"Could not parse HTML: {e}") from e
    
    def _clean_text(self, text: Optional[str]) -> Optional[str]:
        """Clean and normalize text content."""
        if not text:
            return None
        # Remove excessive whitespace
        text = ' '.join(text.split())
        return text.strip() if text else None


class MetaTagScraper(BaseScraper):
    """
    Extractor driven by Open Graph / Twitter Card meta tags.
    
    Subclasses tune which tags are read through the class attributes. A
    video found in the meta tags suppresses the image asset. When
    ``use_script_fallback`` is set and no asset was found, inline scripts
    are searched for embedded post JSON.
    """
    
    TITLE_TAGS: tuple[str, ...] = ('og:title', 'twitter:title')
    AUTHOR_TAGS: tuple[str, ...] = ('twitter:site', 'og:site_name')
    THUMBNAIL_TAGS: tuple[str, ...] = ('og:image', 'twitter:image')
    VIDEO_TAGS: tuple[str, ...] = ('og:video', 'og:video:url')
    IMAGE_TAGS: tuple[str, ...] = ('og:image', 'og:image:secure_url')
    
    use_script_fallback: bool = False
    
    @property
    def default_title(self) -> str:
        return f"{self.platform.display_name} Content"
    
    @property
    def default_author(self) -> str:
        return f"{self.platform.display_name} User"
    
    async def extract(self, url: str) -> ExtractionResult:
        page = await self._load_page(url)
        try:
            return self._build_result(url, page)
        except ExtractionFailed:
            raise
        except Exception as e:
            raise ExtractionFailed(f"Unexpected page structure: {e}") from e
    
    def _build_result(self, url: str, page: MetaTags) -> ExtractionResult:
        assets = self._meta_assets(page)
        
        if not assets and self.use_script_fallback:
            asset = try_script_fallback(page.soup)
            if asset is not None:
                logger.debug("Media for %s found in inline script", url)
                assets.append(asset)
        
        return ExtractionResult.from_assets(
            source_url=url,
            platform=self.platform,
            title=self._clean_text(page.first(*self.TITLE_TAGS)) or self.default_title,
            author=self._clean_text(page.first(*self.AUTHOR_TAGS)) or self.default_author,
            thumbnail=page.first(*self.THUMBNAIL_TAGS),
            assets=assets,
        )
    
    def _meta_assets(self, page: MetaTags) -> list[MediaAsset]:
        video_url = page.first(*self.VIDEO_TAGS) if self.VIDEO_TAGS else None
        if video_url:
            return [MediaAsset(
                url=video_url,
                kind=MediaKind.VIDEO,
                quality='hd',
                extension='mp4',
                has_audio=True,
            )]
        
        image_url = page.first(*self.IMAGE_TAGS) if self.IMAGE_TAGS else None
        if image_url:
            return [MediaAsset(
                url=image_url,
                kind=MediaKind.IMAGE,
                quality='original',
                extension='jpg',
            )]
        
        return []


class PendingScraper(BaseScraper):
    """Placeholder for platforms whose extraction is not available yet."""
    
    async def extract(self, url: str) -> ExtractionResult:
        raise PlatformNotImplemented(self.platform.value)
