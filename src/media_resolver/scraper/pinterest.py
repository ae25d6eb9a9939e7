"""Pinterest extractor."""

from ..models import Platform
from .instagram import InstagramScraper


class PinterestScraper(InstagramScraper):
    """Pins are read through the same meta tags as Instagram posts."""
    
    platform = Platform.PINTEREST
