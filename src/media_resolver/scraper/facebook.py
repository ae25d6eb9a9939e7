"""Facebook extractor."""

from ..models import Platform
from .instagram import InstagramScraper


class FacebookScraper(InstagramScraper):
    """Facebook pages expose the same Open Graph tags as Instagram."""
    
    platform = Platform.FACEBOOK
