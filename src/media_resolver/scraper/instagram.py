"""Instagram extractor based on page meta tags."""

from ..models import Platform
from .base import MetaTagScraper


class InstagramScraper(MetaTagScraper):
    """
    Extractor for Instagram posts and reels.
    
    Reads the meta tags public post pages expose to link previews and
    falls back to the post JSON some pages still embed in a script.
    """
    
    platform = Platform.INSTAGRAM
    
    VIDEO_TAGS = ('og:video', 'og:video:url', 'twitter:player:stream')
    
    use_script_fallback = True
