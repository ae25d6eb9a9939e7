"""Twitter / X extractor."""

from ..models import Platform
from .base import MetaTagScraper


class TwitterScraper(MetaTagScraper):
    """
    Extractor for tweets.
    
    Only videos are reported; tweet images are not exposed as assets.
    """
    
    platform = Platform.TWITTER
    
    TITLE_TAGS = ('og:title',)
    AUTHOR_TAGS = ('twitter:site',)
    THUMBNAIL_TAGS = ('og:image',)
    VIDEO_TAGS = ('og:video:url', 'og:video')
    IMAGE_TAGS = ()
    
    default_title = "Tweet"
    default_author = "Twitter User"
