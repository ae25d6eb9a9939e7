"""YouTube extractor placeholder."""

from ..models import Platform
from .base import PendingScraper


class YouTubeScraper(PendingScraper):
    """YouTube serves signed stream URLs, which are not resolved here."""
    
    platform = Platform.YOUTUBE
