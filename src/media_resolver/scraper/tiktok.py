"""TikTok extractor placeholder."""

from ..models import Platform
from .base import PendingScraper


class TikTokScraper(PendingScraper):
    platform = Platform.TIKTOK
