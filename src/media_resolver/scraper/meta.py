"""Meta tag access over a parsed HTML page."""

from typing import Optional

from bs4 import BeautifulSoup


class MetaTags:
    """Reads Open Graph / Twitter Card values from a page."""
    
    def __init__(self, soup: BeautifulSoup):
        self.soup = soup
    
    @classmethod
    def parse(cls, html: str) -> "MetaTags":
        return cls(BeautifulSoup(html, 'html.parser'))
    
    def get(self, name: str) -> Optional[str]:
        """
        Content of the meta tag with the given ``property`` or ``name``.
        
        Empty content counts as missing.
        """
        for attr in ('property', 'name'):
            tag = self.soup.select_one(f'meta[{attr}="{name}"]')
            if tag is None:
                continue
            content = (tag.get('content') or '').strip()
            if content:
                return content
        return None
    
    def first(self, *names: str) -> Optional[str]:
        """First non-empty value among ``names``, in order."""
        for name in names:
            value = self.get(name)
            if value:
                return value
        return None
