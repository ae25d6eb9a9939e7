"""Platform detection and URL handling."""

import re
from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from .errors import InvalidInput, UnsupportedPlatform
from .models import Platform


# Ordered (substring, platform) pairs, first match wins
PLATFORM_DOMAINS: tuple[tuple[str, Platform], ...] = (
    ("instagram.com", Platform.INSTAGRAM),
    ("twitter.com", Platform.TWITTER),
    ("x.com", Platform.TWITTER),
    ("youtube.com", Platform.YOUTUBE),
    ("youtu.be", Platform.YOUTUBE),
    ("tiktok.com", Platform.TIKTOK),
    ("facebook.com", Platform.FACEBOOK),
    ("pinterest.com", Platform.PINTEREST),
)

AUTO = "auto"

MAX_URL_LENGTH = 2048

# Query parameters that only track the share and never change the post
TRACKING_PARAMS = {"igsh", "mibextid", "img_index"}

_HOST_PATTERN = re.compile(r'^(?:[a-z0-9-]+\.)+[a-z]{2,}$')


def detect_platform(url: str) -> Platform:
    """Detect the platform from a URL. Never raises."""
    if not isinstance(url, str):
        return Platform.GENERIC
    for needle, platform in PLATFORM_DOMAINS:
        if needle in url:
            return platform
    return Platform.GENERIC


def resolve_platform(url: str, hint: Optional[str] = None) -> Platform:
    """
    Pick the platform for a request.
    
    Args:
        url: Normalized request URL
        hint: Client-provided platform tag, or None/"auto" to detect
        
    Returns:
        The resolved platform
        
    Raises:
        UnsupportedPlatform: If the hint is not a known platform tag
    """
    if hint is None or not hint.strip() or hint.strip().lower() == AUTO:
        return detect_platform(url)
    try:
        return Platform(hint.strip().lower())
    except ValueError:
        raise UnsupportedPlatform(hint) from None


def validate_url(url: object) -> str:
    """
    Check a client-supplied URL and return its normalized form.
    
    Raises:
        InvalidInput: If the URL is missing or malformed
    """
    if url is None or (isinstance(url, str) and not url.strip()):
        raise InvalidInput("Missing URL parameter")
    if not isinstance(url, str):
        raise InvalidInput("URL must be a string")
    
    url = url.strip()
    if len(url) > MAX_URL_LENGTH:
        raise InvalidInput("URL is too long")
    if any(ch.isspace() for ch in url):
        raise InvalidInput("Invalid URL format")
    
    if "://" not in url:
        url = f"https://{url}"
    
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
        # Accessing .port validates the port number
        parts.port
    except ValueError:
        raise InvalidInput("Invalid URL format") from None
    
    if parts.scheme.lower() not in ("http", "https"):
        raise InvalidInput("Only http and https URLs are supported")
    if not _HOST_PATTERN.match(host):
        raise InvalidInput("Invalid URL format")
    
    return normalize_url(url)


def normalize_url(url: str) -> str:
    """Normalize a URL for fetching and consistent cache keys."""
    parts = urlsplit(url.strip())
    
    # Remove tracking params
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS and not key.startswith("utm_")
    ]
    
    path = parts.path
    if path.endswith("/"):
        path = path.rstrip("/")
    
    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        path,
        urlencode(query),
        "",
    ))
