"""Error kinds raised while resolving a post URL.

Every error carries the HTTP status it maps to and a platform-agnostic
message that is safe to show to API clients.
"""

from typing import Any, Optional


class ResolverError(Exception):
    """Base class for all expected failures."""
    
    status_code: int = 500
    message: str = "Download failed"
    
    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(detail or self.message)
    
    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "error": self.message}


class InvalidInput(ResolverError):
    """Missing or malformed URL."""
    
    status_code = 400
    message = "Missing or invalid URL"
    
    def to_payload(self) -> dict[str, Any]:
        # Validation messages are written for clients
        return {"success": False, "error": self.detail or self.message}


class RateLimited(ResolverError):
    """Client exceeded its request budget."""
    
    status_code = 429
    message = "Too many requests, please try again later"
    
    def __init__(self, retry_after: float):
        self.retry_after = retry_after
        super().__init__(f"Rate limit exceeded, retry in {retry_after:.1f}s")


class UnsupportedPlatform(ResolverError):
    """No extractor exists for the requested platform."""
    
    status_code = 400
    message = "Unsupported platform"
    
    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"No extractor for platform '{platform}'")
    
    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["detectedPlatform"] = self.platform
        return payload


class PlatformNotImplemented(ResolverError):
    """The platform is recognized but extraction is not available yet."""
    
    status_code = 501
    message = "Downloads from this platform are not supported yet"
    
    def __init__(self, platform: str):
        self.platform = platform
        super().__init__(f"Extraction for '{platform}' is not implemented")
    
    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["detectedPlatform"] = self.platform
        return payload


class UpstreamTimeout(ResolverError):
    message = "The request timed out, please try again"


class UpstreamUnreachable(ResolverError):
    message = "Could not reach the page, check the link and try again"
    
    def __init__(self, detail: Optional[str] = None, status: Optional[int] = None):
        self.status = status
        super().__init__(detail)


class ContentTooLarge(ResolverError):
    message = "The page is too large to process"
    
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Response body exceeds {limit} bytes")


class ExtractionFailed(ResolverError):
    message = "Could not read media information from the page"
