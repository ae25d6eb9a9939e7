"""Request and response bodies of the HTTP API."""

from typing import Any, Optional
from pydantic import BaseModel


class DownloadRequest(BaseModel):
    """Request body for resolving a post URL."""
    url: Optional[Any] = None
    platform: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
    version: str
