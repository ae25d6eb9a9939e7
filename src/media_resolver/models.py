"""Data models for extracted media."""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class Platform(str, Enum):
    """Supported social media platforms."""
    
    INSTAGRAM = "instagram"
    TWITTER = "twitter"
    YOUTUBE = "youtube"
    TIKTOK = "tiktok"
    FACEBOOK = "facebook"
    PINTEREST = "pinterest"
    GENERIC = "generic"
    
    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class MediaKind(str, Enum):
    """Kind of a discoverable media resource."""
    
    IMAGE = "image"
    VIDEO = "video"


class MediaAsset(BaseModel):
    """A single image or video found on a post page."""
    
    url: str = Field(..., description="Direct media URL")
    kind: MediaKind = Field(..., alias="type")
    quality: Optional[str] = Field(None, description="hd, original, ...")
    extension: Optional[str] = Field(None, description="File extension without dot")
    
    # Dimensions (only known from embedded post JSON)
    width: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    duration: Optional[float] = Field(None, ge=0)
    has_audio: Optional[bool] = Field(None, alias="hasAudio")
    
    class Config:
        frozen = True
        populate_by_name = True
    
    def to_payload(self) -> dict[str, Any]:
        """JSON shape used in API responses."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ExtractionResult(BaseModel):
    """Normalized description of a post and its media."""
    
    source_url: str
    platform: Platform
    title: str
    author: str
    thumbnail: Optional[str] = None
    images: tuple[MediaAsset, ...] = ()
    videos: tuple[MediaAsset, ...] = ()
    
    class Config:
        frozen = True
    
    @classmethod
    def from_assets(
        cls,
        source_url: str,
        platform: Platform,
        title: str,
        author: str,
        thumbnail: Optional[str] = None,
        assets: Optional[list[MediaAsset]] = None,
    ) -> "ExtractionResult":
        """Build a result, splitting an ordered asset list into images and videos."""
        assets = assets or []
        return cls(
            source_url=source_url,
            platform=platform,
            title=title,
            author=author,
            thumbnail=thumbnail,
            images=tuple(a for a in assets if a.kind == MediaKind.IMAGE),
            videos=tuple(a for a in assets if a.kind == MediaKind.VIDEO),
        )
    
    @property
    def duration(self) -> Optional[float]:
        """Duration of the first video, if known."""
        for video in self.videos:
            if video.duration:
                return video.duration
        return None
    
    def to_payload(self) -> dict[str, Any]:
        """
        Build the success body of the download endpoint.
        
        The ``cached`` and ``requestId`` keys are added by the caller.
        """
        return {
            "success": True,
            "url": self.source_url,
            "title": self.title,
            "author": self.author,
            "thumbnail": self.thumbnail,
            "duration": self.duration,
            "source": self.platform.value,
            "medias": {
                "images": [a.to_payload() for a in self.images],
                "videos": [a.to_payload() for a in self.videos],
            },
        }
