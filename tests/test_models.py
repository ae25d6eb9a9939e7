"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from media_resolver.models import ExtractionResult, MediaAsset, MediaKind, Platform


class TestMediaAsset:
    
    def test_payload_uses_type_and_drops_unset(self):
        asset = MediaAsset(url="https://cdn/x.mp4", kind=MediaKind.VIDEO, quality="hd")
        assert asset.to_payload() == {"url": "https://cdn/x.mp4", "type": "video", "quality": "hd"}
        
        payload = MediaAsset(url="https://cdn/x.mp4", kind=MediaKind.VIDEO, has_audio=True).to_payload()
        assert payload["hasAudio"] is True
        assert "has_audio" not in payload
    
    def test_accepts_alias(self):
        asset = MediaAsset(url="https://cdn/x.jpg", type="image")
        assert asset.kind == MediaKind.IMAGE
    
    def test_immutable(self):
        asset = MediaAsset(url="https://cdn/x.jpg", kind=MediaKind.IMAGE)
        with pytest.raises(ValidationError):
            asset.url = "https://other"


class TestExtractionResult:
    
    def test_from_assets_splits_by_kind(self):
        video = MediaAsset(url="https://cdn/v.mp4", kind=MediaKind.VIDEO, duration=3.0)
        image = MediaAsset(url="https://cdn/i.jpg", kind=MediaKind.IMAGE)
        result = ExtractionResult.from_assets(
            source_url="https://instagram.com/p/1",
            platform=Platform.INSTAGRAM,
            title="t",
            author="a",
            assets=[image, video],
        )
        assert result.images == (image,)
        assert result.videos == (video,)
        assert result.duration == 3.0
    
    def test_empty_assets(self):
        result = ExtractionResult.from_assets(
            source_url="https://instagram.com/p/1",
            platform=Platform.INSTAGRAM,
            title="t",
            author="a",
        )
        payload = result.to_payload()
        assert payload["medias"] == {"images": [], "videos": []}
        assert payload["duration"] is None
        assert payload["source"] == "instagram"
    
    def test_platform_closed_enum(self):
        with pytest.raises(ValidationError):
            ExtractionResult(source_url="u", platform="myspace", title="t", author="a")
