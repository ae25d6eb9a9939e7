"""Fallback extraction from post JSON embedded in inline scripts."""

import json
import logging
import re
from typing import Any, Optional, Union

from bs4 import BeautifulSoup

from ..models import MediaAsset, MediaKind


logger = logging.getLogger(__name__)

# Scripts carrying post data mention this key
MARKER = 'display_url'

CONFIG_PATTERN = re.compile(r'\{\s*"config"\s*:')

_decoder = json.JSONDecoder()


def try_script_fallback(page: Union[str, BeautifulSoup]) -> Optional[MediaAsset]:
    """
    Look for a media descriptor inside inline ``<script>`` blocks.
    
    Each script containing ``display_url`` is searched for the first
    ``{"config": ...}`` object, from which
    ``entry_data.PostPage[0].graphql.shortcode_media`` is read. Scripts that
    fail to decode are logged and skipped.
    
    Args:
        page: Raw HTML or an already parsed document
        
    Returns:
        The first asset found, or None
    """
    soup = page if isinstance(page, BeautifulSoup) else BeautifulSoup(page, 'html.parser')
    
    for index, script in enumerate(soup.find_all('script')):
        text = script.string or script.get_text()
        if not text or MARKER not in text:
            continue
        
        try:
            data = _decode_config(text)
            if data is None:
                continue
            media = _shortcode_media(data)
            if media is None:
                continue
            asset = _asset_from_media(media)
        except (ValueError, TypeError, RecursionError) as e:
            logger.warning("Failed to parse script #%d: %s", index, e)
            continue
        
        if asset is not None:
            return asset
    
    return None


def _decode_config(text: str) -> Optional[dict]:
    match = CONFIG_PATTERN.search(text)
    if not match:
        return None
    data, _ = _decoder.raw_decode(text, match.start())
    return data if isinstance(data, dict) else None


def _dig(data: Any, *path: Union[str, int]) -> Any:
    """Follow a path of keys/indices, returning None on any miss."""
    for step in path:
        if isinstance(step, int):
            if not isinstance(data, list) or len(data) <= step:
                return None
        elif not isinstance(data, dict):
            return None
        data = data[step] if isinstance(step, int) else data.get(step)
    return data


def _shortcode_media(data: dict) -> Optional[dict]:
    media = _dig(data, 'entry_data', 'PostPage', 0, 'graphql', 'shortcode_media')
    return media if isinstance(media, dict) else None


def _asset_from_media(media: dict) -> Optional[MediaAsset]:
    width = _dig(media, 'dimensions', 'width')
    height = _dig(media, 'dimensions', 'height')
    
    if media.get('is_video'):
        if not media.get('video_url'):
            return None
        return MediaAsset(
            url=media['video_url'],
            kind=MediaKind.VIDEO,
            quality='hd',
            extension='mp4',
            width=width,
            height=height,
            duration=media.get('video_duration'),
            has_audio=media.get('has_audio', True),
        )
    
    if media.get('display_url'):
        return MediaAsset(
            url=media['display_url'],
            kind=MediaKind.IMAGE,
            quality='original',
            extension='jpg',
            width=width,
            height=height,
        )
    
    return None
