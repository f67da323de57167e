"""Resolve a free-text query to playable YouTube / YouTube Music URLs."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlencode

import httpx

from cache import TTLCache
from config import DEFAULT_TIMEOUT_SECONDS
from fetch import fetch_text
from models import VideoResolution
from scrape import TokenExtractor, extract_first_video_id

logger = logging.getLogger(__name__)

RESOLVE_CACHE_TTL_SECONDS = 60 * 60
YOUTUBE_RESULTS_URL = "https://www.youtube.com/results"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
MUSIC_WATCH_URL = "https://music.youtube.com/watch?v={video_id}"

# YouTube serves a stripped page without embedded results to non-browser clients.
BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


def build_youtube_search_url(title: Optional[str], artist: Optional[str] = "") -> str:
    """Build a YouTube search-results URL for ``"<title> <artist>"``."""
    query = f"{title or ''} {artist or ''}".strip()
    return f"{YOUTUBE_RESULTS_URL}?{urlencode({'search_query': query})}"


def build_resolution(video_id: Optional[str]) -> VideoResolution:
    if not video_id:
        return VideoResolution()
    return VideoResolution(
        youtube_url=YOUTUBE_WATCH_URL.format(video_id=video_id),
        music_url=MUSIC_WATCH_URL.format(video_id=video_id),
    )


class VideoResolver:
    """Scrape the first video id for a query. Never raises.

    Negative results are cached like positive ones so that queries known to
    yield nothing are not scraped again within the TTL.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: Optional[TTLCache] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        extractor: TokenExtractor = extract_first_video_id,
    ) -> None:
        self.client = client
        self.cache = (
            cache if cache is not None
            else TTLCache(ttl_seconds=RESOLVE_CACHE_TTL_SECONDS)
        )
        self.timeout = timeout
        self.extractor = extractor

    async def resolve_video(
        self, query: Optional[str] = None, search_url: Optional[str] = None
    ) -> VideoResolution:
        """Resolve ``query`` or a precomputed ``search_url`` to playback URLs.

        The cache key is the query when given, else the search URL, both used
        verbatim. With neither, an empty resolution is returned uncached.
        """
        key = query or search_url
        if not key:
            return VideoResolution()

        cached = self.cache.get(key)
        if cached is not None:
            return cached

        url = search_url or build_youtube_search_url(query)
        html = await fetch_text(
            self.client, url, headers=BROWSER_HEADERS, timeout=self.timeout
        )
        video_id = self.extractor(html)
        if video_id is None:
            logger.debug("No video id found for %r", key)

        resolution = build_resolution(video_id)
        self.cache.set(key, resolution)
        return resolution
