"""Cover art lookup via the iTunes Search API with placeholder fallback."""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import quote

import httpx

from cache import TTLCache
from config import DEFAULT_COUNTRY, DEFAULT_TIMEOUT_SECONDS
from fetch import fetch_json
from keys import normalize_key

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
PLACEHOLDER_BASE = "https://dummyimage.com/600x600/111/fff&text="
POSTER_PLACEHOLDER = PLACEHOLDER_BASE + "No+Cover"

_SEARCH_LIMIT = 5
_PLACEHOLDER_TEXT_LIMIT = 60
_LOW_RES_TOKEN = re.compile(r"/100x100bb\.")


def to_hi_res_artwork(url100: Optional[str]) -> Optional[str]:
    """Rewrite a ``.../100x100bb.jpg`` artwork URL to its 600x600 variant."""
    if not url100:
        return None
    return _LOW_RES_TOKEN.sub("/600x600bb.", url100, count=1)


def build_placeholder_poster(title: Optional[str], artist: Optional[str]) -> str:
    """Placeholder image URL captioned with the song text (max 60 chars)."""
    text = f"{str(title or '').strip()} {str(artist or '').strip()}".strip()
    if not text:
        return POSTER_PLACEHOLDER
    return PLACEHOLDER_BASE + quote(text[:_PLACEHOLDER_TEXT_LIMIT], safe="!*'()")


def _first_artwork(data: object) -> Optional[str]:
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list):
        return None
    for item in results:
        if not isinstance(item, dict):
            continue
        url = item.get("artworkUrl100")
        if isinstance(url, str) and url:
            return url
    return None


class PosterResolver:
    """Resolve a song's cover art URL. Never raises; always returns a URL.

    Results, placeholders included, are cached under the normalized
    title/artist key with no expiry.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: Optional[TTLCache] = None,
        country: str = DEFAULT_COUNTRY,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.cache = cache if cache is not None else TTLCache(ttl_seconds=None)
        self.country = country
        self.timeout = timeout

    async def resolve_poster(self, title: Optional[str], artist: Optional[str]) -> str:
        key = normalize_key(title, artist)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        term = f"{title or ''} {artist or ''}".strip()
        if not term:
            poster = build_placeholder_poster(title, artist)
            self.cache.set(key, poster)
            return poster

        params = {
            "term": term,
            "entity": "song",
            "limit": str(_SEARCH_LIMIT),
            "country": self.country,
        }
        data = await fetch_json(
            self.client, ITUNES_SEARCH_URL, params=params, timeout=self.timeout
        )
        poster = to_hi_res_artwork(_first_artwork(data))
        if poster is None:
            logger.debug("No artwork for %r; using placeholder", key)
            poster = build_placeholder_poster(title, artist)

        self.cache.set(key, poster)
        return poster
