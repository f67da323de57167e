"""Podcast search across several terms via the iTunes Search API."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import httpx

from cache import TTLCache
from config import DEFAULT_COUNTRY, DEFAULT_TIMEOUT_SECONDS
from fetch import fetch_json
from keys import podcast_key
from models import PodcastResult

logger = logging.getLogger(__name__)

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"
PODCAST_CACHE_TTL_SECONDS = 10 * 60
DEFAULT_LIMIT_PER_TERM = 10
DEFAULT_TOTAL_LIMIT = 20


def _build_podcast_result(entry: dict) -> PodcastResult:
    """Convert an iTunes podcast entry to a PodcastResult."""
    collection_id = entry.get("collectionId")
    if not isinstance(collection_id, (int, str)):
        collection_id = None
    return PodcastResult(
        collection_id=collection_id,
        title=entry.get("collectionName"),
        author=entry.get("artistName"),
        artwork_url=entry.get("artworkUrl600") or entry.get("artworkUrl100") or None,
        track_view_url=entry.get("trackViewUrl") or None,
        feed_url=entry.get("feedUrl") or None,
    )


def dedupe_podcasts(
    podcasts: Iterable[PodcastResult], total_limit: int
) -> list[PodcastResult]:
    """Keep the first usable podcast per identity, up to ``total_limit``.

    An identity is claimed by its first occurrence even when that entry is
    unusable (no title or no store link), so later duplicates stay dropped.
    """
    seen: set = set()
    unique: list[PodcastResult] = []
    if total_limit <= 0:
        return unique
    for podcast in podcasts:
        identity = podcast.identity
        if identity in seen:
            continue
        seen.add(identity)
        if not podcast.usable:
            continue
        unique.append(podcast)
        if len(unique) >= total_limit:
            break
    return unique


class PodcastResolver:
    """Collect podcasts for a mood from several search terms. Never raises."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: Optional[TTLCache] = None,
        country: str = DEFAULT_COUNTRY,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.cache = (
            cache if cache is not None
            else TTLCache(ttl_seconds=PODCAST_CACHE_TTL_SECONDS)
        )
        self.country = country
        self.timeout = timeout

    def cached(self, mood: str) -> Optional[list[PodcastResult]]:
        """Return the cached list for ``mood`` without touching the network."""
        hit = self.cache.get(podcast_key(mood))
        return list(hit) if hit is not None else None

    async def fetch_by_term(
        self, term: str, limit: int = DEFAULT_LIMIT_PER_TERM
    ) -> list[PodcastResult]:
        """Search podcasts for one term; an empty list on any failure."""
        term = str(term or "").strip()
        if not term:
            return []
        params = {
            "term": term,
            "media": "podcast",
            "entity": "podcast",
            "limit": str(limit),
            "country": self.country,
        }
        data = await fetch_json(
            self.client, ITUNES_SEARCH_URL, params=params, timeout=self.timeout
        )
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            return []
        return [_build_podcast_result(e) for e in results if isinstance(e, dict)]

    async def resolve_podcasts(
        self,
        mood: str,
        search_terms: list[str],
        limit_per_term: int = DEFAULT_LIMIT_PER_TERM,
        total_limit: int = DEFAULT_TOTAL_LIMIT,
    ) -> list[PodcastResult]:
        """Return at most ``total_limit`` deduplicated, usable podcasts.

        Terms are searched in order; searching stops once twice
        ``total_limit`` raw results have been collected. The final list is
        cached per mood for ten minutes.
        """
        cached = self.cached(mood)
        if cached is not None:
            return cached

        collected: list[PodcastResult] = []
        for term in search_terms:
            collected.extend(await self.fetch_by_term(term, limit_per_term))
            if len(collected) >= total_limit * 2:
                break

        unique = dedupe_podcasts(collected, total_limit)
        logger.debug(
            "Podcasts for %r: %d raw, %d kept", mood, len(collected), len(unique)
        )
        self.cache.set(podcast_key(mood), tuple(unique))
        return unique
