"""Mood suggestions: term generation composed with the cached resolvers."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from artwork import PosterResolver
from cache import TTLCache
from config import (
    DEFAULT_GENERATOR_TIMEOUT_SECONDS,
    ITUNES,
    OPENAI,
    YOUTUBE,
    load_cache_max_entries,
    load_config,
    load_country,
    load_openai_key,
    load_openai_model,
)
from generator import TermGenerator
from models import PodcastResult, SongSuggestion, VideoResolution
from podcasts import (
    DEFAULT_LIMIT_PER_TERM,
    DEFAULT_TOTAL_LIMIT,
    PODCAST_CACHE_TTL_SECONDS,
    PodcastResolver,
)
from resolver import RESOLVE_CACHE_TTL_SECONDS, VideoResolver, build_youtube_search_url

logger = logging.getLogger(__name__)

DEFAULT_SONG_COUNT = 30
MAX_SONG_COUNT = 50


class MoodError(Exception):
    """Request rejected before any lookup was attempted."""


class ConfigurationError(MoodError):
    """A required setting (e.g. the OpenAI API key) is missing."""


def _validate_mood(mood: str) -> str:
    if not isinstance(mood, str) or not mood.strip():
        raise MoodError("Mood must be a non-empty string")
    return mood.strip()


def fallback_podcast_terms(mood: str) -> list[str]:
    """Search terms used when the generator returns nothing."""
    return [mood, f"{mood} podcast", "mindfulness", "motivation", "self improvement"]


class MoodService:
    """Entry point for song, podcast and music-URL lookups."""

    def __init__(
        self,
        posters: PosterResolver,
        podcasts: PodcastResolver,
        videos: VideoResolver,
        generator: Optional[TermGenerator] = None,
        clients: tuple[httpx.AsyncClient, ...] = (),
    ) -> None:
        self.posters = posters
        self.podcasts = podcasts
        self.videos = videos
        self.generator = generator
        self._clients = clients

    def _require_generator(self) -> TermGenerator:
        if self.generator is None:
            raise ConfigurationError(
                "Missing required environment variable: OPENAI_API_KEY"
            )
        return self.generator

    async def songs_for_mood(
        self, mood: str, count: int = DEFAULT_SONG_COUNT
    ) -> list[SongSuggestion]:
        """Generate songs for ``mood`` and attach search links and cover art."""
        mood = _validate_mood(mood)
        if not isinstance(count, int) or count < 1 or count > MAX_SONG_COUNT:
            raise MoodError(f"count must be an integer between 1 and {MAX_SONG_COUNT}")
        generator = self._require_generator()

        ideas = await generator.generate_songs(mood, count)
        posters = await asyncio.gather(
            *(self.posters.resolve_poster(i.title, i.artist) for i in ideas)
        )
        return [
            SongSuggestion(
                title=idea.title,
                artist=idea.artist,
                youtube_search_url=build_youtube_search_url(idea.title, idea.artist),
                poster_url=poster,
            )
            for idea, poster in zip(ideas, posters)
        ]

    async def podcasts_for_mood(self, mood: str) -> list[PodcastResult]:
        """Podcasts for ``mood`` searched from generated (or fallback) terms."""
        mood = _validate_mood(mood)
        cached = self.podcasts.cached(mood)
        if cached is not None:
            return cached

        terms = await self._require_generator().generate_podcast_terms(mood)
        if not terms:
            logger.info("Using fallback podcast terms for mood %r", mood)
            terms = fallback_podcast_terms(mood)
        return await self.podcasts.resolve_podcasts(
            mood, terms, DEFAULT_LIMIT_PER_TERM, DEFAULT_TOTAL_LIMIT
        )

    async def resolve_music_url(
        self,
        query: Optional[str] = None,
        youtube_search_url: Optional[str] = None,
    ) -> VideoResolution:
        """Resolve a query or a YouTube search URL to playable URLs."""
        query = query.strip() if isinstance(query, str) else ""
        youtube_search_url = (
            youtube_search_url.strip() if isinstance(youtube_search_url, str) else ""
        )
        if not query and not youtube_search_url:
            raise MoodError("Provide either 'youtube_search_url' or 'query'.")
        return await self.videos.resolve_video(
            query=query or None, search_url=youtube_search_url or None
        )

    async def aclose(self) -> None:
        for client in self._clients:
            await client.aclose()

    async def __aenter__(self) -> "MoodService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def create_service() -> MoodService:
    """Build a MoodService from environment configuration."""
    max_entries = load_cache_max_entries()
    country = load_country()

    itunes_opts = load_config(ITUNES)
    youtube_opts = load_config(YOUTUBE)
    openai_opts = load_config(OPENAI, default_timeout=DEFAULT_GENERATOR_TIMEOUT_SECONDS)
    itunes_client = httpx.AsyncClient(**itunes_opts)
    youtube_client = httpx.AsyncClient(follow_redirects=True, **youtube_opts)
    clients = [itunes_client, youtube_client]

    generator = None
    api_key = load_openai_key()
    if api_key:
        openai_client = httpx.AsyncClient(**openai_opts)
        clients.append(openai_client)
        generator = TermGenerator(
            openai_client, api_key,
            model=load_openai_model(), timeout=openai_opts["timeout"],
        )

    return MoodService(
        posters=PosterResolver(
            itunes_client,
            TTLCache(ttl_seconds=None, max_entries=max_entries),
            country=country,
            timeout=itunes_opts["timeout"],
        ),
        podcasts=PodcastResolver(
            itunes_client,
            TTLCache(ttl_seconds=PODCAST_CACHE_TTL_SECONDS, max_entries=max_entries),
            country=country,
            timeout=itunes_opts["timeout"],
        ),
        videos=VideoResolver(
            youtube_client,
            TTLCache(ttl_seconds=RESOLVE_CACHE_TTL_SECONDS, max_entries=max_entries),
            timeout=youtube_opts["timeout"],
        ),
        generator=generator,
        clients=tuple(clients),
    )
