"""Immutable data structures for mood suggestions."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SongIdea:
    """Title/artist pair proposed by the term generator."""

    title: str
    artist: str


@dataclass(frozen=True)
class SongSuggestion:
    """Song idea enriched with a search link and cover art."""

    title: str
    artist: str
    youtube_search_url: str
    poster_url: str

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PodcastResult:
    """Single podcast from the catalog search."""

    collection_id: Optional[Union[int, str]] = None
    title: Optional[str] = None
    author: Optional[str] = None
    artwork_url: Optional[str] = None
    track_view_url: Optional[str] = None
    feed_url: Optional[str] = None

    @property
    def identity(self) -> object:
        """Dedup identity: the collection id, else the title/author pair."""
        return self.collection_id or f"{self.title}-{self.author}"

    @property
    def usable(self) -> bool:
        return bool(self.title and self.track_view_url)

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class VideoResolution:
    """Playback URLs for one video id; both None when nothing was found."""

    youtube_url: Optional[str] = None
    music_url: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.youtube_url is not None

    def to_dict(self) -> dict:
        """Convert to plain dictionary."""
        return dataclasses.asdict(self)
