"""Moodtunes MCP Server: song and podcast suggestions for a mood, plus YouTube Music links."""

from __future__ import annotations

import dataclasses
import json

from mcp.server.fastmcp import FastMCP

from health import check_health
from service import ConfigurationError, MoodError, create_service

_service = create_service()

mcp = FastMCP("moodtunes")


@mcp.tool()
async def mood_songs(mood: str, count: int = 30) -> str:
    """Suggest real songs for a mood, each with a YouTube search link and cover art.

    Args:
        mood: Free-text mood, e.g. "happy", "rainy sunday", "focus".
        count: Number of songs to suggest (1-50, default 30).

    Returns:
        JSON string with a list of {title, artist, youtube_search_url, poster_url}
        objects or error details.
    """
    try:
        songs = await _service.songs_for_mood(mood, count=count)
        return json.dumps([s.to_dict() for s in songs], ensure_ascii=False, indent=2)
    except ConfigurationError as exc:
        return json.dumps({"error": "ConfigurationError", "message": str(exc)})
    except MoodError as exc:
        return json.dumps({"error": "InvalidRequest", "message": str(exc)})
    except Exception as exc:
        return json.dumps({"error": "UnexpectedError", "message": str(exc)})


@mcp.tool()
async def mood_podcasts(mood: str) -> str:
    """Suggest up to 20 Apple Podcasts shows for a mood.

    Args:
        mood: Free-text mood, e.g. "calm", "anxious", "motivated".

    Returns:
        JSON string with a list of podcasts (collection_id, title, author,
        artwork_url, track_view_url, feed_url) or error details.
    """
    try:
        podcasts = await _service.podcasts_for_mood(mood)
        return json.dumps([p.to_dict() for p in podcasts], ensure_ascii=False, indent=2)
    except ConfigurationError as exc:
        return json.dumps({"error": "ConfigurationError", "message": str(exc)})
    except MoodError as exc:
        return json.dumps({"error": "InvalidRequest", "message": str(exc)})
    except Exception as exc:
        return json.dumps({"error": "UnexpectedError", "message": str(exc)})


@mcp.tool()
async def resolve_music_url(query: str = "", youtube_search_url: str = "") -> str:
    """Resolve a song query to a playable YouTube and YouTube Music URL.

    Args:
        query: Free-text query, e.g. "Imagine John Lennon".
        youtube_search_url: A YouTube search-results URL, as returned by mood_songs.
                            Used when no query is given.

    Returns:
        JSON string with youtube_url and music_url (both null when nothing
        was found) or error details.
    """
    try:
        result = await _service.resolve_music_url(
            query=query, youtube_search_url=youtube_search_url
        )
        return json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    except MoodError as exc:
        return json.dumps({"error": "InvalidRequest", "message": str(exc)})
    except Exception as exc:
        return json.dumps({"error": "UnexpectedError", "message": str(exc)})


@mcp.tool()
async def health_check() -> str:
    """Check Moodtunes configuration health (OpenAI key, catalog country).

    Returns:
        JSON string with health status details.
    """
    return json.dumps(dataclasses.asdict(check_health()), ensure_ascii=False, indent=2)


if __name__ == "__main__":
    mcp.run()
