"""Song and podcast-keyword ideas from an OpenAI chat completion."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

import httpx

from config import DEFAULT_GENERATOR_TIMEOUT_SECONDS, DEFAULT_OPENAI_MODEL
from fetch import post_json
from models import SongIdea

logger = logging.getLogger(__name__)

CHAT_COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
MAX_PODCAST_TERMS = 5

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)
_JSON_ARRAY = re.compile(r"\[[\s\S]*\]")

_SONGS_PROMPT = """
Generate {count} real songs suitable for the mood "{mood}".

Return ONLY valid JSON array.
Format:
[
  {{ "title": "...", "artist": "..." }}
]

Rules:
- No explanations
- No links
- No emojis
- No duplicates
""".strip()

_PODCAST_TERMS_PROMPT = """
Generate 5 podcast search queries (keywords) that match the mood "{mood}".

Return ONLY valid JSON array of strings.
Example:
["stress relief", "calm mind", "sleep stories", "anxiety help", "guided meditation"]

Rules:
- Only strings
- No explanations
- No emojis
""".strip()


def parse_json_array(text: Optional[str]) -> list:
    """Pull the first JSON array out of a model reply, tolerating code fences.

    Returns [] when no array can be decoded.
    """
    if not text:
        return []
    cleaned = _CODE_FENCE.sub("", text).strip()
    match = _JSON_ARRAY.search(cleaned)
    if not match:
        return []
    try:
        parsed = json.loads(match.group(0))
    except ValueError:
        return []
    return parsed if isinstance(parsed, list) else []


def _reply_text(data: Any) -> Optional[str]:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class TermGenerator:
    """Ask a chat model for song ideas and podcast search keywords.

    Every failure (transport, status, malformed reply) yields an empty list.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str = DEFAULT_OPENAI_MODEL,
        timeout: float = DEFAULT_GENERATOR_TIMEOUT_SECONDS,
    ) -> None:
        self.client = client
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    async def _complete(self, prompt: str, temperature: float) -> Optional[str]:
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        data = await post_json(
            self.client, CHAT_COMPLETIONS_URL, payload,
            headers=headers, timeout=self.timeout,
        )
        return _reply_text(data)

    async def generate_songs(self, mood: str, count: int) -> list[SongIdea]:
        text = await self._complete(
            _SONGS_PROMPT.format(count=count, mood=mood), temperature=0.7
        )
        ideas = []
        for item in parse_json_array(text):
            if not isinstance(item, dict):
                continue
            title = str(item.get("title") or "").strip()
            artist = str(item.get("artist") or "").strip()
            if title or artist:
                ideas.append(SongIdea(title=title, artist=artist))
        if not ideas:
            logger.warning("No song ideas generated for mood %r", mood)
        return ideas

    async def generate_podcast_terms(self, mood: str) -> list[str]:
        text = await self._complete(
            _PODCAST_TERMS_PROMPT.format(mood=mood), temperature=0.5
        )
        terms = [str(s or "").strip() for s in parse_json_array(text)]
        return [t for t in terms if t][:MAX_PODCAST_TERMS]
