"""Cache key normalization."""

from __future__ import annotations

from typing import Optional


def _clean(value: Optional[str]) -> str:
    return str(value or "").strip().lower()


def normalize_key(title: Optional[str] = None, artist: Optional[str] = None) -> str:
    """Return ``"<title> - <artist>"`` trimmed and lowercased.

    Missing parts count as empty strings, so ``("Imagine", "John Lennon")`` and
    ``("  imagine ", "JOHN LENNON")`` share one key.
    """
    return f"{_clean(title)} - {_clean(artist)}"


def podcast_key(mood: str) -> str:
    return f"podcasts:{str(mood or '').lower()}"
