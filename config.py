"""Configuration loader: reads HTTP, catalog and term-generator settings from environment variables.

Supports per-service overrides with global fallback:
    MOODTUNES_{SERVICE}_{SUFFIX} → MOODTUNES_{SUFFIX} → default
"""

from __future__ import annotations

import os
from typing import Optional

DEFAULT_TIMEOUT_SECONDS = 8.0
DEFAULT_COUNTRY = "us"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_GENERATOR_TIMEOUT_SECONDS = 30.0

ITUNES = "ITUNES"
YOUTUBE = "YOUTUBE"
OPENAI = "OPENAI"


def _env(key: str, service_key: Optional[str] = None) -> str:
    """Resolve an env var with optional service-specific override.

    Checks MOODTUNES_{SERVICE}_{SUFFIX} first, then MOODTUNES_{SUFFIX}.
    """
    if service_key:
        val = os.environ.get(f"MOODTUNES_{service_key}_{key}", "").strip()
        if val:
            return val
    return os.environ.get(f"MOODTUNES_{key}", "").strip()


def load_timeout(
    service_key: Optional[str] = None, default: float = DEFAULT_TIMEOUT_SECONDS
) -> float:
    """Return the per-request timeout in seconds."""
    raw = _env("TIMEOUT", service_key)
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"MOODTUNES_TIMEOUT must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"MOODTUNES_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_config(
    service_key: Optional[str] = None, default_timeout: float = DEFAULT_TIMEOUT_SECONDS
) -> dict:
    """Build an httpx client options dict from environment variables.

    Args:
        service_key: Optional service identifier ("ITUNES", "YOUTUBE", "OPENAI").
                     When set, service-specific env vars take priority over global ones.

    Environment variables (global):
        MOODTUNES_PROXY  : proxy URL (e.g. http://127.0.0.1:7897)
        MOODTUNES_TIMEOUT: request timeout in seconds (default 8)

    Service-specific (e.g. for YOUTUBE):
        MOODTUNES_YOUTUBE_PROXY
        MOODTUNES_YOUTUBE_TIMEOUT

    The timeout is always present; the proxy only when non-empty.
    """
    opts: dict = {"timeout": load_timeout(service_key, default_timeout)}

    proxy = _env("PROXY", service_key)
    if proxy:
        opts["proxy"] = proxy

    return opts


def load_country() -> str:
    """Return the catalog storefront country code (MOODTUNES_COUNTRY, default "us")."""
    return (_env("COUNTRY", ITUNES) or DEFAULT_COUNTRY).lower()


def load_cache_max_entries() -> Optional[int]:
    """Return the per-cache entry cap, or None for unbounded caches.

    Environment variables:
        MOODTUNES_CACHE_MAX_ENTRIES: positive integer; unset or 0 means unbounded
    """
    raw = _env("CACHE_MAX_ENTRIES")
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(
            f"MOODTUNES_CACHE_MAX_ENTRIES must be an integer, got {raw!r}"
        ) from exc
    if value < 0:
        raise ValueError(f"MOODTUNES_CACHE_MAX_ENTRIES must not be negative, got {raw!r}")
    return value or None


def load_openai_key() -> Optional[str]:
    """Return the term generator API key, or None.

    MOODTUNES_OPENAI_API_KEY wins over the conventional OPENAI_API_KEY.
    """
    key = (
        os.environ.get("MOODTUNES_OPENAI_API_KEY", "").strip()
        or os.environ.get("OPENAI_API_KEY", "").strip()
    )
    return key if key else None


def load_openai_model() -> str:
    """Return the chat model (MOODTUNES_OPENAI_MODEL, default gpt-4o-mini)."""
    return _env("MODEL", OPENAI) or DEFAULT_OPENAI_MODEL
