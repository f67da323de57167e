"""Environment health checks for the term generator and HTTP stack."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from config import load_country, load_openai_key, load_openai_model


@dataclass(frozen=True)
class HealthStatus:
    ok: bool
    has_openai_key: bool
    openai_model: str
    country: str
    httpx_version: Optional[str]
    message: str


def check_health() -> HealthStatus:
    """Check environment health. Never raises."""
    has_openai_key = load_openai_key() is not None
    if has_openai_key:
        message = "Ready"
    else:
        message = (
            "OPENAI_API_KEY is not set. Song and podcast suggestions are "
            "unavailable; music URL resolution still works."
        )

    return HealthStatus(
        ok=True,
        has_openai_key=has_openai_key,
        openai_model=load_openai_model(),
        country=load_country(),
        httpx_version=getattr(httpx, "__version__", None),
        message=message,
    )
