"""Time-bounded HTTP helpers that report failure as None instead of raising."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from config import DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


async def _send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    json: Optional[Any] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[httpx.Response]:
    """Send a request, cancelling it once ``timeout`` seconds elapse.

    Returns None on transport errors, timeouts and non-2xx responses.
    """
    try:
        response = await asyncio.wait_for(
            client.request(
                method, url, params=params, headers=headers, json=json, timeout=timeout
            ),
            timeout,
        )
    except asyncio.TimeoutError:
        logger.warning("%s %s timed out after %ss", method, url, timeout)
        return None
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        return None
    if not response.is_success:
        logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
        return None
    return response


def _decode(response: Optional[httpx.Response], url: str) -> Optional[Any]:
    if response is None:
        return None
    try:
        return response.json()
    except ValueError as exc:
        logger.warning("Response from %s is not valid JSON: %s", url, exc)
        return None


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[dict] = None,
    headers: Optional[dict] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[Any]:
    """GET and decode a JSON document, or None on any failure."""
    response = await _send(
        client, "GET", url, params=params, headers=headers, timeout=timeout
    )
    return _decode(response, url)


async def post_json(
    client: httpx.AsyncClient,
    url: str,
    payload: Any,
    *,
    headers: Optional[dict] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[Any]:
    """POST a JSON body and decode the JSON reply, or None on any failure."""
    response = await _send(
        client, "POST", url, headers=headers, json=payload, timeout=timeout
    )
    return _decode(response, url)


async def fetch_text(
    client: httpx.AsyncClient,
    url: str,
    *,
    headers: Optional[dict] = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Optional[str]:
    """GET a document body as text, or None on any failure."""
    response = await _send(client, "GET", url, headers=headers, timeout=timeout)
    if response is None:
        return None
    return response.text
