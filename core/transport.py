"""Fetch raw weather exports from a file path or an HTTP(S) URL."""

from __future__ import annotations

import asyncio
import urllib.request
from pathlib import Path

USER_AGENT = "weatherchart/1.0 (csv fetch)"
FETCH_TIMEOUT_SECONDS = 30


class TransportError(OSError):
    """Raised when raw input cannot be fetched or read."""


async def fetch_bytes(source: str | Path) -> bytes:
    """Fetch raw bytes without blocking the event loop.

    Args:
        source: Filesystem path, or an `http://`/`https://` URL.

    Returns:
        The raw (undecoded) content.

    Raises:
        TransportError: When the file cannot be read, the request fails, or
            the source is malformed (e.g. an embedded NUL byte or an invalid
            URL).
    """

    return await asyncio.to_thread(_read_source, source)


def _read_source(source: str | Path) -> bytes:
    text = str(source)
    if text.startswith(("http://", "https://")):
        return _fetch_url(text)
    try:
        return Path(source).read_bytes()
    except (OSError, ValueError) as exc:
        raise TransportError(f"Failed to read weather export: {text}") from exc


def _fetch_url(url: str) -> bytes:
    request = urllib.request.Request(
        url,
        headers={"User-Agent": USER_AGENT, "Accept": "text/csv,text/plain"},
    )
    try:
        with urllib.request.urlopen(request, timeout=FETCH_TIMEOUT_SECONDS) as response:
            return response.read()
    except (OSError, ValueError) as exc:
        raise TransportError(f"Failed to fetch weather export: {url}") from exc
