from __future__ import annotations

import httpx

from parkwatch.domain import FetchError


def fetch_page(url: str, *, user_agent: str, timeout_seconds: float = 30.0, transport: httpx.BaseTransport | None = None) -> str:
    headers = {"User-Agent": user_agent}

    try:
        with httpx.Client(timeout=timeout_seconds, headers=headers, follow_redirects=True, transport=transport) as client:
            r = client.get(url)
            r.raise_for_status()
            return r.text
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch {url} ({type(e).__name__}: {e})") from e
