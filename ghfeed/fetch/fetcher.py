"""
HTTP fetching of the source feed.

Uses a synchronous httpx client that follows redirects. By default a
single attempt is made; retries with a linear backoff only happen when
configured.
"""

from __future__ import annotations

from dataclasses import dataclass
import time

import httpx


@dataclass
class FetchResult:
    """Result of an HTTP fetch operation.

    Either text will be populated (success) or error will be populated (failure),
    but never both. status_code may be None for network-level failures.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        text: The response body text, or None on error
        error: Error message if fetch failed, None on success
    """
    url: str
    status_code: int | None
    text: str | None
    error: str | None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def fetch_feed(
    url: str,
    timeout: float = 20.0,
    retries: int = 0,
    user_agent: str | None = None,
    trust_env: bool = True,
    transport: httpx.BaseTransport | None = None,
) -> FetchResult:
    """Fetch a feed document.

    Args:
        url: The feed URL
        timeout: Request timeout in seconds
        retries: Number of retry attempts after the first failure
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        transport: Optional httpx transport, used by tests

    Returns:
        FetchResult with text on success or error message on failure
    """
    headers = {"User-Agent": user_agent} if user_agent else {}
    last_error: str | None = None
    status_code: int | None = None

    for attempt in range(retries + 1):
        try:
            with httpx.Client(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=trust_env,
                transport=transport,
            ) as client:
                resp = client.get(url)
                status_code = resp.status_code
                resp.raise_for_status()
                return FetchResult(url=url, status_code=resp.status_code, text=resp.text, error=None)
        except httpx.HTTPStatusError as exc:
            last_error = f"HTTP {exc.response.status_code} for {url}"
        except httpx.HTTPError as exc:
            status_code = None
            last_error = f"{type(exc).__name__}: {exc}"
        if attempt < retries:
            time.sleep(0.5 * (attempt + 1))

    return FetchResult(url=url, status_code=status_code, text=None, error=last_error)
