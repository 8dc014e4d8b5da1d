"""
HTTP feed fetching.

Feeds are fetched with a synchronous httpx client. A rate-limited
response (HTTP 429) on the first attempt is retried once after a fixed
delay; every other non-2xx status is a failure for that feed only.
"""

from __future__ import annotations

import time

import httpx

from ..config import FetchConfig


class FetchError(Exception):
    """Raised when a feed cannot be retrieved.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None for network-level failures
    """

    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def fetch_feed(
    url: str,
    source: str,
    cfg: FetchConfig,
    transport: httpx.BaseTransport | None = None,
) -> bytes:
    """Fetch a feed document.

    Args:
        url: The feed URL
        source: Human readable source label used in error messages
        cfg: Fetch configuration (timeout, headers, retry delay)
        transport: Optional httpx transport, used by tests

    Returns:
        The raw response body

    Raises:
        FetchError: On transport errors or a non-2xx final status
    """
    headers = {"User-Agent": cfg.user_agent, "Accept": cfg.accept}

    with httpx.Client(
        timeout=cfg.timeout_seconds,
        headers=headers,
        follow_redirects=True,
        trust_env=cfg.trust_env,
        transport=transport,
    ) as client:
        for attempt in range(2):
            try:
                resp = client.get(url)
            except httpx.HTTPError as exc:
                raise FetchError(f"{source}: {type(exc).__name__}: {exc}", url) from exc

            if resp.status_code == httpx.codes.TOO_MANY_REQUESTS and attempt == 0:
                time.sleep(cfg.retry_delay_seconds)
                continue

            if not resp.is_success:
                raise FetchError(
                    f"{source} api status: {resp.status_code} {resp.reason_phrase}",
                    url,
                    resp.status_code,
                )
            return resp.content

    # Unreachable: the second attempt either returns or raises.
    raise FetchError(f"{source}: retries exhausted", url)
