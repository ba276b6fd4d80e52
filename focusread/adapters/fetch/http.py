"""HTTP content fetcher.

Performs one GET per call with a desktop-browser User-Agent, follows standard
redirects, bounds the body size, and hands the page to the sanitizer. Every
outcome, including network failures, is returned as a FetchResult value.
"""

from __future__ import annotations

from typing import Literal
from urllib.parse import urlparse

import httpx
from loguru import logger

from focusread.config.schema import FetchConfig
from focusread.core.models import FetchFailure, FetchResult, FetchSuccess
from focusread.core.text_extract import html_to_text, neutralize_html

INVALID_URL_MESSAGE = "Please enter a valid URL."
EMPTY_CONTENT_MESSAGE = "The URL returned no content."
CONNECTIVITY_MESSAGE = (
    "Could not connect to the URL. Please check the address and your network connection."
)
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while fetching the URL."


class HttpContentFetcher:
    """Fetch an HTTP(S) URL and return sanitized content or a failure."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            config: Timeouts, size limit and User-Agent. Defaults apply when omitted.
            client: Shared client to use instead of a transient one per call.
        """
        self._config = config or FetchConfig()
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {"Accept": "text/html", "User-Agent": self._config.user_agent}

    async def fetch(
        self,
        url: str,
        *,
        output_format: Literal["text", "html"] = "text",
    ) -> FetchResult:
        """Fetch a URL and return its sanitized content.

        Args:
            url: Absolute http(s) URL.
            output_format: "text" for plain text, "html" for neutralized markup.

        Returns:
            FetchSuccess with the content and final URL, or FetchFailure with a
            message suitable for showing to the user.
        """
        url = url.strip()
        if not is_valid_url(url):
            return FetchFailure(message=INVALID_URL_MESSAGE, kind="invalid_url")

        logger.debug("fetching {}", url)
        try:
            response, body = await self._get(url)
        except httpx.TransportError as exc:
            logger.warning("fetch {}: connection failed ({})", url, exc)
            return FetchFailure(message=CONNECTIVITY_MESSAGE, kind="connectivity")
        except Exception as exc:
            logger.warning("fetch {}: unexpected error ({!r})", url, exc)
            description = str(exc)
            if not description:
                return FetchFailure(message=UNKNOWN_ERROR_MESSAGE, kind="unexpected")
            return FetchFailure(message=f"An error occurred: {description}", kind="unexpected")

        if not response.is_success:
            logger.warning("fetch {}: status {}", url, response.status_code)
            return FetchFailure(
                message=(
                    "Failed to fetch URL. Server responded with status: "
                    f"{response.status_code}"
                ),
                kind="http_status",
                status_code=response.status_code,
            )

        if not body:
            logger.warning("fetch {}: empty body", url)
            return FetchFailure(message=EMPTY_CONTENT_MESSAGE, kind="empty")

        decoded = body.decode(response.encoding or "utf-8", errors="replace")
        final_url = str(response.url)
        if output_format == "html":
            return FetchSuccess(content=neutralize_html(decoded, final_url), final_url=final_url)
        return FetchSuccess(content=html_to_text(decoded), final_url=final_url)

    async def _get(self, url: str) -> tuple[httpx.Response, bytes]:
        client = self._client
        if client is not None:
            return await self._get_with_client(client, url)

        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds,
            follow_redirects=True,
            max_redirects=self._config.max_redirects,
        ) as transient_client:
            return await self._get_with_client(transient_client, url)

    async def _get_with_client(
        self, client: httpx.AsyncClient, url: str
    ) -> tuple[httpx.Response, bytes]:
        async with client.stream(
            "GET",
            url,
            headers=self.headers,
            timeout=self._config.timeout_seconds,
            follow_redirects=True,
        ) as response:
            if not response.is_success:
                return response, b""
            body = await _read_body_limited(response, max_bytes=self._config.max_bytes)
            return response, body


def is_valid_url(url: str) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    if not url or any(ch.isspace() for ch in url):
        return False
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError:
        return False
    if port == 0:
        return False
    return parsed.scheme in {"http", "https"} and bool(parsed.hostname)


async def _read_body_limited(response: httpx.Response, *, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    async for chunk in response.aiter_bytes():
        if not chunk:
            continue
        remaining = max_bytes - total
        if remaining <= 0:
            break
        if len(chunk) > remaining:
            chunks.append(chunk[:remaining])
            break
        chunks.append(chunk)
        total += len(chunk)
    return b"".join(chunks)
