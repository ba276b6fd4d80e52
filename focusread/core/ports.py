"""
Port interfaces for focusread.

These are Python Protocol classes defining the contracts that adapters must satisfy.
The core imports ONLY from this file (and models.py) for any external dependency.

Adapters implement these protocols without inheriting from them (structural subtyping).
"""

from __future__ import annotations

from typing import Literal, Protocol

from focusread.core.models import Document, FetchResult, HighlightStyle


class FetcherPort(Protocol):
    """
    Interface for retrieving the content behind a URL.

    Implementations never raise for expected failures: invalid URLs, HTTP
    errors, empty bodies and connectivity problems are all returned as a
    FetchFailure so the caller can show the message as-is.
    """

    async def fetch(
        self,
        url: str,
        *,
        output_format: Literal["text", "html"] = "text",
    ) -> FetchResult:
        """
        Fetch *url* and return sanitized content or a failure description.

        Args:
            url: Absolute http(s) URL.
            output_format: "text" for extracted plain text, "html" for
                neutralized markup.
        """
        ...


class HighlightPolicy(Protocol):
    """Decides whether the word at a running index is highlighted, and how."""

    name: str

    def choose(self, index: int, percentage: float) -> HighlightStyle | None:
        """Return the style for word *index*, or None to leave it plain."""
        ...


class RendererPort(Protocol):
    """Turns a highlighted document into displayable output."""

    def render(self, document: Document) -> str:
        """Return the rendered document."""
        ...
