"""
Reading pipeline: text in, highlighted document out.

`build_document` runs one synchronous pass over a text. `ReaderSession`
wraps it for interactive use, where a new submission may start before an
earlier URL fetch has resolved: every submission takes a request token and
only the newest one is allowed to replace the current document.
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass
from typing import Literal

from loguru import logger

from focusread.config.schema import HighlightConfig
from focusread.core.highlight import highlight_tokens, make_policy
from focusread.core.models import Document, FetchFailure, FetchResult, HighlightedToken
from focusread.core.ports import FetcherPort, HighlightPolicy
from focusread.core.tokenizer import iter_tokens

_PARAGRAPH_SPLIT_RE = re.compile(r"\n+")


def split_paragraphs(text: str) -> list[str]:
    """Split text on newline runs, dropping paragraphs that are only whitespace."""
    return [para for para in _PARAGRAPH_SPLIT_RE.split(text) if para.strip()]


def build_document(
    text: str,
    percentage: float,
    policy: HighlightPolicy,
    *,
    source: str | None = None,
) -> Document:
    """
    Tokenize and highlight *text* paragraph by paragraph.

    The word index runs across paragraph boundaries, so the deterministic
    policy gives the same decisions whether or not the text is wrapped.

    Args:
        text: Plain text to process.
        percentage: Share of words to highlight, 0-100.
        policy: Highlight policy to consult.
        source: Origin URL, kept on the document for renderers.

    Returns:
        The assembled Document. Empty text gives a document with no paragraphs.
    """
    paragraphs: list[list[HighlightedToken]] = []
    next_index = 0
    for para in split_paragraphs(text):
        items = highlight_tokens(iter_tokens(para), percentage, policy, start=next_index)
        next_index += sum(1 for item in items if item.token.is_word)
        paragraphs.append(items)
    return Document(paragraphs=paragraphs, source=source)


@dataclass
class ReadOutcome:
    """Result of one ReaderSession submission."""

    request_id: int
    result: FetchResult | None = None  # None for pasted text
    document: Document | None = None
    stale: bool = False  # a newer submission started before this one finished

    @property
    def ok(self) -> bool:
        return self.document is not None and not self.stale


class ReaderSession:
    """
    Holds the document currently on display and sequences submissions.

    A later submission always wins: when an older URL fetch resolves after a
    newer submission has started, its outcome is marked stale and the current
    document is left untouched.
    """

    def __init__(self, fetcher: FetcherPort, highlight: HighlightConfig) -> None:
        """
        Args:
            fetcher: Adapter used for URL submissions.
            highlight: Percentage and policy applied to every submission.
        """
        self._fetcher = fetcher
        self._highlight = highlight
        self._tokens = itertools.count(1)
        self._latest = 0
        self.document: Document | None = None

    def _begin(self) -> int:
        self._latest = next(self._tokens)
        return self._latest

    def _build(self, text: str, source: str | None) -> Document:
        policy = make_policy(self._highlight.policy, seed=self._highlight.seed)
        return build_document(text, self._highlight.percentage, policy, source=source)

    def _commit(self, outcome: ReadOutcome) -> ReadOutcome:
        if outcome.request_id != self._latest:
            logger.debug(
                "discarding stale result for request {} (latest is {})",
                outcome.request_id,
                self._latest,
            )
            outcome.stale = True
            return outcome
        if outcome.document is not None:
            self.document = outcome.document
        return outcome

    def load_text(self, text: str) -> ReadOutcome:
        """Highlight pasted text and make it the current document."""
        request_id = self._begin()
        document = self._build(text, source=None)
        return self._commit(ReadOutcome(request_id=request_id, document=document))

    async def load_url(
        self,
        url: str,
        *,
        output_format: Literal["text", "html"] = "text",
    ) -> ReadOutcome:
        """
        Fetch *url*, then highlight its text and make it the current document.

        With ``output_format="html"`` the fetched markup is returned in the
        outcome's result but no document is built from it.

        Returns:
            The outcome; failures are carried in ``outcome.result``.
        """
        request_id = self._begin()
        result = await self._fetcher.fetch(url, output_format=output_format)
        outcome = ReadOutcome(request_id=request_id, result=result)
        if isinstance(result, FetchFailure) or output_format == "html":
            return self._commit(outcome)
        outcome.document = self._build(result.content, source=result.final_url or url)
        return self._commit(outcome)
