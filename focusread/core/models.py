"""
Core data models for focusread.

These are plain dataclasses with no external dependencies beyond the standard
library. They represent the values that flow through one reading pass:
fetch outcomes, tokens, highlight decisions and the assembled document.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, TypeAlias

FailureKind: TypeAlias = Literal["invalid_url", "http_status", "empty", "connectivity", "unexpected"]


@dataclass
class FetchSuccess:
    """Sanitized content retrieved from a URL."""

    content: str
    final_url: str = ""  # URL after redirects

    @property
    def ok(self) -> bool:
        return True


@dataclass
class FetchFailure:
    """A user-facing description of why a fetch did not produce content."""

    message: str
    kind: FailureKind = "unexpected"
    status_code: int | None = None  # set when kind == "http_status"

    @property
    def ok(self) -> bool:
        return False


FetchResult: TypeAlias = FetchSuccess | FetchFailure


@dataclass(frozen=True)
class Token:
    """A contiguous slice of input text, either a word or a separator."""

    text: str
    is_word: bool


class HighlightStyle(Enum):
    """Visual emphasis applied to a highlighted word."""

    BOLD = "bold"
    ITALIC = "italic"
    EMPHASIS_FONT = "emphasis-font"
    BACKGROUND = "background"
    BOLD_EMPHASIS = "bold-emphasis"


@dataclass(frozen=True)
class HighlightedToken:
    """A token together with the highlight decision made for it."""

    token: Token
    style: HighlightStyle | None = None
    index: int | None = None  # running word index; None for separators

    @property
    def highlighted(self) -> bool:
        return self.style is not None

    @property
    def text(self) -> str:
        return self.token.text


@dataclass
class Document:
    """Paragraphs of highlighted tokens ready to be rendered."""

    paragraphs: list[list[HighlightedToken]] = field(default_factory=list)
    source: str | None = None  # URL the text came from, if any

    @property
    def word_count(self) -> int:
        return sum(1 for para in self.paragraphs for item in para if item.token.is_word)

    @property
    def highlight_count(self) -> int:
        return sum(1 for para in self.paragraphs for item in para if item.highlighted)

    @property
    def text(self) -> str:
        """Plain text of the document, paragraphs separated by blank lines."""
        return "\n\n".join("".join(item.text for item in para) for para in self.paragraphs)
