"""
Unicode-aware tokenizer.

Text is cut into alternating word-candidate and separator segments. A
separator is a maximal run of characters that are neither a letter, a digit
nor an apostrophe; everything between separators is a word candidate.
Joining the texts of all tokens in order always gives back the input.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

from focusread.core.models import Token

# [^\W_] is "letter or digit" for str patterns; the apostrophe stays inside words.
_SEPARATOR_RE = re.compile(r"(?:[^\w']|_)+")
_ALNUM_RE = re.compile(r"[^\W_]")


def is_word(segment: str) -> bool:
    """Return True if *segment* contains at least one letter or digit."""
    return _ALNUM_RE.search(segment) is not None


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield the tokens of *text* from left to right."""
    pos = 0
    for match in _SEPARATOR_RE.finditer(text):
        if match.start() > pos:
            candidate = text[pos : match.start()]
            yield Token(text=candidate, is_word=is_word(candidate))
        yield Token(text=match.group(0), is_word=False)
        pos = match.end()
    if pos < len(text):
        candidate = text[pos:]
        yield Token(text=candidate, is_word=is_word(candidate))


def tokenize(text: str) -> list[Token]:
    """
    Split *text* into word and separator tokens.

    Args:
        text: Arbitrary input text.

    Returns:
        Tokens in order. Apostrophe-only candidates (e.g. a lone ``'``) are
        returned as non-word tokens.
    """
    return list(iter_tokens(text))
