"""
Highlight selection for word tokens.

A policy decides, for the i-th word of a text, whether it is emphasized and
with which style. Separators are never highlighted and never advance the
word index.
"""

from __future__ import annotations

import random
from collections.abc import Iterable

from focusread.core.models import HighlightedToken, HighlightStyle, Token
from focusread.core.ports import HighlightPolicy

STYLES: tuple[HighlightStyle, ...] = tuple(HighlightStyle)
STRIDE = 13


class DeterministicPolicy:
    """Index-based policy: the same input and percentage always give the same result."""

    name = "deterministic"

    def choose(self, index: int, percentage: float) -> HighlightStyle | None:
        if (index * STRIDE) % 100 < percentage:
            return STYLES[index % len(STYLES)]
        return None


class RandomPolicy:
    """
    Independent coin flip per word.

    Without a seed every run differs. With a seed the draws come from a
    private `random.Random` and repeat exactly.
    """

    name = "random"

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)

    def choose(self, index: int, percentage: float) -> HighlightStyle | None:
        if self._rng.random() * 100 < percentage:
            return self._rng.choice(STYLES)
        return None


def make_policy(name: str, seed: int | None = None) -> HighlightPolicy:
    """
    Build a highlight policy from its configured name.

    Args:
        name: "deterministic" or "random".
        seed: Seed for the random policy; ignored by the deterministic one.

    Raises:
        ValueError: If the name is unknown.
    """
    if name == "deterministic":
        return DeterministicPolicy()
    if name == "random":
        return RandomPolicy(seed=seed)
    raise ValueError(f"unknown highlight policy '{name}'")


def clamp_percentage(value: float) -> float:
    """Clamp a percentage into [0, 100]."""
    return min(max(value, 0), 100)


def highlight_tokens(
    tokens: Iterable[Token],
    percentage: float,
    policy: HighlightPolicy,
    *,
    start: int = 0,
) -> list[HighlightedToken]:
    """
    Attach a highlight decision to every token.

    Args:
        tokens: Tokens in text order.
        percentage: Share of words to emphasize, 0-100 inclusive.
        policy: Policy consulted once per word token.
        start: Running word index of the first word (for multi-paragraph texts).

    Returns:
        One HighlightedToken per input token, in the same order.

    Raises:
        ValueError: If percentage is outside [0, 100].
    """
    if not 0 <= percentage <= 100:
        raise ValueError(f"percentage must be between 0 and 100, got {percentage}")

    result: list[HighlightedToken] = []
    index = start
    for token in tokens:
        if not token.is_word:
            result.append(HighlightedToken(token=token))
            continue
        style = policy.choose(index, percentage)
        result.append(HighlightedToken(token=token, style=style, index=index))
        index += 1
    return result
