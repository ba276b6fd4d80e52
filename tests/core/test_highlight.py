"""Tests for highlight policies and selection."""

from __future__ import annotations

import pytest

from focusread.core.highlight import (
    STYLES,
    DeterministicPolicy,
    RandomPolicy,
    clamp_percentage,
    highlight_tokens,
    make_policy,
)
from focusread.core.models import HighlightStyle
from focusread.core.tokenizer import tokenize

TEXT = (
    "The quick brown fox jumps over the lazy dog, and then it naps. "
    "Later the fox's friends arrive with 3 baskets of berries!"
)


def _words(items):  # type: ignore[no-untyped-def]
    return [item for item in items if item.token.is_word]


class TestDeterministicPolicy:
    def test_rule_matches_stride_formula(self) -> None:
        policy = DeterministicPolicy()
        for index in range(200):
            style = policy.choose(index, 30)
            if (index * 13) % 100 < 30:
                assert style is STYLES[index % 5]
            else:
                assert style is None

    def test_first_word_is_highlighted_for_any_positive_percentage(self) -> None:
        assert DeterministicPolicy().choose(0, 1) is HighlightStyle.BOLD

    def test_repeated_runs_are_identical(self) -> None:
        tokens = tokenize(TEXT)
        first = highlight_tokens(tokens, 40, DeterministicPolicy())
        second = highlight_tokens(tokens, 40, DeterministicPolicy())
        assert first == second


class TestRandomPolicy:
    def test_same_seed_same_decisions(self) -> None:
        tokens = tokenize(TEXT)
        first = highlight_tokens(tokens, 50, RandomPolicy(seed=7))
        second = highlight_tokens(tokens, 50, RandomPolicy(seed=7))
        assert first == second

    def test_roughly_matches_percentage(self) -> None:
        policy = RandomPolicy(seed=1)
        hits = sum(1 for i in range(10_000) if policy.choose(i, 25) is not None)
        assert 2_200 < hits < 2_800

    def test_styles_come_from_fixed_set(self) -> None:
        policy = RandomPolicy(seed=3)
        styles = {policy.choose(i, 100) for i in range(500)}
        assert styles == set(STYLES)


@pytest.mark.parametrize("policy_name", ["deterministic", "random"])
class TestPercentageBounds:
    def test_zero_highlights_nothing(self, policy_name: str) -> None:
        items = highlight_tokens(tokenize(TEXT), 0, make_policy(policy_name, seed=5))
        assert not any(item.highlighted for item in items)

    def test_hundred_highlights_every_word(self, policy_name: str) -> None:
        items = highlight_tokens(tokenize(TEXT), 100, make_policy(policy_name, seed=5))
        assert all(item.highlighted for item in _words(items))

    def test_separators_are_never_highlighted(self, policy_name: str) -> None:
        items = highlight_tokens(tokenize(TEXT), 100, make_policy(policy_name, seed=5))
        for item in items:
            if not item.token.is_word:
                assert item.style is None
                assert item.index is None


class TestHighlightTokens:
    def test_one_decision_per_token_in_order(self) -> None:
        tokens = tokenize(TEXT)
        items = highlight_tokens(tokens, 30, DeterministicPolicy())
        assert [item.token for item in items] == tokens

    def test_index_counts_words_only(self) -> None:
        items = highlight_tokens(tokenize("a, b; 'c ' d"), 0, DeterministicPolicy())
        assert [item.index for item in _words(items)] == [0, 1, 2, 3]

    def test_start_offsets_the_index(self) -> None:
        items = highlight_tokens(tokenize("x y"), 100, DeterministicPolicy(), start=3)
        assert [item.index for item in _words(items)] == [3, 4]
        assert [item.style for item in _words(items)] == [STYLES[3], STYLES[4]]

    @pytest.mark.parametrize("percentage", [-1, 100.5, 250])
    def test_out_of_range_percentage_is_rejected(self, percentage: float) -> None:
        with pytest.raises(ValueError, match="between 0 and 100"):
            highlight_tokens(tokenize(TEXT), percentage, DeterministicPolicy())


def test_make_policy_unknown_name() -> None:
    with pytest.raises(ValueError, match="unknown highlight policy"):
        make_policy("sometimes")


@pytest.mark.parametrize(("value", "expected"), [(-5, 0), (0, 0), (42, 42), (100, 100), (300, 100)])
def test_clamp_percentage(value: float, expected: float) -> None:
    assert clamp_percentage(value) == expected


def test_five_styles_in_order() -> None:
    assert STYLES == (
        HighlightStyle.BOLD,
        HighlightStyle.ITALIC,
        HighlightStyle.EMPHASIS_FONT,
        HighlightStyle.BACKGROUND,
        HighlightStyle.BOLD_EMPHASIS,
    )
