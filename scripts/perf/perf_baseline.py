"""Deterministic local performance baseline runner.

This script benchmarks the text hot path (sanitize, tokenize, highlight) on
synthetic pages of increasing size. It prints stable key=value lines for easy
diffing and also writes the same output to .perf/baseline.txt.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from statistics import median
from time import perf_counter

from focusread.core.highlight import DeterministicPolicy, RandomPolicy
from focusread.core.reader import build_document
from focusread.core.text_extract import html_to_text, neutralize_html
from focusread.core.tokenizer import tokenize

PAGE_SIZES: tuple[int, ...] = (100, 1_000, 10_000)  # paragraphs per page
REPEATS = 5
PERCENTAGE = 30
EVIDENCE_PATH = Path(".perf/baseline.txt")


def _build_paragraph(index: int) -> str:
    return (
        f'<p class="body" onclick="track({index})">Paragraph {index:05d} &amp; its '
        "<b>bold</b> words, <a href=\"javascript:void(0)\">a link</a> and "
        "Grüße aus Köln &mdash; it's naïve to skip them.</p>\n"
    )


def _build_page(paragraphs: int) -> str:
    body = "".join(_build_paragraph(index) for index in range(paragraphs))
    return (
        "<html><head><title>perf</title><style>p { margin: 0 }</style></head>"
        f"<body><script>var x = 1;</script>{body}<!-- footer --></body></html>"
    )


def _measure_sync_call_ms(function: Callable[[], object], repeats: int) -> float:
    function()
    samples_ms: list[float] = []
    for _ in range(repeats):
        start = perf_counter()
        function()
        samples_ms.append((perf_counter() - start) * 1000.0)
    return median(samples_ms)


def _collect_metrics() -> list[tuple[str, float]]:
    metrics: list[tuple[str, float]] = []
    for size in PAGE_SIZES:
        page = _build_page(size)
        text = html_to_text(page)
        metrics.append(
            (f"html_to_text_{size}p_ms", _measure_sync_call_ms(lambda: html_to_text(page), REPEATS))
        )
        metrics.append(
            (
                f"neutralize_html_{size}p_ms",
                _measure_sync_call_ms(
                    lambda: neutralize_html(page, "https://example.com/"), REPEATS
                ),
            )
        )
        metrics.append(
            (f"tokenize_{size}p_ms", _measure_sync_call_ms(lambda: tokenize(text), REPEATS))
        )
        metrics.append(
            (
                f"document_deterministic_{size}p_ms",
                _measure_sync_call_ms(
                    lambda: build_document(text, PERCENTAGE, DeterministicPolicy()), REPEATS
                ),
            )
        )
        metrics.append(
            (
                f"document_random_{size}p_ms",
                _measure_sync_call_ms(
                    lambda: build_document(text, PERCENTAGE, RandomPolicy(seed=0)), REPEATS
                ),
            )
        )
    return metrics


def _render_lines(metrics: list[tuple[str, float]]) -> list[str]:
    return [f"{key}={value:.3f}" for key, value in metrics]


def _write_evidence(lines: list[str]) -> None:
    EVIDENCE_PATH.parent.mkdir(parents=True, exist_ok=True)
    EVIDENCE_PATH.write_text("\n".join(lines) + "\n", encoding="utf-8")


def main() -> int:
    lines = _render_lines(_collect_metrics())
    for line in lines:
        print(line)
    _write_evidence(lines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
