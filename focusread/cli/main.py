"""
CLI entry point for focusread.

Commands:
  focusread read TEXT         Highlight pasted text (use "-" or no TEXT for stdin)
  focusread read --file PATH  Highlight the contents of a text file
  focusread fetch URL         Fetch a page, extract its text and highlight it
  focusread status            Show the effective configuration
  focusread init              Write a default configuration file
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Literal

import cyclopts

from focusread.config.schema import DEFAULT_CONFIG_PATH, Settings

if TYPE_CHECKING:
    from focusread.core.models import Document
    from focusread.core.ports import RendererPort

app = cyclopts.App(
    name="focusread",
    help="Highlight words in a text or web page to aid reading focus.",
)


@app.command
def read(
    text: str | None = None,
    *,
    file: Path | None = None,
    percentage: int | None = None,
    policy: Literal["deterministic", "random"] | None = None,
    seed: int | None = None,
    output: Literal["terminal", "html"] | None = None,
    out: Path | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Highlight pasted text.

    Text comes from the TEXT argument, from --file, or from stdin when TEXT
    is "-" or omitted.
    """
    _setup_logging(log_level)
    settings = _load_settings(config)
    _apply_overrides(settings, percentage=percentage, policy=policy, seed=seed, output=output)

    if file is not None:
        try:
            body = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {file}: {exc}", file=sys.stderr)
            raise SystemExit(1) from None
    elif text is None or text == "-":
        body = sys.stdin.read()
    else:
        body = text

    from focusread.adapters.fetch.http import HttpContentFetcher  # noqa: PLC0415
    from focusread.core.reader import ReaderSession  # noqa: PLC0415

    fetcher = HttpContentFetcher(settings.fetch)
    session = ReaderSession(fetcher=fetcher, highlight=settings.highlight)
    outcome = session.load_text(body)
    if outcome.document is not None:
        _emit(_make_renderer(settings), outcome.document, out)


@app.command
def fetch(
    url: str,
    *,
    format: Literal["text", "html"] | None = None,
    percentage: int | None = None,
    policy: Literal["deterministic", "random"] | None = None,
    seed: int | None = None,
    output: Literal["terminal", "html"] | None = None,
    out: Path | None = None,
    config: Path = DEFAULT_CONFIG_PATH,
    log_level: str = "WARNING",
) -> None:
    """
    Fetch a web page and highlight its text.

    With --format html the page markup is printed with scripts, event
    handlers and javascript: links removed, instead of highlighted text.
    """
    _setup_logging(log_level)
    settings = _load_settings(config)
    _apply_overrides(settings, percentage=percentage, policy=policy, seed=seed, output=output)
    if format is not None:
        settings.fetch.format = format
    asyncio.run(_run_fetch(url=url, settings=settings, out=out))


@app.command
def status(config: Path = DEFAULT_CONFIG_PATH) -> None:
    """Show the effective configuration."""
    settings = _load_settings(config)
    source = str(config) if config.exists() else f"{config} (not found, using defaults)"
    print(f"Config:     {source}")
    print(f"Highlight:  {settings.highlight.percentage}% ({settings.highlight.policy})")
    if settings.highlight.seed is not None:
        print(f"Seed:       {settings.highlight.seed}")
    print(f"Output:     {settings.render.output}")
    fetch_cfg = settings.fetch
    print(f"Fetch:      format={fetch_cfg.format} timeout={fetch_cfg.timeout_seconds}s")
    print(f"User-Agent: {settings.fetch.user_agent}")


@app.command
def init(config: Path = DEFAULT_CONFIG_PATH, force: bool = False) -> None:
    """Write a configuration file with default values."""
    if config.exists() and not force:
        print(f"{config} already exists (use --force to overwrite)", file=sys.stderr)
        raise SystemExit(1)
    Settings().save(config)
    print(f"Configuration saved to {config}")


# ── Internal helpers ─────────────────────────────────────────────────────────


async def _run_fetch(url: str, settings: Settings, out: Path | None) -> None:
    """Fetch *url* through a ReaderSession and emit the result."""
    from focusread.adapters.fetch.http import HttpContentFetcher  # noqa: PLC0415
    from focusread.core.models import FetchFailure  # noqa: PLC0415
    from focusread.core.reader import ReaderSession  # noqa: PLC0415

    fetcher = HttpContentFetcher(settings.fetch)
    session = ReaderSession(fetcher=fetcher, highlight=settings.highlight)
    outcome = await session.load_url(url, output_format=settings.fetch.format)

    result = outcome.result
    if isinstance(result, FetchFailure):
        print(f"error: {result.message}", file=sys.stderr)
        raise SystemExit(1)
    if result is not None and settings.fetch.format == "html":
        _write(result.content, out)
        return
    if outcome.document is not None:
        _emit(_make_renderer(settings), outcome.document, out)


def _load_settings(config: Path) -> Settings:
    """Load settings, turning validation errors into a clean exit."""
    try:
        return Settings.load(config)
    except ValueError as exc:  # includes pydantic.ValidationError and bad JSON
        print(f"error: invalid configuration in {config}: {exc}", file=sys.stderr)
        raise SystemExit(1) from None


def _apply_overrides(
    settings: Settings,
    *,
    percentage: int | None,
    policy: Literal["deterministic", "random"] | None,
    seed: int | None,
    output: Literal["terminal", "html"] | None,
) -> None:
    """Copy command-line options over the loaded settings."""
    from loguru import logger  # noqa: PLC0415

    from focusread.core.highlight import clamp_percentage  # noqa: PLC0415

    if percentage is not None:
        clamped = int(clamp_percentage(percentage))
        if clamped != percentage:
            logger.warning("percentage {} out of range, using {}", percentage, clamped)
        settings.highlight.percentage = clamped
    if policy is not None:
        settings.highlight.policy = policy
    if seed is not None:
        settings.highlight.seed = seed
    if output is not None:
        settings.render.output = output


def _make_renderer(settings: Settings) -> RendererPort:
    if settings.render.output == "html":
        from focusread.adapters.render.html import HtmlRenderer  # noqa: PLC0415

        return HtmlRenderer()
    from focusread.adapters.render.terminal import TerminalRenderer  # noqa: PLC0415

    return TerminalRenderer()


def _emit(renderer: RendererPort, document: Document, out: Path | None) -> None:
    """Render the document and write it to *out* or stdout."""
    from focusread.adapters.render.terminal import TerminalRenderer  # noqa: PLC0415

    if out is None and isinstance(renderer, TerminalRenderer):
        renderer.print(document)
        return
    _write(renderer.render(document), out)


def _write(content: str, out: Path | None) -> None:
    if out is None:
        print(content)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(content, encoding="utf-8")
    print(f"Wrote {out}", file=sys.stderr)


_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _setup_logging(level: str) -> None:
    """
    Configure loguru for command output.

    Removes the default loguru stderr handler and replaces it with one that
    uses a consistent timestamp+level format. httpx and httpcore are clamped
    to WARNING via the stdlib logging bridge.

    Args:
        level: Log level string (case-insensitive), e.g. "INFO", "DEBUG".

    Raises:
        SystemExit: If the level is not a valid log level name.
    """
    import logging

    from loguru import logger

    normalised = level.upper()
    if normalised not in _VALID_LOG_LEVELS:
        valid = ", ".join(sorted(_VALID_LOG_LEVELS))
        print(f"error: invalid --log-level '{level}'. Valid values: {valid}", file=sys.stderr)
        raise SystemExit(1)

    logger.remove()  # remove loguru's built-in default handler
    logger.add(
        sys.stderr,
        level=normalised,
        format=("<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level:<8}</level> {message}"),
        colorize=True,
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
