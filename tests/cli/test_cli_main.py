"""Tests for the focusread CLI commands."""

from __future__ import annotations

import io
import json
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from _pytest.capture import CaptureFixture

from focusread.cli.main import (
    _apply_overrides,
    _run_fetch,
    _setup_logging,
    fetch,
    init,
    read,
    status,
)
from focusread.config.schema import Settings
from focusread.core.models import FetchFailure, FetchSuccess


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / "config.json"


# ── read ────────────────────────────────────────────────────────────────────


def test_read_prints_text_argument(config_path: Path, capsys: CaptureFixture[str]) -> None:
    read("Hello, world!", config=config_path)

    captured = capsys.readouterr()
    assert "Hello, world!" in captured.out


def test_read_from_file_as_html(
    tmp_path: Path, config_path: Path, capsys: CaptureFixture[str]
) -> None:
    source = tmp_path / "input.txt"
    source.write_text("alpha beta\n\ngamma", encoding="utf-8")

    read(file=source, output="html", percentage=100, config=config_path)

    out = capsys.readouterr().out
    assert out.startswith("<!DOCTYPE html>")
    assert '<span class="hl-bold">alpha</span>' in out
    assert '<span class="hl-italic">beta</span>' in out
    assert '<span class="hl-font">gamma</span>' in out


def test_read_missing_file_exits(
    tmp_path: Path, config_path: Path, capsys: CaptureFixture[str]
) -> None:
    missing = tmp_path / "nope.txt"

    with pytest.raises(SystemExit) as exc_info:
        read(file=missing, config=config_path)

    assert exc_info.value.code == 1
    assert f"error: cannot read {missing}" in capsys.readouterr().err


def test_read_non_utf8_file_exits(
    tmp_path: Path, config_path: Path, capsys: CaptureFixture[str]
) -> None:
    source = tmp_path / "latin1.txt"
    source.write_bytes("café crème".encode("latin-1"))

    with pytest.raises(SystemExit) as exc_info:
        read(file=source, config=config_path)

    assert exc_info.value.code == 1
    assert "error: cannot read" in capsys.readouterr().err


def test_read_from_stdin(config_path: Path, capsys: CaptureFixture[str]) -> None:
    with patch("focusread.cli.main.sys.stdin", io.StringIO("from stdin")):
        read("-", config=config_path)

    assert "from stdin" in capsys.readouterr().out


def test_read_writes_output_file(tmp_path: Path, config_path: Path) -> None:
    target = tmp_path / "out" / "page.html"

    read("some words", output="html", out=target, config=config_path)

    assert target.read_text(encoding="utf-8").startswith("<!DOCTYPE html>")


def test_read_uses_configured_percentage(config_path: Path, capsys: CaptureFixture[str]) -> None:
    config_path.write_text(json.dumps({"highlight": {"percentage": 0}}), encoding="utf-8")

    read("one two three", output="html", config=config_path)

    body = capsys.readouterr().out.split("</body>")[0].split("<body>")[1]
    assert "<span>one</span>" in body
    assert "class=\"hl-" not in body


def test_invalid_config_exits(config_path: Path, capsys: CaptureFixture[str]) -> None:
    config_path.write_text(json.dumps({"highlight": {"percentage": 500}}), encoding="utf-8")

    with pytest.raises(SystemExit) as exc_info:
        read("text", config=config_path)

    assert exc_info.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err


# ── fetch ───────────────────────────────────────────────────────────────────


async def test_run_fetch_renders_text(capsys: CaptureFixture[str]) -> None:
    settings = Settings()
    settings.render.output = "html"
    success = FetchSuccess(content="Fetched words", final_url="https://example.com/")

    with patch(
        "focusread.adapters.fetch.http.HttpContentFetcher.fetch",
        new=AsyncMock(return_value=success),
    ):
        await _run_fetch("https://example.com/", settings=settings, out=None)

    out = capsys.readouterr().out
    assert "Fetched" in out
    assert 'href="https://example.com/"' in out


async def test_run_fetch_failure_exits_with_message(capsys: CaptureFixture[str]) -> None:
    failure = FetchFailure(
        message="Failed to fetch URL. Server responded with status: 404",
        kind="http_status",
        status_code=404,
    )

    with (
        patch(
            "focusread.adapters.fetch.http.HttpContentFetcher.fetch",
            new=AsyncMock(return_value=failure),
        ),
        pytest.raises(SystemExit) as exc_info,
    ):
        await _run_fetch("https://example.com/missing", settings=Settings(), out=None)

    assert exc_info.value.code == 1
    assert "404" in capsys.readouterr().err


async def test_run_fetch_html_format_prints_markup(capsys: CaptureFixture[str]) -> None:
    settings = Settings()
    settings.fetch.format = "html"
    mock_fetch = AsyncMock(return_value=FetchSuccess(content="<p>kept markup</p>"))

    with patch("focusread.adapters.fetch.http.HttpContentFetcher.fetch", new=mock_fetch):
        await _run_fetch("https://example.com/", settings=settings, out=None)

    assert mock_fetch.await_args.kwargs["output_format"] == "html"
    assert capsys.readouterr().out == "<p>kept markup</p>\n"


def test_fetch_command_applies_format_override(config_path: Path) -> None:
    with patch("focusread.cli.main._run_fetch", new=AsyncMock()) as mock_run:
        fetch("https://example.com/", format="html", percentage=70, config=config_path)

    settings = mock_run.await_args.kwargs["settings"]
    assert settings.fetch.format == "html"
    assert settings.highlight.percentage == 70


def test_fetch_invalid_url_exits(config_path: Path, capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        fetch("not a url", config=config_path)

    assert "Please enter a valid URL." in capsys.readouterr().err


# ── status / init ───────────────────────────────────────────────────────────


def test_status_reports_defaults_when_config_missing(
    config_path: Path, capsys: CaptureFixture[str]
) -> None:
    status(config=config_path)

    out = capsys.readouterr().out
    assert "not found, using defaults" in out
    assert "30% (deterministic)" in out


def test_init_writes_default_config(config_path: Path) -> None:
    init(config=config_path)

    assert Settings.load(config_path) == Settings()


def test_init_refuses_to_overwrite(config_path: Path) -> None:
    config_path.write_text("{}", encoding="utf-8")

    with pytest.raises(SystemExit):
        init(config=config_path)

    init(config=config_path, force=True)
    assert json.loads(config_path.read_text(encoding="utf-8"))["highlight"]["percentage"] == 30


# ── helpers ─────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(("given", "expected"), [(-10, 0), (45, 45), (250, 100)])
def test_apply_overrides_clamps_percentage(given: int, expected: int) -> None:
    settings = Settings()
    _apply_overrides(settings, percentage=given, policy="random", seed=4, output="html")

    assert settings.highlight.percentage == expected
    assert settings.highlight.policy == "random"
    assert settings.highlight.seed == 4
    assert settings.render.output == "html"


def test_setup_logging_rejects_unknown_level(capsys: CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        _setup_logging("LOUD")

    assert "invalid --log-level" in capsys.readouterr().err
