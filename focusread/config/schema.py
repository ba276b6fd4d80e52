"""
Configuration schema for focusread.

Settings are loaded from a JSON file (default: ~/.focusread/config.json).
The file is optional; every field has a default. Command-line options
override the loaded values for a single run.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator

DEFAULT_CONFIG_PATH = Path.home() / ".focusread" / "config.json"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
)


class FetchConfig(BaseModel):
    """Configuration for the URL fetcher."""

    timeout_seconds: float = 20.0
    max_bytes: int = 2_000_000
    max_redirects: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    format: Literal["text", "html"] = "text"

    @model_validator(mode="after")
    def _validate_limits(self) -> FetchConfig:
        """Validate that the fetch limits are usable."""
        if self.timeout_seconds <= 0:
            raise ValueError("fetch.timeout_seconds must be > 0")
        if self.max_bytes <= 0:
            raise ValueError("fetch.max_bytes must be > 0")
        if self.max_redirects < 0:
            raise ValueError("fetch.max_redirects must be >= 0")
        return self


class HighlightConfig(BaseModel):
    """Configuration for word highlighting."""

    percentage: int = Field(default=30, ge=0, le=100)
    policy: Literal["deterministic", "random"] = "deterministic"
    seed: int | None = None  # only used by the random policy


class RenderConfig(BaseModel):
    output: Literal["terminal", "html"] = "terminal"


class Settings(BaseModel):
    """Root configuration object for focusread."""

    fetch: FetchConfig = Field(default_factory=FetchConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def load(cls, path: Path = DEFAULT_CONFIG_PATH) -> Settings:
        """
        Load settings from a JSON file.

        Missing keys use their default values.
        The file is optional; if it does not exist, all defaults apply.
        """
        if not path.exists():
            return cls()
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)

    def save(self, path: Path = DEFAULT_CONFIG_PATH) -> None:
        """Persist settings to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            self.model_dump_json(indent=2, exclude_none=False),
            encoding="utf-8",
        )
