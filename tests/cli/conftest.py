"""Shared fixtures for CLI tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def _drop_cli_log_sinks() -> Iterator[None]:
    """Remove the stderr sink installed by _setup_logging once the test is done."""
    yield
    logger.remove()
