"""Shared test fixtures."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop sinks added during a test (the CLI binds them to captured streams)."""
    yield
    logger.remove()


@pytest.fixture
def write_note(tmp_path):
    """Write a markdown note with the given frontmatter text under tmp_path."""

    def _write(relative_path: str, frontmatter: str | None = None, body: str = "Body\n"):
        path = tmp_path / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        content = body if frontmatter is None else f"---\n{frontmatter.strip()}\n---\n{body}"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
