"""Fixtures for CLI tests."""

import pytest
from typer.testing import CliRunner


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings from the developer's environment out of CLI runs."""
    for name in ("WORKSPACE", "TEMPLATE_FOLDER", "BLOCK_LANGUAGE", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"VS_DATAVIEW_{name}", raising=False)


@pytest.fixture
def workspace(tmp_path, write_note):
    """A workspace with two proj notes, one misc note and a template folder."""
    write_note("alpha.md", "tags: [proj]\nstatus: active\ndue: 2024-11-09")
    write_note("notes/beta.md", "tags: [proj]\nstatus: done\npriority: 0")
    write_note("gamma.md", "tags: [misc]\nstatus: active")
    write_note("Template/daily.md", body="# Day <% 1+1 %>\nDate: <% tp.date.today() %>\n")
    write_note("Template/broken.md", body="<% tp.bogus() %>\n")
    return tmp_path
