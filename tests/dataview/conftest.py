"""Pytest fixtures for query tests."""

from datetime import date
from pathlib import Path

import pytest

from vs_dataview.dataview.document import Document


@pytest.fixture
def record():
    """Frontmatter record covering every value shape."""
    return {
        "title": "Project Alpha",
        "status": "active",
        "priority": 0,
        "done": False,
        "archived": True,
        "score": 2.0,
        "ratio": 2.5,
        "tags": ["project", "dev"],
        "due": date(2024, 11, 9),
        "started": "2024-01-05",
        "milestones": ["2024-03-01", "kickoff"],
        "owner": {"name": "sam", "team": "core"},
        "notes": None,
    }


@pytest.fixture
def make_document():
    """Build a Document from a name and metadata."""

    def _make(name: str, **metadata) -> Document:
        return Document(name=name, path=Path(f"{name}.md"), metadata=metadata)

    return _make


@pytest.fixture
def proj_documents(make_document):
    """Three documents tagged proj with a in {0, 2, 3}, plus one untagged."""
    return [
        make_document("zero", tags=["proj"], a=0, b="x"),
        make_document("two", tags=["proj"], a=2, b="x"),
        make_document("other", tags=["misc"], a=5, b="y"),
        make_document("three", tags=["proj"], a=3),
    ]
