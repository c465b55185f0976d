"""File utility functions."""

import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import frontmatter
import yaml
from loguru import logger


class FileError(Exception):
    """Base class for file-related errors."""


class ParseError(FileError):
    """Error parsing file contents."""


def has_frontmatter(content: str) -> bool:
    """Check if content opens with a frontmatter fence.

    Args:
        content: File content to check

    Returns:
        True if content has frontmatter
    """
    return content.startswith("---\n") or content.startswith("---\r\n")


def parse_frontmatter(content: str) -> Tuple[Dict[str, Any], str]:
    """Parse frontmatter from content.

    Args:
        content: Content to parse

    Returns:
        Tuple of (frontmatter dict, remaining content)

    Raises:
        ParseError: If frontmatter is invalid
    """
    try:
        post = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError) as e:
        logger.error(f"Error parsing frontmatter: {e}")
        raise ParseError(f"Invalid frontmatter: {e}") from e

    metadata = post.metadata
    if not isinstance(metadata, dict):
        raise ParseError(f"Frontmatter must be a mapping, got {type(metadata).__name__}")
    return dict(metadata), post.content


def read_metadata(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a markdown file and return its frontmatter metadata.

    Files without frontmatter yield an empty dict.

    Raises:
        ParseError: If the frontmatter block cannot be parsed
    """
    content = Path(path).read_text(encoding="utf-8")
    if not has_frontmatter(content):
        return {}
    metadata, _ = parse_frontmatter(content)
    return metadata


def read_file(path: Union[str, Path]) -> str:
    """Read a text file with its line endings left as they are."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def write_file_atomic(path: Union[str, Path], content: str) -> None:
    """Write file atomically using a temporary file.

    Args:
        path: Path to write to
        content: Content to write
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory
    fd, temp_path = tempfile.mkstemp(dir=str(path.parent))
    success = False

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        # Atomic rename
        Path(temp_path).replace(path)
        success = True
    finally:
        if not success:
            try:
                Path(temp_path).unlink()
            except OSError:
                pass
