"""File utilities for reading markdown documents."""

from .gitignore import should_ignore_file, get_gitignore_patterns, build_gitignore_spec
from .file_utils import (
    FileError,
    ParseError,
    has_frontmatter,
    parse_frontmatter,
    read_file,
    read_metadata,
    write_file_atomic,
)

__all__ = [
    "FileError",
    "ParseError",
    "has_frontmatter",
    "parse_frontmatter",
    "read_file",
    "read_metadata",
    "write_file_atomic",
    "should_ignore_file",
    "get_gitignore_patterns",
    "build_gitignore_spec",
]
