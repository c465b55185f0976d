"""Gitignore pattern handling for workspace discovery."""

from pathlib import Path
from typing import List

import pathspec

# Folders an editor workspace search skips by default
DEFAULT_PATTERNS = [
    ".git/",
    ".hg/",
    ".svn/",
    "node_modules/",
    ".obsidian/",
    ".trash/",
    "__pycache__/",
    ".venv/",
    "venv/",
    ".DS_Store",
]


def get_gitignore_patterns(workspace_root: Path) -> List[str]:
    """Get ignore patterns for a workspace.

    Args:
        workspace_root: Root directory, possibly containing a .gitignore

    Returns:
        Default patterns followed by the workspace .gitignore patterns
    """
    gitignore_path = workspace_root / ".gitignore"
    patterns = list(DEFAULT_PATTERNS)

    if gitignore_path.exists():
        with open(gitignore_path, encoding="utf-8") as f:
            # Add each non-empty line that doesn't start with #
            patterns.extend(
                line.strip() for line in f if line.strip() and not line.strip().startswith("#")
            )

    return patterns


def build_gitignore_spec(workspace_root: Path) -> pathspec.PathSpec:
    """Build a PathSpec object from the workspace ignore patterns."""
    patterns = get_gitignore_patterns(workspace_root)
    return pathspec.PathSpec.from_lines("gitwildmatch", patterns)


def should_ignore_file(file_path: Path, workspace_root: Path, spec: pathspec.PathSpec) -> bool:
    """Check if a file should be ignored.

    Args:
        file_path: Path to the file to check
        workspace_root: Root directory the patterns are relative to
        spec: Compiled ignore patterns, see build_gitignore_spec

    Returns:
        True if the file should be ignored, False otherwise
    """
    try:
        relative_path = Path(file_path).relative_to(workspace_root)
    except ValueError:
        # Outside the workspace, nothing to match against
        return False

    return spec.match_file(relative_path.as_posix())
