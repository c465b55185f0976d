"""vs-dataview - frontmatter tables and date templates for markdown workspaces."""

__version__ = "0.1.0"
