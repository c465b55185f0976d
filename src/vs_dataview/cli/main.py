"""Main CLI entry point for vs-dataview."""  # pragma: no cover

from vs_dataview.cli.app import app  # pragma: no cover

# Register commands
from vs_dataview.cli.commands import table, template  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    # start the app
    app()
