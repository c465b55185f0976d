from pathlib import Path
from typing import Optional

import typer

from vs_dataview.config import init_cli_logging, load_config


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:  # pragma: no cover
        import vs_dataview

        typer.echo(f"vs-dataview version: {vs_dataview.__version__}")
        raise typer.Exit()


app = typer.Typer(name="vs-dataview", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    workspace: Optional[Path] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace folder to query. Defaults to VS_DATAVIEW_WORKSPACE or the current directory.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """vs-dataview - frontmatter tables and date templates for markdown workspaces."""
    config = load_config(workspace=workspace, log_level="DEBUG" if verbose else None)
    init_cli_logging(config.log_level, config.log_file)
    ctx.obj = config
