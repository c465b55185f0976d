"""utility functions for commands"""

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from vs_dataview.config import DataviewConfig
from vs_dataview.workspace import Workspace, WorkspaceError

console = Console()
error_console = Console(stderr=True)


def fail(message: str) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    error_console.print(f"[red]✗ {escape(message)}[/red]", soft_wrap=True)
    raise typer.Exit(1)


def success(message: str) -> None:
    console.print(f"[green]✓ {escape(message)}[/green]", soft_wrap=True)


def get_config(ctx: typer.Context) -> DataviewConfig:
    config = ctx.obj
    if not isinstance(config, DataviewConfig):  # pragma: no cover
        config = DataviewConfig()
    return config


def get_workspace(ctx: typer.Context) -> Workspace:
    """Open the configured workspace, failing the command when it is missing."""
    try:
        return Workspace(get_config(ctx))
    except WorkspaceError as e:
        fail(str(e))
