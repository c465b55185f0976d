"""Template commands: list templates and insert an expanded template."""

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from vs_dataview.cli.app import app
from vs_dataview.cli.commands.command_utils import console, fail, get_workspace, success
from vs_dataview.file_utils import read_file, write_file_atomic
from vs_dataview.templating import TemplateExpander
from vs_dataview.workspace import WorkspaceError


def insert_at_line(content: str, text: str, line: Optional[int]) -> str:
    """Insert text at the start of a 1-based line, or append when line is None.

    Lines past the end append. Text takes the content's CRLF line endings.
    """
    newline = "\r\n" if "\r\n" in content else "\n"
    if newline == "\r\n":
        text = text.replace("\r\n", "\n").replace("\n", newline)
    if line is None:
        return content + text
    lines = content.splitlines(keepends=True)
    if line > len(lines):
        if lines and not lines[-1].endswith(("\n", "\r")):
            return content + newline + text
        return content + text
    position = line - 1
    return "".join(lines[:position]) + text + "".join(lines[position:])


@app.command()
def templates(ctx: typer.Context) -> None:
    """List the templates in the workspace template folder."""
    workspace = get_workspace(ctx)
    try:
        names = workspace.list_templates()
    except WorkspaceError as e:
        fail(str(e))

    for name in names:
        console.print(f"[cyan]{escape(name)}[/cyan]", soft_wrap=True)


@app.command()
def insert(
    ctx: typer.Context,
    name: Annotated[str, typer.Argument(help="Template file name")],
    into: Annotated[
        Optional[Path], typer.Option("--into", help="File to insert the expanded template into")
    ] = None,
    line: Annotated[
        Optional[int],
        typer.Option("--line", min=1, help="1-based line to insert before; appends when omitted"),
    ] = None,
) -> None:
    """Expand template NAME and print it, or insert it into a file."""
    workspace = get_workspace(ctx)
    try:
        template_text = workspace.read_template(name)
    except WorkspaceError as e:
        fail(str(e))

    if into is not None and not into.is_file():
        fail(f"File not found: {into}")

    expanded = TemplateExpander().expand(template_text)

    if into is None:
        typer.echo(expanded, nl=False)
        return

    content = read_file(into)
    write_file_atomic(into, insert_at_line(content, expanded, line))
    success(f"Inserted {name} into {into}")
