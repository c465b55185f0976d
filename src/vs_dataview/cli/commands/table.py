"""Table commands: render query blocks into markdown tables."""

import sys
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from vs_dataview.cli.app import app
from vs_dataview.cli.commands.command_utils import fail, get_config, get_workspace, success
from vs_dataview.dataview import DataviewDetector, DataviewError, DataviewExecutor, DataviewParser
from vs_dataview.file_utils import read_file, write_file_atomic


@app.command()
def query(ctx: typer.Context) -> None:
    """Render the query block read from stdin as a markdown table.

    Example:

    printf '```vs-dataview\\ntable status, due\\nfrom #project\\n```' | vs-dataview query
    """
    config = get_config(ctx)
    selected_text = sys.stdin.read()

    detector = DataviewDetector(config.block_language)
    try:
        parsed = DataviewParser.parse(detector.require_query_block(selected_text))
    except DataviewError as e:
        fail(str(e))

    workspace = get_workspace(ctx)
    typer.echo(DataviewExecutor(workspace.iter_documents()).execute(parsed))


@app.command()
def table(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Markdown file whose query blocks are replaced")],
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the result instead of writing the file")
    ] = False,
) -> None:
    """Replace every query block in FILE with its rendered table."""
    config = get_config(ctx)
    if not file.is_file():
        fail(f"File not found: {file}")

    content = read_file(file)
    detector = DataviewDetector(config.block_language)
    blocks = detector.detect_queries(content)
    if not blocks:
        fail(f"No `{config.block_language}` blocks found in {file}")

    # Parse every block before touching any document or the file
    parsed = []
    for block in blocks:
        try:
            parsed.append(DataviewParser.parse(block.query))
        except DataviewError as e:
            fail(f"Block at line {block.start_line + 1}: {e}")

    workspace = get_workspace(ctx)
    replacements = []
    for block, block_query in zip(blocks, parsed):
        rendered = DataviewExecutor(workspace.iter_documents()).execute(block_query)
        replacements.append((block, rendered))

    updated = detector.replace_blocks(content, replacements)
    if dry_run:
        typer.echo(updated)
        return

    write_file_atomic(file, updated)
    logger.info(f"Rendered {len(replacements)} tables into {file}")
    success(f"Updated {len(replacements)} table(s) in {file}")
