import asyncio
import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

# Import logger setup first to ensure logging is configured
from gocomplete.logger import get_logger, setup_logger
from gocomplete.config import load_config
from gocomplete.domain.document import TextDocument
from gocomplete.domain.exceptions import MalformedOutput
from gocomplete.domain.types import CompletionItem, Position, SnippetString
from gocomplete.infrastructure.state import FileSettingsStore
from gocomplete.provider import GoCompletionProvider
from gocomplete.utils import get_state_dir

load_dotenv()

console = Console()

cli = typer.Typer(
    name="gocomplete",
    help="Go completion suggestions driven by gocode",
    epilog="""
    Examples:
    $ gocomplete complete main.go --line 12 --column 8
    $ gocomplete complete main.go --offset 240 --json
    """,
    add_completion=False,
)


def resolve_position(document: TextDocument, offset: Optional[int], line: Optional[int], column: Optional[int]) -> Position:
    """Cursor position from a character offset or a zero-based line/column pair."""
    if offset is not None:
        if line is not None or column is not None:
            raise typer.BadParameter("Use either --offset or --line/--column, not both")
        return document.position_at(offset)
    if line is None or column is None:
        raise typer.BadParameter("Either --offset or both --line and --column are required")
    if line >= document.line_count:
        raise typer.BadParameter(f"Line {line} is past the end of the file ({document.line_count} lines)")
    return Position(line=line, character=min(column, len(document.line_at(line))))


def render_table(items: list[CompletionItem]) -> Table:
    table = Table(title=f"{len(items)} completion item(s)")
    table.add_column("Label", style="cyan", no_wrap=True)
    table.add_column("Kind", style="magenta")
    table.add_column("Detail")
    table.add_column("Insert", style="green")
    table.add_column("Sort", style="dim")
    for item in items:
        insert = item.insert_text.value if isinstance(item.insert_text, SnippetString) else item.insert_text
        table.add_row(
            item.label,
            item.kind.value if item.kind else "",
            item.detail or "",
            insert or "",
            item.effective_sort_text,
        )
    return table


async def _complete(provider: GoCompletionProvider, document: TextDocument, position: Position) -> list[CompletionItem]:
    items = await provider.provide_completions(document, position)
    await provider.options.wait_for_advisories()
    return items


@cli.command()
def complete(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Go source file"),
    offset: Optional[int] = typer.Option(None, "--offset", min=0, help="Cursor as a character offset"),
    line: Optional[int] = typer.Option(None, "--line", min=0, help="Zero-based cursor line"),
    column: Optional[int] = typer.Option(None, "--column", min=0, help="Zero-based cursor column"),
    config_path: Optional[Path] = typer.Option(None, "--config", help="JSON settings file"),
    as_json: bool = typer.Option(False, "--json", help="Print the items as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging (default level: GOCOMPLETE_LOG_LEVEL or INFO)"),
    state_dir: Optional[Path] = typer.Option(None, "--state-dir", help="Directory for persisted flags"),
):
    """Print completion suggestions for a position in FILE."""
    setup_logger(log_level="DEBUG" if debug else None)
    logger = get_logger("main")

    config = load_config(config_path)
    document = TextDocument(file.read_text(encoding="utf-8"), filename=str(file.resolve()))
    position = resolve_position(document, offset, line, column)

    settings = FileSettingsStore((state_dir or get_state_dir()) / "state.json")
    provider = GoCompletionProvider(config, settings=settings)

    logger.info(f"Completing {document.filename} at {position.line}:{position.character}")
    try:
        items = asyncio.run(_complete(provider, document, position))
    except MalformedOutput as e:
        logger.error(f"Unreadable gocode output: {e}")
        console.print(f"[red]gocode returned output that could not be decoded:[/red] {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([item.to_display_dict() for item in items], indent=2))
    else:
        console.print(render_table(items))


@cli.command()
def version():
    """Print the installed version."""
    from importlib.metadata import version as dist_version

    typer.echo(dist_version("gocomplete"))


def run():
    """Entry point for the gocomplete command."""
    cli()


if __name__ == "__main__":
    run()
