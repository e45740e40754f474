# towboat/cli/utils/output.py
"""Output formatting utilities"""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...api.exceptions import TowboatError
from ...constants import APP_DESCRIPTION, EMOJI_ERROR, EMOJI_SUCCESS
from ...models import ItemResult, ItemState, RunConfig, RunResult

console = Console()

_STATE_STYLES = {
    ItemState.ALREADY_CORRECT: "dim",
    ItemState.ADOPTED_BACK: "magenta",
    ItemState.MATERIALIZED: "green",
    ItemState.SYMLINKED: "cyan",
    ItemState.REMOVED: "yellow",
    ItemState.ABSENT: "dim",
    ItemState.SKIPPED: "dim",
}


def print_header(config: RunConfig) -> None:
    """Print the run header"""
    console.print(f"[bold]Towboat[/bold] - {APP_DESCRIPTION}")
    console.print(f"Source: {escape(str(config.package_dir))}", soft_wrap=True)
    console.print(f"Target: {escape(str(config.target_dir))}", soft_wrap=True)
    console.print(f"Build tag: [cyan]{config.build_tag}[/cyan]")
    if config.remove:
        console.print("Mode: [yellow]remove[/yellow]")
    if config.dry_run:
        console.print("[yellow]DRY RUN - No changes will be made[/yellow]")
    console.print()


def print_item(item: ItemResult) -> None:
    """Print one item outcome as it happens"""
    style = _STATE_STYLES.get(item.state, "white")
    for line in item.message.splitlines():
        console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)


def format_run_result(result: RunResult) -> None:
    """Format and display the result of a run"""
    for warning in result.warnings:
        console.print(f"[yellow]{escape(warning)}[/yellow]", soft_wrap=True)

    if not result.items:
        return

    table = Table(title="Summary", box=box.SIMPLE, show_header=False)
    table.add_column("State", style="cyan")
    table.add_column("Count", justify="right")
    for state, count in result.summary().items():
        table.add_row(state.replace("_", " "), str(count))

    console.print()
    console.print(f"Found {result.discovered} matching files")
    console.print(table)

    if result.dry_run:
        console.print("[yellow]Dry run completed. Use without --dry-run to apply changes.[/yellow]")
    else:
        elapsed = result.duration or 0.0
        console.print(f"[green]{EMOJI_SUCCESS} Completed successfully in {elapsed:.2f}s[/green]")


def print_error(error: TowboatError) -> None:
    """Print an aborting error with its remediation"""
    console.print(f"[red]{EMOJI_ERROR} Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
    if error.path is not None:
        console.print(f"  [bold]Path:[/bold] {escape(str(error.path))}", highlight=False, soft_wrap=True)
    if error.hint:
        console.print(f"  [yellow]Hint:[/yellow] {error.hint}", soft_wrap=True)

