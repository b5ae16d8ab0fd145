"""Rich renderings used by the command line."""

from typing import List, Mapping, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table

Change = Tuple[str, Optional[str], str]


def diff_environments(before: Mapping[str, str], after: Mapping[str, str]) -> List[Change]:
    """Return (key, old, new) for every key added or changed, sorted by key."""
    changes = []
    for key in sorted(after):
        old = before.get(key)
        if old != after[key]:
            changes.append((key, old, after[key]))
    return changes


def render_changes(changes: List[Change], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not changes:
        console.print("[dim]No environment changes[/dim]")
        return

    table = Table(title="Environment changes", show_lines=False)
    table.add_column("", style="bold", no_wrap=True)
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, old, new in changes:
        marker = "[green]+[/green]" if old is None else "[yellow]~[/yellow]"
        table.add_row(marker, escape(key), escape(new))
    console.print(table)
    console.print(f"{len(changes)} variable(s) added or changed")


def render_path(path: Optional[str], console: Optional[Console] = None, total: Optional[int] = None) -> None:
    console = console or Console()
    entries = path.split(":") if path else []

    table = Table(title="PATH")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Directory", overflow="fold")
    for index, entry in enumerate(entries, start=1):
        table.add_row(str(index), escape(entry) or "[dim](empty)[/dim]")
    console.print(table)

    summary = f"{len(entries)} PATH entries"
    if total is not None:
        summary += f", {total} environment variables"
    console.print(summary)
