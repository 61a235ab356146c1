#!/usr/bin/env python3
"""Command line access to the picker engine."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from .config import PickerSettings
from .errors import UnknownTabError
from .logging_helpers import configure
from .models import IconItem, Tab
from .normalize import normalize
from .search import SearchIndexRegistry
from .storage import JsonFileStore, UsedItemsCache

app = typer.Typer(help="Normalize, search and inspect picker icons.")
console = Console()


@app.callback()
def main(debug: bool = typer.Option(False, help="Log debug output to stderr")):
    configure(debug or PickerSettings.load().debug)


def _parse_raw(value: str) -> Any:
    """Treat *value* as JSON when it looks like an object, else as a string."""
    if value.lstrip().startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"Invalid JSON: {exc}") from exc
    return value


def _items_table(title: str, items: list[IconItem]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Type")
    table.add_column("Id")
    table.add_column("Label")
    table.add_column("Color")
    for i, item in enumerate(items, 1):
        table.add_row(
            str(i),
            item.type.value,
            item.id,
            item.label,
            item.data.color or item.data.backgroundColor or "",
        )
    return table


@app.command("normalize")
def normalize_cmd(value: str = typer.Argument(..., help="Icon string or JSON object")):
    """Print the canonical form of an icon value."""
    item = normalize(_parse_raw(value))
    if item is None:
        rprint("[bold red]Not an icon.[/bold red]")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(item.to_dict(), ensure_ascii=False, indent=2))


@app.command()
def search(
    query: str,
    tab: str = typer.Option("all", help="all, emoji, icon, text or avatar"),
):
    """Search the glyph and emoji corpora."""
    try:
        parsed = Tab.parse(tab)
    except UnknownTabError as exc:
        raise typer.BadParameter(str(exc)) from exc
    settings = PickerSettings.load()
    registry = SearchIndexRegistry(
        glyph_limit=settings.glyph_limit, emoji_limit=settings.emoji_limit
    )
    result = asyncio.run(registry.search(query, parsed))
    if result.is_empty():
        rprint(f"[bold yellow]No matches for '{query}'.[/bold yellow]")
        return
    if result.emojis:
        console.print(_items_table(f"Emojis ({len(result.emojis)})", result.emojis))
    if result.icons:
        console.print(_items_table(f"Icons ({len(result.icons)})", result.icons))


@app.command()
def recent(
    add: Optional[str] = typer.Option(None, help="Record an icon as used first"),
    state: Optional[Path] = typer.Option(None, help="Picker state file"),
):
    """Show (and optionally extend) the recently used icons."""
    settings = PickerSettings.load()
    cache = UsedItemsCache(JsonFileStore(state), limit=settings.used_items_limit)
    if add is not None:
        cache.add(_parse_raw(add))
    items = cache.get()
    if not items:
        rprint("[bold red]No recently used icons.[/bold red]")
        return
    console.print(_items_table("Recently used", items))


if __name__ == "__main__":
    app()
