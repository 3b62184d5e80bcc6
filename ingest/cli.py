"""
BookmarkShelf v1 - Ingest CLI

Command-line interface for loading Chrome bookmarks into a local SQLite store.

Usage:
    python -m ingest.cli
    python -m ingest.cli ingest
    python -m ingest.cli ingest --file ./Bookmarks --db bookmarks.db
    python -m ingest.cli stats --file ./Bookmarks
    python -m ingest.cli show --db bookmarks.db
"""

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import click
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import get_config

from .chrome_parser import ChromeParser
from .db import BookmarkStore
from .errors import BookmarkError
from .paths import locate_bookmarks_file
from .pipeline import run_ingest
from .report import print_bookmarks

console = Console()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def resolve_source(
    file: Optional[Path],
    profile_dir: Optional[str],
    profile: Optional[str],
) -> Path:
    """Explicit file, then BOOKMARKS_FILE, then the Chrome profile lookup"""
    settings = get_config().ingest
    if file is not None:
        return file
    if settings.bookmarks_file is not None:
        return settings.bookmarks_file
    return locate_bookmarks_file(
        profile_dir or settings.user_profile,
        profile or settings.chrome_profile,
    )


def fail(message: str, error: Exception) -> NoReturn:
    """Print a diagnostic and exit with a non-zero status"""
    console.print(f"[red]{message}:[/red] {error}")
    sys.exit(1)


file_option = click.option(
    "--file", "-f",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to a Chrome Bookmarks JSON file (default: looked up in the profile)"
)
profile_dir_option = click.option(
    "--profile-dir",
    help="User profile directory to search (default: USERPROFILE)"
)
profile_option = click.option(
    "--profile", "-p",
    help="Chrome profile folder name (default: CHROME_PROFILE or 'Default')"
)
db_option = click.option(
    "--db", "-d",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path of the SQLite store (default: BOOKMARKS_DB_PATH or bookmarks.db)"
)


@click.group(invoke_without_command=True)
@click.version_option(version="1.0.0")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: LOG_LEVEL or INFO)"
)
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]):
    """BookmarkShelf - Chrome Bookmarks Ingest Tool

    Without a command, runs ingest with the configured defaults.
    """
    logging.basicConfig(
        level=(log_level or get_config().app.log_level).upper(),
        format=LOG_FORMAT,
    )
    if ctx.invoked_subcommand is None:
        ctx.invoke(ingest)


@cli.command()
@file_option
@profile_dir_option
@profile_option
@db_option
@click.option(
    "--batch-size", "-b",
    type=click.IntRange(min=1),
    help="Number of records written per transaction (default: BATCH_SIZE or 500)"
)
@click.option(
    "--dry-run", "-n",
    is_flag=True,
    help="Parse and show stats without writing to the store"
)
def ingest(
    file: Optional[Path],
    profile_dir: Optional[str],
    profile: Optional[str],
    db: Optional[Path],
    batch_size: Optional[int],
    dry_run: bool,
):
    """
    Ingest Chrome bookmarks into the store.

    Flattens the bookmark bar, other and synced folders, recreates the
    store and lists every stored bookmark.
    """
    settings = get_config().ingest
    db_path = db or settings.db_path

    try:
        source = resolve_source(file, profile_dir, profile)
    except BookmarkError as e:
        fail("Error locating bookmarks", e)

    console.print(f"\n[bold blue]BookmarkShelf Ingest[/bold blue]")
    console.print(f"File: {source}")
    console.print(f"Store: {db_path}")
    console.print()

    if dry_run:
        try:
            stats = ChromeParser(source).get_stats()
        except BookmarkError as e:
            fail("Error parsing file", e)
        print_stats(stats)
        console.print("[yellow]Dry run mode - no changes written to the store[/yellow]")
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Ingesting bookmarks...", total=None)

        try:
            result = run_ingest(source, db_path, batch_size or settings.batch_size)
        except BookmarkError as e:
            fail("Ingest failed", e)

        progress.update(task, completed=True)

    console.print(
        f"[bold green]Saved {result.extracted} bookmarks to {result.db_path}[/bold green]"
    )
    console.print(
        f"  New: {result.upsert.inserted}  Replaced duplicates: {result.upsert.replaced}"
    )
    console.print()
    print_bookmarks(console, result.stored)


def print_stats(stats: dict) -> None:
    """Print the per-root breakdown returned by ChromeParser.get_stats"""
    table = Table(title="Root Folders")
    table.add_column("Root", style="cyan")
    table.add_column("Name", style="cyan")
    table.add_column("Bookmarks", justify="right", style="green")
    table.add_column("Unique URLs", justify="right", style="green")

    for root in stats["roots"]:
        table.add_row(root["key"], root["label"], str(root["count"]), str(root["unique"]))

    console.print(table)
    console.print(f"Format version: {stats['version']}")
    console.print(f"Total bookmarks: {stats['total_bookmarks']}")
    console.print()


@cli.command()
@file_option
@profile_dir_option
@profile_option
def stats(file: Optional[Path], profile_dir: Optional[str], profile: Optional[str]):
    """
    Show statistics about a bookmarks file without ingesting.

    Useful for previewing what would be imported.
    """
    try:
        source = resolve_source(file, profile_dir, profile)
        stats = ChromeParser(source).get_stats()
    except BookmarkError as e:
        fail("Error parsing file", e)

    console.print(f"\n[bold blue]Bookmarks File Statistics[/bold blue]")
    console.print(f"File: {source}")
    console.print()
    print_stats(stats)


@cli.command()
@db_option
def show(db: Optional[Path]):
    """
    List the bookmarks held in an existing store.
    """
    db_path = db or get_config().ingest.db_path

    try:
        with BookmarkStore.open(db_path) as store:
            records = store.query_all()
    except BookmarkError as e:
        fail("Store error", e)

    console.print(f"\n[bold blue]Store Contents[/bold blue]")
    console.print(f"Store: {db_path}")
    console.print()
    print_bookmarks(console, records)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == "__main__":
    main()
