"""
BookmarkShelf v1 - Console Report

Renders stored bookmarks as a rich table followed by a total line.
"""

from typing import Sequence

from rich.console import Console
from rich.table import Table

from .chrome_parser import BookmarkRecord

NAME_LIMIT = 27
URL_LIMIT = 37
ELLIPSIS = "..."


def truncate(text: str, limit: int) -> str:
    """Cut text longer than limit so that, with the ellipsis, it fits in limit"""
    if len(text) <= limit:
        return text
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def bookmarks_table(records: Sequence[BookmarkRecord], title: str = "Bookmarks") -> Table:
    """Build the listing table, one row per record"""
    table = Table(title=title)
    table.add_column("Name", style="cyan", no_wrap=True, min_width=NAME_LIMIT)
    table.add_column("URL", style="green", no_wrap=True, min_width=URL_LIMIT)

    for record in records:
        table.add_row(truncate(record.name, NAME_LIMIT), truncate(record.url, URL_LIMIT))

    return table


def print_bookmarks(console: Console, records: Sequence[BookmarkRecord]) -> None:
    """Print every record and the total count"""
    console.print(bookmarks_table(records))
    console.print(f"Total bookmarks: {len(records)}")
