"""
BookmarkShelf v1 - Ingest Module

This module provides functionality to parse Chrome bookmarks files
and store them in a deduplicated SQLite table.
"""

from .chrome_parser import ChromeParser, BookmarkRecord, decode, extract
from .db import BookmarkStore, UpsertResult, open_store
from .errors import (
    BookmarkError,
    FormatError,
    NotFoundError,
    QueryError,
    SchemaError,
    StoreIOError,
)

__all__ = [
    "ChromeParser",
    "BookmarkRecord",
    "decode",
    "extract",
    "BookmarkStore",
    "UpsertResult",
    "open_store",
    "BookmarkError",
    "FormatError",
    "NotFoundError",
    "QueryError",
    "SchemaError",
    "StoreIOError",
]
